"""
Tests for input validation and deterministic parsing.
"""

import pytest

from orderly_bot.tasks.parsers import (
    EMAIL_REPROMPT,
    ConfirmationDecision,
    classify_confirmation,
    parse_item_line,
    validate_email_address,
)


class TestValidateEmailAddress:

    def test_accepts_text_with_at_sign(self):
        assert validate_email_address("jordan@example.com") == ("jordan@example.com", None)

    def test_value_is_not_normalized(self):
        email, error = validate_email_address("Jordan@Example.COM")
        assert email == "Jordan@Example.COM"
        assert error is None

    @pytest.mark.parametrize("text", ["not-an-email", "", "jordan.example.com"])
    def test_rejects_text_without_at_sign(self, text):
        assert validate_email_address(text) == (None, EMAIL_REPROMPT)


class TestClassifyConfirmation:

    @pytest.mark.parametrize("text", ["yes", "Yes please", "YES!", "confirm", "I confirm it"])
    def test_affirmatives(self, text):
        assert classify_confirmation(text) == ConfirmationDecision.CONFIRM

    @pytest.mark.parametrize("text", ["no", "No thanks", "nah", "Nope", "cancel that"])
    def test_declines(self, text):
        assert classify_confirmation(text) == ConfirmationDecision.DECLINE

    def test_affirmative_wins_over_negative(self):
        assert classify_confirmation("yes, no changes") == ConfirmationDecision.CONFIRM

    @pytest.mark.parametrize("text", ["maybe", "hmm", ""])
    def test_unclear(self, text):
        assert classify_confirmation(text) == ConfirmationDecision.UNCLEAR


class TestParseItemLine:

    def test_name_and_quantity(self):
        assert parse_item_line("Chocolate Cake x 2 = ₹700") == ("Chocolate Cake", 2)

    def test_without_price_part(self):
        assert parse_item_line("Mango Tart x 1") == ("Mango Tart", 1)

    def test_name_containing_ampersand(self):
        assert parse_item_line("Coffee & Walnut Cake x 3 = 1140") == ("Coffee & Walnut Cake", 3)

    def test_name_is_trimmed(self):
        assert parse_item_line("  Fruit Tart  x 2 = 700") == ("Fruit Tart", 2)

    @pytest.mark.parametrize("line", [
        "Chocolate Cake",
        "Chocolate Cake x two = 700",
        "Chocolate Cake x 0 = 0",
        "Chocolate Cake x -1 = 0",
    ])
    def test_invalid_lines_raise(self, line):
        with pytest.raises(ValueError):
            parse_item_line(line)
