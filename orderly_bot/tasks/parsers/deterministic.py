"""
Deterministic Parsing Functions.

This module contains the string-based parsing used by the conversation
engine: classifying the customer's answer to "confirm this order?" and
splitting the order service's "<Item> x <qty> = ..." item lines.
"""

import re
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ConfirmationDecision(str, Enum):
    """How the customer answered the confirmation prompt."""
    CONFIRM = "yes"
    DECLINE = "no"
    UNCLEAR = "unclear"


# Affirmatives are plain substrings ("yes please", "CONFIRM it")
CONFIRM_KEYWORDS = ("yes", "confirm")

# "no" is a substring match too; the extra words catch casual refusals that
# do not contain it
DECLINE_KEYWORDS = ("no",)
DECLINE_PATTERN = re.compile(r"\b(nah|nope|cancel)\b", re.IGNORECASE)

ITEM_LINE_SEPARATOR = " = "
QUANTITY_SEPARATOR = " x "


def classify_confirmation(user_input: str) -> ConfirmationDecision:
    """
    Classify an answer to the order confirmation prompt.

    Affirmatives win over negatives, so "yes, no changes" confirms.

    Returns:
        CONFIRM, DECLINE, or UNCLEAR
    """
    text = (user_input or "").lower()

    if any(keyword in text for keyword in CONFIRM_KEYWORDS):
        return ConfirmationDecision.CONFIRM
    if any(keyword in text for keyword in DECLINE_KEYWORDS) or DECLINE_PATTERN.search(text):
        return ConfirmationDecision.DECLINE
    return ConfirmationDecision.UNCLEAR


def parse_item_line(line: str) -> tuple[str, int]:
    """
    Split an order service item line into (item name, quantity).

    "Coffee & Walnut Cake x 2 = 760" -> ("Coffee & Walnut Cake", 2)

    The name is returned trimmed. Raises ValueError when the line has no
    " x " separator or the quantity is not a positive integer.
    """
    head = line.split(ITEM_LINE_SEPARATOR)[0]
    name, separator, quantity_part = head.rpartition(QUANTITY_SEPARATOR)
    if not separator:
        raise ValueError(f"No quantity in item line: {line!r}")

    quantity = int(quantity_part.strip())
    if quantity < 1:
        raise ValueError(f"Quantity must be positive: {line!r}")

    return name.strip(), quantity
