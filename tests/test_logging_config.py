"""
Tests for logging configuration.
"""
import logging

from tests.test_helpers import FakeConfirmer, FakeInterpreter, run


class TestLoggingConfiguration:
    """Test logging setup and configuration."""

    def test_setup_logging_default_level(self, monkeypatch):
        """Test that setup_logging defaults to INFO level."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        from orderly_bot.logging_config import setup_logging
        setup_logging()

        logger = logging.getLogger("orderly_bot")
        assert logger.level == logging.INFO

    def test_setup_logging_respects_env_var(self, monkeypatch):
        """Test that LOG_LEVEL env var is respected."""
        monkeypatch.setenv("LOG_LEVEL", "warning")

        from orderly_bot.logging_config import setup_logging
        setup_logging()

        logger = logging.getLogger("orderly_bot")
        assert logger.level == logging.WARNING

    def test_setup_logging_explicit_level(self):
        """Test that explicit level parameter works."""
        from orderly_bot.logging_config import setup_logging
        setup_logging(level="ERROR")

        logger = logging.getLogger("orderly_bot")
        assert logger.level == logging.ERROR

    def test_setup_logging_invalid_level_defaults_to_info(self):
        """Test that invalid level falls back to INFO."""
        from orderly_bot.logging_config import setup_logging
        setup_logging(level="INVALID_LEVEL")

        logger = logging.getLogger("orderly_bot")
        assert logger.level == logging.INFO

    def test_http_stack_quieted_outside_debug(self):
        from orderly_bot.logging_config import setup_logging
        setup_logging(level="INFO")

        assert logging.getLogger("urllib3").level == logging.WARNING


class TestNoSensitiveDataInLogs:
    """Test that customer details are not logged at INFO level or higher."""

    def test_conversation_does_not_log_customer_details(self, caplog):
        from orderly_bot.logging_config import setup_logging
        from orderly_bot.tasks import ConversationEngine, RevealTimings, default_catalog

        setup_logging(level="INFO")
        engine = ConversationEngine(
            default_catalog(), FakeInterpreter(), FakeConfirmer(), timings=RevealTimings.instant(),
        )

        with caplog.at_level(logging.INFO, logger="orderly_bot"):
            for text in ("Jordan", "jordan@example.com", "221B Baker Street", "2 chocolate cakes", "yes"):
                run(engine.submit(text))

        assert caplog.records
        for record in caplog.records:
            if record.levelno >= logging.INFO:
                message = record.getMessage()
                assert "jordan@example.com" not in message
                assert "221B Baker Street" not in message


def _record(level, msg, *args):
    return logging.LogRecord("orderly_bot.tasks", level, __file__, 1, msg, args, None)


class TestCustomerDataFilter:
    """Test that email addresses are masked before records reach a handler."""

    def test_masks_email_in_arguments(self):
        from orderly_bot.logging_config import REDACTED_EMAIL, CustomerDataFilter

        record = _record(logging.INFO, "Sending receipt to %s", "jordan@example.com")
        assert CustomerDataFilter().filter(record) is True
        assert record.getMessage() == f"Sending receipt to {REDACTED_EMAIL}"

    def test_masks_email_in_message_text(self):
        from orderly_bot.logging_config import CustomerDataFilter

        record = _record(logging.WARNING, "bad address j.doe+cakes@mail.example.co.uk given")
        CustomerDataFilter().filter(record)
        assert "j.doe+cakes@mail.example.co.uk" not in record.getMessage()

    def test_debug_records_are_untouched(self):
        from orderly_bot.logging_config import CustomerDataFilter

        record = _record(logging.DEBUG, "profile email=%s", "jordan@example.com")
        CustomerDataFilter().filter(record)
        assert record.getMessage() == "profile email=jordan@example.com"

    def test_records_without_email_keep_their_args(self):
        from orderly_bot.logging_config import CustomerDataFilter

        record = _record(logging.INFO, "Step %s -> %s", "collecting_name", "collecting_email")
        CustomerDataFilter().filter(record)
        assert record.args == ("collecting_name", "collecting_email")

    def test_setup_logging_installs_filter_once_per_handler(self):
        from orderly_bot.logging_config import CustomerDataFilter, setup_logging

        setup_logging(level="INFO")
        setup_logging(level="INFO")

        handlers = logging.getLogger().handlers
        assert handlers
        for handler in handlers:
            assert sum(isinstance(f, CustomerDataFilter) for f in handler.filters) == 1

    def test_application_logs_are_masked_after_setup(self, caplog):
        from orderly_bot.logging_config import setup_logging

        with caplog.at_level(logging.INFO, logger="orderly_bot"):
            setup_logging(level="INFO")
            logging.getLogger("orderly_bot.tasks.checkout_handler").info(
                "customer email %s", "jordan@example.com",
            )

        assert caplog.records
        assert "jordan@example.com" not in caplog.records[-1].getMessage()
