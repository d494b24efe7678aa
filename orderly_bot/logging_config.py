"""
Logging configuration for the Orderly bot application.

Usage:
    from orderly_bot.logging_config import setup_logging
    setup_logging()  # Call once at application startup

Environment variables:
    LOG_LEVEL: Set to DEBUG, INFO, WARNING, ERROR, or CRITICAL (default: INFO)

Customers type their email address into the chat, so every root handler gets
a CustomerDataFilter that masks email addresses in INFO-and-above records.
DEBUG output is left untouched for local troubleshooting.
"""
import logging
import os
import re
import sys

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

EMAIL_PATTERN = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")
REDACTED_EMAIL = "[email redacted]"


class CustomerDataFilter(logging.Filter):
    """Mask email addresses in records at INFO level or higher."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno < logging.INFO:
            return True
        message = record.getMessage()
        masked = EMAIL_PATTERN.sub(REDACTED_EMAIL, message)
        if masked != message:
            record.msg = masked
            record.args = ()
        return True


def install_customer_data_filter(handlers) -> None:
    """Attach a CustomerDataFilter to each handler that does not have one yet."""
    for handler in handlers:
        if not any(isinstance(f, CustomerDataFilter) for f in handler.filters):
            handler.addFilter(CustomerDataFilter())


def setup_logging(level: str = None) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If not provided, reads from LOG_LEVEL env var, defaults to INFO.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    level = level.upper()

    if level not in VALID_LEVELS:
        level = "INFO"

    numeric_level = getattr(logging, level)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    install_customer_data_filter(logging.getLogger().handlers)

    logging.getLogger("orderly_bot").setLevel(numeric_level)

    # Reduce noise from the HTTP stack in non-debug mode
    if level != "DEBUG":
        logging.getLogger("urllib3").setLevel(logging.WARNING)
        logging.getLogger("requests").setLevel(logging.WARNING)
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.debug("Logging configured at %s level", level)
