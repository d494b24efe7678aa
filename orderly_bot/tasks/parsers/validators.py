"""
Input Validation Functions.

This module contains validation functions for user-provided customer
details.
"""

import logging

logger = logging.getLogger(__name__)

EMAIL_REPROMPT = "Please provide a valid email address."


def validate_email_address(email: str) -> tuple[str | None, str | None]:
    """
    Validate an email address.

    The only requirement is an "@" somewhere in the text; the confirmation
    email is sent by the order service, which does its own checking. The
    value is returned verbatim, without normalization.

    Args:
        email: The raw text the customer typed

    Returns:
        Tuple of (email, error_message).
        If valid: (email, None)
        If invalid: (None, user-friendly re-prompt)
    """
    if not email or "@" not in email:
        logger.debug("Email rejected: missing @")
        return (None, EMAIL_REPROMPT)
    return (email, None)
