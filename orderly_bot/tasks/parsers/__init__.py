"""
Parsers Package.

This package contains the parsing and validation functions used by the
conversation engine for interpreting user input.

Exports:
- Validators: Email validation
- Deterministic Parsers: Confirmation classification, item line splitting
"""

from .validators import (
    EMAIL_REPROMPT,
    validate_email_address,
)

from .deterministic import (
    ConfirmationDecision,
    classify_confirmation,
    parse_item_line,
)

__all__ = [
    # Validators
    "EMAIL_REPROMPT",
    "validate_email_address",
    # Deterministic parsers
    "ConfirmationDecision",
    "classify_confirmation",
    "parse_item_line",
]
