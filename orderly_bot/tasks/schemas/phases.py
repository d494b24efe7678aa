"""
Conversation Step Definitions.

This module defines the ConversationStep enum representing the stages of the
guided order conversation, in the order they are normally visited.
"""

from enum import Enum


class ConversationStep(str, Enum):
    """Stages of the order conversation."""
    GREETING = "greeting"
    COLLECTING_NAME = "collecting_name"
    COLLECTING_EMAIL = "collecting_email"
    COLLECTING_ADDRESS = "collecting_address"
    AWAITING_ORDER_TEXT = "awaiting_order_text"  # Menu shown, waiting for free-text order
    AWAITING_ORDER_CONFIRMATION = "awaiting_order_confirmation"
    COMPLETE = "complete"


# Profile fields that must already be set while the conversation is at a step
REQUIRED_PROFILE_FIELDS: dict[ConversationStep, tuple[str, ...]] = {
    ConversationStep.GREETING: (),
    ConversationStep.COLLECTING_NAME: (),
    ConversationStep.COLLECTING_EMAIL: ("name",),
    ConversationStep.COLLECTING_ADDRESS: ("name", "email"),
    ConversationStep.AWAITING_ORDER_TEXT: ("name", "email", "address"),
    ConversationStep.AWAITING_ORDER_CONFIRMATION: ("name", "email", "address"),
    ConversationStep.COMPLETE: ("name", "email", "address"),
}
