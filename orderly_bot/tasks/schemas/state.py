"""
Conversation State.

The mutable state owned by a single ConversationEngine.
"""

from pydantic import BaseModel, Field

from ..models import CustomerProfile, PendingOrder
from .phases import ConversationStep


class ConversationState(BaseModel):
    """Everything the engine knows about one session, apart from messages."""

    step: ConversationStep = ConversationStep.GREETING
    profile: CustomerProfile = Field(default_factory=CustomerProfile)
    pending_order: PendingOrder | None = None
    confirmed_order: PendingOrder | None = None  # Set once, on the way to COMPLETE
