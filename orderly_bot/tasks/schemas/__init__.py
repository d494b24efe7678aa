"""
Conversation Schemas.

This package contains the data structures used by the conversation engine
for representing steps, state and results.
"""

from .phases import ConversationStep, REQUIRED_PROFILE_FIELDS
from .result import InterpretationResult, Reply, StepOutcome, SubmitResult
from .state import ConversationState

__all__ = [
    # Steps
    "ConversationStep",
    "REQUIRED_PROFILE_FIELDS",
    # State
    "ConversationState",
    # Results
    "InterpretationResult",
    "Reply",
    "StepOutcome",
    "SubmitResult",
]
