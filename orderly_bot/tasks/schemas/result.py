"""
Conversation Results.

Defines the normalized result of an order interpretation, the outcome a step
handler hands back to the engine, and the result returned to engine callers.
"""

from dataclasses import dataclass, field

from ..models import Message, Notification, PendingOrder
from .phases import ConversationStep


@dataclass(frozen=True)
class InterpretationResult:
    """
    Normalized reading of a free-text order.

    Exactly one of `order` (accepted) or `reason` (rejected) is set. This is
    the only shape the engine ever sees from the interpretation service.
    """
    order: PendingOrder | None = None
    reason: str | None = None

    @classmethod
    def accepted(cls, order: PendingOrder) -> "InterpretationResult":
        return cls(order=order)

    @classmethod
    def rejected(cls, reason: str) -> "InterpretationResult":
        return cls(reason=reason)

    @property
    def is_accepted(self) -> bool:
        return self.order is not None


@dataclass(frozen=True)
class Reply:
    """An assistant message to commit, and how long it should take to appear."""
    text: str
    delay: float = 0.0


@dataclass
class StepOutcome:
    """What a step handler decided. `next_step` of None means stay put."""
    replies: list[Reply] = field(default_factory=list)
    next_step: ConversationStep | None = None
    notifications: list[Notification] = field(default_factory=list)


@dataclass
class SubmitResult:
    """Result of a single engine call."""
    step: ConversationStep
    messages: list[Message] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return self.step == ConversationStep.COMPLETE
