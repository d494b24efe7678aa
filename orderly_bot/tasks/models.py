"""
Pydantic models for the order conversation.

The conversation state is made of:
- CustomerProfile (filled step by step: name, email, address)
- PendingOrder (line items awaiting the customer's yes/no)
- Message (one entry of the transcript)
- Notification (side-channel announcements such as "Order Confirmed!")
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from .menu_catalog import MenuItem


class CustomerProfile(BaseModel):
    """Customer details collected during the conversation."""

    name: str | None = None
    email: str | None = None
    address: str | None = None
    phone: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Partial wire form: only the fields collected so far."""
        return self.model_dump(exclude_none=True)


class LineItem(BaseModel):
    """One menu item and its quantity within an order."""

    model_config = ConfigDict(frozen=True)

    item: MenuItem
    quantity: PositiveInt

    @property
    def line_subtotal(self) -> int:
        return self.item.unit_price * self.quantity

    def get_summary(self) -> str:
        return f"{self.quantity} × {self.item.name}"


class PendingOrder(BaseModel):
    """An interpreted order waiting for the customer's confirmation."""

    line_items: list[LineItem] = Field(min_length=1)
    external_order_id: str | None = None

    @property
    def total(self) -> int:
        return sum(line.line_subtotal for line in self.line_items)


class MessageOrigin(str, Enum):
    """Who authored a transcript message."""
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """
    A single transcript entry.

    `timestamp` is stamped when the message is revealed, not when it is
    committed, so it reflects when the customer could first see it.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    text: str
    origin: MessageOrigin
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Notification(BaseModel):
    """A transient announcement for the presentation layer."""

    title: str
    description: str
