"""
Chat Schemas for Orderly Bot
============================

This module defines Pydantic models for the chat API endpoints.

Endpoint Coverage:
------------------
- POST /chat/start: Start a new chat session
- POST /chat/message: Send a message and receive the assistant's replies
- GET /chat/{session_id}/transcript: Poll the revealed transcript

Key Concepts:
-------------
1. **Committed vs revealed**: /chat/message returns every assistant message
   the turn produced, immediately. The transcript endpoint returns only the
   messages whose typing delay has elapsed, which is what a chat window shows.

2. **Step**: Each response reports the conversation step so clients can
   adapt their input widget (e.g. an email field while collecting email).

Validation:
-----------
- Message text is trimmed, then must be 1..MAX_MESSAGE_LENGTH characters.
"""

from datetime import datetime
from typing import Any, List

from pydantic import BaseModel, Field, field_validator

from ..config import MAX_MESSAGE_LENGTH
from ..tasks import ConversationStep, Message, MessageOrigin, Notification


class MessageOut(BaseModel):
    """
    A single transcript message.

    Attributes:
        id: Increasing message id within the session
        text: Message text
        origin: "user" or "assistant"
        timestamp: When the message appeared (commit time until revealed)
    """
    id: int
    text: str
    origin: MessageOrigin
    timestamp: datetime

    @classmethod
    def from_message(cls, message: Message) -> "MessageOut":
        return cls(
            id=message.id,
            text=message.text,
            origin=message.origin,
            timestamp=message.timestamp,
        )


class NotificationOut(BaseModel):
    title: str
    description: str

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationOut":
        return cls(title=notification.title, description=notification.description)


class ChatStartResponse(BaseModel):
    """
    Response from starting a new chat session.

    Attributes:
        session_id: UUID for this chat session (use in subsequent requests)
        step: Conversation step after the greeting (collecting_name)
        message: The greeting
    """
    session_id: str
    step: ConversationStep
    message: str


class ChatMessageRequest(BaseModel):
    """
    Request body for sending a chat message.

    Attributes:
        session_id: UUID of the current chat session
        message: Customer's message text, trimmed (1-2000 characters)
    """
    session_id: str
    message: str = Field(..., min_length=1, max_length=MAX_MESSAGE_LENGTH)

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value


class ChatMessageResponse(BaseModel):
    """
    Response from sending a chat message.

    Attributes:
        step: Conversation step after this message
        messages: Assistant messages produced by this turn, in order
        is_complete: True once the order is confirmed
        is_awaiting_service: True while the order service is still working
    """
    step: ConversationStep
    messages: List[MessageOut] = Field(default_factory=list)
    is_complete: bool = False
    is_awaiting_service: bool = False


class TranscriptResponse(BaseModel):
    """
    The revealed transcript of a session.

    Attributes:
        session_id: UUID of the chat session
        step: Current conversation step
        prompt: The question the customer is currently expected to answer
        messages: Revealed messages (after `after_id` when given)
        is_composing: True while a committed message is still "being typed"
        is_awaiting_service: True while the order service is still working
        notifications: Announcements raised so far
    """
    session_id: str
    step: ConversationStep
    prompt: str
    messages: List[MessageOut] = Field(default_factory=list)
    is_composing: bool = False
    is_awaiting_service: bool = False
    notifications: List[NotificationOut] = Field(default_factory=list)
