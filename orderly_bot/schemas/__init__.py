"""
Schemas Package for Orderly Bot
===============================

Pydantic models used for API request validation and response serialization.
Kept apart from the engine's own models so the wire format can evolve without
touching conversation logic.

Schema Organization:
--------------------
- **chat.py**: Chat session, message and transcript schemas

Naming Conventions:
-------------------
- *Out: Response models (e.g., MessageOut) - what API returns
- *Request: Request bodies (e.g., ChatMessageRequest)
- *Response: Complete response structures (e.g., ChatMessageResponse)
"""

from .chat import (
    ChatStartResponse,
    ChatMessageRequest,
    ChatMessageResponse,
    MessageOut,
    NotificationOut,
    TranscriptResponse,
)

__all__ = [
    "ChatStartResponse",
    "ChatMessageRequest",
    "ChatMessageResponse",
    "MessageOut",
    "NotificationOut",
    "TranscriptResponse",
]
