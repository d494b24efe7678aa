"""
Chat Routes for Orderly Bot
===========================

Customer-facing chat endpoints. These are transport only: every decision is
made by the session's ConversationEngine, and every message text comes from
it.

Endpoints:
----------
- POST /chat/start: Start a new chat session and get the greeting
- POST /chat/message: Send a message and get the assistant's replies
- GET /chat/{session_id}/transcript: Poll the revealed transcript

Conversation Flow:
------------------
1. Customer calls /chat/start to get a session_id and greeting
2. Customer sends name, email and address via /chat/message
3. Customer sends a free-text order; the engine interprets it through the
   order service and replies with a summary and a confirmation prompt
4. Customer answers yes/no; "yes" completes the conversation

Clients that want the typing effect poll /transcript, which only returns
messages whose reveal delay has elapsed.

Every handler is `async def`: engines are not thread-safe, so they are only
ever touched from the event loop, never from the threadpool.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from ..schemas.chat import (
    ChatStartResponse,
    ChatMessageRequest,
    ChatMessageResponse,
    MessageOut,
    NotificationOut,
    TranscriptResponse,
)
from ..services.session import ChatSession, create_session, get_session


logger = logging.getLogger(__name__)

# Router definition
chat_router = APIRouter(prefix="/chat", tags=["Chat"])


def _require_session(session_id: str) -> ChatSession:
    session = get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Invalid session_id")
    return session


@chat_router.post("/start", response_model=ChatStartResponse)
async def chat_start() -> ChatStartResponse:
    """Start a new chat session and return the greeting."""
    session = create_session()
    result = session.engine.start()
    return ChatStartResponse(
        session_id=session.session_id,
        step=result.step,
        message=result.messages[0].text,
    )


@chat_router.post("/message", response_model=ChatMessageResponse)
async def chat_message(req: ChatMessageRequest) -> ChatMessageResponse:
    """Send a message to the assistant and receive this turn's replies."""
    session = _require_session(req.session_id)
    engine = session.engine

    if engine.is_awaiting_service:
        logger.info("Session %s busy, rejecting message", req.session_id)
        raise HTTPException(
            status_code=409,
            detail="Still working on the previous message",
        )

    result = await engine.submit(req.message)

    return ChatMessageResponse(
        step=result.step,
        messages=[MessageOut.from_message(m) for m in result.messages],
        is_complete=result.is_complete,
        is_awaiting_service=engine.is_awaiting_service,
    )


@chat_router.get("/{session_id}/transcript", response_model=TranscriptResponse)
async def chat_transcript(
    session_id: str,
    after_id: Optional[int] = Query(None, description="Only return messages with a greater id"),
) -> TranscriptResponse:
    """Return the messages revealed so far."""
    session = _require_session(session_id)
    engine = session.engine
    engine.reveal_queue.reveal_due()

    return TranscriptResponse(
        session_id=session_id,
        step=engine.step,
        prompt=engine.message_builder.get_step_prompt(engine.step),
        messages=[MessageOut.from_message(m) for m in engine.transcript.since(after_id)],
        is_composing=engine.is_composing,
        is_awaiting_service=engine.is_awaiting_service,
        notifications=[NotificationOut.from_notification(n) for n in session.notifications],
    )
