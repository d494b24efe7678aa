"""
Session Management Service for Orderly Bot
==========================================

This module keeps one ConversationEngine per chat session in an in-memory
registry. Sessions are not persisted: a session evicted from the registry (or
lost on restart) cannot be restored, and the customer starts over.

Session Data Structure:
-----------------------
Each ChatSession holds:
- engine: The session's own ConversationEngine (nothing is shared between
  sessions except the read-only menu catalog)
- notifications: Announcements raised by the engine ("Order Confirmed!"),
  collected for the presentation layer

Cache Eviction Strategy:
------------------------
1. **TTL-based**: Sessions not accessed within SESSION_TTL_SECONDS are removed.
   Checked probabilistically (~1% of requests) to avoid overhead.

2. **LRU-based**: When the registry reaches SESSION_MAX_CACHE_SIZE, the oldest
   10% of sessions (by last access time) are evicted to make room.

Thread Safety:
--------------
All registry operations are protected by a threading.Lock. A single session's
engine is not thread-safe; the chat routes refuse a new message while the
previous one is still waiting on the order service.

Engine Construction:
--------------------
Engines are built by the registered engine factory. The default factory wires
the HTTP order service clients and reveal timings from config.py. Tests swap
it with set_engine_factory() to inject fake service clients.

Usage:
------
    from orderly_bot.services.session import create_session, get_session

    session = create_session()
    session.engine.start()

    session = get_session(session_id)
    if session is None:
        raise HTTPException(404, "Session not found")
"""

import logging
import random
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .. import config
from ..tasks import (
    ConversationEngine,
    HttpOrderConfirmer,
    HttpOrderInterpreter,
    Notification,
    RevealTimings,
    default_catalog,
)


logger = logging.getLogger(__name__)

# Builds an engine that reports notifications to the given callback
EngineFactory = Callable[[Callable[[Notification], None]], ConversationEngine]


@dataclass
class ChatSession:
    """A live conversation and what it has announced so far."""
    session_id: str
    engine: ConversationEngine
    notifications: List[Notification] = field(default_factory=list)


def build_default_engine(notifier: Callable[[Notification], None]) -> ConversationEngine:
    """Engine wired to the configured order webhooks."""
    return ConversationEngine(
        catalog=default_catalog(),
        interpreter=HttpOrderInterpreter(
            config.ORDER_INTERPRET_URL,
            timeout=config.ORDER_SERVICE_TIMEOUT_SECONDS,
        ),
        confirmer=HttpOrderConfirmer(
            config.ORDER_CONFIRM_URL,
            timeout=config.ORDER_SERVICE_TIMEOUT_SECONDS,
        ),
        timings=RevealTimings.from_config(),
        notifier=notifier,
    )


_engine_factory: EngineFactory = build_default_engine


def set_engine_factory(factory: Optional[EngineFactory]) -> EngineFactory:
    """
    Replace the engine factory used for new sessions.

    Passing None restores the default. Returns the previous factory so
    callers can put it back.
    """
    global _engine_factory
    previous = _engine_factory
    _engine_factory = factory or build_default_engine
    return previous


# =============================================================================
# Session Registry
# =============================================================================
# Structure: {session_id: {"session": ChatSession, "last_access": timestamp}}

SESSION_CACHE: Dict[str, Dict[str, Any]] = {}
_cache_lock = threading.Lock()


# =============================================================================
# Cache Maintenance Functions
# =============================================================================

def _cleanup_expired_sessions() -> int:
    """
    Remove sessions not accessed within SESSION_TTL_SECONDS.

    Returns:
        int: Number of sessions removed
    """
    now = time.time()
    expired = []

    with _cache_lock:
        for sid, entry in SESSION_CACHE.items():
            if now - entry.get("last_access", 0) > config.SESSION_TTL_SECONDS:
                expired.append(sid)

        for sid in expired:
            del SESSION_CACHE[sid]

    if expired:
        logger.debug("Cleaned up %d expired sessions", len(expired))

    return len(expired)


def _evict_oldest_sessions(count: int) -> None:
    """
    Evict the `count` least recently used sessions once the registry is full.
    """
    with _cache_lock:
        if len(SESSION_CACHE) < config.SESSION_MAX_CACHE_SIZE:
            return

        sorted_sessions = sorted(
            SESSION_CACHE.items(),
            key=lambda x: x[1].get("last_access", 0)
        )

        to_remove = sorted_sessions[:count]
        for sid, _ in to_remove:
            del SESSION_CACHE[sid]

        logger.debug("Evicted %d oldest sessions", len(to_remove))


# =============================================================================
# Public Session Management Functions
# =============================================================================

def create_session() -> ChatSession:
    """
    Create and register a new session with a fresh engine.

    The engine is not started; callers decide when the greeting goes out.
    """
    session_id = str(uuid.uuid4())
    notifications: List[Notification] = []
    engine = _engine_factory(notifications.append)
    session = ChatSession(session_id=session_id, engine=engine, notifications=notifications)

    _evict_oldest_sessions(max(1, config.SESSION_MAX_CACHE_SIZE // 10))

    with _cache_lock:
        SESSION_CACHE[session_id] = {
            "session": session,
            "last_access": time.time(),
        }

    logger.info("Created session %s", session_id)
    return session


def get_session(session_id: str) -> Optional[ChatSession]:
    """
    Look up a session and refresh its last access time.

    Returns:
        The ChatSession, or None if it does not exist or has expired
    """
    if random.random() < 0.01:
        _cleanup_expired_sessions()

    now = time.time()
    with _cache_lock:
        entry = SESSION_CACHE.get(session_id)
        if entry is None:
            return None
        if now - entry["last_access"] > config.SESSION_TTL_SECONDS:
            del SESSION_CACHE[session_id]
            logger.debug("Session %s expired on access", session_id)
            return None
        entry["last_access"] = now
        return entry["session"]


def remove_session(session_id: str) -> bool:
    """Drop a session. Returns True if it existed."""
    with _cache_lock:
        return SESSION_CACHE.pop(session_id, None) is not None


def clear_sessions() -> None:
    """Drop every session (used by tests and on shutdown)."""
    with _cache_lock:
        SESSION_CACHE.clear()


def get_cache_stats() -> Dict[str, int]:
    """Current registry size and limits."""
    with _cache_lock:
        size = len(SESSION_CACHE)
    return {
        "cached_sessions": size,
        "max_cache_size": config.SESSION_MAX_CACHE_SIZE,
        "ttl_seconds": config.SESSION_TTL_SECONDS,
    }
