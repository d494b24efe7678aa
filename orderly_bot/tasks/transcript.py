"""
Transcript and delayed message reveal.

The Transcript is the append-only log the presentation layer renders. The
RevealQueue sits in front of it: the engine commits a message immediately and
schedules when it should *appear*, which is how the "Orderly is typing..."
effect is produced without holding up state transitions.

Ordering guarantee: messages surface in the order they were scheduled, even
when a later message asks for a shorter delay. Each entry's reveal time is
clamped to be no earlier than the entry before it.
"""

import asyncio
import logging
import time
from collections import deque
from datetime import datetime, timezone
from typing import Callable, Iterator

from .models import Message

logger = logging.getLogger(__name__)


class Transcript:
    """Append-only, ordered log of revealed messages."""

    def __init__(self) -> None:
        self._messages: list[Message] = []

    def append(self, message: Message) -> None:
        if self._messages:
            last = self._messages[-1]
            if message.id <= last.id:
                raise ValueError(f"Message id {message.id} is not after {last.id}")
            if message.timestamp < last.timestamp:
                raise ValueError("Message timestamp precedes the previous entry")
        self._messages.append(message)

    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def since(self, after_id: int | None) -> list[Message]:
        """Messages with an id greater than `after_id` (all when None)."""
        if after_id is None:
            return list(self._messages)
        return [m for m in self._messages if m.id > after_id]

    @property
    def last(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]


class RevealQueue:
    """
    FIFO of (message, reveal_at) pairs drained into a Transcript.

    Draining can happen three ways:
    - reveal_due(): reveal whatever is due now (polling, e.g. per HTTP request)
    - drain(): await on the event loop until the queue is empty
    - flush(): reveal everything immediately (tests, shutdown)
    """

    def __init__(
        self,
        transcript: Transcript,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.transcript = transcript
        self._clock = clock
        self._pending: deque[tuple[Message, float]] = deque()
        self._last_reveal_at = float("-inf")

    @property
    def is_composing(self) -> bool:
        """True while any scheduled message has not yet appeared."""
        return bool(self._pending)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def schedule(self, message: Message, delay: float = 0.0) -> float:
        """
        Schedule `message` to appear after `delay` seconds.

        A zero-delay message with nothing ahead of it is revealed before this
        call returns. Returns the (clamped) reveal time.
        """
        now = self._clock()
        reveal_at = max(now + max(delay, 0.0), self._last_reveal_at)
        self._last_reveal_at = reveal_at
        self._pending.append((message, reveal_at))
        logger.debug("Scheduled message %d (%s) to reveal in %.2fs",
                     message.id, message.origin.value, reveal_at - now)
        self.reveal_due(now)
        return reveal_at

    def reveal_due(self, now: float | None = None) -> list[Message]:
        """Move every message whose reveal time has passed into the transcript."""
        if now is None:
            now = self._clock()
        revealed = []
        while self._pending and self._pending[0][1] <= now:
            message, _ = self._pending.popleft()
            revealed.append(self._reveal(message))
        return revealed

    def flush(self) -> list[Message]:
        """Reveal every pending message immediately, in order."""
        revealed = []
        while self._pending:
            message, _ = self._pending.popleft()
            revealed.append(self._reveal(message))
        return revealed

    async def drain(self) -> list[Message]:
        """Sleep until each pending message is due and reveal it."""
        revealed = []
        while self._pending:
            wait = self._pending[0][1] - self._clock()
            if wait > 0:
                await asyncio.sleep(wait)
            if self._pending:
                message, _ = self._pending.popleft()
                revealed.append(self._reveal(message))
        return revealed

    def _reveal(self, message: Message) -> Message:
        timestamp = datetime.now(timezone.utc)
        last = self.transcript.last
        if last is not None and timestamp < last.timestamp:
            timestamp = last.timestamp
        shown = message.model_copy(update={"timestamp": timestamp})
        self.transcript.append(shown)
        return shown
