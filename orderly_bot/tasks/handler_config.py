"""
Handler Configuration for Conversation Handlers.

This module provides a centralized configuration dataclass that is shared
across all step handlers, so each handler receives the catalog, the message
builder and the reveal timings from one place.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .menu_catalog import MenuCatalog
    from .message_builder import MessageBuilder


@dataclass(frozen=True)
class RevealTimings:
    """
    Simulated typing delays, in seconds.

    Attributes:
        reveal_delay: Ordinary assistant replies
        follow_up_delay: A prompt that follows another reply in the same turn
        greeting_delay: The opening greeting
    """
    reveal_delay: float = 1.0
    follow_up_delay: float = 0.5
    greeting_delay: float = 0.5

    @classmethod
    def from_config(cls) -> "RevealTimings":
        """Build timings from the environment-driven config module."""
        from .. import config
        return cls(
            reveal_delay=config.REVEAL_DELAY_SECONDS,
            follow_up_delay=config.FOLLOW_UP_DELAY_SECONDS,
            greeting_delay=config.GREETING_DELAY_SECONDS,
        )

    @classmethod
    def instant(cls) -> "RevealTimings":
        """No delays at all; every message appears as soon as it is committed."""
        return cls(reveal_delay=0.0, follow_up_delay=0.0, greeting_delay=0.0)


@dataclass
class HandlerConfig:
    """
    Shared configuration for conversation step handlers.

    Attributes:
        catalog: The menu every order is drawn from
        message_builder: MessageBuilder for constructing assistant messages
        timings: Reveal delays for assistant messages
    """

    catalog: "MenuCatalog"
    message_builder: "MessageBuilder"
    timings: RevealTimings = RevealTimings()


class BaseHandler:
    """
    Base class for conversation step handlers.

    Handlers inherit from this and call super().__init__(config).
    """

    def __init__(self, config: HandlerConfig):
        self.config = config
        self.catalog = config.catalog
        self.message_builder = config.message_builder
        self.timings = config.timings
