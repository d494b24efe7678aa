"""
State Machine for the Order Conversation.

This module provides the ConversationEngine: a deterministic state machine
that walks one customer from greeting to a confirmed (or re-started) order.

    GREETING -> COLLECTING_NAME -> COLLECTING_EMAIL -> COLLECTING_ADDRESS
             -> AWAITING_ORDER_TEXT <-> AWAITING_ORDER_CONFIRMATION -> COMPLETE

Each step has a focused handler that can only produce outcomes valid for that
step. The engine owns the state, applies the handler's outcome, and commits
messages.

Messages are revealed in two phases. A message is committed (gets its id and
enters the history) the moment a handler produces it, while its appearance in
the transcript is scheduled on the RevealQueue. Step and profile are always
final when submit() returns, whatever the transcript currently shows.
"""

import logging
import time
from typing import Callable

from .checkout_handler import CheckoutHandler
from .confirmation_handler import ConfirmationHandler
from .handler_config import HandlerConfig, RevealTimings
from .menu_catalog import MenuCatalog
from .message_builder import MessageBuilder
from .models import CustomerProfile, Message, MessageOrigin, Notification, PendingOrder
from .order_service import BaseOrderConfirmer, BaseOrderInterpreter
from .schemas import (
    REQUIRED_PROFILE_FIELDS,
    ConversationState,
    ConversationStep,
    Reply,
    StepOutcome,
    SubmitResult,
)
from .taking_items_handler import TakingItemsHandler
from .transcript import RevealQueue, Transcript

logger = logging.getLogger(__name__)

# Steps whose handlers call the order service
SERVICE_STEPS = frozenset({
    ConversationStep.AWAITING_ORDER_TEXT,
    ConversationStep.AWAITING_ORDER_CONFIRMATION,
})


class ConversationEngine:
    """
    Drives a single order conversation.

    One instance per session; instances share nothing but the read-only
    catalog. Not safe for concurrent submit() calls: a caller must wait for
    one submit() to finish (see is_awaiting_service) before the next.

    Args:
        catalog: Menu presented to the customer and sent to the interpreter
        interpreter: Order interpretation client
        confirmer: Order confirmation client
        timings: Reveal delays (defaults to RevealTimings())
        notifier: Called with each Notification the conversation raises
        clock: Monotonic clock used for reveal scheduling
    """

    def __init__(
        self,
        catalog: MenuCatalog,
        interpreter: BaseOrderInterpreter,
        confirmer: BaseOrderConfirmer,
        timings: RevealTimings | None = None,
        notifier: Callable[[Notification], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.catalog = catalog
        self.message_builder = MessageBuilder(catalog)
        self.timings = timings or RevealTimings()
        self.transcript = Transcript()
        self.reveal_queue = RevealQueue(self.transcript, clock=clock)

        self._state = ConversationState()
        self._history: list[Message] = []
        self._next_message_id = 1
        self._awaiting_service = False
        self._notifier = notifier

        config = HandlerConfig(
            catalog=catalog,
            message_builder=self.message_builder,
            timings=self.timings,
        )
        self.checkout_handler = CheckoutHandler(config)
        self.taking_items_handler = TakingItemsHandler(config, interpreter)
        self.confirmation_handler = ConfirmationHandler(config, confirmer)

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def step(self) -> ConversationStep:
        return self._state.step

    @property
    def profile(self) -> CustomerProfile:
        """A copy of the customer profile; edits do not affect the engine."""
        return self._state.profile.model_copy()

    @property
    def pending_order(self) -> PendingOrder | None:
        return self._state.pending_order

    @property
    def confirmed_order(self) -> PendingOrder | None:
        return self._state.confirmed_order

    @property
    def is_awaiting_service(self) -> bool:
        """True while an interpreter or confirmer call is outstanding."""
        return self._awaiting_service

    @property
    def is_composing(self) -> bool:
        """True while a committed message has not yet appeared in the transcript."""
        return self.reveal_queue.is_composing

    @property
    def is_complete(self) -> bool:
        return self._state.step == ConversationStep.COMPLETE

    @property
    def history(self) -> tuple[Message, ...]:
        """Every committed message, including ones not yet revealed."""
        return tuple(self._history)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def start(self) -> SubmitResult:
        """Greet the customer and start collecting their name. Idempotent."""
        if self._state.step != ConversationStep.GREETING:
            return SubmitResult(step=self._state.step)

        logger.info("Conversation started")
        greeting = self._commit_assistant(
            Reply(self.message_builder.GREETING, self.timings.greeting_delay)
        )
        self._transition(ConversationStep.COLLECTING_NAME)
        return SubmitResult(step=self._state.step, messages=[greeting])

    async def submit(self, raw_text: str) -> SubmitResult:
        """
        Record the customer's text and advance the conversation.

        Never raises: every failure is turned into an assistant message and
        the step is left where it was.
        """
        messages: list[Message] = []
        if self._state.step == ConversationStep.GREETING:
            messages.extend(self.start().messages)

        self._commit(raw_text, MessageOrigin.USER, delay=0.0)

        if self._awaiting_service:
            logger.warning("Input received while a service call is outstanding")
            messages.append(self._commit_assistant(Reply(self.message_builder.STILL_WORKING)))
            return SubmitResult(step=self._state.step, messages=messages)

        step = self._state.step
        try:
            outcome = await self._dispatch(step, raw_text)
            if outcome.next_step is not None and outcome.next_step != step:
                self._transition(outcome.next_step)
        except Exception:
            logger.exception("Error handling input at step %s", step.value)
            outcome = StepOutcome(replies=[Reply(self.message_builder.GENERIC_ERROR, self.timings.reveal_delay)])

        for reply in outcome.replies:
            messages.append(self._commit_assistant(reply))
        for notification in outcome.notifications:
            self._notify(notification)

        return SubmitResult(step=self._state.step, messages=messages)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _dispatch(self, step: ConversationStep, raw_text: str) -> StepOutcome:
        if step == ConversationStep.COLLECTING_NAME:
            return self.checkout_handler.handle_name(raw_text, self._state)
        elif step == ConversationStep.COLLECTING_EMAIL:
            return self.checkout_handler.handle_email(raw_text, self._state)
        elif step == ConversationStep.COLLECTING_ADDRESS:
            return self.checkout_handler.handle_address(raw_text, self._state)
        elif step in SERVICE_STEPS:
            self._awaiting_service = True
            try:
                if step == ConversationStep.AWAITING_ORDER_TEXT:
                    return await self.taking_items_handler.handle_order_text(raw_text, self._state)
                return await self.confirmation_handler.handle_confirmation(raw_text, self._state)
            finally:
                self._awaiting_service = False
        else:
            return StepOutcome(replies=[Reply(self.message_builder.ALREADY_COMPLETE, self.timings.reveal_delay)])

    def _transition(self, next_step: ConversationStep) -> None:
        """Move to `next_step`, refusing moves that would break state invariants."""
        current = self._state.step
        if current == ConversationStep.COMPLETE:
            raise RuntimeError("Conversation is complete; no further transitions")

        missing = [
            field_name for field_name in REQUIRED_PROFILE_FIELDS[next_step]
            if getattr(self._state.profile, field_name) is None
        ]
        if missing:
            raise RuntimeError(f"Cannot enter {next_step.value}: missing {', '.join(missing)}")

        has_pending = self._state.pending_order is not None
        if has_pending != (next_step == ConversationStep.AWAITING_ORDER_CONFIRMATION):
            raise RuntimeError(f"Cannot enter {next_step.value} with pending order={has_pending}")

        logger.info("Step %s -> %s", current.value, next_step.value)
        self._state.step = next_step

    def _commit_assistant(self, reply: Reply) -> Message:
        return self._commit(reply.text, MessageOrigin.ASSISTANT, delay=reply.delay)

    def _commit(self, text: str, origin: MessageOrigin, delay: float) -> Message:
        message = Message(id=self._next_message_id, text=text, origin=origin)
        self._next_message_id += 1
        self._history.append(message)
        self.reveal_queue.schedule(message, delay)
        return message

    def _notify(self, notification: Notification) -> None:
        logger.info("Notification: %s", notification.title)
        if self._notifier is None:
            return
        try:
            self._notifier(notification)
        except Exception:
            logger.exception("Notifier failed for '%s'", notification.title)
