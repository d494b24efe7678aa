"""
Confirmation Handler for the Order Conversation.

This module handles the customer's answer to "would you like to confirm this
order?". A confirmation finishes the conversation, a refusal sends the
customer back to ordering, and anything else is asked again.

The decision is forwarded to the order service when the order has an id, but
the service's answer never changes the flow: the customer has made up their
mind either way.

Kept out of state_machine.py so the engine never talks to the confirmer
directly.
"""

import logging

from .handler_config import BaseHandler, HandlerConfig
from .models import Notification
from .order_service import BaseOrderConfirmer, Decision, OrderServiceError
from .parsers import ConfirmationDecision, classify_confirmation
from .schemas import ConversationState, ConversationStep, Reply, StepOutcome

logger = logging.getLogger(__name__)

ORDER_CONFIRMED_NOTIFICATION = Notification(
    title="Order Confirmed! 🎉",
    description="Your order has been successfully placed.",
)


class ConfirmationHandler(BaseHandler):
    """
    Handles order confirmation and cancellation.

    Confirmation: notify the service ("yes"), thank the customer, complete.
    Refusal: notify the service ("no") best-effort, drop the pending order,
    ask for a new order.
    """

    def __init__(self, config: HandlerConfig, confirmer: BaseOrderConfirmer):
        super().__init__(config)
        self.confirmer = confirmer

    async def handle_confirmation(self, user_input: str, state: ConversationState) -> StepOutcome:
        """Handle the customer's answer to the confirmation prompt."""
        decision = classify_confirmation(user_input)
        logger.info("CONFIRMATION: decision=%s", decision.value)

        if decision == ConfirmationDecision.CONFIRM:
            return await self._handle_confirmed(state)

        if decision == ConfirmationDecision.DECLINE:
            return await self._handle_declined(state)

        return StepOutcome(
            replies=[Reply(self.message_builder.CONFIRMATION_REPROMPT, self.timings.reveal_delay)],
        )

    async def _handle_confirmed(self, state: ConversationState) -> StepOutcome:
        order = state.pending_order
        if order is not None and order.external_order_id:
            await self._send_decision(order.external_order_id, "yes")

        state.confirmed_order = order
        state.pending_order = None
        return StepOutcome(
            replies=[Reply(self.message_builder.order_confirmed(state.profile.email), self.timings.reveal_delay)],
            next_step=ConversationStep.COMPLETE,
            notifications=[ORDER_CONFIRMED_NOTIFICATION],
        )

    async def _handle_declined(self, state: ConversationState) -> StepOutcome:
        order = state.pending_order
        if order is not None and order.external_order_id:
            await self._send_decision(order.external_order_id, "no")

        state.pending_order = None
        return StepOutcome(
            replies=[Reply(self.message_builder.ORDER_INSTEAD, self.timings.reveal_delay)],
            next_step=ConversationStep.AWAITING_ORDER_TEXT,
        )

    async def _send_decision(self, order_id: str, decision: Decision) -> None:
        """Forward the decision; failures are logged and otherwise ignored."""
        try:
            await self.confirmer.confirm(order_id, decision)
            logger.info("CONFIRMATION: service acknowledged '%s' for order %s", decision, order_id)
        except OrderServiceError as e:
            logger.warning("CONFIRMATION: could not send '%s' for order %s: %s", decision, order_id, e)
        except Exception:
            logger.exception("CONFIRMATION: unexpected error sending '%s' for order %s", decision, order_id)
