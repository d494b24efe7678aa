"""
Taking Items Handler for the Order Conversation.

This module handles the free-text ordering step: the customer's text is sent
to the order interpretation service together with their details and the
menu, and the normalized answer decides whether we move on to confirmation
or ask again.

The engine in state_machine.py owns the outstanding-call flag around this
handler; the handler itself only turns a service answer into a step outcome.
"""

import logging

from .handler_config import BaseHandler, HandlerConfig
from .order_service import (
    BaseOrderInterpreter,
    OrderServiceError,
    REJECTION_FALLBACK_MESSAGE,
    SERVICE_ERROR_MESSAGE,
)
from .schemas import (
    ConversationState,
    ConversationStep,
    InterpretationResult,
    Reply,
    StepOutcome,
)

logger = logging.getLogger(__name__)


class TakingItemsHandler(BaseHandler):
    """
    Turns free-text orders into a pending order.

    Every failure (service rejection, unknown item, unreadable response,
    network error) lands on the same retry path: explain, show the menu
    again, stay on this step.
    """

    def __init__(self, config: HandlerConfig, interpreter: BaseOrderInterpreter):
        super().__init__(config)
        self.interpreter = interpreter

    async def handle_order_text(self, user_input: str, state: ConversationState) -> StepOutcome:
        """Interpret the order and either summarize it or ask again."""
        result = await self._interpret(user_input, state)

        if result.is_accepted:
            state.pending_order = result.order
            logger.info("ORDER: accepted %d line item(s), total %d, order_id=%s",
                        len(result.order.line_items), result.order.total,
                        result.order.external_order_id)
            return StepOutcome(
                replies=[
                    Reply(self.message_builder.build_order_summary(result.order)),
                    Reply(self.message_builder.CONFIRMATION_PROMPT, self.timings.follow_up_delay),
                ],
                next_step=ConversationStep.AWAITING_ORDER_CONFIRMATION,
            )

        logger.info("ORDER: rejected, asking again")
        return StepOutcome(
            replies=[
                Reply(result.reason or REJECTION_FALLBACK_MESSAGE),
                Reply(self.message_builder.retry_menu(), self.timings.follow_up_delay),
            ],
        )

    async def _interpret(self, user_input: str, state: ConversationState) -> InterpretationResult:
        """Call the interpreter, mapping every failure to a rejection."""
        try:
            return await self.interpreter.interpret(
                user_input,
                state.profile.model_copy(),
                self.catalog,
            )
        except OrderServiceError as e:
            logger.warning("Order interpretation failed: %s", e)
        except Exception:
            logger.exception("Unexpected error during order interpretation")
        return InterpretationResult.rejected(SERVICE_ERROR_MESSAGE)
