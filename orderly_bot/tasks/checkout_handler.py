"""
Customer Details Handler for the Order Conversation.

This module handles the information-gathering steps that come before the
menu: the customer's name, email address and delivery address.

The engine in state_machine.py only routes input here; the name, email and
address rules live in this module.
"""

import logging

from .handler_config import BaseHandler
from .parsers import validate_email_address
from .schemas import ConversationState, ConversationStep, Reply, StepOutcome

logger = logging.getLogger(__name__)


class CheckoutHandler(BaseHandler):
    """
    Collects customer details one step at a time.

    Name and address are taken as typed. The email must contain an "@";
    anything else is re-prompted without touching the profile.
    """

    def handle_name(self, user_input: str, state: ConversationState) -> StepOutcome:
        """Store the name and ask for an email."""
        state.profile.name = user_input
        logger.info("CHECKOUT: name collected")
        return StepOutcome(
            replies=[Reply(self.message_builder.acknowledge_name(user_input), self.timings.reveal_delay)],
            next_step=ConversationStep.COLLECTING_EMAIL,
        )

    def handle_email(self, user_input: str, state: ConversationState) -> StepOutcome:
        """Store a plausible email and ask for the address, or re-prompt."""
        email, error_message = validate_email_address(user_input)
        if error_message:
            logger.info("CHECKOUT: email rejected, re-prompting")
            return StepOutcome(replies=[Reply(error_message, self.timings.reveal_delay)])

        state.profile.email = email
        logger.info("CHECKOUT: email collected")
        return StepOutcome(
            replies=[Reply(self.message_builder.ASK_ADDRESS, self.timings.reveal_delay)],
            next_step=ConversationStep.COLLECTING_ADDRESS,
        )

    def handle_address(self, user_input: str, state: ConversationState) -> StepOutcome:
        """Store the address and present the menu."""
        state.profile.address = user_input
        logger.info("CHECKOUT: address collected, presenting menu")
        return StepOutcome(
            replies=[Reply(self.message_builder.present_menu(), self.timings.reveal_delay)],
            next_step=ConversationStep.AWAITING_ORDER_TEXT,
        )
