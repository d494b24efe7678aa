"""
Message Builder for the Order Conversation.

This module handles message generation for the conversation flow,
including the menu display, order summaries, and the fixed prompts for
each step.

Kept separate from state_machine.py so wording can change without touching
transition logic.
"""

from .menu_catalog import MenuCatalog
from .models import PendingOrder
from .schemas import ConversationStep

CURRENCY_SYMBOL = "₹"


def format_price(amount: int) -> str:
    """Format an amount in minor units for display (350 -> '₹350')."""
    return f"{CURRENCY_SYMBOL}{amount}"


class MessageBuilder:
    """
    Handles message construction for the conversation engine.

    Provides the greeting, per-step prompts, the rendered menu and order
    summaries. Holds the catalog so menu text always matches what the engine
    sends to the order service.
    """

    GREETING = (
        "Hi 👋 I'm Orderly, your smart order assistant. I'll help you place your "
        "order quickly and correctly. Can I have your name, please?"
    )
    ASK_ADDRESS = "Thanks! What's your delivery address?"
    ORDER_INSTRUCTIONS = (
        "What would you like to order today?\n\n"
        'You can order by telling me something like: "2 chocolate cakes and 1 mango tart"'
    )
    CONFIRMATION_PROMPT = (
        'Would you like to confirm this order? (Reply "yes" to confirm or "no" to change it)'
    )
    CONFIRMATION_REPROMPT = (
        'Sorry, I need a clear answer. Please reply "yes" to confirm this order or "no" to change it.'
    )
    ORDER_INSTEAD = "No problem! What would you like to order instead?"
    ALREADY_COMPLETE = (
        "Your order is already confirmed! If you need to place another order, "
        "please start a new conversation."
    )
    STILL_WORKING = "I'm still working on your last message. One moment, please!"
    GENERIC_ERROR = "I'm sorry, I didn't quite catch that. Could you try again?"

    def __init__(self, catalog: MenuCatalog):
        self.catalog = catalog

    def format_menu(self) -> str:
        """One '<glyph> <name> — ₹<price>' line per item, blank-line separated."""
        lines = []
        for item in self.catalog:
            prefix = f"{item.glyph} " if item.glyph else ""
            lines.append(f"{prefix}{item.name} — {format_price(item.unit_price)}")
        return "\n\n".join(lines)

    def acknowledge_name(self, name: str) -> str:
        return f"Great {name}! Could you share your email so I can send your confirmation?"

    def present_menu(self) -> str:
        return f"Perfect! Here's today's menu:\n\n{self.format_menu()}\n\n{self.ORDER_INSTRUCTIONS}"

    def retry_menu(self) -> str:
        return f"Here are our available items:\n\n{self.format_menu()}\n\nPlease try ordering again."

    def build_order_summary(self, order: PendingOrder) -> str:
        """Itemized lines, total and (when assigned) the service's order id."""
        lines = ["Perfect 🎉 Your order is:"]
        lines.extend(line.get_summary() for line in order.line_items)
        lines.append(f"Total: {format_price(order.total)}")
        if order.external_order_id:
            lines.append(f"Order ID: {order.external_order_id}")
        lines.append("Thank you for choosing us!")
        return "\n".join(lines)

    def order_confirmed(self, email: str | None) -> str:
        return (
            "Wonderful! 🎉 Your order has been confirmed. You'll receive an email at "
            f"{email} shortly with the details. Thank you for choosing us! 🙌"
        )

    def get_step_prompt(self, step: ConversationStep) -> str:
        """The question the customer is currently expected to answer."""
        if step in (ConversationStep.GREETING, ConversationStep.COLLECTING_NAME):
            return "Can I have your name, please?"
        elif step == ConversationStep.COLLECTING_EMAIL:
            return "Could you share your email so I can send your confirmation?"
        elif step == ConversationStep.COLLECTING_ADDRESS:
            return "What's your delivery address?"
        elif step == ConversationStep.AWAITING_ORDER_TEXT:
            return "What would you like to order today?"
        elif step == ConversationStep.AWAITING_ORDER_CONFIRMATION:
            return self.CONFIRMATION_PROMPT
        else:
            return self.ALREADY_COMPLETE
