"""
Conversation Engine for Order Capture.

This package walks a customer from greeting to a confirmed order:
- Step-by-step collection of name, email and delivery address
- Free-text ordering interpreted by an external order service
- Deterministic yes/no confirmation
- Delayed, ordered reveal of assistant messages ("typing" effect)
"""

from .menu_catalog import (
    MenuItem,
    MenuCatalog,
    DEFAULT_MENU_ITEMS,
    default_catalog,
)

from .models import (
    CustomerProfile,
    LineItem,
    PendingOrder,
    MessageOrigin,
    Message,
    Notification,
)

from .schemas import (
    ConversationStep,
    ConversationState,
    InterpretationResult,
    SubmitResult,
)

from .order_service import (
    BaseOrderInterpreter,
    BaseOrderConfirmer,
    HttpOrderInterpreter,
    HttpOrderConfirmer,
    OrderServiceError,
)

from .transcript import (
    Transcript,
    RevealQueue,
)

from .handler_config import RevealTimings

from .state_machine import ConversationEngine

__all__ = [
    # Menu
    "MenuItem",
    "MenuCatalog",
    "DEFAULT_MENU_ITEMS",
    "default_catalog",
    # Models
    "CustomerProfile",
    "LineItem",
    "PendingOrder",
    "MessageOrigin",
    "Message",
    "Notification",
    # Schemas
    "ConversationStep",
    "ConversationState",
    "InterpretationResult",
    "SubmitResult",
    # Order service
    "BaseOrderInterpreter",
    "BaseOrderConfirmer",
    "HttpOrderInterpreter",
    "HttpOrderConfirmer",
    "OrderServiceError",
    # Transcript
    "Transcript",
    "RevealQueue",
    # Engine
    "RevealTimings",
    "ConversationEngine",
]
