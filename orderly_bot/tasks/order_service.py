"""
Order interpretation and confirmation service clients.

The conversation engine delegates two things to an external webhook service:
1. Interpreting a free-text order ("2 chocolate cakes") against the menu
2. Recording the customer's yes/no decision on an interpreted order

The HTTP clients here only marshal a request, await one response and map it
into domain types. They never retry; retry and fallback policy belongs to the
engine. Transport problems surface as OrderServiceError.

All knowledge of the service's loose response shape (array-wrapped payloads,
`customerMessage` vs `message`, the "<Item> x <qty> = ..." item strings) is
confined to parse_interpretation_response().
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Literal

import requests

from .menu_catalog import MenuCatalog
from .models import CustomerProfile, LineItem, PendingOrder
from .parsers import parse_item_line
from .schemas import InterpretationResult

logger = logging.getLogger(__name__)

# Request timeout in seconds, used when none is configured
DEFAULT_TIMEOUT = 15.0

VALID_STATUS = "valid"

# Service said no (or said yes about something we cannot find) without a reason
REJECTION_FALLBACK_MESSAGE = "Sorry, I couldn't understand your order."

# Unreadable response or transport failure
SERVICE_ERROR_MESSAGE = "Sorry, there was an error processing your order. Please try again."

Decision = Literal["yes", "no"]


class OrderServiceError(Exception):
    """The order service could not be reached or returned an unusable response."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


# =============================================================================
# Client Contracts
# =============================================================================

class BaseOrderInterpreter(ABC):
    """Turns free-text orders into an InterpretationResult."""

    @abstractmethod
    async def interpret(
        self,
        order_text: str,
        profile: CustomerProfile,
        catalog: MenuCatalog,
    ) -> InterpretationResult:
        """
        Interpret `order_text` for the given customer against `catalog`.

        Raises:
            OrderServiceError: transport failure, non-OK status, undecodable body
        """


class BaseOrderConfirmer(ABC):
    """Records the customer's decision on an interpreted order."""

    @abstractmethod
    async def confirm(self, order_id: str, decision: Decision) -> bool:
        """
        Send `decision` for `order_id`. Returns True once the service acknowledged.

        Raises:
            OrderServiceError: transport failure or non-OK status
        """


# =============================================================================
# Wire Format
# =============================================================================

def build_interpret_request(
    order_text: str,
    profile: CustomerProfile,
    catalog: MenuCatalog,
) -> dict[str, Any]:
    """Request body for the interpret operation."""
    return {
        "orderText": order_text,
        "customerDetails": profile.to_payload(),
        "menuItems": catalog.to_payload(),
    }


def build_confirm_request(order_id: str, decision: Decision) -> dict[str, str]:
    """Request body for the confirm operation."""
    return {"order_id": order_id, "confirm": decision}


def parse_interpretation_response(data: Any, catalog: MenuCatalog) -> InterpretationResult:
    """
    Normalize an interpret response into accepted/rejected.

    Expected shape is a non-empty array whose first element is either
        {"status": "valid", "items": "<Item> x <qty> = ...", "totalPrice": n, "order_id": "..."}
    or
        {"status": <anything else>, "customerMessage" | "message": "..."}

    `items` may also be a list of such strings, one per line item. Every item
    must resolve to a catalog entry by exact (trimmed) name, otherwise the
    order is rejected even though the service called it valid.

    Args:
        data: Decoded JSON body
        catalog: Menu the order must be drawn from

    Returns:
        InterpretationResult; never raises
    """
    if not isinstance(data, list) or not data or not isinstance(data[0], dict):
        logger.warning("Unrecognized interpret response shape: %s", type(data).__name__)
        return InterpretationResult.rejected(SERVICE_ERROR_MESSAGE)

    response = data[0]
    service_reason = response.get("customerMessage") or response.get("message")
    if not isinstance(service_reason, str) or not service_reason.strip():
        service_reason = None

    if response.get("status") != VALID_STATUS:
        logger.info("Order rejected by service (status=%s)", response.get("status"))
        return InterpretationResult.rejected(service_reason or REJECTION_FALLBACK_MESSAGE)

    raw_items = response.get("items")
    item_lines = raw_items if isinstance(raw_items, list) else [raw_items]

    line_items: list[LineItem] = []
    try:
        for line in item_lines:
            if not isinstance(line, str):
                raise ValueError(f"Item line is not a string: {line!r}")
            name, quantity = parse_item_line(line)
            menu_item = catalog.find_by_name(name)
            if menu_item is None:
                logger.info("Service returned unknown menu item: %s", name)
                return InterpretationResult.rejected(service_reason or REJECTION_FALLBACK_MESSAGE)
            line_items.append(LineItem(item=menu_item, quantity=quantity))
    except ValueError as e:
        logger.warning("Could not parse interpreted items: %s", e)
        return InterpretationResult.rejected(SERVICE_ERROR_MESSAGE)

    if not line_items:
        logger.warning("Service accepted an order with no items")
        return InterpretationResult.rejected(SERVICE_ERROR_MESSAGE)

    order_id = response.get("order_id")
    order = PendingOrder(
        line_items=line_items,
        external_order_id=str(order_id) if order_id not in (None, "") else None,
    )

    service_total = response.get("totalPrice")
    if isinstance(service_total, (int, float)) and service_total != order.total:
        logger.warning(
            "Service total %s differs from menu total %s for order %s; using menu total",
            service_total, order.total, order.external_order_id,
        )

    return InterpretationResult.accepted(order)


# =============================================================================
# HTTP Clients
# =============================================================================

def _post_json(url: str, payload: dict[str, Any], timeout: float) -> Any:
    """POST `payload` and return the decoded JSON body (None for an empty body)."""
    if not url:
        raise OrderServiceError("Order service URL is not configured")

    try:
        response = requests.post(url, json=payload, timeout=timeout)
    except requests.RequestException as e:
        raise OrderServiceError(f"Order service request failed: {e}") from e

    if not response.ok:
        raise OrderServiceError(
            f"Order service returned HTTP {response.status_code}",
            status_code=response.status_code,
        )

    if not response.content:
        return None

    try:
        return response.json()
    except ValueError as e:
        raise OrderServiceError("Order service returned invalid JSON") from e


class HttpOrderInterpreter(BaseOrderInterpreter):
    """Interprets orders through the order webhook."""

    def __init__(self, url: str, timeout: float = DEFAULT_TIMEOUT):
        self.url = url
        self.timeout = timeout

    async def interpret(
        self,
        order_text: str,
        profile: CustomerProfile,
        catalog: MenuCatalog,
    ) -> InterpretationResult:
        payload = build_interpret_request(order_text, profile, catalog)
        logger.debug("Interpreting order text (%d chars)", len(order_text))
        # requests is blocking; run it off the event loop
        data = await asyncio.to_thread(_post_json, self.url, payload, self.timeout)
        return parse_interpretation_response(data, catalog)


class HttpOrderConfirmer(BaseOrderConfirmer):
    """Sends yes/no decisions to the order webhook."""

    def __init__(self, url: str, timeout: float = DEFAULT_TIMEOUT):
        self.url = url
        self.timeout = timeout

    async def confirm(self, order_id: str, decision: Decision) -> bool:
        payload = build_confirm_request(order_id, decision)
        logger.debug("Sending decision '%s' for order %s", decision, order_id)
        await asyncio.to_thread(_post_json, self.url, payload, self.timeout)
        return True
