"""
Helper functions for tests.

Provides fake order service clients and canned interpret responses so the
engine can be driven without a network.
"""

import asyncio

from orderly_bot.tasks import BaseOrderConfirmer, BaseOrderInterpreter
from orderly_bot.tasks.order_service import parse_interpretation_response


def valid_response(items="Chocolate Cake x 2 = ₹700", total=700, order_id="ORD-1"):
    """Interpret response body for an accepted order."""
    return [{"status": "valid", "items": items, "totalPrice": total, "order_id": order_id}]


def rejected_response(message="Item not found"):
    """Interpret response body for a rejected order."""
    return [{"status": "invalid", "customerMessage": message}]


class FakeInterpreter(BaseOrderInterpreter):
    """Replays queued response bodies (or raises queued exceptions) in order.

    Falls back to valid_response() once the queue is empty.
    """

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def queue(self, *responses):
        self.responses.extend(responses)

    async def interpret(self, order_text, profile, catalog):
        self.calls.append({"order_text": order_text, "profile": profile, "catalog": catalog})
        response = self.responses.pop(0) if self.responses else valid_response()
        if isinstance(response, Exception):
            raise response
        return parse_interpretation_response(response, catalog)


class FakeConfirmer(BaseOrderConfirmer):
    """Records decisions; raises `error` when set."""

    def __init__(self, error=None):
        self.error = error
        self.calls = []

    async def confirm(self, order_id, decision):
        self.calls.append((order_id, decision))
        if self.error is not None:
            raise self.error
        return True


class SlowInterpreter(FakeInterpreter):
    """FakeInterpreter that yields to the event loop mid-call.

    Set `engine` to record the engine's busy flag as seen from inside each call.
    """

    def __init__(self, responses=None, delay=0.01):
        super().__init__(responses)
        self.delay = delay
        self.engine = None
        self.busy_during_call = []

    async def interpret(self, order_text, profile, catalog):
        if self.engine is not None:
            self.busy_during_call.append(self.engine.is_awaiting_service)
        await asyncio.sleep(self.delay)
        return await super().interpret(order_text, profile, catalog)


class SlowConfirmer(FakeConfirmer):
    """FakeConfirmer that yields to the event loop mid-call."""

    def __init__(self, error=None, delay=0.01):
        super().__init__(error)
        self.delay = delay
        self.engine = None
        self.busy_during_call = []

    async def confirm(self, order_id, decision):
        if self.engine is not None:
            self.busy_during_call.append(self.engine.is_awaiting_service)
        await asyncio.sleep(self.delay)
        return await super().confirm(order_id, decision)


def run(coro):
    """Drive an engine coroutine to completion."""
    return asyncio.run(coro)
