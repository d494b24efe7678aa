import pytest
from fastapi.testclient import TestClient

import orderly_bot.services.session as session_mod
from orderly_bot.main import app
from orderly_bot.tasks import (
    ConversationEngine,
    ConversationStep,
    RevealTimings,
    default_catalog,
)
from tests.test_helpers import FakeConfirmer, FakeInterpreter, run, valid_response


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def interpreter():
    return FakeInterpreter()


@pytest.fixture
def confirmer():
    return FakeConfirmer()


@pytest.fixture
def notifications():
    return []


@pytest.fixture
def engine(catalog, interpreter, confirmer, notifications):
    """An unstarted engine with no reveal delays."""
    return ConversationEngine(
        catalog=catalog,
        interpreter=interpreter,
        confirmer=confirmer,
        timings=RevealTimings.instant(),
        notifier=notifications.append,
    )


@pytest.fixture
def engine_at_order_text(engine):
    """An engine that has collected name, email and address."""
    engine.start()
    run(engine.submit("Jordan"))
    run(engine.submit("jordan@example.com"))
    run(engine.submit("221B Baker Street"))
    assert engine.step == ConversationStep.AWAITING_ORDER_TEXT
    return engine


@pytest.fixture
def engine_at_confirmation(engine_at_order_text, interpreter):
    """An engine holding a pending order of 2 Chocolate Cakes (ORD-1)."""
    interpreter.queue(valid_response())
    run(engine_at_order_text.submit("2 chocolate cakes"))
    assert engine_at_order_text.step == ConversationStep.AWAITING_ORDER_CONFIRMATION
    return engine_at_order_text


@pytest.fixture
def client(interpreter, confirmer):
    """FastAPI TestClient whose sessions use the fake order service clients."""

    def build_engine(notifier):
        return ConversationEngine(
            catalog=default_catalog(),
            interpreter=interpreter,
            confirmer=confirmer,
            timings=RevealTimings.instant(),
            notifier=notifier,
        )

    previous = session_mod.set_engine_factory(build_engine)
    session_mod.clear_sessions()

    with TestClient(app) as test_client:
        yield test_client

    session_mod.clear_sessions()
    session_mod.set_engine_factory(previous)
