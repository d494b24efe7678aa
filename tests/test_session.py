"""
Tests for the in-memory session registry.
"""

import time

import pytest

import orderly_bot.config as config_mod
import orderly_bot.services.session as session_mod
from orderly_bot.tasks import ConversationEngine, ConversationStep, RevealTimings, default_catalog
from tests.test_helpers import FakeConfirmer, FakeInterpreter, run


@pytest.fixture
def registry():
    """Empty registry whose engines use fake service clients."""

    def build_engine(notifier):
        return ConversationEngine(
            catalog=default_catalog(),
            interpreter=FakeInterpreter(),
            confirmer=FakeConfirmer(),
            timings=RevealTimings.instant(),
            notifier=notifier,
        )

    previous = session_mod.set_engine_factory(build_engine)
    session_mod.clear_sessions()
    yield session_mod
    session_mod.clear_sessions()
    session_mod.set_engine_factory(previous)


class TestSessionRegistry:

    def test_create_and_get(self, registry):
        session = registry.create_session()
        assert registry.get_session(session.session_id) is session
        assert session.engine.step == ConversationStep.GREETING

    def test_unknown_session(self, registry):
        assert registry.get_session("does-not-exist") is None

    def test_sessions_do_not_share_engines(self, registry):
        first = registry.create_session()
        second = registry.create_session()
        assert first.engine is not second.engine
        run(first.engine.submit("Jordan"))
        assert second.engine.step == ConversationStep.GREETING

    def test_expired_session_is_dropped(self, registry, monkeypatch):
        session = registry.create_session()
        monkeypatch.setattr(config_mod, "SESSION_TTL_SECONDS", 10)
        registry.SESSION_CACHE[session.session_id]["last_access"] = time.time() - 60
        assert registry.get_session(session.session_id) is None
        assert session.session_id not in registry.SESSION_CACHE

    def test_cleanup_removes_only_expired(self, registry, monkeypatch):
        old = registry.create_session()
        fresh = registry.create_session()
        monkeypatch.setattr(config_mod, "SESSION_TTL_SECONDS", 10)
        registry.SESSION_CACHE[old.session_id]["last_access"] = time.time() - 60
        assert registry._cleanup_expired_sessions() == 1
        assert registry.get_session(fresh.session_id) is fresh

    def test_full_registry_evicts_least_recently_used(self, registry, monkeypatch):
        monkeypatch.setattr(config_mod, "SESSION_MAX_CACHE_SIZE", 3)
        sessions = [registry.create_session() for _ in range(3)]
        for offset, session in enumerate(sessions):
            registry.SESSION_CACHE[session.session_id]["last_access"] = time.time() - 100 + offset

        newest = registry.create_session()

        assert registry.get_session(sessions[0].session_id) is None
        assert registry.get_session(sessions[1].session_id) is sessions[1]
        assert registry.get_session(newest.session_id) is newest

    def test_notifications_are_collected(self, registry):
        session = registry.create_session()
        for text in ("Jordan", "jordan@example.com", "221B Baker Street", "2 chocolate cakes", "yes"):
            run(session.engine.submit(text))
        assert [n.title for n in session.notifications] == ["Order Confirmed! 🎉"]

    def test_remove_session(self, registry):
        session = registry.create_session()
        assert registry.remove_session(session.session_id) is True
        assert registry.remove_session(session.session_id) is False

    def test_cache_stats(self, registry):
        registry.create_session()
        stats = registry.get_cache_stats()
        assert stats["cached_sessions"] == 1
        assert stats["max_cache_size"] == config_mod.SESSION_MAX_CACHE_SIZE


class TestDefaultEngine:

    def test_default_engine_uses_configured_webhooks(self, monkeypatch):
        monkeypatch.setattr(config_mod, "ORDER_INTERPRET_URL", "https://orders.example/interpret")
        monkeypatch.setattr(config_mod, "ORDER_CONFIRM_URL", "https://orders.example/confirm")
        monkeypatch.setattr(config_mod, "ORDER_SERVICE_TIMEOUT_SECONDS", 7.0)

        engine = session_mod.build_default_engine(lambda n: None)

        interpreter = engine.taking_items_handler.interpreter
        confirmer = engine.confirmation_handler.confirmer
        assert interpreter.url == "https://orders.example/interpret"
        assert confirmer.url == "https://orders.example/confirm"
        assert interpreter.timeout == confirmer.timeout == 7.0
        assert engine.timings.reveal_delay == config_mod.REVEAL_DELAY_SECONDS
