# This project was developed with assistance from AI tools.
"""Fixtures for functional tests.

The real app from ``loandesk.main`` is a module singleton. The lifespan is
not run; every test wires the in-memory ``repository`` and mocked
``delivery`` fixtures (from the parent conftest) plus a conversation engine
through ``dependency_overrides``. ``_clean_overrides`` clears them after
each test so state from one test never leaks into the next.
"""

import asyncio
from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient

from loandesk.dependencies import get_delivery, get_engine, get_repository
from loandesk.main import app as real_app
from loandesk.services.conversation import ConversationEngine

NOW = datetime(2024, 3, 5, 3, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _clean_overrides():
    """Clear app dependency overrides after each test."""
    yield
    real_app.dependency_overrides.clear()


@pytest.fixture
def app():
    """Return the real FastAPI app with all routers mounted."""
    return real_app


@pytest.fixture
def make_client(app, repository, delivery):
    """Factory fixture: wire repository + LINE double + engine, return TestClient."""

    def _make() -> TestClient:
        engine = ConversationEngine(repository, delivery, bank_name="KBank", clock=lambda: NOW)
        app.dependency_overrides[get_repository] = lambda: repository
        app.dependency_overrides[get_delivery] = lambda: delivery
        app.dependency_overrides[get_engine] = lambda: engine
        return TestClient(app)

    return _make


@pytest.fixture
def seed(repository, make_application):
    """Store cases (built with ``make_application`` overrides) before the client runs."""

    def _seed(*cases: dict) -> None:
        async def _store():
            for overrides in cases:
                await repository.create_application(make_application(**overrides))

        asyncio.run(_store())

    return _seed


@pytest.fixture
def line_event():
    """Factory for one LINE text-message event from an individual chat."""

    def _make(text, user_id="U-partner-1", reply_token="reply-token-1"):
        return {
            "type": "message",
            "replyToken": reply_token,
            "source": {"type": "user", "userId": user_id},
            "message": {"type": "text", "id": "m-1", "text": text},
        }

    return _make
