"""Pytest configuration and fixtures for orgcore.

Environment is set before app.main is imported (settings are validated when
the app is created). HTTP tests use app.main:app through httpx's
ASGITransport; the lifespan does not run there, so the store, change feed
and email sender are supplied through app.dependency_overrides.
"""

import os

os.environ.setdefault("DATABASE_BACKEND", "memory")
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.api.v1.dependencies import (  # noqa: E402
    get_change_feed,
    get_document_store,
    get_email_sender,
)
from app.application.services.action_dispatcher import ActionDispatcher  # noqa: E402
from app.application.use_cases.automation import RuleEngine  # noqa: E402
from app.core.constants import COLLECTION_MEMBERS  # noqa: E402
from app.core.limiter import limiter  # noqa: E402
from app.infrastructure.memory import InMemoryDocumentStore  # noqa: E402
from app.infrastructure.messaging import InProcessChangeFeed  # noqa: E402
from app.infrastructure.repositories import RuleRepository  # noqa: E402
from app.infrastructure.security import create_access_token  # noqa: E402
from app.main import app  # noqa: E402

limiter.enabled = False


class RecordingEmailSender:
    """IEmailSender that keeps every message instead of delivering it."""

    def __init__(self) -> None:
        self.sent: list[dict] = []

    async def send(self, to_emails: list[str], subject: str, body: str) -> None:
        self.sent.append({"to": to_emails, "subject": subject, "body": body})


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def dispatcher(store: InMemoryDocumentStore, email_sender: RecordingEmailSender) -> ActionDispatcher:
    return ActionDispatcher(store, email_sender)


@pytest.fixture
def change_feed(store: InMemoryDocumentStore, dispatcher: ActionDispatcher) -> InProcessChangeFeed:
    """Change feed with the rule engine subscribed, as wired by the lifespan."""
    feed = InProcessChangeFeed()
    feed.subscribe(RuleEngine(store, RuleRepository(store), dispatcher).on_document_change)
    return feed


@pytest.fixture
async def client(
    store: InMemoryDocumentStore,
    email_sender: RecordingEmailSender,
    change_feed: InProcessChangeFeed,
) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) backed by the in-memory store."""
    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    app.dependency_overrides[get_change_feed] = lambda: change_feed
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Bearer token for an ordinary member (uid member-1)."""
    return {"Authorization": f"Bearer {create_access_token('member-1')}"}


@pytest.fixture
async def admin_headers(store: InMemoryDocumentStore) -> dict[str, str]:
    """Bearer token for a member whose record has role ADMIN."""
    await store.create(COLLECTION_MEMBERS, {"name": "Admin", "role": "ADMIN"}, document_id="admin-1")
    return {"Authorization": f"Bearer {create_access_token('admin-1')}"}
