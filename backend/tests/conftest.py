"""Shared test fixtures and collaborator fakes for all test groups."""

import json

import pytest

from club_api.core.config import Settings
from club_api.core.exceptions import PaymentGatewayError, StorageError, WebhookPayloadError
from club_api.db import close_db, init_db
from club_api.domain.checkout import LineItem
from club_api.services.payment_gateway import (
    CheckoutSession,
    GatewaySession,
    WebhookEnvelope,
    envelope_from_event,
)


# ---------------------------------------------------------------------------
# Fakes - no network calls
# ---------------------------------------------------------------------------


class FakeGateway:
    """PaymentGateway test double.

    Sessions the webhook may look up are registered with add_session();
    parse_webhook decodes the body without checking the signature.
    """

    def __init__(self) -> None:
        self.created: list[dict] = []
        self.retrieved: list[str] = []
        self.sessions: dict[str, GatewaySession] = {}
        self.fail_create_with: str | None = None

    def add_session(self, session_id: str, customer_email: str | None, line_items: list[LineItem]) -> None:
        self.sessions[session_id] = GatewaySession(
            id=session_id,
            customer_email=customer_email,
            line_items=line_items,
        )

    async def create_checkout_session(self, line_items, customer_email, success_url, cancel_url):
        if self.fail_create_with:
            raise PaymentGatewayError(self.fail_create_with)
        session_id = f"cs_test_{len(self.created) + 1}"
        self.created.append({
            "line_items": line_items,
            "customer_email": customer_email,
            "success_url": success_url,
            "cancel_url": cancel_url,
        })
        return CheckoutSession(id=session_id, url=f"https://checkout.stripe.test/c/pay/{session_id}")

    async def retrieve_session(self, session_id: str) -> GatewaySession:
        self.retrieved.append(session_id)
        if session_id not in self.sessions:
            raise PaymentGatewayError(f"No such checkout.session: '{session_id}'")
        return self.sessions[session_id]

    def parse_webhook(self, payload: bytes, signature: str | None) -> WebhookEnvelope:
        try:
            event = json.loads(payload)
        except ValueError:
            raise WebhookPayloadError("Invalid payload")
        return envelope_from_event(event)


class RecordingNotifier:
    """Notifier test double that keeps every message instead of sending it."""

    enabled = True

    def __init__(self) -> None:
        self.sent: list[dict] = []

    async def send(self, subject: str, html_body: str, recipient: str) -> bool:
        self.sent.append({"subject": subject, "html": html_body, "to": recipient})
        return True


class FakeStorage:
    def __init__(self) -> None:
        self.uploads: list[dict] = []
        self.fail_with: str | None = None

    async def upload(self, data: bytes, filename: str, content_type: str | None = None) -> str:
        if self.fail_with:
            raise StorageError(self.fail_with)
        self.uploads.append({"data": data, "filename": filename, "content_type": content_type})
        return f"https://cdn.example.test/uploads/{filename}"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def db_url(tmp_path) -> str:
    """File-backed SQLite database, fresh for every test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'club_test.db'}"


@pytest.fixture
def settings(db_url) -> Settings:
    return Settings(
        database_url=db_url,
        debug=True,
        stripe_secret_key="sk_test_dummy",
        stripe_webhook_secret="",
        smtp_host="",
        s3_bucket="",
        jwt_secret="api-test-secret-0123456789abcdef01234",
        bcrypt_rounds=4,
        webhook_dedupe_enabled=False,
    )


@pytest.fixture
async def db(db_url):
    """Initialise the global engine in the pytest-asyncio loop.

    For in-process tests that call services directly. API tests use the
    api_client fixture instead, which initialises the database in the
    TestClient's own loop.
    """
    await init_db(db_url)
    yield
    await close_db()
