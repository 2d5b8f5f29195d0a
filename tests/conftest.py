"""Pytest configuration and fixtures for eventdesk.

Environment is set before app.main is imported (settings load in
create_app). HTTP tests run app.main:app over ASGITransport with the
Firebase and Razorpay clients replaced by the in-memory fakes in
tests/fakes.py through app.dependency_overrides. All imports use app.*.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-session-tokens-0123456789")
os.environ.setdefault("RAZORPAY_KEY_ID", "rzp_test_key")
os.environ.setdefault("RAZORPAY_KEY_SECRET", "test_razorpay_secret")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("ADMIN_REGISTRATION_SECRET", "test-admin-registration-secret")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.api.v1.dependencies import (  # noqa: E402
    get_blob_storage,
    get_document_store,
    get_identity_provider,
    get_payment_gateway,
)
from app.infrastructure.security.jwt import issue_session_token  # noqa: E402
from app.main import app  # noqa: E402
from tests.fakes import (  # noqa: E402
    FakeBlobStorage,
    FakeIdentityProvider,
    FakePaymentGateway,
    InMemoryDocumentStore,
)

TEST_RAZORPAY_SECRET = os.environ["RAZORPAY_KEY_SECRET"]
TEST_ADMIN_SECRET = os.environ["ADMIN_REGISTRATION_SECRET"]
USER_UID = "user-uid-1"
ADMIN_UID = "admin-uid-1"


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore(
        {
            "users": {USER_UID: {"id": USER_UID, "email": "team@example.com"}},
            "admin": {ADMIN_UID: {"id": ADMIN_UID, "email": "admin@example.com"}},
        }
    )


@pytest.fixture
def identity() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def storage() -> FakeBlobStorage:
    return FakeBlobStorage()


@pytest.fixture
def gateway() -> FakePaymentGateway:
    return FakePaymentGateway()


@pytest.fixture
async def client(
    store: InMemoryDocumentStore,
    identity: FakeIdentityProvider,
    storage: FakeBlobStorage,
    gateway: FakePaymentGateway,
) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) backed by the fakes."""
    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_identity_provider] = lambda: identity
    app.dependency_overrides[get_blob_storage] = lambda: storage
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def user_headers() -> dict[str, str]:
    """Bearer headers for the participant seeded in the store fixture."""
    return {"Authorization": f"Bearer {issue_session_token(USER_UID)}"}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    """Bearer headers for the admin seeded in the store fixture."""
    return {"Authorization": f"Bearer {issue_session_token(ADMIN_UID)}"}
