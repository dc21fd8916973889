from __future__ import annotations

import base64
import time

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from httpx import ASGITransport, AsyncClient
from jose import jwt
from starlette.testclient import TestClient

from employee_manager.api.v1.endpoints.employees import get_store
from employee_manager.core.dependencies import get_current_user
from employee_manager.main import app
from employee_manager.models.auth import UserInfo
from tests.fakes import FakeAuthService, InMemoryDocumentStore, RecordingNavigator

TEST_PROJECT_ID = "employee-manager-test"
TEST_KID = "test-kid-1"
COLLECTION = "employees"


def _int_to_base64url(value: int) -> str:
    byte_length = (value.bit_length() + 7) // 8
    return base64.urlsafe_b64encode(value.to_bytes(byte_length, byteorder="big")).rstrip(b"=").decode("ascii")


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _auth_settings():
    from employee_manager.core.config import settings

    original_project = settings.FIREBASE_PROJECT_ID
    original_container = settings.COSMOS_DB_EMPLOYEES_CONTAINER
    settings.FIREBASE_PROJECT_ID = TEST_PROJECT_ID
    settings.COSMOS_DB_EMPLOYEES_CONTAINER = COLLECTION
    yield
    settings.FIREBASE_PROJECT_ID = original_project
    settings.COSMOS_DB_EMPLOYEES_CONTAINER = original_container


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def rsa_test_keys():
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode("utf-8")

    pub = private_key.public_key().public_numbers()
    jwk_dict = {
        "kty": "RSA",
        "kid": TEST_KID,
        "use": "sig",
        "alg": "RS256",
        "n": _int_to_base64url(pub.n),
        "e": _int_to_base64url(pub.e),
    }
    jwks_response = {"keys": [jwk_dict]}
    return private_pem, jwks_response


def _make_token(
    private_pem: str,
    *,
    uid: str = "test-uid-123",
    email: str = "test.user@acme.io",
    audience: str = TEST_PROJECT_ID,
    expired: bool = False,
) -> str:
    now = int(time.time())
    claims = {
        "user_id": uid,
        "sub": uid,
        "email": email,
        "iss": f"https://securetoken.google.com/{audience}",
        "aud": audience,
        "exp": now - 3600 if expired else now + 3600,
        "iat": now - 60,
        "auth_time": now - 60,
    }
    return jwt.encode(claims, private_pem, algorithm="RS256", headers={"kid": TEST_KID})


@pytest.fixture
def mock_user():
    return UserInfo(id="user-1", email="hr.admin@acme.io")


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def auth_service():
    return FakeAuthService()


@pytest.fixture
def navigator():
    return RecordingNavigator()


@pytest.fixture
def authenticated_client(mock_user, store):
    app.dependency_overrides[get_current_user] = lambda: mock_user
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
