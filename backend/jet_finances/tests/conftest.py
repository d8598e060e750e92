"""
Shared fixtures: in-memory database, stubbed auth service and signed-in clients.
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import jet_finances.models  # noqa: F401
from jet_finances.main import app
from jet_finances.db.base import Base
from jet_finances.db.session import get_db
from jet_finances.core.config import settings
from jet_finances.core.exceptions import InvalidCredentials
from jet_finances.core.rate_limit import limiter
from jet_finances.core.security import (
    ACCESS_TOKEN_ALGORITHM,
    ACCESS_TOKEN_AUDIENCE,
    CSRF_COOKIE_NAME,
    CSRF_HEADER_NAME,
)
from jet_finances.models.user import User, UserRole
from jet_finances.services import auth_service
from jet_finances.services.auth_service import SignInResult

TEST_JWT_SECRET = "test-jwt-secret"
TEST_PASSWORD = "correct-password"


def mint_access_token(auth_id: str, email: str, expires_in: int = 3600) -> str:
    """Create an access token shaped like the ones the auth service issues."""
    payload = {
        "sub": auth_id,
        "email": email,
        "aud": ACCESS_TOKEN_AUDIENCE,
        "role": "authenticated",
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm=ACCESS_TOKEN_ALGORITHM)


def auth_id_for(email: str) -> str:
    return f"auth-{email}"


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Start every test with empty login attempt counters."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def fake_auth(monkeypatch):
    """Replace the auth service with an in-process stub accepting TEST_PASSWORD."""
    calls = {"sign_in": [], "sign_out": []}
    token_lifetime = {"seconds": 3600}

    async def fake_sign_in(email, password):
        calls["sign_in"].append(email)
        if password != TEST_PASSWORD:
            raise InvalidCredentials("Invalid email or password", status_code=400)
        return SignInResult(
            access_token=mint_access_token(auth_id_for(email), email, token_lifetime["seconds"]),
            auth_id=auth_id_for(email),
            email=email,
        )

    async def fake_sign_out(access_token):
        calls["sign_out"].append(access_token)

    monkeypatch.setattr(settings, "SUPABASE_JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setattr(auth_service, "sign_in_with_password", fake_sign_in)
    monkeypatch.setattr(auth_service, "sign_out", fake_sign_out)
    calls["token_lifetime"] = token_lifetime
    return calls


@pytest.fixture()
def make_client(session_factory, fake_auth):
    """Factory for TestClients sharing the test database."""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    clients = []

    def factory() -> TestClient:
        client = TestClient(app)
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()
    app.dependency_overrides.clear()


@pytest.fixture()
def login_as(make_client, db):
    """Return a signed-in client for a user with the given role."""
    def _login(email: str, role: UserRole) -> TestClient:
        if not db.query(User).filter(User.email == email).first():
            db.add(User(auth_id=auth_id_for(email), email=email, role=role))
            db.commit()

        client = make_client()
        response = client.post("/api/auth/login", json={"email": email, "password": TEST_PASSWORD})
        assert response.status_code == 200, response.text
        csrf_token = client.cookies.get(CSRF_COOKIE_NAME)
        assert csrf_token, "login did not set the CSRF cookie"
        client.headers[CSRF_HEADER_NAME] = csrf_token
        return client

    return _login


@pytest.fixture()
def superadmin_client(login_as):
    return login_as("admin@example.com", UserRole.SUPERADMIN)


@pytest.fixture()
def reader_client(login_as):
    return login_as("reader@example.com", UserRole.READER)
