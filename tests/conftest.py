# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator
from typing import Any

import base58
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from nacl.signing import SigningKey
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-wallet-auth")

from wallet_auth.core.settings import Settings
from wallet_auth.db.session import Base, build_engine
from wallet_auth.db.session import get_db as app_get_session
from wallet_auth.main import app as fastapi_app
from wallet_auth.services.auth import AuthService
from wallet_auth.services.nonce import challenge_message
from wallet_auth.stores.memory import InMemoryIdentityStore, InMemoryTokenStore
from wallet_auth.stores.sql import SqlIdentityStore, SqlTokenStore

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()

        # Stores commit eagerly, so wipe every table between tests.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def test_settings() -> Settings:
    """Settings with short, explicit token lifetimes."""
    return Settings(
        secret_key="unit-test-secret",
        access_token_expire_minutes=15,
        refresh_token_expire_days=7,
    )


def generate_wallet() -> dict[str, Any]:
    signing_key = SigningKey.generate()
    pubkey_bytes = signing_key.verify_key.encode()
    return {
        "signing_key": signing_key,
        "pubkey_bytes": pubkey_bytes,
        "address": base58.b58encode(pubkey_bytes).decode(),
    }


def sign_challenge(wallet: dict[str, Any], nonce: str) -> str:
    """Sign the challenge message for ``nonce`` and return it base-58 encoded."""
    message = challenge_message(nonce).encode("utf-8")
    signature = wallet["signing_key"].sign(message).signature
    return base58.b58encode(signature).decode()


@pytest.fixture()
def wallet() -> dict[str, Any]:
    """Return a fresh Ed25519 wallet."""
    return generate_wallet()


@pytest.fixture()
def other_wallet() -> dict[str, Any]:
    """Return a second, unrelated wallet."""
    return generate_wallet()


@pytest.fixture()
def identity_store() -> InMemoryIdentityStore:
    return InMemoryIdentityStore()


@pytest.fixture()
def token_store() -> InMemoryTokenStore:
    return InMemoryTokenStore()


@pytest.fixture()
def auth_service(
    identity_store: InMemoryIdentityStore,
    token_store: InMemoryTokenStore,
    test_settings: Settings,
) -> AuthService:
    """AuthService over in-memory stores."""
    return AuthService(identity_store, token_store, settings=test_settings)


@pytest.fixture()
def sql_auth_service(db_session: Session, test_settings: Settings) -> AuthService:
    """AuthService over the SQLAlchemy stores."""
    return AuthService(SqlIdentityStore(db_session), SqlTokenStore(db_session), settings=test_settings)
