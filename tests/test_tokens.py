# tests/test_tokens.py
"""Tests for JWT issuance and validation."""

from __future__ import annotations

from datetime import timedelta

import pytest
from jose import jwt

from wallet_auth.core.errors import TokenInvalid
from wallet_auth.db.time import utcnow
from wallet_auth.records import Identity, TokenKind
from wallet_auth.services.tokens import TokenIssuer


@pytest.fixture()
def issuer(token_store, test_settings) -> TokenIssuer:
    return TokenIssuer(token_store, test_settings)


@pytest.fixture()
def identity() -> Identity:
    return Identity(id=42, address="addr", nonce="00" * 16)


def test_issue_pair_claims_and_expiry(issuer, identity, test_settings) -> None:
    before = utcnow().replace(microsecond=0)
    pair = issuer.issue_pair(identity)

    access_claims = jwt.decode(pair.access.token, test_settings.secret_key, algorithms=["HS256"])
    refresh_claims = jwt.decode(pair.refresh.token, test_settings.secret_key, algorithms=["HS256"])

    assert access_claims["sub"] == "42"
    assert access_claims["type"] == "access"
    assert refresh_claims["type"] == "refresh"
    assert access_claims["exp"] == int(pair.access.expires.timestamp())
    assert refresh_claims["exp"] == int(pair.refresh.expires.timestamp())
    assert pair.access.expires - before >= timedelta(minutes=15)
    assert pair.access.expires - before < timedelta(minutes=16)
    assert pair.refresh.expires - before >= timedelta(days=7)
    assert pair.refresh.expires - before < timedelta(days=7, minutes=1)


def test_only_refresh_token_is_persisted(issuer, identity, token_store) -> None:
    pair = issuer.issue_pair(identity)

    record = token_store.find_valid_refresh(pair.refresh.token)
    assert record is not None
    assert record.identity_id == identity.id
    assert record.kind is TokenKind.REFRESH
    assert record.expires_at == pair.refresh.expires
    assert token_store.find_valid_refresh(pair.access.token) is None


def test_tokens_minted_together_are_distinct(issuer, identity) -> None:
    first = issuer.issue_pair(identity)
    second = issuer.issue_pair(identity)
    assert first.refresh.token != second.refresh.token
    assert first.access.token != second.access.token


def test_verify_token_returns_record(issuer, identity) -> None:
    pair = issuer.issue_pair(identity)
    record = issuer.verify_token(pair.refresh.token, TokenKind.REFRESH)
    assert record.token == pair.refresh.token


def test_verify_token_rejects_access_token(issuer, identity) -> None:
    pair = issuer.issue_pair(identity)
    with pytest.raises(TokenInvalid):
        issuer.verify_token(pair.access.token, TokenKind.REFRESH)
    with pytest.raises(TokenInvalid):
        issuer.verify_token(pair.access.token, TokenKind.ACCESS)


def test_verify_token_requires_record(issuer, identity, token_store) -> None:
    pair = issuer.issue_pair(identity)
    assert token_store.delete_record(pair.refresh.token) is True
    with pytest.raises(TokenInvalid):
        issuer.verify_token(pair.refresh.token)


def test_verify_token_rejects_foreign_secret(token_store, test_settings, identity) -> None:
    other = TokenIssuer(token_store, test_settings.model_copy(update={"secret_key": "other-secret"}))
    pair = other.issue_pair(identity)
    with pytest.raises(TokenInvalid):
        TokenIssuer(token_store, test_settings).verify_token(pair.refresh.token)


def test_expired_token_is_rejected(token_store, test_settings, identity) -> None:
    past = utcnow() - timedelta(days=30)
    stale = TokenIssuer(token_store, test_settings, clock=lambda: past)
    pair = stale.issue_pair(identity)
    with pytest.raises(TokenInvalid):
        TokenIssuer(token_store, test_settings).verify_token(pair.refresh.token)


def test_decode_access_token(issuer, identity) -> None:
    pair = issuer.issue_pair(identity)
    assert issuer.decode_access_token(pair.access.token) == identity.id
    with pytest.raises(TokenInvalid):
        issuer.decode_access_token(pair.refresh.token)
    with pytest.raises(TokenInvalid):
        issuer.decode_access_token("not.a.jwt")


def test_non_numeric_subject_is_rejected(issuer, test_settings) -> None:
    token = jwt.encode(
        {"sub": "abc", "type": "access", "exp": int((utcnow() + timedelta(minutes=5)).timestamp())},
        test_settings.secret_key,
        algorithm="HS256",
    )
    with pytest.raises(TokenInvalid):
        issuer.decode_access_token(token)
