"""Unit tests for the PyJWT-backed token issuer."""

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest
from freezegun import freeze_time

from blogapi.infra.jwt import JWTTokenIssuer
from blogapi.services._shared.ports import TokenError, TokenSubject

ACCESS = "access-secret-for-tests"
REFRESH = "refresh-secret-for-tests"


@pytest.fixture()
def issuer() -> JWTTokenIssuer:
    return JWTTokenIssuer(
        access_secret=ACCESS,
        refresh_secret=REFRESH,
        access_expires=timedelta(minutes=15),
        refresh_expires=timedelta(days=30),
    )


@pytest.fixture()
def subject() -> TokenSubject:
    return TokenSubject(user_id=42, username="zoe")


class TestConstruction:
    @pytest.mark.parametrize("access, refresh", [("", REFRESH), (ACCESS, ""), ("", "")])
    def test_empty_secret_is_fatal(self, access, refresh):
        with pytest.raises(RuntimeError, match="must be configured"):
            JWTTokenIssuer(access_secret=access, refresh_secret=refresh)

    def test_identical_secrets_are_fatal(self):
        with pytest.raises(RuntimeError, match="must differ"):
            JWTTokenIssuer(access_secret="same", refresh_secret="same")


class TestClaims:
    def test_access_claims(self, issuer, subject):
        pair = issuer.issue_tokens(subject)
        claims = jwt.decode(pair.access_token, ACCESS, algorithms=["HS256"])
        assert claims["sub"] == "42"
        assert claims["username"] == "zoe"
        assert claims["type"] == "access"
        assert claims["exp"] - claims["iat"] == 15 * 60

    def test_refresh_claims(self, issuer, subject):
        pair = issuer.issue_tokens(subject)
        claims = jwt.decode(pair.refresh_token, REFRESH, algorithms=["HS256"])
        assert claims["sub"] == "42"
        assert claims["type"] == "refresh"
        assert "username" not in claims
        assert claims["jti"]
        assert claims["exp"] - claims["iat"] == 30 * 24 * 3600

    def test_tokens_signed_with_distinct_secrets(self, issuer, subject):
        pair = issuer.issue_tokens(subject)
        with pytest.raises(jwt.InvalidSignatureError):
            jwt.decode(pair.access_token, REFRESH, algorithms=["HS256"])
        with pytest.raises(jwt.InvalidSignatureError):
            jwt.decode(pair.refresh_token, ACCESS, algorithms=["HS256"])

    def test_refresh_tokens_differ_within_same_second(self, issuer, subject):
        with freeze_time("2024-01-01 12:00:00"):
            first = issuer.issue_tokens(subject)
            second = issuer.issue_tokens(subject)
        assert first.refresh_token != second.refresh_token


class TestVerification:
    def test_round_trip(self, issuer, subject):
        pair = issuer.issue_tokens(subject)
        assert issuer.decode_access(pair.access_token)["sub"] == "42"
        assert issuer.decode_refresh(pair.refresh_token)["sub"] == "42"

    def test_wrong_type_rejected(self, issuer, subject):
        pair = issuer.issue_tokens(subject)
        with pytest.raises(TokenError):
            issuer.decode_access(pair.refresh_token)
        with pytest.raises(TokenError):
            issuer.decode_refresh(pair.access_token)

    def test_forged_token_rejected(self, issuer, subject):
        forged = jwt.encode({"sub": "42", "type": "access", "exp": 9999999999}, "x" * 32)
        with pytest.raises(TokenError, match="Signature verification failed"):
            issuer.decode_access(forged)

    def test_malformed_token_rejected(self, issuer):
        with pytest.raises(TokenError):
            issuer.decode_access("not-a-jwt")

    def test_access_token_expires_after_fifteen_minutes(self, issuer, subject):
        with freeze_time("2024-01-01 00:00:00"):
            pair = issuer.issue_tokens(subject)
        with freeze_time("2024-01-01 00:14:59"):
            assert issuer.decode_access(pair.access_token)["username"] == "zoe"
        with freeze_time("2024-01-01 00:15:01"), pytest.raises(TokenError, match="expired"):
            issuer.decode_access(pair.access_token)

    def test_refresh_token_outlives_access_token(self, issuer, subject):
        with freeze_time("2024-01-01"):
            pair = issuer.issue_tokens(subject)
        with freeze_time("2024-01-20"):
            assert issuer.decode_refresh(pair.refresh_token)["type"] == "refresh"
        with freeze_time("2024-02-01"), pytest.raises(TokenError, match="expired"):
            issuer.decode_refresh(pair.refresh_token)
