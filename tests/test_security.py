"""Tests for password hashing and token issuance/validation."""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from jose import jwt

from app.services.jwt import TOKEN_LIFETIME, JWTService
from app.services.password import hash_password, verify_password
from app.services.result import ErrorKind

SUBJECT = "0ea31cf0-8283-4661-bb6e-774f6f095e55"


class TestPasswordHashing:
    """Tests for the credential verifier."""

    def test_verify_matching_password(self):
        assert verify_password("Abc123", hash_password("Abc123"))

    def test_verify_wrong_password(self):
        assert not verify_password("Abc123", hash_password("Xyz789"))

    def test_hash_is_salted(self):
        """Same password hashes differently each time."""
        assert hash_password("Abc123") != hash_password("Abc123")

    def test_malformed_hash_returns_false(self):
        assert verify_password("Abc123", "not-a-bcrypt-hash") is False


class TestTokenService:
    """Tests for token issue and validation."""

    def setup_method(self):
        self.service = JWTService("unit-test-secret")

    def test_issue_then_validate(self):
        issued = self.service.issue(SUBJECT)
        assert issued.success
        result = self.service.validate(issued.value)
        assert result.success
        assert result.value == SUBJECT

    def test_token_has_two_hour_lifetime(self):
        token = self.service.issue(SUBJECT).value
        claims = jwt.get_unverified_claims(token)
        assert claims["sub"] == SUBJECT
        assert claims["exp"] - claims["iat"] == int(TOKEN_LIFETIME.total_seconds())

    def test_expired_token_rejected(self):
        issued_at = datetime.now(timezone.utc) - TOKEN_LIFETIME - timedelta(minutes=1)
        token = self.service.create_token(SUBJECT, issued_at=issued_at)
        result = self.service.validate(token)
        assert not result.success
        assert result.error == ErrorKind.INVALID_TOKEN

    def test_wrong_secret_rejected(self):
        token = JWTService("another-secret").create_token(SUBJECT)
        assert self.service.validate(token).error == ErrorKind.INVALID_TOKEN

    def test_tampered_token_rejected(self):
        token = self.service.create_token(SUBJECT)
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])
        assert not self.service.validate(tampered).success

    def test_malformed_token_rejected(self):
        assert self.service.validate("invalid.token.here").error == ErrorKind.INVALID_TOKEN
        assert self.service.validate("").error == ErrorKind.INVALID_TOKEN

    def test_missing_issued_at_rejected(self):
        exp = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jwt.encode({"sub": SUBJECT, "exp": exp}, "unit-test-secret", algorithm="HS256")
        assert self.service.validate(token).error == ErrorKind.INVALID_TOKEN

    def test_missing_subject_rejected(self):
        now = datetime.now(timezone.utc)
        token = jwt.encode({"iat": now, "exp": now + timedelta(hours=1)}, "unit-test-secret", algorithm="HS256")
        assert self.service.validate(token).error == ErrorKind.INVALID_TOKEN

    def test_empty_signature_is_a_failure(self):
        with patch("app.services.jwt.jwt.encode", return_value=""):
            result = self.service.issue(SUBJECT)
        assert not result.success
        assert result.error == ErrorKind.TOKEN_ISSUE_FAILED

    def test_non_uuid_subject_rejected(self):
        now = datetime.now(timezone.utc)
        claims = {"sub": "not-a-uuid", "iat": now, "exp": now + timedelta(hours=1)}
        token = jwt.encode(claims, "unit-test-secret", algorithm="HS256")
        assert self.service.validate(token).error == ErrorKind.INVALID_TOKEN

    def test_uppercase_subject_normalized(self):
        token = self.service.create_token(SUBJECT.upper())
        assert self.service.validate(token).value == SUBJECT
