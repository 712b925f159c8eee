"""JWT Token Service."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from app.config import get_settings
from app.services.result import ErrorKind, ServiceResult
from app.services.user import is_valid_uuid

logger = logging.getLogger("user_accounts")

TOKEN_LIFETIME = timedelta(hours=2)

_DECODE_OPTIONS = {"require_sub": True, "require_iat": True, "require_exp": True}


class JWTService:
    """Handles JWT token creation and validation."""

    def __init__(self, secret_key: str, algorithm: str = "HS256") -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm

    def create_token(self, user_id: str, issued_at: datetime | None = None) -> str:
        """Sign a token for the given user id."""
        issued_at = issued_at or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + TOKEN_LIFETIME,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def issue(self, user_id: str) -> ServiceResult[str]:
        """Issue a token, reporting an empty signature as a failure."""
        try:
            token = self.create_token(user_id)
        except JWTError as e:
            logger.error("Failed to generate JWT token for user %s: %s", user_id, e)
            return ServiceResult.fail(ErrorKind.TOKEN_ISSUE_FAILED, "Please check server logs.")
        if not token:
            logger.error("Failed to generate JWT token for user %s", user_id)
            return ServiceResult.fail(ErrorKind.TOKEN_ISSUE_FAILED, "Please check server logs.")
        return ServiceResult.ok(token)

    def decode_token(self, token: str) -> dict[str, Any] | None:
        """Decode and validate a JWT token. Returns None if invalid."""
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm], options=_DECODE_OPTIONS)
        except JWTError:
            return None

    def validate(self, token: str) -> ServiceResult[str]:
        """Verify signature, expiry and claims. Returns the subject id."""
        payload = self.decode_token(token) if token else None
        if not payload:
            logger.warning("Rejected token: invalid signature, expired or malformed")
            return ServiceResult.fail(ErrorKind.INVALID_TOKEN, "Invalid or expired token")

        subject = payload.get("sub")
        if not is_valid_uuid(subject):
            logger.warning("Rejected token: subject claim is not a user id")
            return ServiceResult.fail(ErrorKind.INVALID_TOKEN, "Invalid or expired token")
        return ServiceResult.ok(subject.lower())


_jwt_service: JWTService | None = None


def get_jwt_service() -> JWTService:
    """Get singleton JWT service instance."""
    global _jwt_service
    if _jwt_service is None:
        settings = get_settings()
        _jwt_service = JWTService(settings.JWT_SECRET_KEY, settings.JWT_ALGORITHM)
    return _jwt_service
