"""Authentication service."""

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from app.models.user import User
from app.schemas.user import UserPublic
from app.services.jwt import JWTService, get_jwt_service
from app.services.password import verify_password
from app.services.result import ErrorKind, ServiceResult
from app.services.user import UserService, get_user_service

logger = logging.getLogger("user_accounts")


@dataclass
class LoginResult:
    """Public user data plus a freshly issued token."""

    user: UserPublic
    token: str


class AuthService:
    """Handles login, session refresh and token resolution."""

    def __init__(self, user_service: UserService | None = None, jwt_service: JWTService | None = None) -> None:
        self.user_service = user_service or get_user_service()
        self.jwt_service = jwt_service or get_jwt_service()

    def login(self, db: Session, email: str, password: str) -> ServiceResult[LoginResult]:
        """Authenticate by email and password and issue a token.

        Unknown email and wrong password report the same error kind.
        """
        user = self.user_service.get_by_email(db, email)
        if not user:
            logger.warning("Failed login attempt: credentials are not valid")
            return ServiceResult.fail(ErrorKind.INVALID_CREDENTIALS, "Invalid email or password")

        if not user.is_active:
            logger.warning("Login rejected for inactive user %s", user.id)
            return ServiceResult.fail(ErrorKind.ACCOUNT_INACTIVE, "The user is not active")

        if not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt: credentials are not valid")
            return ServiceResult.fail(ErrorKind.INVALID_CREDENTIALS, "Invalid email or password")

        issued = self.jwt_service.issue(user.id)
        if not issued.success:
            return ServiceResult.fail(issued.error, issued.detail)

        user.last_login_at = datetime.utcnow()
        db.commit()
        db.refresh(user)

        logger.info("User %s logged in successfully", email)
        return ServiceResult.ok(LoginResult(user=UserPublic.model_validate(user), token=issued.value))

    def check_status(self, user: User) -> ServiceResult[LoginResult]:
        """Re-issue a token for an already validated user."""
        issued = self.jwt_service.issue(user.id)
        if not issued.success:
            return ServiceResult.fail(issued.error, issued.detail)
        return ServiceResult.ok(LoginResult(user=UserPublic.model_validate(user), token=issued.value))

    def validate_token(self, db: Session, token: str) -> ServiceResult[User]:
        """Resolve a token to an active user. Active status is checked on every call."""
        subject = self.jwt_service.validate(token)
        if not subject.success:
            return ServiceResult.fail(subject.error, subject.detail)

        user = self.user_service.get_record(db, subject.value)
        if user is None:
            logger.warning("Token subject %s no longer exists", subject.value)
            return ServiceResult.fail(ErrorKind.INVALID_TOKEN, "Invalid or expired token")
        if not user.is_active:
            logger.warning("Inactive user %s attempted access", user.id)
            return ServiceResult.fail(
                ErrorKind.INACTIVE_ACCOUNT, "User is inactive. Please contact the administrator."
            )
        return ServiceResult.ok(user)


_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Get singleton auth service instance."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service
