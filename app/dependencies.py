"""Authentication dependencies for FastAPI routes."""

from collections.abc import Callable

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.http_errors import raise_for_error
from app.models.user import User
from app.services.auth import get_auth_service
from app.services.authorization import PROTECTED_OPERATIONS, authorize


def get_bearer_token(request: Request) -> str | None:
    """Extract the token from an ``Authorization: Bearer`` header."""
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:].strip() or None
    return None


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
) -> User:
    """Resolve the caller from their token. Raises 401 if missing, invalid or inactive."""
    token = get_bearer_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    result = get_auth_service().validate_token(db, token)
    raise_for_error(result, status_code=status.HTTP_401_UNAUTHORIZED)
    return result.value


def require_operation(name: str) -> Callable[..., User]:
    """Dependency factory gating a route on the roles declared for ``name``.

    Token validation runs first, so the role check never sees an anonymous caller.
    """
    operation = PROTECTED_OPERATIONS[name]

    def dependency(user: User = Depends(get_current_user)) -> User:
        raise_for_error(authorize(user, operation))
        return user

    return dependency
