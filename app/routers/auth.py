"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_operation
from app.http_errors import raise_for_error
from app.models.user import User
from app.rate_limit import limiter
from app.schemas.auth import LoginRequest, LoginResponse
from app.services.auth import get_auth_service

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
@limiter.limit("10/minute")
def login(request: Request, body: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    """Authenticate and receive a JWT token."""
    result = get_auth_service().login(db, body.email, body.password)
    raise_for_error(result)
    return LoginResponse(user=result.value.user, token=result.value.token)


@router.get("/check-status", response_model=LoginResponse)
def check_status(user: User = Depends(require_operation("check_status"))) -> LoginResponse:
    """Refresh the caller's token."""
    result = get_auth_service().check_status(user)
    raise_for_error(result)
    return LoginResponse(user=result.value.user, token=result.value.token)
