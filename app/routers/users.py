"""User management API endpoints."""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_operation
from app.http_errors import raise_for_error
from app.models.user import User
from app.rate_limit import limiter
from app.schemas.user import PaginatedUsers, UserCreate, UserPublic, UserResponse, UserUpdate
from app.services.user import get_user_service

router = APIRouter(prefix="/api/v1/users", tags=["Users"])


@router.post("/", response_model=UserPublic, status_code=201)
@limiter.limit("5/minute")
def register(request: Request, body: UserCreate, db: Session = Depends(get_db)) -> UserPublic:
    """Register a new user account."""
    roles = [role.value for role in body.roles] if body.roles else None
    result = get_user_service().create(db, body.email, body.name, body.password, roles)
    raise_for_error(result)
    return result.value


@router.get("/", response_model=PaginatedUsers)
def list_users(
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> PaginatedUsers:
    """List active users."""
    result = get_user_service().find_all(db, limit=limit, offset=offset)
    return result.value


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, db: Session = Depends(get_db)) -> UserResponse:
    """Get a single active user by id."""
    result = get_user_service().find_by_id(db, user_id)
    raise_for_error(result)
    return UserResponse.model_validate(result.value)


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    body: UserUpdate,
    _admin: User = Depends(require_operation("update_user")),
    db: Session = Depends(get_db),
) -> UserResponse:
    """Update fields on an active user. Admin only."""
    fields = body.model_dump(exclude_unset=True)
    if fields.get("roles"):
        fields["roles"] = [role.value for role in body.roles]
    result = get_user_service().update(db, user_id, fields)
    raise_for_error(result)
    return UserResponse.model_validate(result.value)


@router.delete("/{user_id}", response_model=UserResponse)
def deactivate_user(
    user_id: str,
    _admin: User = Depends(require_operation("deactivate_user")),
    db: Session = Depends(get_db),
) -> UserResponse:
    """Deactivate a user. The row is kept with ``is_active`` set to false. Admin only."""
    result = get_user_service().deactivate(db, user_id)
    raise_for_error(result)
    return UserResponse.model_validate(result.value)
