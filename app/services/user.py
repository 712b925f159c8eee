"""User lifecycle service: registration, listing, updates and soft deletion."""

import logging
import math
import re
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.user import DEFAULT_ROLES, User
from app.schemas.user import PaginatedUsers, UserPublic, UserResponse
from app.services.password import hash_password
from app.services.result import ErrorKind, ServiceResult

logger = logging.getLogger("user_accounts")

UUID_PATTERN = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")

UPDATABLE_FIELDS = {"email", "name", "password", "roles"}

PG_UNIQUE_VIOLATION = "23505"


def is_valid_uuid(value: str) -> bool:
    return isinstance(value, str) and bool(UUID_PATTERN.fullmatch(value))


def _normalize_roles(roles: list[str] | None) -> list[str]:
    """De-duplicate roles keeping order; the first entry is the primary role."""
    if not roles:
        return list(DEFAULT_ROLES)
    return list(dict.fromkeys(str(getattr(role, "value", role)) for role in roles))


def _is_unique_violation(error: IntegrityError) -> bool:
    orig = error.orig
    if getattr(orig, "pgcode", None) == PG_UNIQUE_VIOLATION or getattr(orig, "sqlstate", None) == PG_UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(orig) or "Duplicate entry" in str(orig)


class UserService:
    """Owns create/read/update/deactivate on user records.

    Inactive users are treated as logically deleted: they are hidden from
    listings and every id-based operation reports them as inactive.
    """

    def get_record(self, db: Session, user_id: str) -> User | None:
        """Fetch a user row by id regardless of active status."""
        if not is_valid_uuid(user_id):
            return None
        return db.get(User, user_id.lower())

    def get_by_email(self, db: Session, email: str) -> User | None:
        """Fetch a user row by exact email regardless of active status."""
        return db.query(User).filter(User.email == email).first()

    def create(
        self, db: Session, email: str, name: str, password: str, roles: list[str] | None = None
    ) -> ServiceResult[UserPublic]:
        """Register a new user. The returned record has no password hash or active flag."""
        user = User(
            email=email.strip(),
            name=name.strip(),
            password_hash=hash_password(password),
            roles=_normalize_roles(roles),
            is_active=True,
        )
        try:
            db.add(user)
            db.commit()
            db.refresh(user)
        except SQLAlchemyError as e:
            return self._handle_db_error(db, e, f"create {email}")

        logger.info("User created successfully")
        return ServiceResult.ok(UserPublic.model_validate(user))

    def find_all(self, db: Session, limit: int = 10, offset: int = 0) -> ServiceResult[PaginatedUsers]:
        """List active users, one page at a time."""
        offset = max(offset, 0)
        query = db.query(User).filter(User.is_active.is_(True))
        total = query.count()

        if limit <= 0:
            items: list[User] = []
            current_page, total_pages = 1, 0
        else:
            items = query.order_by(User.created_at, User.id).offset(offset).limit(limit).all()
            current_page = offset // limit + 1
            total_pages = math.ceil(total / limit)

        logger.info("Operation find users success")
        return ServiceResult.ok(
            PaginatedUsers(
                items=[UserResponse.model_validate(u) for u in items],
                total=total,
                current_page=current_page,
                total_pages=total_pages,
            )
        )

    def find_by_id(self, db: Session, user_id: str) -> ServiceResult[User]:
        """Fetch an active user by id."""
        if not is_valid_uuid(user_id):
            logger.warning("Invalid UUID: %s", user_id)
            return ServiceResult.fail(ErrorKind.INVALID_IDENTIFIER, "The id must be a valid UUID")

        user = db.get(User, user_id.lower())
        if user is None:
            logger.warning("User %s does not exist", user_id)
            return ServiceResult.fail(ErrorKind.NOT_FOUND, f"User with id {user_id} not found")
        if not user.is_active:
            logger.warning("The user %s is inactive in database", user_id)
            return ServiceResult.fail(ErrorKind.INACTIVE_ACCOUNT, "The user is inactive in database")

        logger.info("Find user by id success")
        return ServiceResult.ok(user)

    def update(self, db: Session, user_id: str, fields: dict[str, Any]) -> ServiceResult[User]:
        """Merge a partial set of fields onto an active user."""
        if not is_valid_uuid(user_id):
            logger.warning("Invalid UUID: %s", user_id)
            return ServiceResult.fail(ErrorKind.INVALID_IDENTIFIER, "The id must be a valid UUID")

        user = db.get(User, user_id.lower())
        if user is None:
            logger.warning("User %s does not exist", user_id)
            return ServiceResult.fail(ErrorKind.NOT_FOUND, f"User with id {user_id} not found")
        if not user.is_active:
            logger.warning("Update rejected, user %s is inactive in database", user_id)
            return ServiceResult.fail(ErrorKind.INACTIVE_ACCOUNT, "The user is inactive in database")

        changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS and v is not None}
        if "password" in changes:
            changes["password_hash"] = hash_password(changes.pop("password"))
        if "roles" in changes:
            changes["roles"] = _normalize_roles(changes["roles"])

        for key, value in changes.items():
            setattr(user, key, value)
        try:
            db.commit()
            db.refresh(user)
        except SQLAlchemyError as e:
            return self._handle_db_error(db, e, f"update {user_id}")

        logger.info("User updated successfully")
        return ServiceResult.ok(user)

    def deactivate(self, db: Session, user_id: str) -> ServiceResult[User]:
        """Soft-delete a user. Fails if the user is already inactive."""
        result = self.find_by_id(db, user_id)
        if not result.success:
            return result

        user = result.value
        user.is_active = False
        try:
            db.commit()
            db.refresh(user)
        except SQLAlchemyError as e:
            return self._handle_db_error(db, e, f"deactivate {user_id}")

        logger.info("User deactivated successfully")
        return ServiceResult.ok(user)

    def _handle_db_error(self, db: Session, error: SQLAlchemyError, operation: str) -> ServiceResult:
        """Roll back and classify a storage fault. Raw details stay in the logs."""
        db.rollback()
        if isinstance(error, IntegrityError) and _is_unique_violation(error):
            logger.error("Duplicate key on %s: %s", operation, error.orig)
            return ServiceResult.fail(ErrorKind.DUPLICATE_EMAIL, "Email already registered")

        logger.error("Unknown database error on %s", operation, exc_info=error)
        return ServiceResult.fail(ErrorKind.UNKNOWN, "Please check server logs.")


_user_service: UserService | None = None


def get_user_service() -> UserService:
    """Get singleton user service instance."""
    global _user_service
    if _user_service is None:
        _user_service = UserService()
    return _user_service
