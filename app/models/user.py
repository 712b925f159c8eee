"""User model."""

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, Boolean, Column, DateTime, String

from app.database import Base

DEFAULT_ROLES = ["user"]


class ValidRole(str, Enum):
    """Role labels a user can hold."""

    ADMIN = "admin"
    USER = "user"


def _new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """Application user. Rows are deactivated, never deleted."""

    __tablename__ = "user"

    id = Column(String(36), primary_key=True, default=_new_id)
    email = Column(String(256), unique=True, nullable=False, index=True)
    password_hash = Column(String(256), nullable=False)
    name = Column(String(256), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    roles = Column(JSON, nullable=False, default=lambda: list(DEFAULT_ROLES))
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
    last_login_at = Column(DateTime, nullable=True)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email} active={self.is_active}>"
