"""Demo data for local development."""

import logging

from sqlalchemy.orm import Session

from app.models.user import User
from app.services.password import hash_password

logger = logging.getLogger("user_accounts")

SEED_PASSWORD = "Abc123"

SEED_USERS = [
    {"email": "test1@google.com", "name": "Test One", "roles": ["admin"]},
    {"email": "test2@google.com", "name": "Test Two", "roles": ["user"]},
    {"email": "test3@google.com", "name": "Test Three", "roles": ["user"]},
    {"email": "test4@google.com", "name": "Test Four", "roles": ["user"]},
    {"email": "test5@google.com", "name": "Test Five", "roles": ["user"]},
    {"email": "test6@google.com", "name": "Test Six", "roles": ["user"]},
    {"email": "test7@google.com", "name": "Test Seven", "roles": ["user"]},
    {"email": "test8@google.com", "name": "Test Eight", "roles": ["user"]},
    {"email": "test9@google.com", "name": "Test Nine", "roles": ["user"]},
    {"email": "test10@google.com", "name": "Test Ten", "roles": ["user"]},
    {"email": "test11@google.com", "name": "Test Eleven", "roles": ["user"]},
]


class SeedService:
    """Replaces every user row with the demo set."""

    def run(self, db: Session) -> User:
        """Wipe the user table and insert the seed users. Returns the first (admin) user."""
        db.query(User).delete()
        password_hash = hash_password(SEED_PASSWORD)
        users = [User(password_hash=password_hash, is_active=True, **data) for data in SEED_USERS]
        db.add_all(users)
        db.commit()
        db.refresh(users[0])
        logger.info("Seed executed: %d users inserted", len(users))
        return users[0]


_seed_service: SeedService | None = None


def get_seed_service() -> SeedService:
    """Get singleton seed service instance."""
    global _seed_service
    if _seed_service is None:
        _seed_service = SeedService()
    return _seed_service
