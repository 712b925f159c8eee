"""Role-based authorization for protected operations."""

import logging
from dataclasses import dataclass, field

from app.models.user import User, ValidRole
from app.services.result import ErrorKind, ServiceResult

logger = logging.getLogger("user_accounts")


@dataclass(frozen=True)
class ProtectedOperation:
    """An operation and the roles allowed to run it. Any one role suffices."""

    name: str
    required_roles: frozenset[str] = field(default_factory=frozenset)


PROTECTED_OPERATIONS: dict[str, ProtectedOperation] = {
    "update_user": ProtectedOperation("update_user", frozenset({ValidRole.ADMIN.value})),
    "deactivate_user": ProtectedOperation("deactivate_user", frozenset({ValidRole.ADMIN.value})),
    "check_status": ProtectedOperation("check_status"),
}


def authorize(user: User | None, operation: ProtectedOperation | None) -> ServiceResult[User | None]:
    """Allow or deny ``user`` running ``operation``.

    An operation with no required roles is open to any authenticated caller.
    """
    if operation is None or not operation.required_roles:
        return ServiceResult.ok(user)

    if user is None:
        logger.warning("No principal attached for protected operation %s", operation.name)
        return ServiceResult.fail(ErrorKind.MISSING_PRINCIPAL, "User not found in request")

    if set(user.roles or []) & operation.required_roles:
        return ServiceResult.ok(user)

    required = ", ".join(sorted(operation.required_roles))
    logger.warning("User %s denied %s, needs one of [%s]", user.id, operation.name, required)
    return ServiceResult.fail(ErrorKind.FORBIDDEN, f"User {user.name} needs a valid role: [{required}]")
