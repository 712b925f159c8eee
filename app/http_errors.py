"""Translation of service failures into HTTP errors."""

from fastapi import HTTPException, status

from app.services.result import ErrorKind, ServiceResult

STATUS_BY_ERROR: dict[ErrorKind, int] = {
    ErrorKind.INVALID_IDENTIFIER: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INACTIVE_ACCOUNT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.ACCOUNT_INACTIVE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.DUPLICATE_EMAIL: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.MISSING_PRINCIPAL: status.HTTP_400_BAD_REQUEST,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.TOKEN_ISSUE_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.UNKNOWN: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

SERVER_ERROR_DETAIL = "Please check server logs."


def to_http_exception(result: ServiceResult, status_code: int | None = None) -> HTTPException:
    """Build the HTTPException for a failed result."""
    code = status_code or STATUS_BY_ERROR.get(result.error, status.HTTP_500_INTERNAL_SERVER_ERROR)
    detail = SERVER_ERROR_DETAIL if code >= 500 else result.detail
    headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
    return HTTPException(status_code=code, detail=detail, headers=headers)


def raise_for_error(result: ServiceResult, status_code: int | None = None) -> None:
    """Raise the mapped HTTPException if ``result`` is a failure."""
    if not result.success:
        raise to_http_exception(result, status_code)
