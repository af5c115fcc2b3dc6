from fastapi import status
from core.exceptions import (
    AuthError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    PersistenceError,
    UpstreamError,
    ValidationError,
)

class ErrorCode:
    VALIDATION_ERROR = "VALIDATION_ERROR"

    AUTH_INVALID_CREDENTIALS = "AUTH_INVALID_CREDENTIALS"
    AUTH_MISSING_TOKEN = "AUTH_MISSING_TOKEN"
    AUTH_INVALID_TOKEN = "AUTH_INVALID_TOKEN"
    INVALID_CURRENT_PASSWORD = "INVALID_CURRENT_PASSWORD"
    WEAK_PASSWORD = "WEAK_PASSWORD"
    FORBIDDEN = "FORBIDDEN"

    USER_NOT_FOUND = "USER_NOT_FOUND"
    DEPOSIT_NOT_FOUND = "DEPOSIT_NOT_FOUND"
    WITHDRAWAL_NOT_FOUND = "WITHDRAWAL_NOT_FOUND"
    TRADE_NOT_FOUND = "TRADE_NOT_FOUND"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    ALREADY_FINALIZED = "ALREADY_FINALIZED"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"

    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"


class ErrorMessage:
    INVALID_CREDENTIALS = "Invalid email or password"
    MISSING_TOKEN = "No token provided"
    INVALID_TOKEN = "Invalid token"
    INVALID_CURRENT_PASSWORD = "Current password is incorrect"
    WEAK_PASSWORD = "New password must be at least {length} characters"
    FORBIDDEN = "You are not authorized to perform this action"

    USER_NOT_FOUND = "User not found"
    DEPOSIT_NOT_FOUND = "Deposit not found"
    WITHDRAWAL_NOT_FOUND = "Withdrawal not found"
    TRADE_NOT_FOUND = "Trade not found"
    RESOURCE_NOT_FOUND = "Resource not found"

    ALREADY_FINALIZED = "Request has already been finalized"
    INSUFFICIENT_FUNDS = "Insufficient balance"

    UPSTREAM_ERROR = "Main backend request failed"
    PERSISTENCE_ERROR = "Database error"



def bad_request(code: str, message: str, details: dict | None = None):
    return ValidationError(code=code, message=message, details=details)


def unauthorized(code: str = ErrorCode.AUTH_INVALID_TOKEN, message: str = ErrorMessage.INVALID_TOKEN):
    return AuthError(code=code, message=message)


def forbidden(code: str = ErrorCode.FORBIDDEN, message: str = ErrorMessage.FORBIDDEN, details: dict | None = None):
    return ForbiddenError(code=code, message=message, details=details)


def not_found(code: str, message: str, details: dict | None = None):
    return NotFoundError(code=code, message=message, details=details)


def already_finalized(kind: str, request_id: int, current_status: str):
    return ConflictError(
        code=ErrorCode.ALREADY_FINALIZED,
        message=ErrorMessage.ALREADY_FINALIZED,
        details={"kind": kind, "id": request_id, "status": current_status},
    )


def insufficient_funds(user_id: int, coin: str, amount):
    return ConflictError(
        code=ErrorCode.INSUFFICIENT_FUNDS,
        message=ErrorMessage.INSUFFICIENT_FUNDS,
        details={"user_id": user_id, "coin": coin, "amount": str(amount)},
        status_code=status.HTTP_400_BAD_REQUEST,
    )


def upstream_error(message: str = ErrorMessage.UPSTREAM_ERROR, details: dict | None = None):
    return UpstreamError(code=ErrorCode.UPSTREAM_ERROR, message=message, details=details)


def persistence_error(message: str = ErrorMessage.PERSISTENCE_ERROR):
    return PersistenceError(code=ErrorCode.PERSISTENCE_ERROR, message=message)
