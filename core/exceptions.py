from fastapi import status


class AppException(Exception):
    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict | None = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details or {}


class ValidationError(AppException):
    def __init__(self, code: str, message: str, details: dict | None = None):
        super().__init__(status.HTTP_400_BAD_REQUEST, code, message, details)


class AuthError(AppException):
    def __init__(self, code: str, message: str, details: dict | None = None):
        super().__init__(status.HTTP_401_UNAUTHORIZED, code, message, details)


class ForbiddenError(AppException):
    def __init__(self, code: str, message: str, details: dict | None = None):
        super().__init__(status.HTTP_403_FORBIDDEN, code, message, details)


class NotFoundError(AppException):
    def __init__(self, code: str, message: str, details: dict | None = None):
        super().__init__(status.HTTP_404_NOT_FOUND, code, message, details)


class ConflictError(AppException):
    """Request conflicts with current state (finalized request, short balance)."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict | None = None,
        status_code: int = status.HTTP_409_CONFLICT,
    ):
        super().__init__(status_code, code, message, details)


class UpstreamError(AppException):
    def __init__(self, code: str, message: str, details: dict | None = None):
        super().__init__(status.HTTP_502_BAD_GATEWAY, code, message, details)


class PersistenceError(AppException):
    def __init__(self, code: str, message: str, details: dict | None = None):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, code, message, details)
