from fastapi import HTTPException
from museum_inventory.constants.error_codes import ErrorCode


class AppException(HTTPException):
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: ErrorCode,
        details: dict | None = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.error_code = error_code
        self.details = details

    @property
    def message(self) -> str:
        return self.detail


class InvalidInputError(AppException):
    """Rejected before the store is touched."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(400, message, ErrorCode.VALIDATION_ERROR, details)


class RecordNotFoundError(AppException):
    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.NOT_FOUND):
        super().__init__(404, message, error_code)


class DuplicateNameError(AppException):
    def __init__(self, message: str = "Location name must be unique."):
        super().__init__(409, message, ErrorCode.LOCATION_NAME_EXISTS)


class DuplicatePositionError(AppException):
    """A concurrent batch claimed the same positions; the whole batch may be retried."""

    def __init__(
        self,
        message: str = "Failed to create items due to a duplicate position. Please try again.",
    ):
        super().__init__(409, message, ErrorCode.DUPLICATE_POSITION)


class PersistenceError(AppException):
    def __init__(
        self,
        message: str = "A database error occurred.",
        error_code: ErrorCode = ErrorCode.PERSISTENCE_ERROR,
    ):
        super().__init__(500, message, error_code)


class BatchCreateError(PersistenceError):
    def __init__(self, message: str = "Failed to create inventory items."):
        super().__init__(message, ErrorCode.BATCH_CREATE_FAILED)
