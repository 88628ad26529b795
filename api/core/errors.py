"""Domain exceptions raised by services and mapped to HTTP responses in main.py."""

from typing import Any


class AppError(Exception):
    """Base class for errors that carry their own HTTP status and error code."""

    status_code: int = 500
    code: str = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(AppError):
    """Requested identifier does not resolve to an existing row."""

    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, entity: str, identifier: Any):
        self.entity = entity
        self.identifier = identifier
        super().__init__(
            f"{entity} not found",
            details={"entity": entity, "id": str(identifier)},
        )


class ConflictError(AppError):
    status_code = 409
    code = "CONFLICT"


class InvalidStatusTransitionError(ConflictError):
    code = "INVALID_STATUS_TRANSITION"

    def __init__(self, current: str, requested: str):
        super().__init__(
            f"Cannot change status from {current} to {requested}",
            details={"current_status": current, "requested_status": requested},
        )


class ForbiddenError(AppError):
    status_code = 403
    code = "FORBIDDEN"


class BusinessRuleError(AppError):
    status_code = 400
    code = "BUSINESS_LOGIC_ERROR"
