"""
Domain Exceptions

Defines the error taxonomy of the workforce tracking core. Validation-style
errors are raised from already-fetched state before any external call;
infrastructure errors surface failures of the store or the ERP gateway.
"""

from enum import Enum


class ErrorType(str, Enum):
    """Error type enumeration for discriminated unions."""

    VALIDATION = "validation"
    NOT_AUTHORIZED = "not_authorized"
    INVALID_TRANSITION = "invalid_transition"
    NOT_FOUND = "not_found"
    GATEWAY = "gateway"
    TIMEOUT = "timeout"
    REPOSITORY = "repository"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict[str, str | dict[str, str | int | bool | None]]:
        """Convert error to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainError):
    """Raised when request input violates a domain rule."""

    def __init__(
        self,
        field_name: str,
        value: str | int | float | bool | None,
        message: str,
        error_code: str | None = None,
    ) -> None:
        self.field_name = field_name
        self.value = value
        self.error_code = error_code or "VALIDATION_ERROR"

        details = {
            "field": field_name,
            "value": str(value) if value is not None else None,
            "error_code": self.error_code,
        }
        super().__init__(
            f"Validation failed for field '{field_name}': {message}",
            ErrorType.VALIDATION,
            details,
        )


class MissingPauseReasonError(ValidationError):
    """Raised when a STOP action is submitted without a pause reason code."""

    def __init__(self) -> None:
        super().__init__(
            "pause_reason_code",
            None,
            "a pause reason is required when stopping work",
            "MISSING_PAUSE_REASON",
        )


class InvalidPauseReasonError(ValidationError):
    """Raised when a STOP action names a pause reason that does not exist."""

    def __init__(self, code: str) -> None:
        super().__init__(
            "pause_reason_code",
            code,
            f"unknown pause reason code: {code}",
            "INVALID_PAUSE_REASON",
        )
        self.code = code


class NotAuthorizedError(DomainError):
    """Raised when a worker is not in a machine's assignee lists."""

    def __init__(self, login_code: str, machine_id: str) -> None:
        super().__init__(
            f"Worker {login_code} is not authorized for machine {machine_id}",
            ErrorType.NOT_AUTHORIZED,
            {"login_code": login_code, "machine_id": machine_id},
        )
        self.login_code = login_code
        self.machine_id = machine_id


class InvalidTransitionError(DomainError):
    """Raised when an action is not allowed from the worker's derived state."""

    def __init__(self, action: str, last_event_kind: str | None) -> None:
        current = last_event_kind or "NONE"
        super().__init__(
            f"Cannot {action} work when the last recorded activity is {current}",
            ErrorType.INVALID_TRANSITION,
            {"action": action, "last_event_kind": current},
        )
        self.action = action
        self.last_event_kind = last_event_kind


class EntityNotFoundError(DomainError):
    """Raised when a referenced directory entity does not exist."""

    def __init__(self, entity_type: str, entity_id: str) -> None:
        super().__init__(
            f"{entity_type} not found: {entity_id}",
            ErrorType.NOT_FOUND,
            {"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class GatewayError(DomainError):
    """Raised when the ERP write gateway fails."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        gateway_details = dict(details or {})
        if status_code is not None:
            gateway_details["status_code"] = status_code
        super().__init__(message, ErrorType.GATEWAY, gateway_details)
        self.status_code = status_code


class WriteRejectedError(GatewayError):
    """Raised when an activity event could not be appended to the log."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(f"Activity write rejected: {message}", status_code)


class SnapshotTimeoutError(DomainError):
    """Raised when a snapshot bulk read exceeds its deadline."""

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(
            f"Workforce snapshot reads exceeded {timeout_seconds:g}s deadline",
            ErrorType.TIMEOUT,
            {"timeout_seconds": str(timeout_seconds)},
        )
        self.timeout_seconds = timeout_seconds


class DatabaseError(DomainError):
    """Raised when a database operation fails."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorType.REPOSITORY)
