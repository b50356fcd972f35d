"""Mapping of domain errors to HTTP responses."""

from fastapi import HTTPException, status

from shopfloor.domain.shared.exceptions import (
    DatabaseError,
    DomainError,
    EntityNotFoundError,
    GatewayError,
    InvalidTransitionError,
    NotAuthorizedError,
    SnapshotTimeoutError,
    ValidationError,
)

# Checked in order; subclasses come before their bases
_STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidTransitionError, status.HTTP_409_CONFLICT),
    (GatewayError, status.HTTP_502_BAD_GATEWAY),
    (SnapshotTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT),
    (DatabaseError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def status_for(error: DomainError) -> int:
    for error_class, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_class):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def to_http_exception(error: DomainError) -> HTTPException:
    return HTTPException(status_code=status_for(error), detail=error.to_dict())
