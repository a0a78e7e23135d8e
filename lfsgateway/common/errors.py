from __future__ import annotations
import enum
from typing import Any, Dict, Optional, Tuple

from .contracts import ErrorBody, Lock, LockExistsErrorBody


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation_error"
    REPOSITORY_NOT_FOUND = "repository_not_found"
    REPOSITORY_READ_ONLY = "repository_read_only"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    BANDWIDTH_LIMIT_EXCEEDED = "bandwidth_limit_exceeded"
    INSUFFICIENT_STORAGE = "insufficient_storage"
    SERVICE_UNAVAILABLE = "service_unavailable"
    UNAUTHORIZED = "unauthorized"
    LOCK_CONFLICT = "lock_conflict"
    LOCK_OPERATION_UNAUTHORIZED = "lock_operation_unauthorized"
    INTERNAL = "internal"


STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.REPOSITORY_NOT_FOUND: 404,
    ErrorKind.REPOSITORY_READ_ONLY: 403,
    ErrorKind.RATE_LIMIT_EXCEEDED: 429,
    ErrorKind.BANDWIDTH_LIMIT_EXCEEDED: 509,
    ErrorKind.INSUFFICIENT_STORAGE: 507,
    ErrorKind.SERVICE_UNAVAILABLE: 503,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.LOCK_CONFLICT: 409,
    ErrorKind.LOCK_OPERATION_UNAUTHORIZED: 403,
    ErrorKind.INTERNAL: 500,
}

GENERIC_INTERNAL_MESSAGE = "Internal server error"


class LfsError(Exception):
    """Failure raised by the gateway or by one of its collaborators.

    ``kind`` selects the HTTP status and body shape; only ``LOCK_CONFLICT``
    carries a payload (the lock already holding the path).
    """

    def __init__(self, kind: ErrorKind, message: str, *, lock: Optional[Lock] = None):
        if kind is ErrorKind.LOCK_CONFLICT and lock is None:
            raise ValueError("a lock conflict must carry the existing lock")
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.lock = lock

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def __repr__(self) -> str:
        return f"LfsError({self.kind.value!r}, {self.message!r})"


def validation_error(message: str) -> LfsError:
    return LfsError(ErrorKind.VALIDATION, message)


def lock_exists(message: str, lock: Lock) -> LfsError:
    return LfsError(ErrorKind.LOCK_CONFLICT, message, lock=lock)


def lock_unauthorized(operation: str, path: str) -> LfsError:
    return LfsError(
        ErrorKind.LOCK_OPERATION_UNAUTHORIZED,
        f"LFS {operation} operation is not allowed on {path}",
    )


def translate(err: BaseException) -> Tuple[int, Dict[str, Any]]:
    """Map any exception to ``(status, json body)``.

    Non-``LfsError`` exceptions are unclassified: they become a 500 with a
    generic message so no internals reach the client.
    """
    if not isinstance(err, LfsError):
        return STATUS_BY_KIND[ErrorKind.INTERNAL], ErrorBody(message=GENERIC_INTERNAL_MESSAGE).model_dump()

    status = STATUS_BY_KIND[err.kind]
    if err.kind is ErrorKind.LOCK_CONFLICT:
        body = LockExistsErrorBody(message=err.message, lock=err.lock)
        return status, body.model_dump(mode="json", exclude_none=True)
    return status, ErrorBody(message=err.message).model_dump()
