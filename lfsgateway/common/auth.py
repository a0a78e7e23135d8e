from __future__ import annotations
import base64
import binascii
import enum
import logging
from typing import Dict, Optional

from fastapi import Request

from .errors import validation_error
from .ports import RepositoryAccessor

log = logging.getLogger("lfsgateway.auth")

# ---------- Auth extraction ----------

def transport_user(request: Request) -> Optional[str]:
    """Username already authenticated by the server stack (starlette AuthenticationMiddleware)."""
    user = request.scope.get("user")
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    return getattr(user, "display_name", None) or None


def username_from_authorization(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.strip():
        return None

    parts = authorization.strip().split(None, 1)
    scheme = parts[0]
    if scheme.lower() != "basic":
        raise validation_error(f"Only 'Basic' authentication is allowed, not {scheme}")

    credentials = parts[1].strip() if len(parts) > 1 else ""
    try:
        if not credentials:
            raise ValueError("empty credentials")
        # clients may drop the trailing "=" padding
        padded = credentials + "=" * (-len(credentials) % 4)
        decoded = base64.b64decode(padded, validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        raise validation_error(f"Not in valid Base64 scheme: {credentials}")

    # user:password, split on the first colon only
    return decoded.split(":", 1)[0]


def resolve_username(remote_user: Optional[str], authorization: Optional[str]) -> Optional[str]:
    if remote_user:
        return remote_user
    return username_from_authorization(authorization)


def get_username(request: Request) -> Optional[str]:
    return resolve_username(transport_user(request), request.headers.get("authorization"))

# ---------- Access gate ----------

class Operation(str, enum.Enum):
    DOWNLOAD = "download"
    UPLOAD = "upload"
    VERIFY = "verify"
    LIST_LOCKS = "list_locks"
    CREATE_LOCK = "create_lock"
    DELETE_LOCK = "delete_lock"
    LIST_LOCKS_TO_VERIFY = "list_locks_to_verify"


class Access(str, enum.Enum):
    READ = "read"
    WRITE = "write"


# batch verify is unchecked; list-to-verify needs write like create/delete
REQUIRED_ACCESS: Dict[Operation, Optional[Access]] = {
    Operation.DOWNLOAD: Access.READ,
    Operation.UPLOAD: Access.WRITE,
    Operation.VERIFY: None,
    Operation.LIST_LOCKS: Access.READ,
    Operation.CREATE_LOCK: Access.WRITE,
    Operation.DELETE_LOCK: Access.WRITE,
    Operation.LIST_LOCKS_TO_VERIFY: Access.WRITE,
}


def check_access(
    accessor: Optional[RepositoryAccessor],
    operation: Operation,
    ref_name: Optional[str],
    username: Optional[str],
) -> None:
    if accessor is None:
        return

    required = REQUIRED_ACCESS[operation]
    if required is Access.READ:
        log.debug("access.check read op=%s ref=%s user=%s", operation.value, ref_name, username)
        accessor.check_read_access(ref_name, username)
    elif required is Access.WRITE:
        log.debug("access.check write op=%s ref=%s user=%s", operation.value, ref_name, username)
        accessor.check_write_access(ref_name, username)
