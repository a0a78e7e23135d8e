"""
Pieces shared by the batch and locking handlers: the protocol error taxonomy,
principal extraction, the repository access gate and the LFS JSON response.
"""
from .contracts import LFS_MEDIA_TYPE, ErrorBody, Lock, LockExistsErrorBody, LockOwner, LfsRef, ref_name
from .errors import ErrorKind, LfsError, STATUS_BY_KIND, lock_exists, lock_unauthorized, translate, validation_error
from .auth import Operation, check_access, get_username, resolve_username, username_from_authorization
from .ports import AccessorProvider, RepositoryAccessor

__all__ = [
    "LFS_MEDIA_TYPE",
    "ErrorBody",
    "Lock",
    "LockExistsErrorBody",
    "LockOwner",
    "LfsRef",
    "ref_name",
    "ErrorKind",
    "LfsError",
    "STATUS_BY_KIND",
    "lock_exists",
    "lock_unauthorized",
    "translate",
    "validation_error",
    "Operation",
    "check_access",
    "get_username",
    "resolve_username",
    "username_from_authorization",
    "AccessorProvider",
    "RepositoryAccessor",
]
