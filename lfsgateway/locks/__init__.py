"""
LFS File Locking API handler.
Exports the FastAPI router via get_router() and the LockingService for DI.
"""
from .contracts import (
    CreateLockRequest, DeleteLockRequest, ListLocksQuery, ListLocksToVerifyRequest,
    LockList, LockResponse, LocksToVerify, parse_limit,
)
from .ports import LockManager, LockManagerProvider
from .paths import is_path_present_for_ref
from .routes import get_router, parse_unlock_path
from .service import LockingService
from .adapters_inmemory import InMemoryLockManager

__all__ = [
    "CreateLockRequest",
    "DeleteLockRequest",
    "ListLocksQuery",
    "ListLocksToVerifyRequest",
    "LockList",
    "LockResponse",
    "LocksToVerify",
    "parse_limit",
    "LockManager",
    "LockManagerProvider",
    "is_path_present_for_ref",
    "get_router",
    "parse_unlock_path",
    "LockingService",
    "InMemoryLockManager",
]
