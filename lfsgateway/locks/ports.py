from __future__ import annotations
from typing import Callable, Optional, Protocol

from ..common.contracts import Lock
from .contracts import LockList


class LockManager(Protocol):
    """
    Owner of lock state. Implementations must make create_lock an atomic
    check-and-create (at most one active lock per path) and raise LfsError:
      - LOCK_CONFLICT (with the existing lock) when the path is already locked
      - LOCK_OPERATION_UNAUTHORIZED when a delete is not allowed or the lock is unknown
      - any repository/availability kind for wider failures
    """
    def create_lock(self, path: str, ref_name: Optional[str], username: Optional[str]) -> Lock: ...

    def list_locks(
        self,
        path: Optional[str],
        lock_id: Optional[str],
        cursor: Optional[str],
        limit: int,
        ref_name: Optional[str],
    ) -> LockList: ...

    def list_locks_to_verify(
        self,
        ref_name: Optional[str],
        username: Optional[str],
        cursor: Optional[str],
        limit: int,
    ) -> LockList:
        """One page of the locks relevant to ``ref_name``; the caller splits ours/theirs."""
        ...

    def delete_lock(self, lock_id: str, ref_name: Optional[str], username: Optional[str], force: bool) -> Lock: ...

    def is_lock_administrator(self, username: Optional[str]) -> bool: ...


# repository path -> lock manager for that repository, or None when locking is unavailable
LockManagerProvider = Callable[[Optional[str]], Optional[LockManager]]
