from __future__ import annotations
import logging
from typing import Optional

from ..common.auth import Operation, check_access
from ..common.contracts import ref_name
from ..common.errors import ErrorKind, LfsError
from ..common.ports import AccessorProvider, RepositoryAccessor
from .contracts import (
    CreateLockRequest, DeleteLockRequest, ListLocksQuery, ListLocksToVerifyRequest,
    LockList, LockResponse, LocksToVerify,
)
from .ports import LockManager, LockManagerProvider

UNAVAILABLE_MESSAGE = "LFS file locking service unavailable"


class LockingService:
    """
    File Locking API. Every operation runs the access gate first, then makes
    exactly one state-changing (or listing) call on the lock manager.

    The manager and accessor are fixed, or resolved per request from the
    repository path through the optional providers.
    """

    def __init__(
        self,
        lock_manager: Optional[LockManager],
        accessor: Optional[RepositoryAccessor] = None,
        logger: Optional[logging.Logger] = None,
        *,
        lock_manager_provider: Optional[LockManagerProvider] = None,
        accessor_provider: Optional[AccessorProvider] = None,
    ) -> None:
        self.lock_manager = lock_manager
        self.accessor = accessor
        self.lock_manager_provider = lock_manager_provider
        self.accessor_provider = accessor_provider
        self.log = logger or logging.getLogger("lfsgateway.locks")

    def _accessor_for(self, repo_path: Optional[str]) -> Optional[RepositoryAccessor]:
        if self.accessor_provider is not None:
            return self.accessor_provider(repo_path)
        return self.accessor

    def _manager(self, repo_path: Optional[str]) -> LockManager:
        manager = self.lock_manager
        if self.lock_manager_provider is not None:
            manager = self.lock_manager_provider(repo_path)
        if manager is None:
            raise LfsError(ErrorKind.SERVICE_UNAVAILABLE, UNAVAILABLE_MESSAGE)
        return manager

    def create_lock(
        self, req: CreateLockRequest, username: Optional[str], *, repo_path: Optional[str] = None
    ) -> LockResponse:
        ref = ref_name(req.ref)
        check_access(self._accessor_for(repo_path), Operation.CREATE_LOCK, ref, username)
        manager = self._manager(repo_path)
        self.log.debug("locks.create path=%s ref=%s user=%s", req.path, ref, username)
        lock = manager.create_lock(req.path, ref, username)
        self.log.info("locks.created id=%s path=%s user=%s", lock.id, lock.path, username)
        return LockResponse(lock=lock)

    def list_locks(
        self, query: ListLocksQuery, username: Optional[str], *, repo_path: Optional[str] = None
    ) -> LockList:
        check_access(self._accessor_for(repo_path), Operation.LIST_LOCKS, query.refspec, username)
        manager = self._manager(repo_path)
        self.log.debug(
            "locks.list path=%s id=%s cursor=%s limit=%d refspec=%s",
            query.path, query.id, query.cursor, query.limit, query.refspec,
        )
        return manager.list_locks(query.path, query.id, query.cursor, query.limit, query.refspec)

    def list_locks_to_verify(
        self, req: ListLocksToVerifyRequest, username: Optional[str], *, repo_path: Optional[str] = None
    ) -> LocksToVerify:
        ref = ref_name(req.ref)
        check_access(self._accessor_for(repo_path), Operation.LIST_LOCKS_TO_VERIFY, ref, username)
        manager = self._manager(repo_path)
        self.log.debug("locks.verify cursor=%s limit=%d ref=%s user=%s", req.cursor, req.limit, ref, username)
        page = manager.list_locks_to_verify(ref, username, req.cursor, req.limit)

        res = LocksToVerify(next_cursor=page.next_cursor)
        for lock in page.locks:
            # anonymous callers own nothing
            if username is not None and lock.owner_name == username:
                res.ours.append(lock)
            else:
                res.theirs.append(lock)
        return res

    def delete_lock(
        self, lock_id: str, req: DeleteLockRequest, username: Optional[str], *, repo_path: Optional[str] = None
    ) -> LockResponse:
        ref = ref_name(req.ref)
        check_access(self._accessor_for(repo_path), Operation.DELETE_LOCK, ref, username)
        manager = self._manager(repo_path)
        force = False
        if req.force:
            # force from a non-administrator is silently dropped
            force = manager.is_lock_administrator(username)
        self.log.debug("locks.delete id=%s ref=%s user=%s force=%s", lock_id, ref, username, force)
        lock = manager.delete_lock(lock_id, ref, username, force)
        self.log.info("locks.deleted id=%s path=%s user=%s force=%s", lock.id, lock.path, username, force)
        return LockResponse(lock=lock)
