from __future__ import annotations
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional

from dulwich.repo import BaseRepo

from ..common.contracts import Lock, LockOwner
from ..common.errors import ErrorKind, LfsError, lock_exists, lock_unauthorized, validation_error
from .contracts import LockList
from .paths import is_path_present_for_ref

ClockFn = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryLockManager:
    """Thread-safe in-memory lock table with coarse-grained lock.

    Single-process dev/testing only; locks vanish with the process.
    Cursors are the id of the first lock on the next page. With ``git_repo``
    set, only paths present in the tree of the requested ref can be locked.
    """

    def __init__(
        self,
        administrators: Iterable[str] = (),
        page_size: int = 100,
        now: Optional[ClockFn] = None,
        id_factory: Optional[Callable[[], str]] = None,
        git_repo: Optional[BaseRepo] = None,
    ):
        self.administrators = set(administrators)
        self.page_size = page_size
        self._now = now or _utcnow
        self._new_id = id_factory or (lambda: uuid.uuid4().hex)
        self._locks: Dict[str, Lock] = {}  # insertion ordered
        self._by_path: Dict[str, str] = {}
        self.git_repo = git_repo
        self._lock = threading.RLock()

    def create_lock(self, path: str, ref_name: Optional[str], username: Optional[str]) -> Lock:
        if not username:
            raise LfsError(ErrorKind.UNAUTHORIZED, "Authentication required to create a lock")
        if self.git_repo is not None and not is_path_present_for_ref(self.git_repo, ref_name, path):
            raise validation_error(f"Path {path} does not exist at {ref_name or 'HEAD'}")
        with self._lock:
            existing_id = self._by_path.get(path)
            if existing_id is not None:
                raise lock_exists("already created lock", self._locks[existing_id])
            lock = Lock(id=self._new_id(), path=path, locked_at=self._now(), owner=LockOwner(name=username))
            self._locks[lock.id] = lock
            self._by_path[path] = lock.id
            return lock

    def list_locks(
        self,
        path: Optional[str],
        lock_id: Optional[str],
        cursor: Optional[str],
        limit: int,
        ref_name: Optional[str],
    ) -> LockList:
        with self._lock:
            locks = [
                l for l in self._locks.values()
                if (path is None or l.path == path) and (lock_id is None or l.id == lock_id)
            ]
        return self._page(locks, cursor, limit)

    def list_locks_to_verify(
        self,
        ref_name: Optional[str],
        username: Optional[str],
        cursor: Optional[str],
        limit: int,
    ) -> LockList:
        with self._lock:
            locks = list(self._locks.values())
        return self._page(locks, cursor, limit)

    def delete_lock(self, lock_id: str, ref_name: Optional[str], username: Optional[str], force: bool) -> Lock:
        with self._lock:
            lock = self._locks.get(lock_id)
            if lock is None:
                raise LfsError(ErrorKind.LOCK_OPERATION_UNAUTHORIZED, f"Lock {lock_id} does not exist")
            if not force and lock.owner_name != username:
                raise lock_unauthorized("delete", lock.path)
            del self._locks[lock_id]
            del self._by_path[lock.path]
            return lock

    def is_lock_administrator(self, username: Optional[str]) -> bool:
        return username is not None and username in self.administrators

    def _page(self, locks: List[Lock], cursor: Optional[str], limit: int) -> LockList:
        start = 0
        if cursor:
            ids = [l.id for l in locks]
            if cursor not in ids:
                raise validation_error(f"Invalid cursor: {cursor}")
            start = ids.index(cursor)

        size = self.page_size if limit <= 0 else min(limit, self.page_size)
        page = locks[start:start + size]
        rest = locks[start + size:]
        return LockList(locks=page, next_cursor=rest[0].id if rest else None)
