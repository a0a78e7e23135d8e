from __future__ import annotations
from typing import Iterable, Optional

from .errors import ErrorKind, LfsError


class StaticRepositoryAccessor:
    """
    Fixed reader/writer sets, ignoring the ref. ``readers=None`` lets every
    authenticated user read; writers can always read.
    """

    def __init__(
        self,
        writers: Iterable[str] = (),
        readers: Optional[Iterable[str]] = None,
        anonymous_read: bool = False,
    ):
        self.writers = set(writers)
        self.readers = set(readers) if readers is not None else None
        self.anonymous_read = anonymous_read

    def check_read_access(self, ref_name: Optional[str], username: Optional[str]) -> None:
        if username is None:
            if self.anonymous_read:
                return
            raise LfsError(ErrorKind.UNAUTHORIZED, "Authentication required")
        if self.readers is None or username in self.readers or username in self.writers:
            return
        raise LfsError(ErrorKind.REPOSITORY_NOT_FOUND, "Repository not found")

    def check_write_access(self, ref_name: Optional[str], username: Optional[str]) -> None:
        if username is None:
            raise LfsError(ErrorKind.UNAUTHORIZED, "Authentication required")
        self.check_read_access(ref_name, username)
        if username not in self.writers:
            raise LfsError(ErrorKind.REPOSITORY_READ_ONLY, f"User {username} has read-only access")
