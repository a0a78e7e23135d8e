from __future__ import annotations
from typing import Callable, Optional, Protocol


class RepositoryAccessor(Protocol):
    """
    Read/write permission decisions on the main git repository.
    Both checks return None when access is granted and raise an LfsError
    (typically REPOSITORY_NOT_FOUND, REPOSITORY_READ_ONLY or UNAUTHORIZED)
    otherwise.
    """
    def check_read_access(self, ref_name: Optional[str], username: Optional[str]) -> None: ...
    def check_write_access(self, ref_name: Optional[str], username: Optional[str]) -> None: ...


# repository path (e.g. "/repo.git/info/lfs", None when unknown) -> accessor, or None for no gate
AccessorProvider = Callable[[Optional[str]], Optional[RepositoryAccessor]]
