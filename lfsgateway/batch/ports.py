from __future__ import annotations
from typing import Callable, Optional, Protocol

from .contracts import Action, BatchRequest


class LargeFileRepository(Protocol):
    """
    Storage backend for large objects. The gateway never touches object
    bytes; it only asks the backend where the client should send or fetch
    them. Whole-repository failures are raised as LfsError.
    """
    def get_size(self, oid: str) -> int:
        """Stored size of the object, or -1 when the backend does not have it."""
        ...

    def get_download_action(self, oid: str) -> Action: ...

    def get_upload_action(self, oid: str, size: int) -> Action: ...

    def get_verify_action(self, oid: str) -> Optional[Action]:
        """Follow-up verification action for uploads, or None if not required."""
        ...


# (request, repository path, raw Authorization header) -> backend for this request
RepositoryProvider = Callable[[BatchRequest, Optional[str], Optional[str]], Optional[LargeFileRepository]]
