from __future__ import annotations
import threading
from typing import Dict, Optional

from .contracts import Action


class InMemoryLargeFileRepository:
    """
    Size table standing in for object storage. Hrefs point at ``base_url``;
    serving the bytes behind them is the storage backend's business, not ours.
    """

    def __init__(self, base_url: str, expires_in: int = 3600, require_verify: bool = True):
        self.base_url = base_url.rstrip("/")
        self.expires_in = expires_in
        self.require_verify = require_verify
        self._sizes: Dict[str, int] = {}
        self._lock = threading.RLock()

    def put(self, oid: str, size: int) -> None:
        with self._lock:
            self._sizes[oid] = size

    def remove(self, oid: str) -> None:
        with self._lock:
            self._sizes.pop(oid, None)

    def get_size(self, oid: str) -> int:
        with self._lock:
            return self._sizes.get(oid, -1)

    def get_download_action(self, oid: str) -> Action:
        return Action(href=f"{self.base_url}/objects/{oid}", expires_in=self.expires_in)

    def get_upload_action(self, oid: str, size: int) -> Action:
        return Action(
            href=f"{self.base_url}/objects/{oid}",
            header={"Content-Type": "application/octet-stream"},
            expires_in=self.expires_in,
        )

    def get_verify_action(self, oid: str) -> Optional[Action]:
        if not self.require_verify:
            return None
        return Action(href=f"{self.base_url}/objects/verify", expires_in=self.expires_in)
