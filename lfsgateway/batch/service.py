from __future__ import annotations
import logging
import time
from typing import Optional

from ..common.auth import Operation, check_access
from ..common.contracts import ref_name
from ..common.errors import ErrorKind, LfsError
from ..common.ports import AccessorProvider, RepositoryAccessor
from .contracts import BatchRequest, BatchResponse
from .ports import LargeFileRepository, RepositoryProvider
from .transfer import for_operation


class BatchService:
    """
    Batch API: access gate -> storage backend -> per-object actions.

    Collaborators are either fixed (``repository``/``accessor``) or looked up
    per request through ``repository_provider``/``accessor_provider``, which
    see the repository path and the caller's raw Authorization header.
    """

    def __init__(
        self,
        repository: Optional[LargeFileRepository],
        accessor: Optional[RepositoryAccessor] = None,
        logger: Optional[logging.Logger] = None,
        *,
        repository_provider: Optional[RepositoryProvider] = None,
        accessor_provider: Optional[AccessorProvider] = None,
    ) -> None:
        self.repository = repository
        self.accessor = accessor
        self.repository_provider = repository_provider
        self.accessor_provider = accessor_provider
        self.log = logger or logging.getLogger("lfsgateway.batch")

    def _accessor_for(self, repo_path: Optional[str]) -> Optional[RepositoryAccessor]:
        if self.accessor_provider is not None:
            return self.accessor_provider(repo_path)
        return self.accessor

    def _repository_for(
        self, req: BatchRequest, repo_path: Optional[str], authorization: Optional[str]
    ) -> Optional[LargeFileRepository]:
        if self.repository_provider is not None:
            return self.repository_provider(req, repo_path, authorization)
        return self.repository

    def batch(
        self,
        req: BatchRequest,
        username: Optional[str],
        *,
        repo_path: Optional[str] = None,
        authorization: Optional[str] = None,
    ) -> BatchResponse:
        t0 = time.perf_counter()
        check_access(self._accessor_for(repo_path), Operation(req.operation), ref_name(req.ref), username)

        repository = self._repository_for(req, repo_path, authorization)
        if repository is None:
            self.log.error("batch.no_repository operation=%s repo=%s", req.operation, repo_path)
            raise LfsError(ErrorKind.INTERNAL, "Failed to get the LFS repository")

        res = for_operation(req.operation, repository, req.objects).process()
        failed = sum(1 for o in res.objects if o.error is not None)
        self.log.info(
            "batch.ok operation=%s repo=%s user=%s objects=%d failed=%d dur_ms=%d",
            req.operation, repo_path, username, len(res.objects), failed, int((time.perf_counter() - t0) * 1000),
        )
        return res
