from __future__ import annotations
from typing import Optional, Tuple

from dulwich.repo import Repo
from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..batch import BatchService, InMemoryLargeFileRepository
from ..batch import get_router as batch_router
from ..common.adapters_inmemory import StaticRepositoryAccessor
from ..common.http import LfsJSONResponse, http_exception_handler
from ..common.ports import RepositoryAccessor
from ..locks import InMemoryLockManager, LockingService
from ..locks import get_router as locks_router
from .observability import RequestContextMiddleware, configure_logging
from .settings import GatewaySettings


def make_services_from_settings(cfg: GatewaySettings) -> Tuple[BatchService, LockingService]:
    accessor: Optional[RepositoryAccessor] = None
    if cfg.WRITERS is not None:
        accessor = StaticRepositoryAccessor(writers=cfg.WRITERS, readers=cfg.READERS, anonymous_read=cfg.ANONYMOUS_READ)

    backend = cfg.BACKEND.lower()
    if backend == "inmemory":
        repository = InMemoryLargeFileRepository(cfg.PUBLIC_URL, expires_in=cfg.ACTION_EXPIRES_IN)
        git_repo = Repo(cfg.GIT_REPO_PATH) if cfg.GIT_REPO_PATH else None
        lock_manager = InMemoryLockManager(
            administrators=cfg.LOCK_ADMINISTRATORS, page_size=cfg.LOCK_PAGE_SIZE, git_repo=git_repo
        )
    elif backend == "none":
        # host process injects real services via create_app(...)
        repository, lock_manager = None, None
    else:
        raise RuntimeError(f"Unknown LFS_BACKEND: {cfg.BACKEND}")

    return BatchService(repository, accessor), LockingService(lock_manager, accessor)


def create_app(
    settings: Optional[GatewaySettings] = None,
    batch_service: Optional[BatchService] = None,
    locking_service: Optional[LockingService] = None,
) -> FastAPI:
    cfg = settings or GatewaySettings()
    if cfg.LOG_LEVEL:
        configure_logging(cfg.LOG_LEVEL)
    if batch_service is None or locking_service is None:
        default_batch, default_locking = make_services_from_settings(cfg)
        batch_service = batch_service or default_batch
        locking_service = locking_service or default_locking

    app = FastAPI(title=cfg.APP_NAME, version=cfg.APP_VERSION)
    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # Routers
    app.include_router(batch_router(lambda: batch_service), prefix=cfg.BATCH_PREFIX)
    app.include_router(locks_router(lambda: locking_service), prefix=cfg.LOCKS_PREFIX)

    @app.get("/health", response_class=LfsJSONResponse)
    def health():
        return LfsJSONResponse(content={"status": "ok", "version": cfg.APP_VERSION})

    return app

app = create_app()
