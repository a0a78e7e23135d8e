from __future__ import annotations
import logging
from typing import Callable

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from ..common.auth import get_username
from ..common.errors import ErrorKind, LfsError
from ..common.http import LfsJSONResponse, lfs_error, lfs_ok, parse_model, repository_path
from .contracts import CreateLockRequest, DeleteLockRequest, ListLocksQuery, ListLocksToVerifyRequest
from .service import LockingService

log = logging.getLogger("lfsgateway.locks.routes")


def parse_unlock_path(tail: str) -> str:
    """``<id>/unlock`` -> ``<id>``; anything else is not a locking endpoint."""
    segments = tail.rstrip("/").split("/")
    if len(segments) != 2 or not segments[0] or segments[1] != "unlock":
        raise LfsError(ErrorKind.INTERNAL, f"Invalid delete-lock endpoint: /{tail}")
    return segments[0]


def get_router(service_factory: Callable[[], LockingService]) -> APIRouter:
    r = APIRouter(tags=["lfs-locks"], default_response_class=LfsJSONResponse)
    service = service_factory()

    @r.get("/locks")
    async def list_locks(request: Request, svc: LockingService = Depends(lambda: service)):
        try:
            username = get_username(request)
            query = ListLocksQuery.from_params(request.query_params)
            res = await run_in_threadpool(svc.list_locks, query, username, repo_path=repository_path(request, "/locks"))
            return lfs_ok(res)
        except Exception as e:
            return lfs_error(e, log)

    @r.get("/locks/{tail:path}")
    async def list_locks_bad_path(tail: str):
        return lfs_error(LfsError(ErrorKind.INTERNAL, f"Invalid path info in the GET request: /{tail}"), log)

    @r.post("/locks")
    async def create_lock(request: Request, svc: LockingService = Depends(lambda: service)):
        try:
            username = get_username(request)
            req = parse_model(CreateLockRequest, await request.body())
            res = await run_in_threadpool(svc.create_lock, req, username, repo_path=repository_path(request, "/locks"))
            return lfs_ok(res, status_code=201)
        except Exception as e:
            return lfs_error(e, log)

    @r.post("/locks/verify")
    async def list_locks_to_verify(request: Request, svc: LockingService = Depends(lambda: service)):
        try:
            username = get_username(request)
            req = parse_model(ListLocksToVerifyRequest, await request.body(), allow_empty=True)
            res = await run_in_threadpool(
                svc.list_locks_to_verify, req, username, repo_path=repository_path(request, "/locks/verify")
            )
            return lfs_ok(res)
        except Exception as e:
            return lfs_error(e, log)

    @r.post("/locks/{tail:path}")
    async def delete_lock(tail: str, request: Request, svc: LockingService = Depends(lambda: service)):
        try:
            username = get_username(request)
            lock_id = parse_unlock_path(tail)
            req = parse_model(DeleteLockRequest, await request.body(), allow_empty=True)
            res = await run_in_threadpool(
                svc.delete_lock, lock_id, req, username, repo_path=repository_path(request, f"/locks/{tail}")
            )
            return lfs_ok(res)
        except Exception as e:
            return lfs_error(e, log)

    return r
