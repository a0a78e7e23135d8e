from __future__ import annotations
import logging
from typing import Callable

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from ..common.auth import get_username
from ..common.http import LfsJSONResponse, lfs_error, lfs_ok, parse_model, repository_path
from .contracts import BatchRequest
from .service import BatchService

log = logging.getLogger("lfsgateway.batch.routes")


def get_router(service_factory: Callable[[], BatchService]) -> APIRouter:
    r = APIRouter(tags=["lfs-batch"], default_response_class=LfsJSONResponse)
    service = service_factory()

    @r.post("/objects/batch")
    async def batch(request: Request, svc: BatchService = Depends(lambda: service)):
        try:
            username = get_username(request)
            req = parse_model(BatchRequest, await request.body())
            res = await run_in_threadpool(
                svc.batch, req, username,
                repo_path=repository_path(request, "/objects/batch"),
                authorization=request.headers.get("authorization"),
            )
            return lfs_ok(res)
        except Exception as e:
            return lfs_error(e, log)

    return r
