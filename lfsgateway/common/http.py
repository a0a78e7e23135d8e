from __future__ import annotations
import logging
from typing import Optional, Type, TypeVar

import pydantic
from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from .contracts import LFS_MEDIA_TYPE
from .errors import ErrorKind, LfsError, translate, validation_error

M = TypeVar("M", bound=BaseModel)


class LfsJSONResponse(JSONResponse):
    media_type = LFS_MEDIA_TYPE


def lfs_ok(model: BaseModel, status_code: int = 200) -> LfsJSONResponse:
    return LfsJSONResponse(status_code=status_code, content=model.model_dump(mode="json", exclude_none=True))


def lfs_error(err: BaseException, log: logging.Logger) -> LfsJSONResponse:
    """The one place an exception turns into an HTTP response."""
    if not isinstance(err, LfsError):
        log.error("request.unclassified_error error=%r", err, exc_info=err)
    elif err.kind is ErrorKind.INTERNAL:
        log.error("request.internal_error message=%s", err.message)
    else:
        log.info("request.rejected kind=%s message=%s", err.kind.value, err.message)
    status, body = translate(err)
    return LfsJSONResponse(status_code=status, content=body)


def _first_error(exc: pydantic.ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    if first.get("type") == "value_error" and "error" in first.get("ctx", {}):
        # our own validators already phrase a protocol message
        return str(first["ctx"]["error"])
    where = ".".join(str(p) for p in first.get("loc", ()))
    return f"{where}: {first.get('msg')}" if where else str(first.get("msg"))


def parse_model(model: Type[M], raw: Optional[bytes], *, allow_empty: bool = False) -> M:
    """Decode a JSON request body into ``model``; every failure is a validation error."""
    if not raw or not raw.strip():
        if allow_empty:
            return model()
        raise validation_error("Request body is required")
    if allow_empty and raw.strip() == b"null":
        return model()
    try:
        return model.model_validate_json(raw)
    except pydantic.ValidationError as e:
        raise validation_error(f"Invalid request: {_first_error(e)}")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> LfsJSONResponse:
    """Routing failures (unknown path, wrong method) in the LFS error shape."""
    return LfsJSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=exc.headers)


def repository_path(request: Request, endpoint: str) -> str:
    """Request path without the LFS endpoint, e.g. ``/repo.git/info/lfs``."""
    path = request.url.path
    if endpoint and path.endswith(endpoint):
        return path[: -len(endpoint)]
    return path
