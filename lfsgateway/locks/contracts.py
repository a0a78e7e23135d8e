from __future__ import annotations
import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, constr
from starlette.datastructures import QueryParams

from ..common.contracts import LfsRef, Lock
from ..common.errors import validation_error

# ---------- Requests ----------

class CreateLockRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: constr(strip_whitespace=True, min_length=1)
    ref: Optional[LfsRef] = None


class ListLocksToVerifyRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    ref: Optional[LfsRef] = None
    cursor: Optional[str] = None
    limit: int = 0  # 0 or less = no client-imposed limit


class DeleteLockRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    force: bool = False
    ref: Optional[LfsRef] = None


_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_limit(raw: Optional[str]) -> int:
    """Absent or empty means 0; any other non-integer is rejected."""
    if not raw:
        return 0
    if not _INTEGER.fullmatch(raw):
        raise validation_error(f"Invalid limit parameter in the GET request: {raw}")
    return int(raw)


class ListLocksQuery(BaseModel):
    """Filters of ``GET /locks``; built from already URL-decoded query params."""
    model_config = ConfigDict(frozen=True)

    path: Optional[str] = None
    id: Optional[str] = None
    cursor: Optional[str] = None
    limit: int = 0
    refspec: Optional[str] = None

    @classmethod
    def from_params(cls, params: QueryParams) -> "ListLocksQuery":
        def value(key: str) -> Optional[str]:
            # a repeated key keeps its first value
            values = params.getlist(key)
            return values[0] if values and values[0] else None

        return cls(
            path=value("path"),
            id=value("id"),
            cursor=value("cursor"),
            limit=parse_limit(value("limit")),
            refspec=value("refspec"),
        )

# ---------- Responses ----------

class LockList(BaseModel):
    locks: List[Lock] = Field(default_factory=list)
    next_cursor: Optional[str] = None


class LocksToVerify(BaseModel):
    ours: List[Lock] = Field(default_factory=list)
    theirs: List[Lock] = Field(default_factory=list)
    next_cursor: Optional[str] = None


class LockResponse(BaseModel):
    """Body of a successful create or delete."""
    lock: Lock
