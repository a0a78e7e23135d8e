from __future__ import annotations
from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, conint, constr, field_validator

from ..common.contracts import LfsRef

UPLOAD = "upload"
DOWNLOAD = "download"
VERIFY = "verify"
OPERATIONS = (UPLOAD, DOWNLOAD, VERIFY)

BASIC_TRANSFER = "basic"

# ---------- Requests ----------

class LfsObject(BaseModel):
    model_config = ConfigDict(frozen=True)

    oid: constr(strip_whitespace=True, min_length=1)
    size: conint(ge=0) = 0


class BatchRequest(BaseModel):
    """LFS batch request (Batch API v2.4). ``transfers`` omitted means basic."""
    model_config = ConfigDict(frozen=True)

    operation: str
    objects: List[LfsObject]
    ref: Optional[LfsRef] = None
    transfers: Optional[List[str]] = None

    @field_validator("operation")
    @classmethod
    def known_operation(cls, v: str) -> str:
        if v not in OPERATIONS:
            raise ValueError(f"Invalid LFS operation '{v}', expected one of {', '.join(OPERATIONS)}")
        return v

    @field_validator("transfers")
    @classmethod
    def basic_transfer_offered(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        # only the basic adapter is served
        if v is not None and BASIC_TRANSFER not in v:
            raise ValueError(f"Missing 'basic' in transfer property: {v}")
        return v

    @property
    def is_upload(self) -> bool:
        return self.operation == UPLOAD

    @property
    def is_download(self) -> bool:
        return self.operation == DOWNLOAD

    @property
    def is_verify(self) -> bool:
        return self.operation == VERIFY

# ---------- Responses ----------

class Action(BaseModel):
    href: str
    header: Optional[Dict[str, str]] = None
    expires_in: Optional[int] = None
    expires_at: Optional[datetime] = None


class ObjectError(BaseModel):
    code: int
    message: str


class ObjectResult(BaseModel):
    oid: str
    size: int
    authenticated: Optional[bool] = None
    actions: Optional[Dict[str, Action]] = None
    error: Optional[ObjectError] = None


class BatchResponse(BaseModel):
    transfer: Literal["basic"] = BASIC_TRANSFER
    objects: List[ObjectResult] = Field(default_factory=list)
