from __future__ import annotations
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, constr

LFS_MEDIA_TYPE = "application/vnd.git-lfs+json; charset=utf-8"

# ---------- Shared protocol objects ----------

class LfsRef(BaseModel):
    """Server ref the objects/locks belong to (fully-qualified, e.g. refs/heads/main)."""
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None


def ref_name(ref: Optional[LfsRef]) -> Optional[str]:
    return ref.name if ref is not None else None


class LockOwner(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str


class Lock(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: constr(min_length=1)
    path: constr(min_length=1)
    locked_at: datetime
    owner: Optional[LockOwner] = None

    @property
    def owner_name(self) -> Optional[str]:
        return self.owner.name if self.owner else None

# ---------- Error bodies ----------

class ErrorBody(BaseModel):
    message: str


class LockExistsErrorBody(ErrorBody):
    lock: Lock
