from __future__ import annotations
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class GatewaySettings(BaseSettings):
    APP_NAME: str = Field(default="lfs-gateway")
    APP_VERSION: str = Field(default="0.1.0")
    # Mount points; git-lfs derives both from <remote>/info/lfs by default
    BATCH_PREFIX: str = Field(default="/info/lfs")
    LOCKS_PREFIX: str = Field(default="/info/lfs")
    # Collaborators
    BACKEND: str = Field(default="inmemory")  # "inmemory" | "none"
    PUBLIC_URL: str = Field(default="http://localhost:8000/info/lfs")
    ACTION_EXPIRES_IN: int = Field(default=3600)
    LOCK_PAGE_SIZE: int = Field(default=100)
    LOCK_ADMINISTRATORS: List[str] = Field(default_factory=list)
    # git repository whose trees gate lock creation; unset allows any path
    GIT_REPO_PATH: Optional[str] = None
    # None disables the access gate entirely
    WRITERS: Optional[List[str]] = None
    READERS: Optional[List[str]] = None
    ANONYMOUS_READ: bool = False
    # unset leaves logging to the host process
    LOG_LEVEL: Optional[str] = None

    class Config:
        env_prefix = "LFS_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"
