"""
LFS Batch API handler.
Exports the FastAPI router via get_router() and the BatchService for DI.
"""
from .contracts import Action, BatchRequest, BatchResponse, LfsObject, ObjectError, ObjectResult
from .ports import LargeFileRepository, RepositoryProvider
from .routes import get_router
from .service import BatchService
from .transfer import DownloadHandler, TransferHandler, UploadHandler, VerifyHandler, for_operation
from .adapters_inmemory import InMemoryLargeFileRepository

__all__ = [
    "Action",
    "BatchRequest",
    "BatchResponse",
    "LfsObject",
    "ObjectError",
    "ObjectResult",
    "LargeFileRepository",
    "RepositoryProvider",
    "get_router",
    "BatchService",
    "TransferHandler",
    "UploadHandler",
    "DownloadHandler",
    "VerifyHandler",
    "for_operation",
    "InMemoryLargeFileRepository",
]
