from __future__ import annotations
import logging
from typing import Dict, List, Sequence, Type

from .contracts import (
    DOWNLOAD, UPLOAD, VERIFY,
    Action, BatchResponse, LfsObject, ObjectError, ObjectResult,
)
from .ports import LargeFileRepository

log = logging.getLogger("lfsgateway.batch.transfer")


class TransferHandler:
    """Produces the batch response for one operation over the requested objects, in order."""

    def __init__(self, repository: LargeFileRepository, objects: Sequence[LfsObject]):
        self.repository = repository
        self.objects = list(objects)

    def process(self) -> BatchResponse:
        return BatchResponse(objects=[self.process_object(o) for o in self.objects])

    def process_object(self, obj: LfsObject) -> ObjectResult:
        raise NotImplementedError

    def _stored_size(self, oid: str) -> int:
        size = self.repository.get_size(oid)
        return -1 if size is None or size < 0 else size


def _not_found(obj: LfsObject) -> ObjectResult:
    return ObjectResult(
        oid=obj.oid, size=obj.size,
        error=ObjectError(code=404, message=f"Object {obj.oid} does not exist"),
    )


class UploadHandler(TransferHandler):
    def process_object(self, obj: LfsObject) -> ObjectResult:
        if self._stored_size(obj.oid) != -1:
            # already stored: no actions tells the client to skip it
            return ObjectResult(oid=obj.oid, size=obj.size)

        actions: Dict[str, Action] = {UPLOAD: self.repository.get_upload_action(obj.oid, obj.size)}
        verify = self.repository.get_verify_action(obj.oid)
        if verify is not None:
            actions[VERIFY] = verify
        return ObjectResult(oid=obj.oid, size=obj.size, actions=actions)


class DownloadHandler(TransferHandler):
    def process_object(self, obj: LfsObject) -> ObjectResult:
        size = self._stored_size(obj.oid)
        if size == -1:
            log.debug("batch.download missing oid=%s", obj.oid)
            return _not_found(obj)
        return ObjectResult(
            oid=obj.oid, size=size,
            actions={DOWNLOAD: self.repository.get_download_action(obj.oid)},
        )


class VerifyHandler(TransferHandler):
    def process_object(self, obj: LfsObject) -> ObjectResult:
        size = self._stored_size(obj.oid)
        if size == -1:
            return _not_found(obj)
        if size != obj.size:
            return ObjectResult(
                oid=obj.oid, size=obj.size,
                error=ObjectError(
                    code=422,
                    message=f"Size mismatch for object {obj.oid}: expected {obj.size}, stored {size}",
                ),
            )
        return ObjectResult(oid=obj.oid, size=size)


HANDLERS: Dict[str, Type[TransferHandler]] = {
    UPLOAD: UploadHandler,
    DOWNLOAD: DownloadHandler,
    VERIFY: VerifyHandler,
}


def for_operation(operation: str, repository: LargeFileRepository, objects: List[LfsObject]) -> TransferHandler:
    try:
        handler_cls = HANDLERS[operation]
    except KeyError:
        raise ValueError(f"Unsupported operation: {operation}")
    return handler_cls(repository, objects)
