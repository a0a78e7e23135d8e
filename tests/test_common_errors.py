from datetime import datetime, timezone

import pytest

from lfsgateway.common.contracts import Lock, LockOwner
from lfsgateway.common.errors import (
    ErrorKind, LfsError, STATUS_BY_KIND, lock_exists, lock_unauthorized, translate, validation_error
)

LOCK = Lock(
    id="l1", path="assets/model.bin",
    locked_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    owner=LockOwner(name="alice"),
)


@pytest.mark.parametrize("kind,status", [
    (ErrorKind.VALIDATION, 422),
    (ErrorKind.REPOSITORY_NOT_FOUND, 404),
    (ErrorKind.REPOSITORY_READ_ONLY, 403),
    (ErrorKind.RATE_LIMIT_EXCEEDED, 429),
    (ErrorKind.BANDWIDTH_LIMIT_EXCEEDED, 509),
    (ErrorKind.INSUFFICIENT_STORAGE, 507),
    (ErrorKind.SERVICE_UNAVAILABLE, 503),
    (ErrorKind.UNAUTHORIZED, 401),
    (ErrorKind.LOCK_OPERATION_UNAUTHORIZED, 403),
    (ErrorKind.INTERNAL, 500),
])
def test_message_only_kinds(kind, status):
    code, body = translate(LfsError(kind, "boom"))
    assert code == status
    assert body == {"message": "boom"}


def test_every_kind_has_a_status():
    assert set(STATUS_BY_KIND) == set(ErrorKind)


def test_lock_conflict_carries_the_existing_lock():
    code, body = translate(lock_exists("already created lock", LOCK))
    assert code == 409
    assert body["message"] == "already created lock"
    assert body["lock"]["id"] == "l1"
    assert body["lock"]["path"] == "assets/model.bin"
    assert body["lock"]["owner"] == {"name": "alice"}
    assert Lock.model_validate(body["lock"]) == LOCK


def test_lock_conflict_requires_a_lock():
    with pytest.raises(ValueError):
        LfsError(ErrorKind.LOCK_CONFLICT, "no lock given")


def test_unclassified_exception_does_not_leak_details():
    code, body = translate(KeyError("db password is hunter2"))
    assert code == 500
    assert body == {"message": "Internal server error"}


def test_helpers():
    err = validation_error("bad")
    assert err.kind is ErrorKind.VALIDATION and err.status_code == 422 and str(err) == "bad"

    err = lock_unauthorized("delete", "a.bin")
    assert err.kind is ErrorKind.LOCK_OPERATION_UNAUTHORIZED
    assert "a.bin" in err.message
