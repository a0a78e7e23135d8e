import pytest

from lfsgateway.batch.contracts import Action, BatchRequest, LfsObject
from lfsgateway.batch.service import BatchService
from lfsgateway.batch.transfer import DownloadHandler, UploadHandler, VerifyHandler, for_operation
from lfsgateway.common.errors import ErrorKind, LfsError


class FakeRepo:
    def __init__(self, sizes=None, verify=True):
        self.sizes = dict(sizes or {})
        self.verify = verify
        self.calls = []

    def get_size(self, oid):
        self.calls.append(("size", oid))
        return self.sizes.get(oid, -1)

    def get_download_action(self, oid):
        self.calls.append(("download", oid))
        return Action(href=f"https://store.example/{oid}")

    def get_upload_action(self, oid, size):
        self.calls.append(("upload", oid, size))
        return Action(href=f"https://store.example/{oid}", header={"X-Size": str(size)})

    def get_verify_action(self, oid):
        return Action(href="https://store.example/verify") if self.verify else None


def objs(*pairs):
    return [LfsObject(oid=o, size=s) for o, s in pairs]


def test_for_operation_picks_strategy():
    repo = FakeRepo()
    assert isinstance(for_operation("upload", repo, []), UploadHandler)
    assert isinstance(for_operation("download", repo, []), DownloadHandler)
    assert isinstance(for_operation("verify", repo, []), VerifyHandler)
    with pytest.raises(ValueError):
        for_operation("delete", repo, [])


def test_upload_skips_present_objects_and_adds_verify_action():
    repo = FakeRepo(sizes={"have": 10})
    res = UploadHandler(repo, objs(("have", 10), ("new", 20))).process()

    assert res.transfer == "basic"
    present, missing = res.objects
    assert present.oid == "have" and present.actions is None and present.error is None
    assert missing.actions["upload"].href == "https://store.example/new"
    assert missing.actions["upload"].header == {"X-Size": "20"}
    assert missing.actions["verify"].href == "https://store.example/verify"


def test_upload_without_verify_action():
    res = UploadHandler(FakeRepo(verify=False), objs(("new", 1))).process()
    assert set(res.objects[0].actions) == {"upload"}


def test_download_reports_missing_objects_individually():
    repo = FakeRepo(sizes={"a": 3})
    res = DownloadHandler(repo, objs(("a", 3), ("b", 4))).process()

    a, b = res.objects
    assert a.actions["download"].href == "https://store.example/a"
    assert a.error is None
    assert b.actions is None
    assert b.error.code == 404
    assert "b" in b.error.message
    # missing objects never ask for an action
    assert ("download", "b") not in repo.calls


def test_verify_checks_presence_and_size():
    repo = FakeRepo(sizes={"ok": 5, "short": 2})
    res = VerifyHandler(repo, objs(("ok", 5), ("short", 3), ("gone", 1))).process()

    ok, short, gone = res.objects
    assert ok.error is None and ok.actions is None
    assert short.error.code == 422
    assert gone.error.code == 404


def test_objects_processed_in_request_order_exactly_once():
    repo = FakeRepo()
    UploadHandler(repo, objs(("x", 1), ("y", 2), ("z", 3))).process()
    assert [c[1] for c in repo.calls if c[0] == "size"] == ["x", "y", "z"]


def test_service_requires_a_repository():
    svc = BatchService(None)
    req = BatchRequest(operation="download", objects=objs(("a", 1)))
    with pytest.raises(LfsError) as ei:
        svc.batch(req, "alice")
    assert ei.value.kind is ErrorKind.INTERNAL


def test_service_runs_gate_before_backend():
    class Denying:
        def check_read_access(self, ref_name, username):
            raise LfsError(ErrorKind.REPOSITORY_NOT_FOUND, "no such repo")

        def check_write_access(self, ref_name, username):
            raise LfsError(ErrorKind.REPOSITORY_READ_ONLY, "read only")

    repo = FakeRepo()
    svc = BatchService(repo, Denying())
    with pytest.raises(LfsError) as ei:
        svc.batch(BatchRequest(operation="upload", objects=objs(("a", 1))), "bob")
    assert ei.value.kind is ErrorKind.REPOSITORY_READ_ONLY
    assert repo.calls == []


def test_request_model_invariants():
    with pytest.raises(Exception):
        BatchRequest(operation="copy", objects=[])
    with pytest.raises(Exception):
        BatchRequest(operation="upload", objects=[], transfers=["lfs-standalone-file"])
    req = BatchRequest(operation="upload", objects=[], transfers=["tus", "basic"])
    assert req.is_upload and not req.is_download and not req.is_verify
    assert BatchRequest(operation="verify", objects=[]).transfers is None
