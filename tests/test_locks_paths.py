import pytest
from dulwich.objects import Blob, Commit, Tree
from dulwich.repo import MemoryRepo

from lfsgateway.common.errors import ErrorKind, LfsError
from lfsgateway.locks.adapters_inmemory import InMemoryLockManager
from lfsgateway.locks.paths import is_path_present_for_ref


def _commit(repo, tree, message):
    c = Commit()
    c.tree = tree.id
    c.author = c.committer = b"Test <test@example.com>"
    c.author_time = c.commit_time = 1700000000
    c.author_timezone = c.commit_timezone = 0
    c.message = message
    repo.object_store.add_object(c)
    return c


@pytest.fixture
def repo():
    r = MemoryRepo()
    blob = Blob.from_string(b"psd bytes")
    art = Tree()
    art.add(b"hero.psd", 0o100644, blob.id)
    main_root = Tree()
    main_root.add(b"art", 0o040000, art.id)
    main_root.add(b"README", 0o100644, blob.id)
    dev_root = Tree()
    dev_root.add(b"README", 0o100644, blob.id)
    for obj in (blob, art, main_root, dev_root):
        r.object_store.add_object(obj)

    r.refs[b"refs/heads/main"] = _commit(r, main_root, b"main").id
    r.refs[b"refs/heads/dev"] = _commit(r, dev_root, b"dev").id
    r.refs.set_symbolic_ref(b"HEAD", b"refs/heads/main")
    return r


def test_path_lookup_on_named_ref(repo):
    assert is_path_present_for_ref(repo, "refs/heads/main", "art/hero.psd")
    assert is_path_present_for_ref(repo, "refs/heads/main", "art")
    assert not is_path_present_for_ref(repo, "refs/heads/dev", "art/hero.psd")
    assert is_path_present_for_ref(repo, "refs/heads/dev", "README")


def test_empty_refspec_means_head(repo):
    assert is_path_present_for_ref(repo, None, "art/hero.psd")
    assert is_path_present_for_ref(repo, "", "/art/hero.psd")


def test_missing_paths_and_refs(repo):
    assert not is_path_present_for_ref(repo, "refs/heads/main", "art/villain.psd")
    # a file is not a directory
    assert not is_path_present_for_ref(repo, "refs/heads/main", "README/inner")
    assert not is_path_present_for_ref(repo, "refs/heads/main", "")
    assert not is_path_present_for_ref(repo, "refs/heads/gone", "README")


def test_lock_manager_only_locks_existing_paths(repo):
    m = InMemoryLockManager(git_repo=repo)
    lock = m.create_lock("art/hero.psd", "refs/heads/main", "alice")
    assert lock.path == "art/hero.psd"

    with pytest.raises(LfsError) as ei:
        m.create_lock("art/hero.psd", "refs/heads/dev", "bob")
    assert ei.value.kind is ErrorKind.VALIDATION
    assert "refs/heads/dev" in ei.value.message
