from __future__ import annotations
import logging
from typing import Optional

from dulwich.errors import NotTreeError
from dulwich.object_store import tree_lookup_path
from dulwich.objectspec import parse_commit
from dulwich.repo import BaseRepo

log = logging.getLogger("lfsgateway.locks.paths")


def is_path_present_for_ref(repo: BaseRepo, refspec: Optional[str], path: str) -> bool:
    """True when ``path`` exists in the tree of the commit ``refspec`` resolves to.

    An empty refspec means HEAD. Unresolvable refs and missing paths are both
    reported as absent.
    """
    rev = refspec or "HEAD"
    try:
        commit = parse_commit(repo, rev.encode("utf-8"))
    except KeyError:
        log.debug("paths.unknown_ref ref=%s", rev)
        return False

    key = path.strip("/").encode("utf-8")
    if not key:
        return False
    try:
        tree_lookup_path(repo.object_store.__getitem__, commit.tree, key)
    except (KeyError, NotTreeError):
        return False
    return True
