"""Common git utility functions.

This module provides shared helper functions used by the repository client
for reference naming, HEAD resolution, tree flattening and byte/string
conversion.
"""

from typing import TYPE_CHECKING

from dulwich.objects import Blob, Commit, Tree
from dulwich.object_store import iter_tree_contents

if TYPE_CHECKING:
    from dulwich.repo import BaseRepo

HEAD_REF = b"HEAD"
HEADS_PREFIX = b"refs/heads/"
REMOTES_PREFIX = b"refs/remotes/"


def decode_bytes(value: bytes | str) -> str:
    """Decode bytes to str if needed.

    Args:
        value: A bytes or str value.

    Returns:
        The value as a string.
    """
    if isinstance(value, bytes):
        return value.decode()
    return value


def strip_refs_heads(ref: bytes | str) -> str:
    """Strip the refs/heads/ prefix from a reference name.

    Args:
        ref: Full reference name (bytes or str).

    Returns:
        Branch name without the refs/heads/ prefix.
    """
    ref_str = decode_bytes(ref)
    if ref_str.startswith("refs/heads/"):
        return ref_str[len("refs/heads/") :]
    return ref_str


def branch_ref(name: str) -> bytes:
    """Return the full local reference name for a branch.

    Names already starting with refs/ are returned unchanged.
    """
    if name.startswith("refs/"):
        return name.encode()
    return HEADS_PREFIX + name.encode()


def remote_tracking_ref(remote_name: str, branch: bytes | str) -> bytes:
    """Return refs/remotes/<remote>/<branch> for a branch name or ref."""
    return REMOTES_PREFIX + f"{remote_name}/{strip_refs_heads(branch)}".encode()


def get_head_sha(repo: "BaseRepo") -> bytes | None:
    """Get the commit SHA that HEAD resolves to.

    Returns:
        The hex SHA as bytes, or None when HEAD is unborn.
    """
    try:
        return repo.head()
    except KeyError:
        return None


def head_target(repo: "BaseRepo") -> bytes:
    """Return the reference HEAD ultimately points at.

    For an attached HEAD this is the branch ref (which may not exist yet on
    an unborn branch). For a detached HEAD it is HEAD itself.
    """
    names, _sha = repo.refs.follow(HEAD_REF)
    return names[-1]


def is_detached(repo: "BaseRepo") -> bool:
    """Whether HEAD points directly at a commit instead of a branch."""
    return head_target(repo) == HEAD_REF


def commit_tree_id(repo: "BaseRepo", sha: bytes | None) -> bytes | None:
    """Return the tree id of a commit, or None for a missing commit id."""
    if sha is None:
        return None
    commit = repo[sha]
    if not isinstance(commit, Commit):
        return None
    return commit.tree


def flatten_tree(
    repo: "BaseRepo", tree_id: bytes | None
) -> dict[bytes, tuple[int, bytes]]:
    """Flatten a tree into a mapping of path to (mode, blob sha).

    Args:
        repo: Repository holding the tree.
        tree_id: Root tree id, or None for an empty tree.

    Returns:
        Mapping of repository-relative paths (bytes) to mode and blob sha.
    """
    if tree_id is None:
        return {}
    return {
        entry.path: (entry.mode, entry.sha)
        for entry in iter_tree_contents(repo.object_store, tree_id)
        if entry.path is not None and entry.mode is not None and entry.sha is not None
    }


def empty_tree_id(repo: "BaseRepo") -> bytes:
    """Store and return the id of the empty tree."""
    tree = Tree()
    repo.object_store.add_object(tree)
    return tree.id


def blob_id(data: bytes) -> bytes:
    """Return the git blob id for file content without storing it."""
    return Blob.from_string(data).id


def is_full_sha(value: str) -> bool:
    """Whether a string is a full 40 character hex commit id."""
    if len(value) != 40:
        return False
    try:
        _ = bytes.fromhex(value)
    except ValueError:
        return False
    return True
