"""Working tree adapters.

This module provides one interface over the two places a working tree can
live: a directory on disk managed through the dulwich index, and a
MemoryFileSystem paired with an in-memory staging index. The repository
client only talks to the abstract Worktree.
"""

import os
import stat
from abc import ABC, abstractmethod
from collections.abc import Iterable  # noqa: TC003 - Used at runtime in type annotation
from pathlib import Path
from typing import TYPE_CHECKING, Final

from dulwich import porcelain
from dulwich.errors import CommitError
from dulwich.index import IndexEntry, build_file_from_blob, commit_tree
from dulwich.objects import Blob
from dulwich.repo import Repo

from gitvcs.client._memory import MemoryFileSystem, MemoryStorage
from gitvcs.client._models import WorktreeStatus
from gitvcs.utils import (
    Signature,
    blob_id,
    commit_tree_id,
    decode_bytes,
    flatten_tree,
    get_head_sha,
    head_target,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dulwich.repo import BaseRepo

# Blob mode for regular, non-executable files
_FILE_MODE: Final = 0o100644


def _is_gitlink(mode: int) -> bool:
    return stat.S_IFMT(mode) == 0o160000


def write_commit(  # noqa: PLR0913
    repo: "BaseRepo",
    message: str,
    *,
    author: Signature,
    committer: Signature,
    tree: bytes | None = None,
    parents: "Sequence[bytes] | None" = None,
) -> bytes:
    """Create a commit and advance the reference HEAD points at.

    Args:
        repo: Repository to commit in.
        message: Commit message.
        author: Author identity.
        committer: Committer identity.
        tree: Root tree id; None commits the repository's own index.
        parents: Explicit parent commits replacing HEAD; None uses HEAD.

    Returns:
        The new commit id.

    Raises:
        CommitError: If the branch moved while the commit was written.
    """
    author_timezone, commit_timezone = porcelain.get_user_timezones()
    ref = head_target(repo)
    old_head = get_head_sha(repo) if parents is not None else None
    sha = repo.do_commit(
        message.encode(),
        committer=committer.to_bytes(),
        author=author.to_bytes(),
        commit_timezone=commit_timezone,
        author_timezone=author_timezone,
        tree=tree,
        # An explicit parent list is written as a dangling commit first
        ref=ref if parents is None else None,
        merge_heads=list(parents) if parents is not None else [],
    )
    if parents is not None and not repo.refs.set_if_equals(ref, old_head, sha):
        msg = f"{decode_bytes(ref)} changed during commit"
        raise CommitError(msg)
    return sha


class Worktree(ABC):
    """Abstract working tree with a staging index.

    Paths are repository-relative POSIX strings throughout.
    """

    __slots__: Final = ()

    @abstractmethod
    def status(self) -> WorktreeStatus:
        """Compare HEAD, the index and the working tree."""

    @abstractmethod
    def stage(self, paths: Iterable[str]) -> frozenset[str]:
        """Stage paths, recording deletions for files that no longer exist.

        Raises:
            FileNotFoundError: If a path is neither in the working tree nor
                tracked.
        """

    @abstractmethod
    def commit(
        self,
        message: str,
        *,
        author: Signature,
        committer: Signature,
        parents: "Sequence[bytes] | None" = None,
    ) -> bytes:
        """Commit the index and advance the current branch.

        The new commit's parent is HEAD unless `parents` is given.
        """

    @abstractmethod
    def reset_index(self, tree_id: bytes | None) -> None:
        """Replace the index with the contents of a tree."""

    @abstractmethod
    def checkout_tree(
        self, tree_id: bytes | None, *, remove_untracked: bool = False
    ) -> None:
        """Make the working tree and index match a tree.

        Tracked files missing from the tree are deleted. Untracked files are
        kept unless `remove_untracked` is set.
        """

    def stage_tracked(self) -> frozenset[str]:
        """Stage modified and deleted tracked files."""
        status = self.status()
        if not status.modified:
            return frozenset()
        return self.stage(sorted(status.modified))

    def stage_all(self) -> frozenset[str]:
        """Stage every change, including untracked files."""
        status = self.status()
        pending = status.modified | status.untracked
        if not pending:
            return frozenset()
        return self.stage(sorted(pending))


# =============================================================================
# Disk
# =============================================================================


class DiskWorktree(Worktree):
    """Working tree of a non-bare on-disk repository."""

    __slots__: Final = ("_repo", "_root")
    _repo: Repo
    _root: Path

    def __init__(self, repo: Repo) -> None:
        self._repo = repo
        self._root = Path(repo.path).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def status(self) -> WorktreeStatus:
        status = porcelain.status(self._repo, untracked_files="all")
        staged: set[str] = set()
        for paths in status.staged.values():
            staged.update(decode_bytes(p) for p in paths)
        return WorktreeStatus(
            staged=frozenset(staged),
            modified=frozenset(decode_bytes(p) for p in status.unstaged),
            untracked=frozenset(
                decode_bytes(p).replace(os.sep, "/") for p in status.untracked
            ),
        )

    def stage(self, paths: Iterable[str]) -> frozenset[str]:
        present: list[str] = []
        removed: list[str] = []
        index = self._repo.open_index()
        for path in paths:
            if (self._root / path).exists():
                present.append(path)
            elif path.encode() in index:
                removed.append(path)
            else:
                msg = f"Path not found in working tree or index: {path}"
                raise FileNotFoundError(msg)

        if removed:
            for path in removed:
                del index[path.encode()]
            index.write()

        if present:
            _ = porcelain.add(
                self._repo, paths=[str(self._root / p) for p in present]
            )

        return frozenset(present) | frozenset(removed)

    def commit(
        self,
        message: str,
        *,
        author: Signature,
        committer: Signature,
        parents: "Sequence[bytes] | None" = None,
    ) -> bytes:
        return write_commit(
            self._repo,
            message,
            author=author,
            committer=committer,
            parents=parents,
        )

    def reset_index(self, tree_id: bytes | None) -> None:
        target = flatten_tree(self._repo, tree_id)
        index = self._repo.open_index()
        index.clear()
        for path_bytes, (mode, sha) in target.items():
            if _is_gitlink(mode):
                continue
            full_path = self._root / path_bytes.decode()
            try:
                stat_info = full_path.lstat()
            except FileNotFoundError:
                stat_info = None
            # Zeroed stat data forces a content comparison on the next status
            if (
                stat_info is not None
                and stat.S_ISREG(stat_info.st_mode)
                and blob_id(full_path.read_bytes()) != sha
            ):
                stat_info = None
            index[path_bytes] = self._index_entry(stat_info, mode, sha)
        index.write()

    def checkout_tree(
        self, tree_id: bytes | None, *, remove_untracked: bool = False
    ) -> None:
        target = flatten_tree(self._repo, tree_id)
        index = self._repo.open_index()

        stale = [decode_bytes(p) for p in index if p not in target]
        if remove_untracked:
            stale.extend(self.status().untracked)
        for rel_path in stale:
            self._remove_file(rel_path)

        index.clear()
        for path_bytes, (mode, sha) in target.items():
            if _is_gitlink(mode):
                continue
            blob = self._repo[sha]
            if not isinstance(blob, Blob):
                continue
            full_path = self._root / path_bytes.decode()
            if full_path.is_symlink():
                full_path.unlink()
            full_path.parent.mkdir(parents=True, exist_ok=True)
            stat_info = build_file_from_blob(
                blob, mode, str(full_path).encode("utf-8")
            )
            index[path_bytes] = self._index_entry(stat_info, mode, sha)
        index.write()

    def _remove_file(self, rel_path: str) -> None:
        full_path = self._root / rel_path
        try:
            full_path.unlink()
        except FileNotFoundError:
            return
        # Drop directories left empty, stopping at the repository root
        parent = full_path.parent
        while parent != self._root and parent.is_relative_to(self._root):
            try:
                parent.rmdir()
            except OSError:
                break
            parent = parent.parent

    @staticmethod
    def _index_entry(
        stat_info: os.stat_result | None, mode: int, sha: bytes
    ) -> IndexEntry:
        # ctime/mtime are tuples of (seconds, nanoseconds)
        if stat_info is None:
            return IndexEntry(
                ctime=(0, 0),
                mtime=(0, 0),
                dev=0,
                ino=0,
                mode=mode,
                uid=0,
                gid=0,
                size=0,
                sha=sha,
                flags=0,
            )
        return IndexEntry(
            ctime=(
                int(stat_info.st_ctime),
                stat_info.st_ctime_ns % 1_000_000_000,
            ),
            mtime=(
                int(stat_info.st_mtime),
                stat_info.st_mtime_ns % 1_000_000_000,
            ),
            dev=stat_info.st_dev,
            ino=stat_info.st_ino,
            mode=mode,
            uid=stat_info.st_uid,
            gid=stat_info.st_gid,
            size=stat_info.st_size,
            sha=sha,
            flags=0,
        )


# =============================================================================
# Memory
# =============================================================================


class MemoryWorktree(Worktree):
    """Working tree held in a MemoryFileSystem with an in-memory index."""

    __slots__: Final = ("_filesystem", "_storage")
    _storage: MemoryStorage
    _filesystem: MemoryFileSystem

    def __init__(self, storage: MemoryStorage, filesystem: MemoryFileSystem) -> None:
        self._storage = storage
        self._filesystem = filesystem

    def _head_tree(self) -> dict[bytes, tuple[int, bytes]]:
        repo = self._storage.repo
        return flatten_tree(repo, commit_tree_id(repo, get_head_sha(repo)))

    def status(self) -> WorktreeStatus:
        index = self._storage.index
        head = self._head_tree()
        files = self._filesystem.snapshot()

        staged = {
            decode_bytes(path)
            for path in index.keys() | head.keys()
            if index.get(path) != head.get(path)
        }
        modified: set[str] = set()
        for path_bytes, (_mode, sha) in index.items():
            path = decode_bytes(path_bytes)
            data = files.get(path)
            if data is None or Blob.from_string(data).id != sha:
                modified.add(path)
        untracked = {path for path in files if path.encode() not in index}

        return WorktreeStatus(
            staged=frozenset(staged),
            modified=frozenset(modified),
            untracked=frozenset(untracked),
        )

    def stage(self, paths: Iterable[str]) -> frozenset[str]:
        index = self._storage.index
        object_store = self._storage.repo.object_store
        staged: set[str] = set()
        for path in paths:
            path_bytes = path.encode()
            if self._filesystem.is_file(path):
                blob = Blob.from_string(self._filesystem.read_bytes(path))
                object_store.add_object(blob)
                mode = index.get(path_bytes, (_FILE_MODE, b""))[0]
                index[path_bytes] = (mode, blob.id)
            elif path_bytes in index:
                del index[path_bytes]
            else:
                msg = f"Path not found in working tree or index: {path}"
                raise FileNotFoundError(msg)
            staged.add(path)
        return frozenset(staged)

    def commit(
        self,
        message: str,
        *,
        author: Signature,
        committer: Signature,
        parents: "Sequence[bytes] | None" = None,
    ) -> bytes:
        repo = self._storage.repo
        tree_id = commit_tree(
            repo.object_store,
            [
                (path, sha, mode)
                for path, (mode, sha) in sorted(self._storage.index.items())
            ],
        )
        return write_commit(
            repo,
            message,
            author=author,
            committer=committer,
            tree=tree_id,
            parents=parents,
        )

    def reset_index(self, tree_id: bytes | None) -> None:
        index = self._storage.index
        index.clear()
        index.update(flatten_tree(self._storage.repo, tree_id))

    def checkout_tree(
        self, tree_id: bytes | None, *, remove_untracked: bool = False
    ) -> None:
        repo = self._storage.repo
        index = self._storage.index
        target = flatten_tree(repo, tree_id)

        for path_bytes in index.keys() - target.keys():
            path = decode_bytes(path_bytes)
            if self._filesystem.is_file(path):
                self._filesystem.remove(path)
        if remove_untracked:
            for path in self._filesystem.files():
                if path.encode() not in index:
                    self._filesystem.remove(path)

        for path_bytes, (mode, sha) in target.items():
            blob = repo[sha]
            if isinstance(blob, Blob):
                self._filesystem.write_bytes(
                    decode_bytes(path_bytes), blob.as_raw_string()
                )

        index.clear()
        index.update(target)
