"""In-memory repository storage.

A memory-backed client keeps its object database in a dulwich MemoryRepo and
its working tree in a MemoryFileSystem. Both live in the process-wide
``memory_registry`` under the client's path key, so several clients opened
with the same key share one repository until it is disposed.
"""

import posixpath
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dulwich.repo import MemoryRepo

from gitvcs.constants import DEFAULT_BRANCH
from gitvcs.exceptions import InvalidOptionsError
from gitvcs.utils import HEAD_REF, branch_ref

if TYPE_CHECKING:
    from collections.abc import Iterator


def normalize_path(path: str) -> str:
    """Normalize a working tree path to a relative POSIX path.

    Raises:
        InvalidOptionsError: If the path is empty or escapes the root.
    """
    normalized = posixpath.normpath(path.replace("\\", "/")).lstrip("/")
    if normalized in {"", "."} or normalized == ".." or normalized.startswith("../"):
        msg = f"Invalid working tree path: {path!r}"
        raise InvalidOptionsError(msg)
    return normalized


class MemoryFileSystem:
    """A flat in-memory working tree of files keyed by relative path.

    Directories are implicit: a directory exists while a file below it does.
    """

    __slots__ = ("_files", "_lock")

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}
        self._lock = threading.RLock()

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.exists(path)

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> "Iterator[str]":
        return iter(self.files())

    def write_bytes(self, path: str, data: bytes) -> None:
        """Create or replace a file."""
        key = normalize_path(path)
        with self._lock:
            if any(existing.startswith(f"{key}/") for existing in self._files):
                msg = f"Path is a directory: {path!r}"
                raise IsADirectoryError(msg)
            parts = key.split("/")
            for depth in range(1, len(parts)):
                if "/".join(parts[:depth]) in self._files:
                    msg = f"Parent of {path!r} is a file"
                    raise NotADirectoryError(msg)
            self._files[key] = bytes(data)

    def write_text(self, path: str, text: str, encoding: str = "utf-8") -> None:
        self.write_bytes(path, text.encode(encoding))

    def read_bytes(self, path: str) -> bytes:
        """Read a file.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        key = normalize_path(path)
        with self._lock:
            try:
                return self._files[key]
            except KeyError:
                msg = f"No such file: {path!r}"
                raise FileNotFoundError(msg) from None

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        return self.read_bytes(path).decode(encoding)

    def exists(self, path: str) -> bool:
        """Whether a file or an implicit directory exists at the path."""
        key = normalize_path(path)
        with self._lock:
            if key in self._files:
                return True
            return any(existing.startswith(f"{key}/") for existing in self._files)

    def is_file(self, path: str) -> bool:
        with self._lock:
            return normalize_path(path) in self._files

    def remove(self, path: str) -> None:
        """Delete a file.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        key = normalize_path(path)
        with self._lock:
            if self._files.pop(key, None) is None:
                msg = f"No such file: {path!r}"
                raise FileNotFoundError(msg)

    def files(self) -> list[str]:
        """Return all file paths, sorted."""
        with self._lock:
            return sorted(self._files)

    def snapshot(self) -> dict[str, bytes]:
        """Return a copy of all file contents keyed by path."""
        with self._lock:
            return dict(self._files)

    def clear(self) -> None:
        with self._lock:
            self._files.clear()


@dataclass(slots=True)
class MemoryStorage:
    """Object database and staging index of an in-memory repository.

    Attributes:
        repo: The dulwich repository holding objects, refs and config.
        index: Staged entries keyed by path (bytes) as (mode, blob sha).
    """

    repo: MemoryRepo
    index: dict[bytes, tuple[int, bytes]] = field(default_factory=dict)

    @classmethod
    def create(cls) -> "MemoryStorage":
        """Create storage with an empty repository on an unborn default branch."""
        repo = MemoryRepo.init_bare([], {})
        repo.refs.set_symbolic_ref(HEAD_REF, branch_ref(DEFAULT_BRANCH))
        return cls(repo=repo)


@dataclass(frozen=True, slots=True)
class MemoryBackend:
    """Storage and working tree registered under one key."""

    storage: MemoryStorage
    filesystem: MemoryFileSystem


class MemoryRegistry:
    """Process-wide mapping of keys to in-memory repositories.

    Storages and filesystems are tracked separately so that eviction removes
    both entries for a key. All access is guarded by a lock.
    """

    __slots__ = ("_filesystems", "_lock", "_storages")

    def __init__(self) -> None:
        self._storages: dict[str, MemoryStorage] = {}
        self._filesystems: dict[str, MemoryFileSystem] = {}
        self._lock = threading.Lock()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._storages

    def __len__(self) -> int:
        with self._lock:
            return len(self._storages)

    def get_or_create(self, key: str) -> tuple[MemoryBackend, bool]:
        """Return the backend for a key, creating it if missing.

        Returns:
            Tuple of (backend, created).
        """
        with self._lock:
            storage = self._storages.get(key)
            created = storage is None
            if storage is None:
                storage = MemoryStorage.create()
                self._storages[key] = storage
            filesystem = self._filesystems.get(key)
            if filesystem is None:
                filesystem = MemoryFileSystem()
                self._filesystems[key] = filesystem
            return MemoryBackend(storage=storage, filesystem=filesystem), created

    def lookup(self, key: str) -> MemoryBackend | None:
        """Return the backend for a key, or None if not registered."""
        with self._lock:
            storage = self._storages.get(key)
            filesystem = self._filesystems.get(key)
            if storage is None or filesystem is None:
                return None
            return MemoryBackend(storage=storage, filesystem=filesystem)

    def evict(self, key: str) -> bool:
        """Remove both entries for a key.

        Returns:
            True if anything was registered under the key.
        """
        with self._lock:
            had_storage = self._storages.pop(key, None) is not None
            had_filesystem = self._filesystems.pop(key, None) is not None
            return had_storage or had_filesystem

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._storages)

    def clear(self) -> None:
        with self._lock:
            self._storages.clear()
            self._filesystems.clear()


memory_registry = MemoryRegistry()
