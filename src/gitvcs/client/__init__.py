"""Repository client.

This package provides GitClient, its functional options and result models,
the in-memory backend registry, and helpers for creating and cloning
repositories.

Example:
    >>> from gitvcs.client import new_git_client, with_mem, with_path
    >>> client = new_git_client(with_path("scratch"), with_mem())
    >>> client.filesystem.write_text("README.md", "hello")
    >>> client.commit_all("Add readme").no_changes
    False
"""

from gitvcs.utils import Signature

from ._auth import load_private_key, resolve_transport_kwargs, url_transport
from ._client import GitClient
from ._factory import (
    build_config,
    clone_repo,
    create_bare_repo,
    is_repo_exists,
    new_git_client,
)
from ._memory import (
    MemoryBackend,
    MemoryFileSystem,
    MemoryRegistry,
    MemoryStorage,
    memory_registry,
)
from ._models import CommitResult, GitLog, PullResult, PushResult, WorktreeStatus
from ._options import (
    AuthOverride,
    CheckoutOptions,
    CommitOptions,
    ConfigOption,
    Option,
    PullOptions,
    PushOptions,
    ResetOptions,
    apply_options,
    with_all,
    with_auth_pull,
    with_auth_push,
    with_auth_type,
    with_author,
    with_bare,
    with_branch,
    with_commit,
    with_committer,
    with_depth,
    with_force_checkout,
    with_force_pull,
    with_force_push,
    with_hash,
    with_mem,
    with_mode,
    with_parents,
    with_password,
    with_path,
    with_private_key,
    with_private_key_path,
    with_prune,
    with_reference_name_pull,
    with_refspecs,
    with_remote_name_pull,
    with_remote_name_push,
    with_remote_url,
    with_username,
)
from ._protocol import ClientProtocol
from ._worktree import DiskWorktree, MemoryWorktree, Worktree

__all__ = [
    "AuthOverride",
    "CheckoutOptions",
    "ClientProtocol",
    "CommitOptions",
    "CommitResult",
    "ConfigOption",
    "DiskWorktree",
    "GitClient",
    "GitLog",
    "MemoryBackend",
    "MemoryFileSystem",
    "MemoryRegistry",
    "MemoryStorage",
    "MemoryWorktree",
    "Option",
    "PullOptions",
    "PullResult",
    "PushOptions",
    "PushResult",
    "ResetOptions",
    "Signature",
    "Worktree",
    "WorktreeStatus",
    "apply_options",
    "build_config",
    "clone_repo",
    "create_bare_repo",
    "is_repo_exists",
    "load_private_key",
    "memory_registry",
    "new_git_client",
    "resolve_transport_kwargs",
    "url_transport",
    "with_all",
    "with_auth_pull",
    "with_auth_push",
    "with_auth_type",
    "with_author",
    "with_bare",
    "with_branch",
    "with_commit",
    "with_committer",
    "with_depth",
    "with_force_checkout",
    "with_force_pull",
    "with_force_push",
    "with_hash",
    "with_mem",
    "with_mode",
    "with_parents",
    "with_password",
    "with_path",
    "with_private_key",
    "with_private_key_path",
    "with_prune",
    "with_reference_name_pull",
    "with_refspecs",
    "with_remote_name_pull",
    "with_remote_name_push",
    "with_remote_url",
    "with_username",
]
