"""gitvcs: a git repository client for on-disk and in-memory repositories.

Example:
    >>> from gitvcs import new_git_client, with_path
    >>> client = new_git_client(with_path("/tmp/repo"))
    >>> client.commit_all("Initial import")
"""

from gitvcs.client import (
    ClientProtocol,
    CommitResult,
    GitClient,
    GitLog,
    PullResult,
    PushResult,
    Signature,
    WorktreeStatus,
    clone_repo,
    create_bare_repo,
    is_repo_exists,
    new_git_client,
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
from gitvcs.config import GitClientConfig, Settings, load_settings
from gitvcs.enums import AuthType, InitType, ResetMode
from gitvcs.exceptions import GitVcsError

__all__ = [
    "AuthType",
    "ClientProtocol",
    "CommitResult",
    "GitClient",
    "GitClientConfig",
    "GitLog",
    "GitVcsError",
    "InitType",
    "PullResult",
    "PushResult",
    "ResetMode",
    "Settings",
    "Signature",
    "WorktreeStatus",
    "clone_repo",
    "create_bare_repo",
    "is_repo_exists",
    "load_settings",
    "new_git_client",
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
