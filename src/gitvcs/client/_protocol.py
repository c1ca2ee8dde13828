"""Protocol definitions for repository clients.

This module defines the structural interface shared by GitClient and test
doubles, so callers can depend on the operations rather than the class.
"""

from typing import Protocol, Self, runtime_checkable

from gitvcs.client._models import CommitResult, GitLog, PullResult, PushResult


@runtime_checkable
class ClientProtocol(Protocol):
    """Structural interface for a repository client.

    Implementations open a repository in init(), expose the lifecycle
    operations below, and delete the repository in dispose().
    """

    @property
    def path(self) -> str:
        """Repository path or memory key."""
        ...

    @property
    def is_bare(self) -> bool:
        """Whether the repository has no working tree."""
        ...

    def init(self) -> Self:
        """Open or create the repository."""
        ...

    def checkout(self, *options: object) -> None:
        """Switch the working tree to a branch or commit."""
        ...

    def checkout_branch(self, branch: str, *options: object) -> None:
        """Check out a branch, creating it from HEAD if needed."""
        ...

    def commit(self, message: str, *options: object) -> CommitResult:
        """Commit staged changes."""
        ...

    def commit_all(self, message: str, *options: object) -> CommitResult:
        """Stage every change and commit."""
        ...

    def pull(self, *options: object) -> PullResult:
        """Fetch and fast-forward the current branch."""
        ...

    def push(self, *options: object) -> PushResult:
        """Push local branches to a remote."""
        ...

    def reset(self, *options: object) -> None:
        """Move the current branch and reset index and working tree."""
        ...

    def get_logs(self) -> list[GitLog]:
        """Return reachable commits, newest first."""
        ...

    def dispose(self) -> None:
        """Delete the repository."""
        ...
