"""Result models for repository client operations.

All models are frozen dataclasses with slots for memory efficiency.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True)
class WorktreeStatus:
    """Working tree status relative to HEAD and the index.

    Attributes:
        staged: Paths whose index entry differs from HEAD.
        modified: Tracked paths whose working copy differs from the index,
            including deleted files.
        untracked: Paths present in the working tree but not in the index.
    """

    staged: frozenset[str] = frozenset()
    modified: frozenset[str] = frozenset()
    untracked: frozenset[str] = frozenset()

    @property
    def is_clean(self) -> bool:
        """Whether there are no staged, modified or untracked paths."""
        return not (self.staged or self.modified or self.untracked)

    @property
    def has_uncommitted_changes(self) -> bool:
        """Whether tracked content differs from HEAD (untracked files ignored)."""
        return bool(self.staged or self.modified)


@dataclass(frozen=True, slots=True)
class CommitResult:
    """Result of a commit operation.

    Attributes:
        sha: The commit SHA (None if no changes were committed).
        files: Paths included in the commit.
        no_changes: True if there was nothing to commit.
    """

    sha: str | None
    files: frozenset[str]
    no_changes: bool


@dataclass(frozen=True, slots=True)
class GitLog:
    """A single commit as returned by history enumeration.

    Attributes:
        sha: Full commit SHA.
        message: Full commit message.
        author_name: Author name.
        author_email: Author email.
        timestamp: Author time in the author's timezone.
        branch: Branch the commit belongs to. Not populated by history
            enumeration.
    """

    sha: str
    message: str
    author_name: str
    author_email: str
    timestamp: "datetime"
    branch: str | None = None

    @property
    def summary(self) -> str:
        """First line of the commit message."""
        return self.message.split("\n", 1)[0]


@dataclass(frozen=True, slots=True)
class PullResult:
    """Result of a pull operation.

    Attributes:
        remote_name: Remote that was fetched.
        branch: Branch that was updated (None for an empty remote).
        sha: Commit the branch points at after the pull.
        updated: True if the branch or working tree moved.
        up_to_date: True if the local branch already contained the remote.
        empty_remote: True if the remote has no branches yet.
    """

    remote_name: str
    branch: str | None = None
    sha: str | None = None
    updated: bool = False
    up_to_date: bool = False
    empty_remote: bool = False


@dataclass(frozen=True, slots=True)
class PushResult:
    """Result of a push operation.

    Attributes:
        remote_name: Remote that received the push.
        updated_refs: Remote ref names mapped to their new SHA. Deleted refs
            map to None.
        up_to_date: True if there was nothing to send.
    """

    remote_name: str
    updated_refs: dict[str, str | None] = field(default_factory=dict)
    up_to_date: bool = False
