"""gitvcs exceptions."""

from pathlib import Path
from typing import Any


class GitVcsError(Exception):
    """Base exception for gitvcs errors."""


# =============================================================================
# Option and Argument Exceptions
# =============================================================================


class InvalidOptionsError(GitVcsError, ValueError):
    """Raised when client or operation options are invalid."""


class InvalidArgsLengthError(GitVcsError, ValueError):
    """Raised when a call receives an unexpected number of arguments."""


class UnsupportedTypeError(GitVcsError, TypeError):
    """Raised when an argument has a type the client cannot handle.

    Attributes:
        value_type: The offending type.
    """

    def __init__(self, message: str, *, value_type: type | None = None) -> None:
        """Initialize with error message and type context.

        Args:
            message: Human-readable error message.
            value_type: The offending type.
        """
        super().__init__(message)
        self.value_type: type | None = value_type


# =============================================================================
# Repository Exceptions
# =============================================================================


class RepositoryError(GitVcsError):
    """Base exception for repository errors."""


class InvalidActionsForBareRepoError(RepositoryError):
    """Raised when a working-tree operation is attempted on a bare repository.

    Attributes:
        path: Path or memory key of the bare repository.
        action: The rejected operation.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        action: str | None = None,
    ) -> None:
        """Initialize with error message and repository context.

        Args:
            message: Human-readable error message.
            path: Path or memory key of the bare repository.
            action: The rejected operation.
        """
        super().__init__(message)
        self.path: str | None = path
        self.action: str | None = action


class RepositoryNotInitializedError(RepositoryError):
    """Raised when a client is used before init() or after dispose()."""


class InvalidRepoPathError(RepositoryError, ValueError):
    """Raised when a repository path is empty or unusable."""


class RepoAlreadyExistsError(RepositoryError):
    """Raised when creating a repository where one already exists.

    Attributes:
        path: The existing repository path.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        """Initialize with error message and path context.

        Args:
            message: Human-readable error message.
            path: The existing repository path.
        """
        super().__init__(message)
        self.path: Path | None = path


class UnableToCloneWithEmptyRemoteUrlError(RepositoryError, ValueError):
    """Raised when cloning without a remote URL."""


class UnableToGetCurrentBranchError(RepositoryError):
    """Raised when HEAD is detached and a current branch is required."""


class ReferenceNotFoundError(RepositoryError, KeyError):
    """Raised when a branch, commit or remote reference cannot be resolved.

    Attributes:
        ref: The reference that was not found.
    """

    def __init__(self, message: str, *, ref: str | None = None) -> None:
        """Initialize with error message and reference context.

        Args:
            message: Human-readable error message.
            ref: The reference that was not found.
        """
        super().__init__(message)
        self.ref: str | None = ref


class WorktreeDirtyError(RepositoryError):
    """Raised when uncommitted changes would be overwritten.

    Attributes:
        paths: Repository-relative paths with staged or modified changes.
    """

    def __init__(self, message: str, *, paths: frozenset[str] = frozenset()) -> None:
        """Initialize with error message and the conflicting paths.

        Args:
            message: Human-readable error message.
            paths: Repository-relative paths with staged or modified changes.
        """
        super().__init__(message)
        self.paths: frozenset[str] = paths


# =============================================================================
# Remote Exceptions
# =============================================================================


class RemoteError(GitVcsError):
    """Base exception for remote and transport errors."""


class RemoteNotFoundError(RemoteError, KeyError):
    """Raised when a named remote is not configured.

    Attributes:
        remote_name: The remote that was not found.
    """

    def __init__(self, message: str, *, remote_name: str | None = None) -> None:
        """Initialize with error message and remote context.

        Args:
            message: Human-readable error message.
            remote_name: The remote that was not found.
        """
        super().__init__(message)
        self.remote_name: str | None = remote_name


class RemoteAlreadyExistsError(RemoteError):
    """Raised when creating a remote whose name is already configured.

    Attributes:
        remote_name: The existing remote name.
    """

    def __init__(self, message: str, *, remote_name: str | None = None) -> None:
        """Initialize with error message and remote context.

        Args:
            message: Human-readable error message.
            remote_name: The existing remote name.
        """
        super().__init__(message)
        self.remote_name: str | None = remote_name


class NonFastForwardError(RemoteError):
    """Raised when an update would discard commits on the other side.

    Attributes:
        ref: The reference being updated.
        local_sha: Local commit SHA.
        remote_sha: Remote commit SHA.
    """

    def __init__(
        self,
        message: str,
        *,
        ref: str | None = None,
        local_sha: str | None = None,
        remote_sha: str | None = None,
    ) -> None:
        """Initialize with error message and ref update context.

        Args:
            message: Human-readable error message.
            ref: The reference being updated.
            local_sha: Local commit SHA.
            remote_sha: Remote commit SHA.
        """
        super().__init__(message)
        self.ref: str | None = ref
        self.local_sha: str | None = local_sha
        self.remote_sha: str | None = remote_sha


class PushRejectedError(RemoteError):
    """Raised when the remote refuses one or more ref updates.

    Attributes:
        ref_status: Mapping of rejected ref names to the remote's reason.
    """

    def __init__(
        self, message: str, *, ref_status: dict[str, str] | None = None
    ) -> None:
        """Initialize with error message and per-ref rejection reasons.

        Args:
            message: Human-readable error message.
            ref_status: Mapping of rejected ref names to the remote's reason.
        """
        super().__init__(message)
        self.ref_status: dict[str, str] = ref_status or {}


class AuthError(RemoteError):
    """Raised when credentials cannot be prepared for a transport."""


class InvalidAuthTypeError(AuthError, ValueError):
    """Raised when the configured auth type is not supported."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(GitVcsError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source
