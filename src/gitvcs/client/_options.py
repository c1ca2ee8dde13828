"""Functional options for the repository client.

Each ``with_*`` builder returns an option object that is applied to the
settings of one operation. Options are validated when built, and applying an
option to the wrong operation raises InvalidOptionsError.

Example:
    >>> client.checkout(with_branch("develop"), with_force_checkout())
    >>> client.push(with_remote_name_push("upstream"), with_force_push())
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from gitvcs.config import GitClientConfig
from gitvcs.constants import DEFAULT_REMOTE_NAME
from gitvcs.enums import AuthType, ResetMode
from gitvcs.exceptions import (
    InvalidAuthTypeError,
    InvalidOptionsError,
    UnsupportedTypeError,
)
from gitvcs.utils import Signature, is_full_sha

T = TypeVar("T")

# =============================================================================
# Operation Settings
# =============================================================================


@dataclass(slots=True)
class CheckoutOptions:
    """Settings for checkout.

    Attributes:
        branch: Branch to switch to.
        hash: Commit to check out with a detached HEAD; wins over branch.
        force: Discard staged and modified changes.
    """

    branch: str | None = None
    hash: str | None = None
    force: bool = False


@dataclass(slots=True)
class CommitOptions:
    """Settings for commit.

    Attributes:
        all: Stage modified and deleted tracked files before committing.
        author: Author identity override.
        committer: Committer identity override (defaults to the author).
        parents: Parent commit SHAs replacing HEAD as the new commit's parents.
    """

    all: bool = False
    author: Signature | None = None
    committer: Signature | None = None
    parents: list[str] | None = None


@dataclass(slots=True)
class PullOptions:
    """Settings for pull.

    Attributes:
        remote_name: Remote to fetch from.
        reference_name: Remote branch to integrate (defaults to the current
            branch).
        depth: Shallow fetch depth; 0 fetches the full history.
        force: Reset onto the remote on divergence or uncommitted changes.
        auth: Credentials replacing the client's for this pull.
    """

    remote_name: str = DEFAULT_REMOTE_NAME
    reference_name: str | None = None
    depth: int = 0
    force: bool = False
    auth: "AuthOverride | None" = None


@dataclass(slots=True)
class PushOptions:
    """Settings for push.

    Attributes:
        remote_name: Remote to push to.
        refspecs: Refspecs in ``[+]<src>:<dst>`` form; empty pushes every
            local branch to the same name.
        prune: Delete remote branches that no longer exist locally.
        force: Allow non-fast-forward updates for every refspec.
        auth: Credentials replacing the client's for this push.
    """

    remote_name: str = DEFAULT_REMOTE_NAME
    refspecs: list[str] = field(default_factory=list)
    prune: bool = False
    force: bool = False
    auth: "AuthOverride | None" = None


@dataclass(slots=True)
class ResetOptions:
    """Settings for reset.

    Attributes:
        commit: Target commit SHA (defaults to HEAD).
        mode: How far the reset reaches.
    """

    commit: str | None = None
    mode: ResetMode = ResetMode.HARD


@dataclass(frozen=True, slots=True)
class AuthOverride:
    """Authentication for a single pull or push.

    Fields left as None keep the client's configured value.

    Attributes:
        auth_type: Authentication method.
        username: HTTP username, or the SSH user.
        password: HTTP password, or the SSH private key passphrase.
        private_key: SSH private key content.
        private_key_path: File holding the SSH private key.
    """

    auth_type: AuthType
    username: str | None = None
    password: str | None = field(default=None, repr=False)
    private_key: str | None = field(default=None, repr=False)
    private_key_path: str | None = None

    def apply(self, config: GitClientConfig) -> GitClientConfig:
        """Return a copy of `config` carrying these credentials."""
        updates: dict[str, Any] = {"auth_type": self.auth_type}  # pyright: ignore[reportExplicitAny]
        for name in ("username", "password", "private_key", "private_key_path"):
            value = getattr(self, name)
            if value is not None:
                updates[name] = value
        return config.model_copy(update=updates)


# =============================================================================
# Option Objects
# =============================================================================


@dataclass(frozen=True, slots=True)
class Option(Generic[T]):
    """A single setting for one kind of operation.

    Attributes:
        target: Settings class the option applies to.
        name: Attribute set on the settings object.
        value: Value assigned.
    """

    target: type[T]
    name: str
    value: Any  # pyright: ignore[reportExplicitAny]

    def __call__(self, options: T) -> None:
        if not isinstance(options, self.target):
            msg = (
                f"Option '{self.name}' applies to {self.target.__name__}, "
                f"not {type(options).__name__}"
            )
            raise InvalidOptionsError(msg)
        setattr(options, self.name, self.value)


@dataclass(frozen=True, slots=True)
class ConfigOption:
    """A single client configuration field set by ``new_git_client``.

    Attributes:
        name: GitClientConfig field name.
        value: Value assigned.
    """

    name: str
    value: Any  # pyright: ignore[reportExplicitAny]

    def __call__(self, values: dict[str, Any]) -> None:  # pyright: ignore[reportExplicitAny]
        values[self.name] = self.value


def apply_options(options: T, items: Iterable[object]) -> T:
    """Apply option callables to a settings object.

    Args:
        options: Settings object to mutate.
        items: Option objects built by the ``with_*`` functions.

    Returns:
        The same settings object, for chaining.

    Raises:
        UnsupportedTypeError: If an item is not callable.
        InvalidOptionsError: If an option targets another operation.
    """
    for item in items:
        if not callable(item):
            msg = f"Unsupported option type: {type(item).__name__}"
            raise UnsupportedTypeError(msg, value_type=type(item))
        apply: Callable[[T], None] = item  # pyright: ignore[reportAssignmentType]
        apply(options)
    return options


def _require_name(value: str, what: str) -> str:
    if not value or not value.strip():
        msg = f"{what} must not be empty"
        raise InvalidOptionsError(msg)
    return value


def _auth_override(
    auth_type: AuthType | str,
    username: str | None,
    password: str | None,
    private_key: str | None,
    private_key_path: str | None,
) -> AuthOverride:
    try:
        method = AuthType(auth_type)
    except ValueError as e:
        msg = f"Unsupported auth type: {auth_type!r}"
        raise InvalidAuthTypeError(msg) from e
    return AuthOverride(
        auth_type=method,
        username=username,
        password=password,
        private_key=private_key,
        private_key_path=private_key_path,
    )


# =============================================================================
# Checkout
# =============================================================================


def with_branch(branch: str) -> Option[CheckoutOptions]:
    """Check out the given branch."""
    return Option(CheckoutOptions, "branch", _require_name(branch, "Branch name"))


def with_hash(sha: str) -> Option[CheckoutOptions]:
    """Check out the given commit with a detached HEAD.

    Raises:
        InvalidOptionsError: If `sha` is not a full 40 character hex id.
    """
    if not is_full_sha(sha):
        msg = f"Invalid commit hash: {sha!r}"
        raise InvalidOptionsError(msg)
    return Option(CheckoutOptions, "hash", sha.lower())


def with_force_checkout(force: bool = True) -> Option[CheckoutOptions]:  # noqa: FBT001, FBT002
    """Discard local changes when checking out."""
    return Option(CheckoutOptions, "force", force)


# =============================================================================
# Commit
# =============================================================================


def with_all(all_: bool = True) -> Option[CommitOptions]:  # noqa: FBT001, FBT002
    """Stage modified and deleted tracked files before committing."""
    return Option(CommitOptions, "all", all_)


def with_author(name: str, email: str) -> Option[CommitOptions]:
    """Commit with the given author identity."""
    return Option(CommitOptions, "author", Signature(name=name, email=email))


def with_committer(name: str, email: str) -> Option[CommitOptions]:
    """Commit with the given committer identity."""
    return Option(CommitOptions, "committer", Signature(name=name, email=email))


def with_parents(*shas: str) -> Option[CommitOptions]:
    """Commit with the given parents instead of HEAD.

    Raises:
        InvalidOptionsError: If a SHA is not a full 40 character hex id.
    """
    for sha in shas:
        if not is_full_sha(sha):
            msg = f"Invalid parent hash: {sha!r}"
            raise InvalidOptionsError(msg)
    return Option(CommitOptions, "parents", [sha.lower() for sha in shas])


# =============================================================================
# Pull
# =============================================================================


def with_remote_name_pull(remote_name: str) -> Option[PullOptions]:
    """Pull from the named remote."""
    return Option(
        PullOptions, "remote_name", _require_name(remote_name, "Remote name")
    )


def with_reference_name_pull(reference_name: str) -> Option[PullOptions]:
    """Pull the given remote branch (short name or refs/heads/ ref)."""
    return Option(
        PullOptions,
        "reference_name",
        _require_name(reference_name, "Reference name"),
    )


def with_depth(depth: int) -> Option[PullOptions]:
    """Limit the fetch to the given number of commits.

    Raises:
        InvalidOptionsError: If `depth` is negative.
    """
    if depth < 0:
        msg = f"Depth must not be negative: {depth}"
        raise InvalidOptionsError(msg)
    return Option(PullOptions, "depth", depth)


def with_force_pull(force: bool = True) -> Option[PullOptions]:  # noqa: FBT001, FBT002
    """Reset onto the remote branch when histories diverge."""
    return Option(PullOptions, "force", force)


def with_auth_pull(
    auth_type: AuthType | str,
    *,
    username: str | None = None,
    password: str | None = None,
    private_key: str | None = None,
    private_key_path: str | None = None,
) -> Option[PullOptions]:
    """Pull with the given credentials instead of the client's.

    Raises:
        InvalidAuthTypeError: If `auth_type` is not a known method.
    """
    return Option(
        PullOptions,
        "auth",
        _auth_override(
            auth_type, username, password, private_key, private_key_path
        ),
    )


# =============================================================================
# Push
# =============================================================================


def with_remote_name_push(remote_name: str) -> Option[PushOptions]:
    """Push to the named remote."""
    return Option(
        PushOptions, "remote_name", _require_name(remote_name, "Remote name")
    )


def with_refspecs(*refspecs: str) -> Option[PushOptions]:
    """Push the given refspecs instead of every local branch.

    Raises:
        InvalidOptionsError: If a refspec is empty.
    """
    return Option(
        PushOptions,
        "refspecs",
        [_require_name(spec, "Refspec") for spec in refspecs],
    )


def with_prune(prune: bool = True) -> Option[PushOptions]:  # noqa: FBT001, FBT002
    """Delete remote branches that do not exist locally."""
    return Option(PushOptions, "prune", prune)


def with_force_push(force: bool = True) -> Option[PushOptions]:  # noqa: FBT001, FBT002
    """Allow non-fast-forward updates on the remote."""
    return Option(PushOptions, "force", force)


def with_auth_push(
    auth_type: AuthType | str,
    *,
    username: str | None = None,
    password: str | None = None,
    private_key: str | None = None,
    private_key_path: str | None = None,
) -> Option[PushOptions]:
    """Push with the given credentials instead of the client's.

    Raises:
        InvalidAuthTypeError: If `auth_type` is not a known method.
    """
    return Option(
        PushOptions,
        "auth",
        _auth_override(
            auth_type, username, password, private_key, private_key_path
        ),
    )


# =============================================================================
# Reset
# =============================================================================


def with_commit(sha: str) -> Option[ResetOptions]:
    """Reset to the given commit instead of HEAD.

    Raises:
        InvalidOptionsError: If `sha` is not a full 40 character hex id.
    """
    if not is_full_sha(sha):
        msg = f"Invalid commit hash: {sha!r}"
        raise InvalidOptionsError(msg)
    return Option(ResetOptions, "commit", sha.lower())


def with_mode(mode: ResetMode | str) -> Option[ResetOptions]:
    """Reset with the given mode (soft, mixed or hard).

    Raises:
        InvalidOptionsError: If `mode` is not a known reset mode.
    """
    try:
        reset_mode = ResetMode(mode)
    except ValueError as e:
        msg = f"Invalid reset mode: {mode!r}"
        raise InvalidOptionsError(msg) from e
    return Option(ResetOptions, "mode", reset_mode)


# =============================================================================
# Client Configuration
# =============================================================================


def with_path(path: str) -> ConfigOption:
    """Repository directory, or the registry key for in-memory clients."""
    return ConfigOption("path", str(path))


def with_remote_url(remote_url: str) -> ConfigOption:
    """URL of the default remote."""
    return ConfigOption("remote_url", remote_url)


def with_bare(is_bare: bool = True) -> ConfigOption:  # noqa: FBT001, FBT002
    """Create a bare repository when none exists."""
    return ConfigOption("is_bare", is_bare)


def with_mem(is_mem: bool = True) -> ConfigOption:  # noqa: FBT001, FBT002
    """Keep the repository in process memory."""
    return ConfigOption("is_mem", is_mem)


def with_auth_type(auth_type: AuthType | str) -> ConfigOption:
    """Authentication method for pull and push."""
    return ConfigOption("auth_type", auth_type)


def with_username(username: str) -> ConfigOption:
    return ConfigOption("username", username)


def with_password(password: str) -> ConfigOption:
    """HTTP password, or the SSH private key passphrase."""
    return ConfigOption("password", password)


def with_private_key(private_key: str) -> ConfigOption:
    """SSH private key content."""
    return ConfigOption("private_key", private_key)


def with_private_key_path(private_key_path: str) -> ConfigOption:
    return ConfigOption("private_key_path", str(private_key_path))
