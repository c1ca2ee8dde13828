"""Client construction and repository helpers."""

import io
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dulwich import porcelain
from dulwich.errors import NotGitRepository
from dulwich.repo import Repo
from pydantic import ValidationError

from gitvcs.client._auth import resolve_transport_kwargs
from gitvcs.client._client import GitClient
from gitvcs.client._options import ConfigOption, with_path, with_remote_url
from gitvcs.config import GitClientConfig
from gitvcs.exceptions import (
    InvalidArgsLengthError,
    InvalidOptionsError,
    InvalidRepoPathError,
    RepoAlreadyExistsError,
    UnableToCloneWithEmptyRemoteUrlError,
    UnsupportedTypeError,
)

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


def build_config(*args: object) -> GitClientConfig:
    """Build a client configuration from one config object or options.

    Args:
        args: Either a single GitClientConfig or mapping of its fields, or
            any number of ConfigOption objects (``with_path`` and friends).
            Options given alongside a config object override its fields.

    Returns:
        The validated configuration.

    Raises:
        InvalidArgsLengthError: If more than one config object is given.
        UnsupportedTypeError: If an argument is of any other type.
        InvalidOptionsError: If a field value fails validation.
    """
    base: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
    overrides: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
    config_objects = 0

    for arg in args:
        if isinstance(arg, GitClientConfig):
            config_objects += 1
            base = arg.model_dump()
        elif isinstance(arg, Mapping):
            config_objects += 1
            base = {str(key): value for key, value in arg.items()}  # pyright: ignore[reportUnknownVariableType]
        elif isinstance(arg, ConfigOption):
            arg(overrides)
        else:
            msg = f"Unsupported argument type: {type(arg).__name__}"
            raise UnsupportedTypeError(msg, value_type=type(arg))

    if config_objects > 1:
        msg = f"Expected at most one configuration object, got {config_objects}"
        raise InvalidArgsLengthError(msg)

    try:
        return GitClientConfig.model_validate({**base, **overrides})
    except ValidationError as e:
        msg = f"Invalid client options: {e}"
        raise InvalidOptionsError(msg) from e


def new_git_client(
    *args: object, logger: "FilteringBoundLogger | None" = None
) -> GitClient:
    """Create a client and open its repository.

    Example:
        >>> client = new_git_client(with_path("/tmp/repo"), with_mem())
        >>> client = new_git_client(GitClientConfig(path="/tmp/repo"))

    Args:
        args: See build_config().
        logger: Logger to use instead of the default stderr logger.

    Returns:
        An initialized GitClient.
    """
    return GitClient(build_config(*args), logger=logger).init()


def is_repo_exists(path: str | Path) -> bool:
    """Whether a git repository can be opened at the path."""
    try:
        repo = Repo(str(path))
    except (NotGitRepository, FileNotFoundError, NotADirectoryError):
        return False
    repo.close()
    return True


def create_bare_repo(path: str | Path) -> None:
    """Create a bare repository, creating the directory if needed.

    Raises:
        InvalidRepoPathError: If the path is empty.
        RepoAlreadyExistsError: If a repository already exists there.
    """
    if not str(path):
        msg = "Repository path must not be empty"
        raise InvalidRepoPathError(msg)

    repo_path = Path(path)
    if is_repo_exists(repo_path):
        msg = f"Repository already exists: {repo_path}"
        raise RepoAlreadyExistsError(msg, path=repo_path)

    repo_path.mkdir(parents=True, exist_ok=True)
    Repo.init_bare(str(repo_path)).close()


def clone_repo(
    path: str | Path,
    url: str,
    *options: object,
    depth: int = 0,
    branch: str | None = None,
    logger: "FilteringBoundLogger | None" = None,
) -> GitClient:
    """Clone a remote repository and open a client on the clone.

    Args:
        path: Directory to clone into.
        url: Remote URL; becomes the ``origin`` remote.
        options: A client configuration or options such as with_auth_type()
            and credentials, as accepted by build_config(); they are
            used for the clone and kept by the returned client.
        depth: Shallow clone depth; 0 clones the full history.
        branch: Branch to check out instead of the remote HEAD.
        logger: Logger for the returned client.

    Returns:
        An initialized GitClient on the clone.

    Raises:
        InvalidRepoPathError: If the path is empty.
        UnableToCloneWithEmptyRemoteUrlError: If the URL is empty.
    """
    if not str(path):
        msg = "Repository path must not be empty"
        raise InvalidRepoPathError(msg)
    if not url:
        msg = "Unable to clone with an empty remote URL"
        raise UnableToCloneWithEmptyRemoteUrlError(msg)

    config = build_config(*options, with_path(str(path)), with_remote_url(url))
    repo = porcelain.clone(
        url,
        str(path),
        errstream=io.BytesIO(),
        depth=depth or None,
        branch=branch,
        **resolve_transport_kwargs(config, url),
    )
    repo.close()

    return GitClient(config, logger=logger).init()
