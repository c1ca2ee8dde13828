"""Author information resolution utilities."""

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from dulwich.repo import Repo

from gitvcs.constants import DEFAULT_AUTHOR_EMAIL, DEFAULT_AUTHOR_NAME

if TYPE_CHECKING:
    from dulwich.config import Config
    from dulwich.repo import BaseRepo


@dataclass(slots=True, frozen=True)
class Signature:
    """A git identity used as commit author or committer.

    Attributes:
        name: Author name.
        email: Author email.
    """

    name: str
    email: str

    def to_bytes(self) -> bytes:
        """Format as a git identity line: ``Name <email>``."""
        return f"{self.name} <{self.email}>".encode()


def get_author_info(repo: "BaseRepo | None" = None) -> Signature:
    """Resolve author info from environment variables or git config.

    Resolution order:
    1. Environment variables (GITVCS_AUTHOR_NAME, GITVCS_AUTHOR_EMAIL)
    2. Repository git config (user.name, user.email), including the
       user's global config for on-disk repositories
    3. Built-in defaults

    Args:
        repo: Repository whose config is consulted, if any.

    Returns:
        Signature with resolved name and email.
    """
    config = _repo_config(repo)
    name = (
        os.environ.get("GITVCS_AUTHOR_NAME")
        or _config_value(config, b"name")
        or DEFAULT_AUTHOR_NAME
    )
    email = (
        os.environ.get("GITVCS_AUTHOR_EMAIL")
        or _config_value(config, b"email")
        or DEFAULT_AUTHOR_EMAIL
    )

    return Signature(name=name, email=email)


def _repo_config(repo: "BaseRepo | None") -> "Config | None":
    if repo is None:
        return None
    if isinstance(repo, Repo):
        return repo.get_config_stack()
    return repo.get_config()


def _config_value(config: "Config | None", key: bytes) -> str | None:
    """Read a user.* value from git config.

    Args:
        config: Git config to read, or None.
        key: Key within the user section (e.g., b"name").

    Returns:
        The config value, or None if not set.
    """
    if config is None:
        return None
    try:
        value = config.get((b"user",), key)
    except KeyError:
        return None
    return value.decode() or None
