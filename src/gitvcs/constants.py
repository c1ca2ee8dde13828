"""Shared constants for gitvcs."""

from typing import Final

DEFAULT_REMOTE_NAME: Final = "origin"

DEFAULT_BRANCH: Final = "master"
DEFAULT_USERNAME: Final = "git"

# Identity used when neither the environment nor git config provides one
DEFAULT_AUTHOR_NAME: Final = "gitvcs"
DEFAULT_AUTHOR_EMAIL: Final = "gitvcs@localhost"
