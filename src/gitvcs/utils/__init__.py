"""Utility functions for gitvcs."""

from ._author import Signature, get_author_info
from ._git import (
    HEAD_REF,
    HEADS_PREFIX,
    REMOTES_PREFIX,
    blob_id,
    branch_ref,
    commit_tree_id,
    decode_bytes,
    empty_tree_id,
    flatten_tree,
    get_head_sha,
    head_target,
    is_detached,
    is_full_sha,
    remote_tracking_ref,
    strip_refs_heads,
)
from ._logging import create_cli_logger, create_client_logger

__all__ = [
    "HEADS_PREFIX",
    "HEAD_REF",
    "REMOTES_PREFIX",
    "Signature",
    "blob_id",
    "branch_ref",
    "commit_tree_id",
    "create_cli_logger",
    "create_client_logger",
    "decode_bytes",
    "empty_tree_id",
    "flatten_tree",
    "get_author_info",
    "get_head_sha",
    "head_target",
    "is_detached",
    "is_full_sha",
    "remote_tracking_ref",
    "strip_refs_heads",
]
