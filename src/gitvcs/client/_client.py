"""Repository client over dulwich.

The GitClient opens or creates a repository on disk or in process memory and
exposes checkout, commit, pull, push, reset, history and disposal through
functional options.

Example:
    >>> from gitvcs.client import GitClient, with_branch
    >>> from gitvcs.config import GitClientConfig
    >>> with GitClient(GitClientConfig(path="/tmp/repo")).init() as client:
    ...     client.checkout_branch("develop")
    ...     result = client.commit_all("Initial import")
"""

import shutil
from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import TracebackType  # noqa: TC003 - Used at runtime in type annotation
from typing import TYPE_CHECKING, Any, Final, Self, cast

from dulwich.client import get_transport_and_path
from dulwich.errors import NotGitRepository
from dulwich.graph import can_fast_forward
from dulwich.objects import ZERO_SHA, Commit
from dulwich.repo import BaseRepo, Repo

from gitvcs.client._auth import resolve_transport_kwargs
from gitvcs.client._memory import MemoryFileSystem, memory_registry
from gitvcs.client._models import (
    CommitResult,
    GitLog,
    PullResult,
    PushResult,
    WorktreeStatus,
)
from gitvcs.client._options import (
    AuthOverride,
    CheckoutOptions,
    CommitOptions,
    PullOptions,
    PushOptions,
    ResetOptions,
    apply_options,
    with_branch,
    with_hash,
)
from gitvcs.client._worktree import DiskWorktree, MemoryWorktree, Worktree
from gitvcs.config import GitClientConfig
from gitvcs.constants import DEFAULT_BRANCH, DEFAULT_REMOTE_NAME
from gitvcs.enums import AuthType, InitType, ResetMode
from gitvcs.exceptions import (
    InvalidActionsForBareRepoError,
    InvalidOptionsError,
    NonFastForwardError,
    PushRejectedError,
    ReferenceNotFoundError,
    RemoteAlreadyExistsError,
    RemoteNotFoundError,
    RepositoryNotInitializedError,
    UnableToGetCurrentBranchError,
    WorktreeDirtyError,
)
from gitvcs.utils import (
    HEAD_REF,
    HEADS_PREFIX,
    REMOTES_PREFIX,
    branch_ref,
    commit_tree_id,
    create_client_logger,
    decode_bytes,
    get_author_info,
    get_head_sha,
    head_target,
    remote_tracking_ref,
    strip_refs_heads,
)

if TYPE_CHECKING:
    from dulwich.client import FetchPackResult
    from structlog.typing import FilteringBoundLogger

# A parsed push refspec: (source ref or None to delete, destination ref, force)
_RefSpec = tuple[bytes | None, bytes, bool]

_REMOTE_SECTION: Final = b"remote"


class GitClient:
    """Client for one repository, on disk or in memory.

    The client is created from a GitClientConfig and does nothing until
    init() opens or creates the repository. Working tree operations are
    rejected on bare repositories.

    The class implements the context manager protocol; leaving the context
    closes the underlying dulwich repository.
    """

    __slots__: Final = (
        "_config",
        "_is_bare",
        "_filesystem",
        "_logger",
        "_repo",
        "_worktree",
    )

    _config: GitClientConfig
    _is_bare: bool
    _filesystem: MemoryFileSystem | None
    _logger: "FilteringBoundLogger"
    _repo: BaseRepo | None
    _worktree: Worktree | None

    def __init__(
        self,
        config: GitClientConfig | None = None,
        *,
        logger: "FilteringBoundLogger | None" = None,
    ) -> None:
        """Store the configuration without touching the repository.

        Args:
            config: Client settings. Defaults to an empty configuration.
            logger: Logger to use instead of the default stderr logger.
        """
        self._config = config if config is not None else GitClientConfig()
        base_logger = logger if logger is not None else create_client_logger()
        self._logger = base_logger.bind(
            path=self._config.path, backend=str(self._config.init_type)
        )
        self._is_bare = self._config.is_bare
        self._filesystem = None
        self._repo = None
        self._worktree = None

    def __repr__(self) -> str:
        return (
            f"GitClient(path={self._config.path!r}, "
            f"backend={self._config.init_type!s}, bare={self._is_bare})"
        )

    # =========================================================================
    # Context Manager Protocol
    # =========================================================================

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Release file handles held by an on-disk repository.

        The client stays usable; dulwich reopens pack files on demand.
        """
        if isinstance(self._repo, Repo):
            self._repo.close()

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def config(self) -> GitClientConfig:
        return self._config

    @property
    def path(self) -> str:
        return self._config.path

    @property
    def remote_url(self) -> str:
        return self._config.remote_url

    @property
    def is_mem(self) -> bool:
        return self._config.is_mem

    @property
    def is_bare(self) -> bool:
        """Whether the opened repository is bare.

        Before init() this reflects the configuration; afterwards it reflects
        the repository found on disk.
        """
        return self._is_bare

    @property
    def auth_type(self) -> AuthType:
        return self._config.auth_type

    @property
    def username(self) -> str:
        return self._config.username

    @property
    def private_key_path(self) -> str:
        return self._config.private_key_path

    @property
    def init_type(self) -> InitType:
        return self._config.init_type

    @property
    def repository(self) -> BaseRepo:
        """The opened dulwich repository.

        Raises:
            RepositoryNotInitializedError: If init() has not been called or
                the client was disposed.
        """
        if self._repo is None:
            msg = "Repository is not initialized; call init() first"
            raise RepositoryNotInitializedError(msg)
        return self._repo

    @property
    def filesystem(self) -> MemoryFileSystem | None:
        """The in-memory working tree, or None for on-disk clients."""
        return self._filesystem

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def init(self) -> Self:
        """Open or create the repository.

        When the repository is not bare, a remote URL is configured and no
        remote exists yet, the default remote is created and pulled. An
        empty remote is not an error.

        Returns:
            The client, for chaining.

        Raises:
            InvalidOptionsError: If the path (or memory key) is empty.
        """
        if not self._config.path:
            msg = "A path is required to initialize a repository"
            raise InvalidOptionsError(msg)

        if self._config.is_mem:
            self._init_mem()
        else:
            self._init_fs()

        remote_url = self._config.remote_url
        if not self._is_bare and remote_url and not self.list_remotes():
            self.create_remote(DEFAULT_REMOTE_NAME, remote_url)
            _ = self.pull()

        return self

    def _init_fs(self) -> None:
        repo_path = Path(self._config.path)
        repo_path.mkdir(parents=True, exist_ok=True)

        try:
            repo = Repo(str(repo_path))
        except NotGitRepository:
            if self._config.is_bare:
                repo = Repo.init_bare(str(repo_path))
            else:
                repo = Repo.init(str(repo_path))
            self._logger.info("repository_created", bare=repo.bare)
        else:
            self._logger.debug("repository_opened", bare=repo.bare)

        self._repo = repo
        self._is_bare = repo.bare
        self._worktree = None if repo.bare else DiskWorktree(repo)

    def _init_mem(self) -> None:
        backend, created = memory_registry.get_or_create(self._config.path)
        self._repo = backend.storage.repo
        self._filesystem = backend.filesystem
        self._is_bare = self._config.is_bare
        self._worktree = (
            None
            if self._is_bare
            else MemoryWorktree(backend.storage, backend.filesystem)
        )
        event = "repository_created" if created else "repository_opened"
        self._logger.info(event, bare=self._is_bare)

    def dispose(self) -> None:
        """Delete the repository.

        Removes the directory of an on-disk repository, or evicts the memory
        registry entries for the client's key. The client must be
        initialized again before further use.

        Raises:
            OSError: If the directory cannot be removed; the client keeps
                its repository handle in that case.
        """
        self.close()
        if self._config.is_mem:
            _ = memory_registry.evict(self._config.path)
        elif self._config.path:
            try:
                shutil.rmtree(self._config.path)
            except FileNotFoundError:
                self._logger.debug("dispose_missing_directory")

        self._repo = None
        self._worktree = None
        self._filesystem = None
        self._logger.info("disposed")

    def _require_worktree(self, action: str) -> Worktree:
        _ = self.repository
        if self._worktree is None:
            msg = f"Cannot {action} in a bare repository"
            raise InvalidActionsForBareRepoError(
                msg, path=self._config.path, action=action
            )
        return self._worktree

    # =========================================================================
    # Status and Staging
    # =========================================================================

    def get_status(self) -> WorktreeStatus:
        """Return staged, modified and untracked paths.

        Raises:
            InvalidActionsForBareRepoError: On a bare repository.
        """
        return self._require_worktree("get status").status()

    def stage(self, *paths: str) -> frozenset[str]:
        """Stage repository-relative paths for the next commit.

        Paths of deleted tracked files stage the deletion.

        Raises:
            InvalidActionsForBareRepoError: On a bare repository.
            FileNotFoundError: If a path is neither present nor tracked.
        """
        return self._require_worktree("stage").stage(paths)

    # =========================================================================
    # Branches and Remotes
    # =========================================================================

    def get_current_branch(self) -> str:
        """Return the short name of the checked-out branch.

        The branch may be unborn (no commits yet).

        Raises:
            UnableToGetCurrentBranchError: If HEAD is detached.
        """
        target = head_target(self.repository)
        if not target.startswith(HEADS_PREFIX):
            msg = "HEAD is detached; no current branch"
            raise UnableToGetCurrentBranchError(msg)
        return strip_refs_heads(target)

    def list_branches(self) -> list[str]:
        """Return the short names of all local branches, sorted."""
        refs = self.repository.refs.keys(base=HEADS_PREFIX)
        return sorted(decode_bytes(ref) for ref in refs)

    def list_remotes(self) -> list[str]:
        """Return the names of configured remotes, sorted."""
        config = self.repository.get_config()
        return sorted(
            decode_bytes(section[1])
            for section in config.sections()
            if len(section) == 2 and section[0] == _REMOTE_SECTION  # noqa: PLR2004
        )

    def get_remote_url(self, name: str = DEFAULT_REMOTE_NAME) -> str:
        """Return the URL of a configured remote.

        Raises:
            RemoteNotFoundError: If the remote does not exist.
        """
        config = self.repository.get_config()
        try:
            url = config.get((_REMOTE_SECTION, name.encode()), b"url")
        except KeyError:
            msg = f"Remote not found: {name}"
            raise RemoteNotFoundError(msg, remote_name=name) from None
        return decode_bytes(url)

    def create_remote(self, name: str, url: str) -> None:
        """Add a remote with the standard fetch refspec.

        Raises:
            RemoteAlreadyExistsError: If a remote with the name exists.
        """
        if name in self.list_remotes():
            msg = f"Remote already exists: {name}"
            raise RemoteAlreadyExistsError(msg, remote_name=name)

        repo = self.repository
        config = repo.get_config()
        section = (_REMOTE_SECTION, name.encode())
        config.set(section, b"url", url.encode())
        config.set(
            section,
            b"fetch",
            f"+refs/heads/*:refs/remotes/{name}/*".encode(),
        )
        if isinstance(repo, Repo):
            config.write_to_path()
        self._logger.info("remote_created", remote=name, url=url)

    # =========================================================================
    # Checkout
    # =========================================================================

    def checkout(self, *options: object) -> None:
        """Switch the working tree to a branch or commit.

        Without options the default branch (master) is checked out. A commit
        given with with_hash() leaves HEAD detached.

        Raises:
            InvalidActionsForBareRepoError: On a bare repository.
            ReferenceNotFoundError: If the branch or commit does not exist.
            WorktreeDirtyError: If staged or modified changes would be
                overwritten and with_force_checkout() was not given.
        """
        opts = apply_options(CheckoutOptions(), options)
        worktree = self._require_worktree("checkout")
        repo = self.repository

        target_ref: bytes | None = None
        if opts.hash is not None:
            target_sha = self._resolve_commit(opts.hash.encode())
        else:
            branch = opts.branch or DEFAULT_BRANCH
            target_ref = branch_ref(branch)
            try:
                target_sha = repo.refs[target_ref]
            except KeyError:
                msg = f"Branch not found: {branch}"
                raise ReferenceNotFoundError(msg, ref=branch) from None

        head_sha = get_head_sha(repo)
        if opts.force or target_sha != head_sha:
            if not opts.force:
                self._ensure_clean(worktree)
            worktree.checkout_tree(commit_tree_id(repo, target_sha))

        if target_ref is not None:
            repo.refs.set_symbolic_ref(HEAD_REF, target_ref)
        else:
            self._detach_head(target_sha)

        self._logger.info(
            "checked_out",
            ref=decode_bytes(target_ref) if target_ref is not None else None,
            sha=decode_bytes(target_sha),
        )

    def checkout_branch(self, branch: str, *options: object) -> None:
        """Check out a branch, creating it from HEAD if it does not exist.

        On an unborn HEAD the branch name simply becomes the unborn branch.
        """
        repo = self.repository
        _ = self._require_worktree("checkout")
        ref = branch_ref(branch)

        if ref not in repo.refs:
            head_sha = get_head_sha(repo)
            if head_sha is None:
                repo.refs.set_symbolic_ref(HEAD_REF, ref)
                self._logger.info("checked_out", ref=decode_bytes(ref), sha=None)
                return
            _ = repo.refs.add_if_new(ref, head_sha)
            self._logger.info("branch_created", branch=branch)

        self.checkout(*options, with_branch(branch))

    def checkout_hash(self, sha: str, *options: object) -> None:
        """Check out a commit by its full SHA, detaching HEAD."""
        self.checkout(*options, with_hash(sha))

    def _resolve_commit(self, sha: bytes) -> bytes:
        repo = self.repository
        try:
            obj = repo[sha]
        except KeyError:
            obj = None
        if not isinstance(obj, Commit):
            msg = f"Commit not found: {decode_bytes(sha)}"
            raise ReferenceNotFoundError(msg, ref=decode_bytes(sha))
        return obj.id

    def _detach_head(self, sha: bytes) -> None:
        refs = self.repository.refs
        # Setting HEAD directly would move the branch it points to
        _ = refs.remove_if_equals(HEAD_REF, None)
        _ = refs.add_if_new(HEAD_REF, sha)

    def _ensure_clean(self, worktree: Worktree) -> None:
        status = worktree.status()
        if status.has_uncommitted_changes:
            paths = status.staged | status.modified
            msg = f"Uncommitted changes would be overwritten: {sorted(paths)}"
            raise WorktreeDirtyError(msg, paths=paths)

    # =========================================================================
    # Commit
    # =========================================================================

    def commit(self, message: str, *options: object) -> CommitResult:
        """Commit staged changes.

        With with_all() modified and deleted tracked files are staged first.
        With with_parents() the given commits replace HEAD as parents.

        Returns:
            CommitResult with the new SHA, or no_changes=True when nothing
            was staged.

        Raises:
            InvalidActionsForBareRepoError: On a bare repository.
            ReferenceNotFoundError: If a with_parents() commit does not exist.
        """
        opts = apply_options(CommitOptions(), options)
        worktree = self._require_worktree("commit")
        parents = (
            [self._resolve_commit(sha.encode()) for sha in opts.parents]
            if opts.parents is not None
            else None
        )

        if opts.all:
            _ = worktree.stage_tracked()

        status = worktree.status()
        if not status.staged:
            return CommitResult(sha=None, files=frozenset(), no_changes=True)

        author = opts.author or get_author_info(self.repository)
        committer = opts.committer or author
        sha = worktree.commit(
            message, author=author, committer=committer, parents=parents
        )

        self._logger.info(
            "committed", sha=decode_bytes(sha), files=len(status.staged)
        )
        return CommitResult(
            sha=decode_bytes(sha), files=status.staged, no_changes=False
        )

    def commit_all(self, message: str, *options: object) -> CommitResult:
        """Stage every change, including untracked files, and commit."""
        _ = self._require_worktree("commit").stage_all()
        return self.commit(message, *options)

    # =========================================================================
    # Pull
    # =========================================================================

    def pull(self, *options: object) -> PullResult:
        """Fetch from a remote and fast-forward the current branch.

        Returns:
            PullResult; an empty remote or an up-to-date branch is reported
            through its flags rather than raised.

        Raises:
            InvalidActionsForBareRepoError: On a bare repository.
            RemoteNotFoundError: If the remote does not exist.
            UnableToGetCurrentBranchError: If HEAD is detached.
            ReferenceNotFoundError: If the remote branch does not exist.
            NonFastForwardError: If histories diverged and with_force_pull()
                was not given.
            WorktreeDirtyError: If uncommitted changes would be overwritten
                and with_force_pull() was not given.
        """
        opts = apply_options(PullOptions(), options)
        worktree = self._require_worktree("pull")
        repo = self.repository
        remote_name = opts.remote_name

        fetched = self._fetch(remote_name, depth=opts.depth, auth=opts.auth)
        remote_heads = {
            ref: sha
            for ref, sha in fetched.refs.items()
            if ref.startswith(HEADS_PREFIX) and sha and sha != ZERO_SHA
        }
        if not remote_heads:
            self._logger.info("pull_empty_remote", remote=remote_name)
            return PullResult(remote_name=remote_name, empty_remote=True)

        for ref, sha in remote_heads.items():
            repo.refs[remote_tracking_ref(remote_name, ref)] = sha

        local_ref = head_target(repo)
        if local_ref == HEAD_REF:
            msg = "Cannot pull with a detached HEAD"
            raise UnableToGetCurrentBranchError(msg)
        local_sha = get_head_sha(repo)

        branch = self._resolve_pull_branch(opts, fetched, remote_heads, local_sha)
        remote_sha = remote_heads.get(HEADS_PREFIX + branch.encode())
        if remote_sha is None:
            msg = f"Remote branch not found: {remote_name}/{branch}"
            raise ReferenceNotFoundError(msg, ref=branch)

        if local_sha is None and local_ref != branch_ref(branch):
            # Adopt the remote branch name for an unborn HEAD
            local_ref = branch_ref(branch)
            repo.refs.set_symbolic_ref(HEAD_REF, local_ref)

        if local_sha == remote_sha or (
            local_sha is not None and can_fast_forward(repo, remote_sha, local_sha)
        ):
            self._logger.info("pull_up_to_date", remote=remote_name, branch=branch)
            return PullResult(
                remote_name=remote_name,
                branch=branch,
                sha=decode_bytes(local_sha) if local_sha is not None else None,
                up_to_date=True,
            )

        fast_forward = local_sha is None or can_fast_forward(
            repo, local_sha, remote_sha
        )
        if not fast_forward and not opts.force:
            msg = f"Branch {branch} has diverged from {remote_name}/{branch}"
            raise NonFastForwardError(
                msg,
                ref=branch,
                local_sha=decode_bytes(local_sha) if local_sha is not None else None,
                remote_sha=decode_bytes(remote_sha),
            )
        if not opts.force:
            self._ensure_clean(worktree)

        worktree.checkout_tree(commit_tree_id(repo, remote_sha))
        repo.refs[local_ref] = remote_sha

        self._logger.info(
            "pulled",
            remote=remote_name,
            branch=branch,
            sha=decode_bytes(remote_sha),
            forced=not fast_forward,
        )
        return PullResult(
            remote_name=remote_name,
            branch=branch,
            sha=decode_bytes(remote_sha),
            updated=True,
        )

    def _resolve_pull_branch(
        self,
        opts: PullOptions,
        fetched: "FetchPackResult",
        remote_heads: dict[bytes, bytes],
        local_sha: bytes | None,
    ) -> str:
        if opts.reference_name:
            return strip_refs_heads(opts.reference_name)

        current = strip_refs_heads(head_target(self.repository))
        if local_sha is not None:
            return current

        # Unborn branch: follow the remote HEAD, then a same-named branch
        symrefs = fetched.symrefs or {}
        remote_head = symrefs.get(HEAD_REF)
        if remote_head is not None and remote_head in remote_heads:
            return strip_refs_heads(remote_head)
        if HEADS_PREFIX + current.encode() in remote_heads:
            return current
        return strip_refs_heads(sorted(remote_heads)[0])

    def _transport(
        self, remote_name: str, auth: AuthOverride | None = None
    ) -> tuple[Any, str]:  # pyright: ignore[reportExplicitAny]
        url = self.get_remote_url(remote_name)
        config = auth.apply(self._config) if auth is not None else self._config
        kwargs = resolve_transport_kwargs(config, url)
        if config.auth_type != AuthType.NONE and not kwargs:
            self._logger.debug("auth_not_applied", remote=remote_name)
        client, path = get_transport_and_path(url, **kwargs)
        return client, path

    def _fetch(
        self,
        remote_name: str,
        *,
        depth: int = 0,
        auth: AuthOverride | None = None,
    ) -> "FetchPackResult":
        client, path = self._transport(remote_name, auth)
        self._logger.debug("fetching", remote=remote_name, depth=depth)
        return cast(
            "FetchPackResult",
            client.fetch(path, self.repository, depth=depth or None),
        )

    # =========================================================================
    # Push
    # =========================================================================

    def push(self, *options: object) -> PushResult:
        """Push local branches to a remote.

        Without with_refspecs() every local branch is pushed to the branch of
        the same name. Remote-tracking refs are updated for pushed branches.

        Returns:
            PushResult; up_to_date=True when there was nothing to send.

        Raises:
            RemoteNotFoundError: If the remote does not exist.
            ReferenceNotFoundError: If a refspec source does not exist.
            NonFastForwardError: If an update is not a fast-forward and
                neither the refspec nor with_force_push() forces it.
            PushRejectedError: If the remote refuses an update.
        """
        opts = apply_options(PushOptions(), options)
        repo = self.repository
        remote_name = opts.remote_name

        local_heads = {
            ref: sha
            for ref, sha in repo.get_refs().items()
            if ref.startswith(HEADS_PREFIX)
        }
        specs = self._parse_refspecs(opts, local_heads)
        client, path = self._transport(remote_name, opts.auth)

        changes: dict[bytes, bytes] = {}

        def update_refs(remote_refs: dict[bytes, bytes]) -> dict[bytes, bytes]:
            for src, dst, force in specs:
                old_sha = remote_refs.get(dst)
                if src is None:
                    if old_sha is not None:
                        changes[dst] = ZERO_SHA
                    continue
                new_sha = repo.refs[src]
                if old_sha == new_sha:
                    continue
                fast_forward = old_sha is None or self._is_ancestor(old_sha, new_sha)
                if not fast_forward and not force:
                    msg = (
                        f"Remote {decode_bytes(dst)} has commits missing from "
                        f"local {decode_bytes(src)}"
                    )
                    raise NonFastForwardError(
                        msg,
                        ref=decode_bytes(dst),
                        local_sha=decode_bytes(new_sha),
                        remote_sha=decode_bytes(old_sha) if old_sha else None,
                    )
                changes[dst] = new_sha

            if opts.prune:
                targets = {dst for _src, dst, _force in specs}
                for ref in remote_refs:
                    if ref.startswith(HEADS_PREFIX) and ref not in targets:
                        changes[ref] = ZERO_SHA
            return dict(changes)

        result = client.send_pack(
            path, update_refs, generate_pack_data=repo.generate_pack_data
        )

        ref_status: dict[bytes, str | None] = result.ref_status or {}
        rejected = {
            decode_bytes(ref): str(reason)
            for ref, reason in ref_status.items()
            if reason is not None
        }
        if rejected:
            msg = f"Push rejected by {remote_name}: {rejected}"
            raise PushRejectedError(msg, ref_status=rejected)

        for ref, sha in changes.items():
            if not ref.startswith(HEADS_PREFIX):
                continue
            tracking = remote_tracking_ref(remote_name, ref)
            if sha == ZERO_SHA:
                _ = repo.refs.remove_if_equals(tracking, None)
            else:
                repo.refs[tracking] = sha

        updated_refs = {
            decode_bytes(ref): None if sha == ZERO_SHA else decode_bytes(sha)
            for ref, sha in changes.items()
        }
        if updated_refs:
            self._logger.info(
                "pushed", remote=remote_name, refs=sorted(updated_refs)
            )
        else:
            self._logger.info("push_up_to_date", remote=remote_name)
        return PushResult(
            remote_name=remote_name,
            updated_refs=updated_refs,
            up_to_date=not updated_refs,
        )

    def _parse_refspecs(
        self, opts: PushOptions, local_heads: dict[bytes, bytes]
    ) -> list[_RefSpec]:
        if not opts.refspecs:
            return [(ref, ref, opts.force) for ref in sorted(local_heads)]

        specs: list[_RefSpec] = []
        for spec in opts.refspecs:
            force = opts.force or spec.startswith("+")
            src, _, dst = spec.lstrip("+").partition(":")
            if not dst:
                dst = src
            if "*" in src:
                src_prefix = _expand_ref(src.split("*", 1)[0])
                dst_prefix = _expand_ref(dst.split("*", 1)[0])
                specs.extend(
                    (ref, dst_prefix + ref[len(src_prefix) :], force)
                    for ref in sorted(local_heads)
                    if ref.startswith(src_prefix)
                )
                continue
            if not src:
                specs.append((None, _expand_ref(dst), force))
                continue
            src_ref = _expand_ref(src)
            if src_ref not in self.repository.refs:
                msg = f"Refspec source not found: {src}"
                raise ReferenceNotFoundError(msg, ref=src)
            specs.append((src_ref, _expand_ref(dst), force))
        return specs

    def _is_ancestor(self, ancestor: bytes, descendant: bytes) -> bool:
        repo = self.repository
        if ancestor not in repo.object_store:
            return False
        return can_fast_forward(repo, ancestor, descendant)

    # =========================================================================
    # Reset
    # =========================================================================

    def reset(self, *options: object) -> None:
        """Move the current branch and reset the index and working tree.

        The default mode is hard, which also removes untracked files.

        Raises:
            InvalidActionsForBareRepoError: On a bare repository.
            ReferenceNotFoundError: If the target commit does not exist or
                HEAD has no commits.
        """
        opts = apply_options(ResetOptions(), options)
        worktree = self._require_worktree("reset")
        repo = self.repository

        head_sha = get_head_sha(repo)
        if opts.commit is not None:
            target_sha = self._resolve_commit(opts.commit.encode())
        elif head_sha is not None:
            target_sha = head_sha
        else:
            msg = "Cannot reset: HEAD has no commits"
            raise ReferenceNotFoundError(msg, ref="HEAD")

        if target_sha != head_sha:
            repo.refs[head_target(repo)] = target_sha

        tree_id = commit_tree_id(repo, target_sha)
        if opts.mode == ResetMode.MIXED:
            worktree.reset_index(tree_id)
        elif opts.mode == ResetMode.HARD:
            worktree.checkout_tree(tree_id, remove_untracked=True)

        self._logger.info(
            "reset", sha=decode_bytes(target_sha), mode=str(opts.mode)
        )

    # =========================================================================
    # History
    # =========================================================================

    def get_logs(self) -> list[GitLog]:
        """Return every commit reachable from HEAD, branches and remotes.

        Each commit appears once, newest first.
        """
        repo = self.repository
        include: set[bytes] = set()
        head_sha = get_head_sha(repo)
        if head_sha is not None:
            include.add(head_sha)
        for ref, sha in repo.get_refs().items():
            if ref.startswith((HEADS_PREFIX, REMOTES_PREFIX)):
                include.add(sha)

        commits = [sha for sha in include if isinstance(repo[sha], Commit)]
        if not commits:
            return []

        walker = repo.get_walker(include=sorted(commits))
        return [_commit_to_log(entry.commit) for entry in walker]


def _expand_ref(name: str) -> bytes:
    if name == "HEAD" or name.startswith("refs/"):
        return name.encode()
    return HEADS_PREFIX + name.encode()


def _parse_identity(identity: bytes) -> tuple[str, str]:
    """Split a ``Name <email>`` identity line."""
    text = identity.decode("utf-8", errors="replace")
    if "<" in text and text.endswith(">"):
        name, email = text.rsplit("<", 1)
        return name.strip(), email.rstrip(">")
    return text, ""


def _commit_to_log(commit: Commit) -> GitLog:
    name, email = _parse_identity(commit.author)
    # dulwich stores the offset in seconds east of UTC
    tz = timezone(timedelta(seconds=commit.author_timezone))
    return GitLog(
        sha=decode_bytes(commit.id),
        message=commit.message.decode("utf-8", errors="replace"),
        author_name=name,
        author_email=email,
        timestamp=datetime.fromtimestamp(commit.author_time, tz=tz),
    )
