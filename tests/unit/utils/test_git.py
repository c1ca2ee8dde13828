import pytest
from dulwich.index import commit_tree
from dulwich.objects import Blob, Commit
from dulwich.repo import MemoryRepo

from gitvcs.client import MemoryStorage
from gitvcs.utils import (
    HEAD_REF,
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


@pytest.fixture
def repo() -> MemoryRepo:
    return MemoryStorage.create().repo


def _commit_files(repo: MemoryRepo, files: dict[bytes, bytes]) -> bytes:
    entries: list[tuple[bytes, bytes, int]] = []
    for path, data in files.items():
        blob = Blob.from_string(data)
        repo.object_store.add_object(blob)
        entries.append((path, blob.id, 0o100644))
    commit = Commit()
    commit.tree = commit_tree(repo.object_store, entries)
    commit.author = commit.committer = b"Test <test@example.com>"
    commit.author_time = commit.commit_time = 0
    commit.author_timezone = commit.commit_timezone = 0
    commit.message = b"test"
    repo.object_store.add_object(commit)
    return commit.id


class TestRefNames:
    def test_decode_bytes(self) -> None:
        assert decode_bytes(b"abc") == "abc"
        assert decode_bytes("abc") == "abc"

    @pytest.mark.parametrize(
        ("ref", "expected"),
        [
            (b"refs/heads/main", "main"),
            ("refs/heads/feature/x", "feature/x"),
            ("main", "main"),
            ("refs/tags/v1", "refs/tags/v1"),
        ],
    )
    def test_strip_refs_heads(self, ref: bytes | str, expected: str) -> None:
        assert strip_refs_heads(ref) == expected

    def test_branch_ref(self) -> None:
        assert branch_ref("main") == b"refs/heads/main"
        assert branch_ref("refs/heads/main") == b"refs/heads/main"

    def test_remote_tracking_ref(self) -> None:
        assert remote_tracking_ref("origin", b"refs/heads/main") == (
            b"refs/remotes/origin/main"
        )
        assert remote_tracking_ref("upstream", "dev") == b"refs/remotes/upstream/dev"


class TestHead:
    def test_unborn_head(self, repo: MemoryRepo) -> None:
        assert get_head_sha(repo) is None
        assert head_target(repo).startswith(b"refs/heads/")
        assert is_detached(repo) is False

    def test_head_follows_branch(self, repo: MemoryRepo) -> None:
        sha = _commit_files(repo, {b"a.txt": b"a"})
        repo.refs[head_target(repo)] = sha

        assert get_head_sha(repo) == sha

    def test_detached_head(self, repo: MemoryRepo) -> None:
        sha = _commit_files(repo, {b"a.txt": b"a"})
        _ = repo.refs.remove_if_equals(HEAD_REF, None)
        _ = repo.refs.add_if_new(HEAD_REF, sha)

        assert is_detached(repo) is True
        assert head_target(repo) == HEAD_REF


class TestTrees:
    def test_flatten_tree_nested(self, repo: MemoryRepo) -> None:
        sha = _commit_files(repo, {b"a.txt": b"a", b"dir/b.txt": b"b"})

        flat = flatten_tree(repo, commit_tree_id(repo, sha))

        assert set(flat) == {b"a.txt", b"dir/b.txt"}
        assert flat[b"dir/b.txt"] == (0o100644, blob_id(b"b"))

    def test_flatten_none_is_empty(self, repo: MemoryRepo) -> None:
        assert flatten_tree(repo, None) == {}

    def test_commit_tree_id_of_none(self, repo: MemoryRepo) -> None:
        assert commit_tree_id(repo, None) is None

    def test_empty_tree(self, repo: MemoryRepo) -> None:
        tree_id = empty_tree_id(repo)

        assert flatten_tree(repo, tree_id) == {}
        assert tree_id == b"4b825dc642cb6eb9a060e54bf8d69288fbee4904"


class TestIsFullSha:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("0" * 40, True),
            ("ABCDEF0123" * 4, True),
            ("0" * 39, False),
            ("g" * 40, False),
            ("", False),
        ],
    )
    def test_is_full_sha(self, value: str, expected: bool) -> None:  # noqa: FBT001
        assert is_full_sha(value) is expected
