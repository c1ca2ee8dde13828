import pytest

from gitvcs.client import (
    GitClient,
    MemoryFileSystem,
    memory_registry,
    new_git_client,
    with_bare,
    with_commit,
    with_mem,
    with_mode,
    with_path,
)
from gitvcs.enums import InitType
from gitvcs.exceptions import (
    InvalidActionsForBareRepoError,
    RepositoryNotInitializedError,
    WorktreeDirtyError,
)


def _fs(client: GitClient) -> MemoryFileSystem:
    assert client.filesystem is not None
    return client.filesystem


class TestMemoryBackend:
    def test_init_registers_key(self, mem_client: GitClient) -> None:
        assert mem_client.init_type == InitType.MEM
        assert "mem-repo" in memory_registry
        assert mem_client.filesystem is not None

    def test_same_key_shares_repository(self, mem_client: GitClient) -> None:
        _fs(mem_client).write_text("a.txt", "a")
        result = mem_client.commit_all("first")

        other = new_git_client(with_path("mem-repo"), with_mem())

        assert other.filesystem is mem_client.filesystem
        assert [log.sha for log in other.get_logs()] == [result.sha]

    def test_different_keys_are_isolated(self, mem_client: GitClient) -> None:
        _fs(mem_client).write_text("a.txt", "a")
        _ = mem_client.commit_all("first")

        other = new_git_client(with_path("other-repo"), with_mem())

        assert other.get_logs() == []
        assert other.get_status().is_clean

    def test_dispose_evicts_registry_entry(self, mem_client: GitClient) -> None:
        mem_client.dispose()

        assert "mem-repo" not in memory_registry
        assert mem_client.filesystem is None
        with pytest.raises(RepositoryNotInitializedError):
            _ = mem_client.get_logs()

    def test_bare_memory_rejects_worktree_actions(self) -> None:
        client = new_git_client(with_path("bare-repo"), with_mem(), with_bare())

        assert client.is_bare is True
        with pytest.raises(InvalidActionsForBareRepoError):
            _ = client.get_status()
        with pytest.raises(InvalidActionsForBareRepoError):
            client.reset()


class TestMemoryWorktree:
    def test_status_and_commit(self, mem_client: GitClient) -> None:
        fs = _fs(mem_client)
        fs.write_text("a.txt", "a")
        fs.write_text("dir/b.txt", "b")

        assert mem_client.get_status().untracked == frozenset({"a.txt", "dir/b.txt"})

        result = mem_client.commit_all("Add files")

        assert result.files == frozenset({"a.txt", "dir/b.txt"})
        assert mem_client.get_status().is_clean

    def test_first_commit_lands_on_default_branch(
        self, mem_client: GitClient
    ) -> None:
        _fs(mem_client).write_text("a.txt", "a")

        result = mem_client.commit_all("first")

        assert mem_client.get_current_branch() == "master"
        assert mem_client.list_branches() == ["master"]
        head = mem_client.repository.refs[b"refs/heads/master"]
        assert head.decode() == result.sha

    def test_modify_and_delete_tracked(self, mem_client: GitClient) -> None:
        fs = _fs(mem_client)
        fs.write_text("a.txt", "a")
        fs.write_text("b.txt", "b")
        _ = mem_client.commit_all("first")

        fs.write_text("a.txt", "changed")
        fs.remove("b.txt")

        status = mem_client.get_status()
        assert status.modified == frozenset({"a.txt", "b.txt"})
        assert status.staged == frozenset()

        staged = mem_client.stage("a.txt", "b.txt")

        assert staged == frozenset({"a.txt", "b.txt"})
        assert mem_client.get_status().staged == frozenset({"a.txt", "b.txt"})

    def test_stage_unknown_path_raises(self, mem_client: GitClient) -> None:
        with pytest.raises(FileNotFoundError):
            _ = mem_client.stage("missing.txt")

    def test_log_order_and_author(self, mem_client: GitClient) -> None:
        fs = _fs(mem_client)
        fs.write_text("a.txt", "1")
        _ = mem_client.commit_all("one")
        fs.write_text("a.txt", "2")
        _ = mem_client.commit_all("two")

        logs = mem_client.get_logs()

        assert [log.summary for log in logs] == ["two", "one"]
        assert logs[0].author_name == "Test User"
        assert logs[0].author_email == "test@example.com"


class TestMemoryCheckoutAndReset:
    def test_branch_switch_updates_filesystem(self, mem_client: GitClient) -> None:
        fs = _fs(mem_client)
        fs.write_text("a.txt", "a")
        _ = mem_client.commit_all("first")
        default = mem_client.get_current_branch()

        mem_client.checkout_branch("feature")
        fs.write_text("feature.txt", "f")
        _ = mem_client.commit_all("feature work")
        mem_client.checkout_branch(default)

        assert not fs.exists("feature.txt")
        assert fs.read_text("a.txt") == "a"
        assert mem_client.list_branches() == sorted([default, "feature"])

    def test_dirty_checkout_refused(self, mem_client: GitClient) -> None:
        fs = _fs(mem_client)
        fs.write_text("a.txt", "v1")
        first = mem_client.commit_all("first")
        fs.write_text("a.txt", "v2")
        _ = mem_client.commit_all("second")
        fs.write_text("a.txt", "local")
        assert first.sha is not None

        with pytest.raises(WorktreeDirtyError):
            mem_client.checkout_hash(first.sha)

    def test_hard_reset(self, mem_client: GitClient) -> None:
        fs = _fs(mem_client)
        fs.write_text("a.txt", "v1")
        first = mem_client.commit_all("first")
        fs.write_text("a.txt", "v2")
        fs.write_text("b.txt", "b")
        _ = mem_client.commit_all("second")
        fs.write_text("untracked.txt", "u")
        assert first.sha is not None

        mem_client.reset(with_commit(first.sha))

        assert fs.files() == ["a.txt"]
        assert fs.read_text("a.txt") == "v1"
        assert mem_client.get_status().is_clean

    def test_mixed_reset(self, mem_client: GitClient) -> None:
        fs = _fs(mem_client)
        fs.write_text("a.txt", "v1")
        first = mem_client.commit_all("first")
        fs.write_text("a.txt", "v2")
        _ = mem_client.commit_all("second")
        assert first.sha is not None

        mem_client.reset(with_commit(first.sha), with_mode("mixed"))

        status = mem_client.get_status()
        assert status.staged == frozenset()
        assert status.modified == frozenset({"a.txt"})
        assert fs.read_text("a.txt") == "v2"
