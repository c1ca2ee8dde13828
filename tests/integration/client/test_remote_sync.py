from collections.abc import Callable

import pytest

from gitvcs.client import (
    GitClient,
    new_git_client,
    with_force_pull,
    with_force_push,
    with_mem,
    with_path,
    with_prune,
    with_reference_name_pull,
    with_refspecs,
    with_remote_name_pull,
    with_remote_url,
)
from gitvcs.exceptions import (
    NonFastForwardError,
    ReferenceNotFoundError,
    RemoteNotFoundError,
)

ClientFactory = Callable[[str], GitClient]
WriteFile = Callable[[GitClient, str, str], None]
ReadFile = Callable[[GitClient, str], str | None]


class TestEmptyRemote:
    def test_init_adds_origin_and_tolerates_empty_remote(
        self, client_factory: ClientFactory, remote_url: str
    ) -> None:
        client = client_factory("alice")

        assert client.list_remotes() == ["origin"]
        assert client.get_remote_url() == remote_url
        result = client.pull()
        assert result.empty_remote is True
        assert result.updated is False

    def test_push_without_commits_is_up_to_date(
        self, client_factory: ClientFactory
    ) -> None:
        client = client_factory("alice")

        assert client.push().up_to_date is True


class TestPushPull:
    def test_push_then_init_pulls_content(
        self, client_factory: ClientFactory, write: WriteFile, read: ReadFile
    ) -> None:
        alice = client_factory("alice")
        write(alice, "a.txt", "hello")
        commit = alice.commit_all("first")
        branch = alice.get_current_branch()

        pushed = alice.push()

        assert pushed.updated_refs == {f"refs/heads/{branch}": commit.sha}
        bob = client_factory("bob")
        assert read(bob, "a.txt") == "hello"
        assert bob.get_current_branch() == branch
        assert bob.get_logs()[0].sha == commit.sha

    def test_pull_fast_forwards(
        self, client_factory: ClientFactory, write: WriteFile, read: ReadFile
    ) -> None:
        alice = client_factory("alice")
        write(alice, "a.txt", "a")
        _ = alice.commit_all("first")
        _ = alice.push()
        bob = client_factory("bob")

        write(alice, "b.txt", "b")
        second = alice.commit_all("second")
        _ = alice.push()
        result = bob.pull()

        assert result.updated is True
        assert result.sha == second.sha
        assert result.branch == alice.get_current_branch()
        assert read(bob, "b.txt") == "b"
        assert bob.get_status().is_clean

    def test_pull_up_to_date(
        self, client_factory: ClientFactory, write: WriteFile
    ) -> None:
        alice = client_factory("alice")
        write(alice, "a.txt", "a")
        _ = alice.commit_all("first")
        _ = alice.push()

        result = alice.pull()

        assert result.up_to_date is True
        assert result.updated is False

    def test_pull_when_local_is_ahead(
        self, client_factory: ClientFactory, write: WriteFile
    ) -> None:
        alice = client_factory("alice")
        write(alice, "a.txt", "a")
        _ = alice.commit_all("first")
        _ = alice.push()
        write(alice, "a.txt", "b")
        local = alice.commit_all("second")

        result = alice.pull()

        assert result.up_to_date is True
        assert result.sha == local.sha

    def test_second_push_is_up_to_date(
        self, client_factory: ClientFactory, write: WriteFile
    ) -> None:
        alice = client_factory("alice")
        write(alice, "a.txt", "a")
        _ = alice.commit_all("first")
        _ = alice.push()

        result = alice.push()

        assert result.up_to_date is True
        assert result.updated_refs == {}

    def test_pull_named_branch(
        self, client_factory: ClientFactory, write: WriteFile
    ) -> None:
        alice = client_factory("alice")
        write(alice, "a.txt", "a")
        _ = alice.commit_all("first")
        _ = alice.push()

        with pytest.raises(ReferenceNotFoundError):
            _ = alice.pull(with_reference_name_pull("missing"))

    def test_unknown_remote(self, client_factory: ClientFactory) -> None:
        alice = client_factory("alice")

        with pytest.raises(RemoteNotFoundError):
            _ = alice.pull(with_remote_name_pull("upstream"))


class TestDivergence:
    def test_diverged_histories(
        self, client_factory: ClientFactory, write: WriteFile, read: ReadFile
    ) -> None:
        alice = client_factory("alice")
        write(alice, "a.txt", "a")
        _ = alice.commit_all("first")
        _ = alice.push()
        bob = client_factory("bob")

        write(alice, "alice.txt", "from alice")
        alice_commit = alice.commit_all("alice work")
        _ = alice.push()
        write(bob, "bob.txt", "from bob")
        _ = bob.commit_all("bob work")

        with pytest.raises(NonFastForwardError):
            _ = bob.push()
        with pytest.raises(NonFastForwardError) as exc_info:
            _ = bob.pull()
        assert exc_info.value.remote_sha == alice_commit.sha

        result = bob.pull(with_force_pull())

        assert result.updated is True
        assert read(bob, "alice.txt") == "from alice"
        assert read(bob, "bob.txt") is None
        assert bob.push().up_to_date is True

    def test_force_push_overwrites_remote(
        self, client_factory: ClientFactory, write: WriteFile, read: ReadFile
    ) -> None:
        alice = client_factory("alice")
        write(alice, "a.txt", "a")
        _ = alice.commit_all("first")
        _ = alice.push()
        bob = client_factory("bob")

        write(alice, "alice.txt", "from alice")
        _ = alice.commit_all("alice work")
        _ = alice.push()
        write(bob, "bob.txt", "from bob")
        bob_commit = bob.commit_all("bob work")

        result = bob.push(with_force_push())

        branch = bob.get_current_branch()
        assert result.updated_refs == {f"refs/heads/{branch}": bob_commit.sha}
        _ = alice.pull(with_force_pull())
        assert read(alice, "bob.txt") == "from bob"


class TestRefspecs:
    def test_push_refspec_and_delete(
        self, client_factory: ClientFactory, write: WriteFile
    ) -> None:
        alice = client_factory("alice")
        write(alice, "a.txt", "a")
        commit = alice.commit_all("first")
        alice.checkout_branch("feature")

        created = alice.push(with_refspecs("feature:topic"))

        assert created.updated_refs == {"refs/heads/topic": commit.sha}
        deleted = alice.push(with_refspecs(":topic"))
        assert deleted.updated_refs == {"refs/heads/topic": None}

    def test_prune_removes_other_remote_branches(
        self, client_factory: ClientFactory, write: WriteFile
    ) -> None:
        alice = client_factory("alice")
        write(alice, "a.txt", "a")
        _ = alice.commit_all("first")
        default = alice.get_current_branch()
        alice.checkout_branch("feature")
        _ = alice.push()

        result = alice.push(with_refspecs(default), with_prune())

        assert result.updated_refs == {"refs/heads/feature": None}

    def test_missing_refspec_source(
        self, client_factory: ClientFactory, write: WriteFile
    ) -> None:
        alice = client_factory("alice")
        write(alice, "a.txt", "a")
        _ = alice.commit_all("first")

        with pytest.raises(ReferenceNotFoundError):
            _ = alice.push(with_refspecs("nope"))


class TestMixedBackends:
    def test_memory_client_reads_disk_push(
        self,
        client_factory: ClientFactory,
        write: WriteFile,
        read: ReadFile,
        remote_url: str,
    ) -> None:
        alice = client_factory("alice")
        write(alice, "a.txt", "shared")
        _ = alice.commit_all("first")
        _ = alice.push()

        reader = new_git_client(
            with_path("mixed-reader"), with_mem(), with_remote_url(remote_url)
        )

        assert read(reader, "a.txt") == "shared"
