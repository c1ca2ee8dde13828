from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from gitvcs.client import (
    GitClient,
    create_bare_repo,
    new_git_client,
    with_mem,
    with_path,
    with_remote_url,
)

ClientFactory = Callable[[str], GitClient]
WriteFile = Callable[[GitClient, str, str], None]
ReadFile = Callable[[GitClient, str], str | None]


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def remote_url(tmp_path: Path) -> str:
    """Path of an empty bare repository acting as the shared remote."""
    remote = tmp_path / "remote.git"
    create_bare_repo(remote)
    return str(remote)


@pytest.fixture
def disk_client(repo_path: Path, author_env: tuple[str, str]) -> Iterator[GitClient]:
    with new_git_client(with_path(str(repo_path))) as client:
        yield client


@pytest.fixture
def mem_client(author_env: tuple[str, str]) -> GitClient:
    return new_git_client(with_path("mem-repo"), with_mem())


@pytest.fixture(params=["fs", "mem"])
def client_factory(
    request: pytest.FixtureRequest,
    tmp_path: Path,
    remote_url: str,
    author_env: tuple[str, str],
) -> ClientFactory:
    """Build clients of either backend attached to the shared remote."""
    backend: str = request.param

    def _create(name: str) -> GitClient:
        options = [with_remote_url(remote_url)]
        if backend == "mem":
            options += [with_path(f"{name}-{tmp_path.name}"), with_mem()]
        else:
            options.append(with_path(str(tmp_path / name)))
        return new_git_client(*options)

    return _create


def write_file(client: GitClient, path: str, content: str) -> None:
    """Write a working tree file for either backend."""
    if client.filesystem is not None:
        client.filesystem.write_text(path, content)
        return
    full_path = Path(client.path) / path
    full_path.parent.mkdir(parents=True, exist_ok=True)
    full_path.write_text(content)


def read_file(client: GitClient, path: str) -> str | None:
    """Read a working tree file for either backend, None if missing."""
    if client.filesystem is not None:
        if not client.filesystem.is_file(path):
            return None
        return client.filesystem.read_text(path)
    full_path = Path(client.path) / path
    if not full_path.is_file():
        return None
    return full_path.read_text()


@pytest.fixture
def write() -> WriteFile:
    return write_file


@pytest.fixture
def read() -> ReadFile:
    return read_file
