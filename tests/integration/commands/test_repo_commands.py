"""Integration tests for repository lifecycle and history commands."""

from collections.abc import Callable
from pathlib import Path

import pytest

from gitvcs.cli._commands import ExitCode
from gitvcs.client import new_git_client, with_path


class TestInit:
    def test_creates_repository(
        self,
        cli_env: Path,
        repo_path: Path,
        capsys: pytest.CaptureFixture[str],
        gitvcs_cli_with_exit_code: Callable[..., int],
    ) -> None:
        code = gitvcs_cli_with_exit_code("--path", str(repo_path), "init")

        assert code == 0
        assert "Initialized repository" in capsys.readouterr().out
        assert (repo_path / ".git").is_dir()

    def test_creates_bare_repository(
        self,
        cli_env: Path,
        repo_path: Path,
        capsys: pytest.CaptureFixture[str],
        gitvcs_cli: Callable[..., None],
    ) -> None:
        gitvcs_cli("--path", str(repo_path), "--bare", "init")

        assert "Initialized bare repository" in capsys.readouterr().out
        assert (repo_path / "HEAD").is_file()

    def test_defaults_to_current_directory(
        self,
        cli_env: Path,
        gitvcs_cli: Callable[..., None],
    ) -> None:
        gitvcs_cli("init")

        assert (cli_env / ".git").is_dir()

    def test_missing_config_file(
        self,
        cli_env: Path,
        capsys: pytest.CaptureFixture[str],
        gitvcs_cli_with_exit_code: Callable[..., int],
    ) -> None:
        code = gitvcs_cli_with_exit_code("--config", "missing.toml", "init")

        assert code == ExitCode.LOAD_ERROR
        assert "missing.toml" in capsys.readouterr().err

    def test_broken_config_file(
        self,
        cli_env: Path,
        capsys: pytest.CaptureFixture[str],
        gitvcs_cli_with_exit_code: Callable[..., int],
    ) -> None:
        _ = (cli_env / "gitvcs.toml").write_text("[client\n")

        code = gitvcs_cli_with_exit_code("--config", "gitvcs.toml", "init")

        assert code == ExitCode.LOAD_ERROR
        assert "Failed to parse TOML file" in capsys.readouterr().err

    def test_config_file_supplies_path(
        self,
        cli_env: Path,
        gitvcs_cli_with_exit_code: Callable[..., int],
    ) -> None:
        _ = (cli_env / "gitvcs.toml").write_text('[client]\npath = "from-config"\n')

        code = gitvcs_cli_with_exit_code("--config", "gitvcs.toml", "init")

        assert code == 0
        assert (cli_env / "from-config" / ".git").is_dir()


class TestStatusAddCommit:
    def test_clean_status(
        self,
        cli_env: Path,
        capsys: pytest.CaptureFixture[str],
        gitvcs_cli: Callable[..., None],
    ) -> None:
        gitvcs_cli("status")

        assert "No uncommitted changes" in capsys.readouterr().out

    def test_untracked_then_staged(
        self,
        cli_env: Path,
        capsys: pytest.CaptureFixture[str],
        gitvcs_cli: Callable[..., None],
    ) -> None:
        gitvcs_cli("init")
        _ = (cli_env / "a.txt").write_text("a")
        _ = capsys.readouterr()

        gitvcs_cli("status")
        untracked = capsys.readouterr().out
        gitvcs_cli("add", "a.txt")
        added = capsys.readouterr().out
        gitvcs_cli("status")
        staged = capsys.readouterr().out

        assert "Untracked files:" in untracked
        assert "? a.txt" in untracked
        assert "Staged 1 file(s)" in added
        assert "Staged files:" in staged
        assert "+ a.txt" in staged

    def test_add_without_paths(
        self,
        cli_env: Path,
        capsys: pytest.CaptureFixture[str],
        gitvcs_cli_with_exit_code: Callable[..., int],
    ) -> None:
        code = gitvcs_cli_with_exit_code("add")

        assert code == ExitCode.VALIDATION_ERROR
        assert "No paths given" in capsys.readouterr().err

    def test_add_missing_path(
        self,
        cli_env: Path,
        gitvcs_cli_with_exit_code: Callable[..., int],
    ) -> None:
        code = gitvcs_cli_with_exit_code("add", "missing.txt")

        assert code == ExitCode.IO_ERROR

    def test_commit_staged(
        self,
        cli_env: Path,
        capsys: pytest.CaptureFixture[str],
        gitvcs_cli: Callable[..., None],
    ) -> None:
        _ = (cli_env / "a.txt").write_text("a")
        gitvcs_cli("add", "a.txt")
        _ = capsys.readouterr()

        gitvcs_cli("commit", "-m", "Add a")

        out = capsys.readouterr().out
        assert "Committed 1 file(s)" in out
        assert "SHA:" in out

    def test_commit_include_untracked(
        self,
        cli_env: Path,
        capsys: pytest.CaptureFixture[str],
        gitvcs_cli: Callable[..., None],
    ) -> None:
        _ = (cli_env / "a.txt").write_text("a")
        _ = (cli_env / "b.txt").write_text("b")

        gitvcs_cli("commit", "-m", "Add files", "--include-untracked")

        assert "Committed 2 file(s)" in capsys.readouterr().out

    def test_nothing_to_commit(
        self,
        cli_env: Path,
        capsys: pytest.CaptureFixture[str],
        gitvcs_cli_with_exit_code: Callable[..., int],
    ) -> None:
        code = gitvcs_cli_with_exit_code("commit", "-m", "empty")

        assert code == 0
        assert "Nothing to commit" in capsys.readouterr().out


class TestLog:
    def test_empty_history(
        self,
        cli_env: Path,
        capsys: pytest.CaptureFixture[str],
        gitvcs_cli: Callable[..., None],
    ) -> None:
        gitvcs_cli("log")

        assert "No commits yet" in capsys.readouterr().out

    def test_lists_newest_first_with_limit(
        self,
        cli_env: Path,
        capsys: pytest.CaptureFixture[str],
        gitvcs_cli: Callable[..., None],
    ) -> None:
        for i in range(3):
            _ = (cli_env / "a.txt").write_text(str(i))
            gitvcs_cli("commit", "-m", f"change {i}", "-u")
        _ = capsys.readouterr()

        gitvcs_cli("log", "-n", "2")

        out = capsys.readouterr().out
        assert "change 2" in out
        assert "change 1" in out
        assert "change 0" not in out
        assert out.index("change 2") < out.index("change 1")
        assert "Test User <test@example.com>" in out


class TestReset:
    def test_hard_reset_to_commit(
        self,
        cli_env: Path,
        capsys: pytest.CaptureFixture[str],
        gitvcs_cli: Callable[..., None],
    ) -> None:
        _ = (cli_env / "a.txt").write_text("v1")
        gitvcs_cli("commit", "-m", "first", "-u")
        _ = (cli_env / "a.txt").write_text("v2")
        gitvcs_cli("commit", "-m", "second", "-u")
        first = new_git_client(with_path(str(cli_env))).get_logs()[1].sha
        _ = capsys.readouterr()

        gitvcs_cli("reset", "--commit", first)

        out = capsys.readouterr().out
        assert "Reset (hard)" in out
        assert first[:8] in out
        assert (cli_env / "a.txt").read_text() == "v1"

    def test_reset_unknown_commit(
        self,
        cli_env: Path,
        gitvcs_cli_with_exit_code: Callable[..., int],
    ) -> None:
        _ = (cli_env / "a.txt").write_text("v1")
        _ = gitvcs_cli_with_exit_code("commit", "-m", "first", "-u")

        code = gitvcs_cli_with_exit_code("reset", "--commit", "f" * 40)

        assert code == ExitCode.NOT_FOUND


class TestDispose:
    def test_requires_force(
        self,
        cli_env: Path,
        repo_path: Path,
        capsys: pytest.CaptureFixture[str],
        gitvcs_cli_with_exit_code: Callable[..., int],
    ) -> None:
        _ = gitvcs_cli_with_exit_code("--path", str(repo_path), "init")
        _ = capsys.readouterr()

        code = gitvcs_cli_with_exit_code("--path", str(repo_path), "dispose")

        assert code == 1
        assert "--force" in capsys.readouterr().out
        assert repo_path.exists()

    def test_force_deletes(
        self,
        cli_env: Path,
        repo_path: Path,
        gitvcs_cli_with_exit_code: Callable[..., int],
    ) -> None:
        _ = gitvcs_cli_with_exit_code("--path", str(repo_path), "init")

        code = gitvcs_cli_with_exit_code(
            "--path", str(repo_path), "dispose", "--force"
        )

        assert code == 0
        assert not repo_path.exists()

    def test_missing_repository(
        self,
        cli_env: Path,
        repo_path: Path,
        gitvcs_cli_with_exit_code: Callable[..., int],
    ) -> None:
        code = gitvcs_cli_with_exit_code(
            "--path", str(repo_path), "dispose", "--force"
        )

        assert code == ExitCode.NOT_FOUND
