import subprocess
from unittest import mock

import pytest

from opscommons.git.errors import TargetDirectoryNotExistsError
from opscommons.git.repo import checkout, clone
from opscommons.shell.cmd import ShellCommandError


@pytest.fixture
def fake_run():
    with mock.patch("subprocess.run") as run:
        run.return_value = subprocess.CompletedProcess([], 0)
        yield run


def test_clone_missing_directory_raises(tmp_path):
    missing = str(tmp_path / "missing")
    with pytest.raises(TargetDirectoryNotExistsError) as exc_info:
        clone(None, "https://example.com/repo.git", missing)
    assert exc_info.value.dir_path == missing


def test_clone_file_is_not_a_directory(tmp_path):
    target = tmp_path / "file"
    target.write_text("x")
    with pytest.raises(TargetDirectoryNotExistsError):
        clone(None, "https://example.com/repo.git", str(target))


def test_clone_runs_git_clone(fake_run, tmp_path):
    clone(None, "https://example.com/repo.git", str(tmp_path))
    assert fake_run.call_args.args[0] == ["git", "clone", "https://example.com/repo.git", str(tmp_path)]


def test_checkout_runs_in_target_directory(fake_run, tmp_path):
    checkout(None, "v0.10.0", str(tmp_path))
    assert fake_run.call_args.args[0] == ["git", "checkout", "v0.10.0"]
    assert fake_run.call_args.kwargs["cwd"] == str(tmp_path)


def test_checkout_missing_directory_raises(tmp_path):
    with pytest.raises(TargetDirectoryNotExistsError):
        checkout(None, "main", str(tmp_path / "nope"))


def test_clone_failure_raises_shell_error(tmp_path):
    with mock.patch("subprocess.run") as run:
        run.return_value = subprocess.CompletedProcess([], 128)
        with pytest.raises(ShellCommandError) as exc_info:
            clone(None, "https://example.com/repo.git", str(tmp_path))
    assert exc_info.value.returncode == 128