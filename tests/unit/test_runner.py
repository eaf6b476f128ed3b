"""Tests for the subprocess-backed command runner."""

import subprocess
from pathlib import Path
from unittest.mock import patch

from aurvoid.runner import CommandResult, CommandRunner, FailureCause, SubprocessRunner


@patch("aurvoid.runner.subprocess.run")
def test_successful_command(mock_run):
    """A zero exit status is a success with no failure cause."""
    mock_run.return_value = subprocess.CompletedProcess(["git"], returncode=0)

    result = SubprocessRunner().run("git", ["clone", "https://aur.example.org/yay.git", "/tmp/yay"])

    assert result.success is True
    assert result.returncode == 0
    assert result.failure is None
    assert result.command == ("git", "clone", "https://aur.example.org/yay.git", "/tmp/yay")


@patch("aurvoid.runner.subprocess.run")
def test_stdio_is_inherited(mock_run):
    """The child gets the terminal: no capture, no stdin redirect, no timeout."""
    mock_run.return_value = subprocess.CompletedProcess(["makepkg"], returncode=0)

    SubprocessRunner().run("makepkg", ["-si"], cwd=Path("/tmp/yay"))

    mock_run.assert_called_once()
    call_args, call_kwargs = mock_run.call_args
    assert call_args[0] == ["makepkg", "-si"]
    assert call_kwargs["cwd"] == str(Path("/tmp/yay"))
    assert call_kwargs["check"] is False
    for key in ("stdin", "stdout", "stderr", "capture_output", "timeout"):
        assert key not in call_kwargs


@patch("aurvoid.runner.subprocess.run")
def test_no_cwd_passes_none(mock_run):
    mock_run.return_value = subprocess.CompletedProcess(["git"], returncode=0)

    SubprocessRunner().run("git", ["--version"])

    assert mock_run.call_args[1]["cwd"] is None


@patch("aurvoid.runner.subprocess.run")
def test_nonzero_exit_is_failure(mock_run):
    """A non-zero exit keeps the status and reports EXIT_STATUS."""
    mock_run.return_value = subprocess.CompletedProcess(["pacman"], returncode=1)

    result = SubprocessRunner().run("sudo", ["pacman", "-Rns", "yay"])

    assert result.success is False
    assert result.returncode == 1
    assert result.failure == FailureCause.EXIT_STATUS
    assert "status 1" in result.detail


@patch("aurvoid.runner.subprocess.run", side_effect=FileNotFoundError(2, "No such file or directory"))
def test_missing_binary_is_launch_failure(mock_run):
    """A missing program becomes a failed result instead of an exception."""
    result = SubprocessRunner().run("makepkg", ["-si"])

    assert result.success is False
    assert result.returncode is None
    assert result.failure == FailureCause.LAUNCH_ERROR
    assert "could not launch makepkg" in result.detail


@patch("aurvoid.runner.subprocess.run", side_effect=PermissionError(13, "Permission denied"))
def test_permission_denied_is_launch_failure(mock_run):
    result = SubprocessRunner().run("makepkg", ["-si"])

    assert result.failure == FailureCause.LAUNCH_ERROR
    assert "Permission denied" in result.detail


def test_exited_with_zero_is_ok():
    assert CommandResult.exited(["true"], 0) == CommandResult.ok(["true"])


def test_subprocess_runner_satisfies_protocol():
    assert isinstance(SubprocessRunner(), CommandRunner)
