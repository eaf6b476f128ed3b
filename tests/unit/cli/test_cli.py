"""Tests for the void command-line interface."""

from unittest.mock import patch

from aurvoid import output

import pytest

from aurvoid.cli import main
from aurvoid.commands import InstallReport, InstallStatus
from aurvoid.errors import BuildFailure, NetworkError, RemovalFailure
from aurvoid.packages.models import BuildAttempt, PackageRecord


def _run(argv):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


@patch("aurvoid.cli.install_package")
def test_install_success_exits_zero(mock_install):
    mock_install.return_value = InstallReport(query="yay", status=InstallStatus.INSTALLED)

    assert _run(["install", "yay"]) == 0
    assert mock_install.call_args[0][0] == "yay"


@patch("aurvoid.cli.install_package")
def test_unverified_install_exits_zero(mock_install):
    mock_install.return_value = InstallReport(query="yay", status=InstallStatus.INSTALLED_UNVERIFIED)

    assert _run(["install", "yay"]) == 0


@patch("aurvoid.cli.install_package")
def test_short_install_flag(mock_install):
    mock_install.return_value = InstallReport(query="yay", status=InstallStatus.INSTALLED)

    assert _run(["-S", "yay"]) == 0
    assert mock_install.call_args[0][0] == "yay"


@patch("aurvoid.cli.remove_package")
def test_short_remove_flag(mock_remove):
    assert _run(["-R", "yay"]) == 0
    mock_remove.assert_called_once_with("yay")


@patch("aurvoid.cli.install_package")
def test_not_found_prints_suggestions(mock_install, capsys):
    """A miss is reported with suggestions and is not a hard error."""
    mock_install.return_value = InstallReport(
        query="yya",
        status=InstallStatus.NOT_FOUND,
        suggestions=[
            PackageRecord(name="yya-bin", build_base="yya-bin", description="Prebuilt"),
            PackageRecord(name="python-yya", build_base="python-yya"),
        ],
    )

    assert _run(["install", "yya"]) == 0

    out = capsys.readouterr().out
    assert "Did you mean:" in out
    assert "1. yya-bin - Prebuilt" in out
    assert "2. python-yya - No description" in out


@patch("aurvoid.cli.install_package")
def test_not_found_without_suggestions(mock_install, capsys):
    mock_install.return_value = InstallReport(query="zzz", status=InstallStatus.NOT_FOUND)

    assert _run(["install", "zzz"]) == 0
    assert "No similar packages found." in capsys.readouterr().out


@patch("aurvoid.cli.install_package")
def test_build_failure_prints_guidance(mock_install, console_output):
    mock_install.side_effect = BuildFailure("Failed to build", attempt=BuildAttempt.RELAXED, guidance=["Then run: gpg --recv-keys <KEY_ID>"])

    assert _run(["install", "yay"]) == 1

    text = console_output.getvalue()
    assert "ERROR: Failed to build" in text
    assert "gpg --recv-keys" in text


@patch("aurvoid.cli.install_package", side_effect=NetworkError("AUR request failed"))
def test_network_error_exits_nonzero(mock_install, console_output):
    assert _run(["install", "yay"]) == 1
    assert "ERROR: AUR request failed" in console_output.getvalue()


@patch("aurvoid.cli.remove_package", side_effect=RemovalFailure("Failed to remove package yay", returncode=1))
def test_removal_failure_exits_nonzero(mock_remove):
    assert _run(["remove", "yay"]) == 1


@patch("aurvoid.cli.install_package", side_effect=KeyboardInterrupt)
def test_interrupt_exits_130(mock_install):
    assert _run(["install", "yay"]) == 130


def test_no_command_prints_usage_and_fails(capsys):
    assert _run([]) == 1
    assert "usage: void" in capsys.readouterr().out


@pytest.mark.parametrize("argv", [["install"], ["install", "a", "b"], ["frobnicate", "yay"], ["-X", "yay"]])
def test_bad_arguments_fail(argv):
    assert _run(argv) != 0


def test_version():
    assert _run(["--version"]) == 0


@patch("aurvoid.cli.install_package")
def test_log_file_mirrors_progress(mock_install, tmp_path, console_output):
    def fake_install(name, config):
        output.log(f"Installing: {name}")
        return InstallReport(query=name, status=InstallStatus.INSTALLED)

    mock_install.side_effect = fake_install
    log_path = tmp_path / "void.log"

    assert _run(["--log-file", str(log_path), "-S", "yay"]) == 0

    assert "Installing: yay" in log_path.read_text(encoding="utf-8")
    assert "Installing: yay" in console_output.getvalue()
    assert output._output_file is None


@patch("aurvoid.cli.install_package", side_effect=NetworkError("AUR request failed"))
def test_log_file_records_errors(mock_install, tmp_path):
    log_path = tmp_path / "void.log"
    log_path.write_text("previous run\n", encoding="utf-8")

    assert _run(["--log-file", str(log_path), "install", "yay"]) == 1

    text = log_path.read_text(encoding="utf-8")
    assert text.startswith("previous run\n")
    assert "ERROR: AUR request failed" in text


@patch("aurvoid.cli.install_package")
def test_unopenable_log_file_is_usage_error(mock_install, tmp_path):
    assert _run(["--log-file", str(tmp_path / "missing" / "void.log"), "install", "yay"]) == 2
    mock_install.assert_not_called()
