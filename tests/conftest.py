"""Pytest configuration and fixtures for aurvoid tests.

No test touches the network or spawns a real process: RPC calls go through
a mocked requests session and commands go through FakeRunner.
"""

import io
import sys
from pathlib import Path
from typing import Optional, Sequence

import pytest

from aurvoid import output
from aurvoid.config import VoidConfig
from aurvoid.runner import CommandResult


class FakeRunner:
    """Scripted CommandRunner that records every call.

    Each program gets a queue of return codes; an unscripted call succeeds.
    A return code of None simulates a program that could not be launched.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[str], Optional[Path]]] = []
        self._scripts: dict[str, list[Optional[int]]] = {}

    def script(self, program: str, *returncodes: Optional[int]) -> None:
        self._scripts.setdefault(program, []).extend(returncodes)

    def run(self, program: str, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        self.calls.append((program, list(args), cwd))
        queue = self._scripts.get(program)
        returncode = queue.pop(0) if queue else 0
        cmd = [program, *args]
        if returncode is None:
            return CommandResult.launch_failed(cmd, FileNotFoundError(2, "No such file or directory"))
        return CommandResult.exited(cmd, returncode)

    def calls_for(self, program: str) -> list[tuple[str, list[str], Optional[Path]]]:
        return [call for call in self.calls if call[0] == program]


@pytest.fixture(autouse=True)
def console_output():
    """Redirect aurvoid.output to an in-memory stream and reset its globals.

    Prevents cross-test contamination of the module-level timer, verbose
    flag and mirror file.
    """
    stream = io.StringIO()

    original_start_time = output._start_time
    original_output_stream = output._output_stream
    original_verbose = output._verbose
    original_output_file = output._output_file

    output._start_time = None
    output._output_stream = stream
    output._verbose = True
    output._output_file = None

    yield stream

    output._start_time = original_start_time
    output._output_stream = original_output_stream
    output._verbose = original_verbose
    output._output_file = original_output_file


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def config(tmp_path: Path) -> VoidConfig:
    """Config rooted in a per-test build directory."""
    return VoidConfig(api_root="https://aur.example.org", build_root=tmp_path / "aur-builds")


@pytest.fixture(autouse=True)
def _restore_stdio():  # noqa: PT004
    """Ensure stdout/stderr are always restored after each test."""
    yield

    if sys.stdout.closed:
        sys.stdout = sys.__stdout__
    if sys.stderr.closed:
        sys.stderr = sys.__stderr__
