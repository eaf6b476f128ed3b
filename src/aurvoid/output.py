"""
Centralized console output for aurvoid.

All user-facing progress lines are prefixed with the elapsed time since
program launch in MM:SS.cc format, so a slow API query or a long makepkg
run is visible at a glance.

Example output:
    00:00.01 Installing: yay-bin
    00:00.02 Removing existing directory: /home/me/aur-builds/yay-bin
    00:00.45 Cloning recipe...
    00:01.10       Done (0.65s)

Usage:
    from aurvoid.output import log, log_detail, log_warning

    log("Installing: yay-bin")
    log_detail("Workspace: /home/me/aur-builds/yay-bin")
    log_warning("First attempt failed, trying with PGP check skip...")
"""

import sys
import time
from types import TracebackType
from typing import Optional, TextIO

# Global state for the timer
_start_time: Optional[float] = None
_output_stream: TextIO = sys.stdout
_verbose: bool = True
_output_file: Optional[TextIO] = None


def init_timer() -> None:
    """
    Initialize the program timer.

    Called automatically on first log if not called explicitly.
    """
    global _start_time
    _start_time = time.time()


def set_verbose(verbose: bool) -> None:
    """
    Set verbose mode for logging.

    Args:
        verbose: If True, verbose_only messages are printed too.
    """
    global _verbose
    _verbose = verbose


def set_output_file(output_file: Optional[TextIO]) -> None:
    """
    Set a file to receive all log output (in addition to the stream).

    Args:
        output_file: File object to receive output, or None to disable file output
    """
    global _output_file
    _output_file = output_file


def get_elapsed() -> float:
    """Get elapsed time in seconds since timer initialization."""
    global _start_time
    if _start_time is None:
        init_timer()
    return time.time() - _start_time  # type: ignore


def format_timestamp() -> str:
    """Format the current elapsed time as MM:SS.cc."""
    elapsed = get_elapsed()
    minutes = int(elapsed // 60)
    seconds = elapsed % 60
    return f"{minutes:02d}:{seconds:05.2f}"


def _print(message: str, end: str = "\n") -> None:
    timestamp = format_timestamp()
    line = f"{timestamp} {message}{end}"
    _output_stream.write(line)
    _output_stream.flush()

    if _output_file is not None:
        _output_file.write(line)
        _output_file.flush()


def log(message: str, verbose_only: bool = False) -> None:
    """
    Log a message with timestamp.

    Args:
        message: Message to log
        verbose_only: If True, only print if verbose mode is enabled
    """
    if verbose_only and not _verbose:
        return
    _print(message)


def log_detail(message: str, indent: int = 6, verbose_only: bool = False) -> None:
    """
    Log an indented detail message.

    Args:
        message: Detail message
        indent: Number of spaces to indent (default 6)
        verbose_only: If True, only print if verbose mode is enabled
    """
    if verbose_only and not _verbose:
        return
    _print(f"{' ' * indent}{message}")


def log_error(message: str) -> None:
    """Log an error message."""
    _print(f"ERROR: {message}")


def log_warning(message: str) -> None:
    """Log a warning message."""
    _print(f"WARNING: {message}")


def log_success(message: str) -> None:
    """Log a success message."""
    _print(message)


class TimedLogger:
    """
    Context manager for logging a pipeline stage with its duration.

    Usage:
        with TimedLogger("Cloning recipe") as stage:
            stage.detail("https://aur.archlinux.org/yay-bin.git")
        # Logs "Done (x.xxs)" if the block did not raise
    """

    def __init__(self, operation: str, verbose_only: bool = False):
        self.operation = operation
        self.verbose_only = verbose_only
        self.start_time = 0.0
        self.failure: Optional[str] = None

    def __enter__(self) -> "TimedLogger":
        self.start_time = time.time()
        log(f"{self.operation}...", self.verbose_only)
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        del exc_val, exc_tb  # Unused
        elapsed = time.time() - self.start_time
        if exc_type is not None:
            return None
        if self.failure is not None:
            log_detail(f"Failed: {self.failure} ({elapsed:.2f}s)")
        else:
            log_detail(f"Done ({elapsed:.2f}s)", verbose_only=self.verbose_only)
        return None

    def detail(self, message: str) -> None:
        """Log a detail message within this stage."""
        log_detail(message, verbose_only=self.verbose_only)

    def fail(self, reason: str) -> None:
        """Mark the stage as failed; reported instead of "Done" on exit."""
        self.failure = reason
