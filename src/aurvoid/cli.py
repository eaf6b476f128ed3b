"""
Command-line interface for aurvoid.

This module provides the `void` CLI tool, a minimalist AUR helper.
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, TextIO

from rich.console import Console
from rich.text import Text

from aurvoid import __version__
from aurvoid.commands import InstallReport, InstallStatus, install_package, remove_package
from aurvoid.config import VoidConfig
from aurvoid.errors import AurVoidError, BuildFailure
from aurvoid.output import log, log_error, set_output_file, set_verbose

# pacman-style short forms accepted in place of the subcommand name
_SHORT_COMMANDS = {"-S": "install", "-R": "remove"}
_OPTIONS_WITH_VALUE = {"--log-file"}


@dataclass
class PackageArgs:
    """Arguments shared by install and remove."""

    package: str
    verbose: bool = False


def print_suggestions(report: InstallReport, console: Optional[Console] = None) -> None:
    """Render the "did you mean" list for a package that was not found."""
    console = console if console is not None else Console(highlight=False)

    if not report.suggestions:
        console.print(Text("No similar packages found.", style="red"))
        return

    console.print(Text("Did you mean:", style="yellow"))
    for index, pkg in enumerate(report.suggestions, start=1):
        line = Text(f"{index}. ")
        line.append(pkg.name, style="green")
        line.append(" - ")
        line.append(pkg.description or "No description", style="dim")
        console.print(line)


def install_command(args: PackageArgs) -> int:
    """Install or sync a package from the AUR.

    Examples:
        void install yay-bin
        void -S yay-bin
    """
    report = install_package(args.package, VoidConfig.from_env())
    if report.status is InstallStatus.NOT_FOUND:
        print_suggestions(report)
    return 0


def remove_command(args: PackageArgs) -> int:
    """Remove an installed package with pacman.

    Examples:
        void remove yay-bin
        void -R yay-bin
    """
    remove_package(args.package)
    return 0


def _expand_short_commands(argv: Sequence[str]) -> list[str]:
    expanded = list(argv)
    index = 0
    while index < len(expanded):
        token = expanded[index]
        if token in _SHORT_COMMANDS:
            expanded[index] = _SHORT_COMMANDS[token]
            break
        if not token.startswith("-"):
            break
        # Skip the value of a separated top-level option
        index += 2 if token in _OPTIONS_WITH_VALUE else 1
    return expanded


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="void",
        description="A minimalist AUR helper",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"void {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        metavar="PATH",
        help="Also append progress output to PATH",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    install_parser = subparsers.add_parser(
        "install",
        help="Install a package (short form: -S)",
    )
    install_parser.add_argument("package", help="AUR package name")

    remove_parser = subparsers.add_parser(
        "remove",
        help="Remove a package (short form: -R)",
    )
    remove_parser.add_argument("package", help="Installed package name")

    return parser
def _open_log_file(parser: argparse.ArgumentParser, path: Optional[Path]) -> Optional[TextIO]:
    if path is None:
        return None
    try:
        return path.expanduser().open("a", encoding="utf-8")
    except OSError as e:
        parser.error(f"cannot open log file {path}: {e.strerror}")


def run_command(command: str, args: PackageArgs) -> int:
    """Run a subcommand and map its failures to an exit code."""
    try:
        if command == "install":
            return install_command(args)
        return remove_command(args)

    except BuildFailure as e:
        log_error(str(e))
        for line in e.guidance:
            log(line)
        return 1

    except AurVoidError as e:
        log_error(str(e))
        return 1

    except KeyboardInterrupt:
        log_error("Interrupted")
        return 130  # Standard exit code for SIGINT


def main(argv: Optional[Sequence[str]] = None) -> None:
    """void - A minimalist AUR helper."""
    parser = build_parser()
    parsed_args = parser.parse_args(_expand_short_commands(sys.argv[1:] if argv is None else argv))

    # If no command specified, show help
    if not parsed_args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if parsed_args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    set_verbose(parsed_args.verbose)

    args = PackageArgs(package=parsed_args.package, verbose=parsed_args.verbose)

    log_file = _open_log_file(parser, parsed_args.log_file)
    set_output_file(log_file)
    try:
        exit_code = run_command(parsed_args.command, args)
    finally:
        set_output_file(None)
        if log_file is not None:
            log_file.close()

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
