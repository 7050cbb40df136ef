"""Subprocess helpers for running external commands."""

import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from . import log
from .services.errors import DependencyMissingError, ExternalCommandFailedError


@dataclass(frozen=True)
class CommandRequest:
    """Typed command invocation request.

    Commands share the terminal; ``quiet`` discards their stdout.
    """

    argv: tuple[str, ...]
    cwd: Path | None = None
    quiet: bool = False


@dataclass(frozen=True)
class CommandResult:
    """Typed command execution result."""

    argv: tuple[str, ...]
    returncode: int


class CommandRunner(Protocol):
    """Runtime command-execution interface."""

    def run(self, request: CommandRequest) -> CommandResult | None: ...


class SubprocessCommandRunner:
    """Default command-runner adapter backed by subprocess."""

    def run(self, request: CommandRequest) -> CommandResult | None:
        try:
            completed = subprocess.run(
                list(request.argv),
                cwd=request.cwd,
                stdout=subprocess.DEVNULL if request.quiet else None,
                check=False,
            )
        except FileNotFoundError:
            return None
        return CommandResult(argv=request.argv, returncode=completed.returncode)


_DEFAULT_COMMAND_RUNNER: CommandRunner = SubprocessCommandRunner()


def command_text(argv: tuple[str, ...] | list[str]) -> str:
    """Render argv as a copy-pasteable shell command.

    Example:
        >>> command_text(("git", "commit", "-m", "Initial commit"))
        "git commit -m 'Initial commit'"
    """
    return shlex.join(list(argv))


def _missing_command_detail(request: CommandRequest) -> str:
    argv = request.argv
    if not argv:
        return "missing required command"
    return f"missing required command: {argv[0]}"


def _command_failure_detail(request: CommandRequest, result: CommandResult) -> str:
    where = f" (in {request.cwd})" if request.cwd is not None else ""
    return f"command failed: {command_text(request.argv)}{where} (exit {result.returncode})"


def run_checked(
    request: CommandRequest, *, runner: CommandRunner | None = None
) -> CommandResult:
    """Run a command and raise a service failure unless it exits cleanly.

    Args:
        request: Command to execute.
        runner: Optional runner override (tests inject fakes here).

    Returns:
        The successful ``CommandResult``.

    Raises:
        DependencyMissingError: The executable could not be found.
        ExternalCommandFailedError: The command exited non-zero.
    """
    log.debug(f"$ {command_text(request.argv)}")
    result = (runner or _DEFAULT_COMMAND_RUNNER).run(request)
    if result is None:
        raise DependencyMissingError(
            _missing_command_detail(request),
            recovery_hint=f"install {request.argv[0]} and retry" if request.argv else None,
        )
    if result.returncode != 0:
        raise ExternalCommandFailedError(
            _command_failure_detail(request, result),
            argv=request.argv,
            returncode=result.returncode,
        )
    return result


def run_inherited(
    cmd: list[str],
    cwd: Path | None = None,
    *,
    quiet: bool = False,
    runner: CommandRunner | None = None,
) -> CommandResult:
    """Run a command attached to the terminal, raising on failure.

    Args:
        cmd: Command and arguments to execute.
        cwd: Optional working directory.
        quiet: Discard stdout so only errors reach the terminal.
        runner: Optional runner override.

    Returns:
        The successful ``CommandResult``.
    """
    return run_checked(CommandRequest(argv=tuple(cmd), cwd=cwd, quiet=quiet), runner=runner)
