"""Tests for typed command execution helpers."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from expostack import exec as exec_util
from expostack.services import DependencyMissingError, ExternalCommandFailedError


class _FakeRunner:
    def __init__(self, result: exec_util.CommandResult | None) -> None:
        self.result = result
        self.requests: list[exec_util.CommandRequest] = []

    def run(self, request: exec_util.CommandRequest) -> exec_util.CommandResult | None:
        self.requests.append(request)
        return self.result


@pytest.mark.parametrize(("quiet", "stdout"), [(False, None), (True, subprocess.DEVNULL)])
def test_subprocess_command_runner_shares_terminal(
    monkeypatch: pytest.MonkeyPatch, quiet: bool, stdout: int | None
) -> None:
    calls: dict[str, object] = {}

    def fake_run(argv: list[str], **kwargs: object) -> subprocess.CompletedProcess[bytes]:
        calls["argv"] = argv
        calls.update(kwargs)
        return subprocess.CompletedProcess(argv, 3)

    monkeypatch.setattr(subprocess, "run", fake_run)

    result = exec_util.SubprocessCommandRunner().run(
        exec_util.CommandRequest(argv=("npm", "run", "format"), cwd=Path("/w/demo"), quiet=quiet)
    )

    assert result == exec_util.CommandResult(argv=("npm", "run", "format"), returncode=3)
    assert calls["argv"] == ["npm", "run", "format"]
    assert calls["cwd"] == Path("/w/demo")
    assert calls["stdout"] == stdout
    assert calls["check"] is False
    assert "capture_output" not in calls


def test_subprocess_command_runner_returns_none_when_missing_executable(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def fake_run(argv: list[str], **kwargs: object) -> subprocess.CompletedProcess[bytes]:
        del argv, kwargs
        raise FileNotFoundError

    monkeypatch.setattr(subprocess, "run", fake_run)

    result = exec_util.SubprocessCommandRunner().run(
        exec_util.CommandRequest(argv=("missing-cmd",))
    )

    assert result is None


def test_run_checked_returns_result_on_success() -> None:
    runner = _FakeRunner(exec_util.CommandResult(argv=("git", "init"), returncode=0))

    result = exec_util.run_checked(exec_util.CommandRequest(argv=("git", "init")), runner=runner)

    assert result.returncode == 0
    assert runner.requests[0].argv == ("git", "init")


def test_run_checked_raises_dependency_missing() -> None:
    with pytest.raises(DependencyMissingError) as exc_info:
        exec_util.run_checked(
            exec_util.CommandRequest(argv=("bunx", "prettier")), runner=_FakeRunner(None)
        )

    assert str(exc_info.value) == "missing required command: bunx"
    assert exc_info.value.code == "dependency_missing"
    assert exc_info.value.recovery_hint == "install bunx and retry"


def test_run_checked_raises_with_command_and_exit_code() -> None:
    runner = _FakeRunner(exec_util.CommandResult(argv=("npm", "install", "--silent"), returncode=1))

    with pytest.raises(ExternalCommandFailedError) as exc_info:
        exec_util.run_checked(
            exec_util.CommandRequest(argv=("npm", "install", "--silent"), cwd=Path("/w/demo")),
            runner=runner,
        )

    error = exc_info.value
    assert error.argv == ("npm", "install", "--silent")
    assert error.returncode == 1
    assert str(error) == "command failed: npm install --silent (in /w/demo) (exit 1)"


def test_run_inherited_builds_terminal_request() -> None:
    runner = _FakeRunner(exec_util.CommandResult(argv=("npx", "expo"), returncode=0))

    exec_util.run_inherited(["npx", "expo"], Path("/w/demo"), quiet=True, runner=runner)
    exec_util.run_inherited(["git", "add", "."], Path("/w/demo"), runner=runner)

    quiet, loud = runner.requests
    assert quiet == exec_util.CommandRequest(argv=("npx", "expo"), cwd=Path("/w/demo"), quiet=True)
    assert loud.quiet is False
