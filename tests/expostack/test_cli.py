import json
import re
from pathlib import Path

import pytest
from typer.testing import CliRunner

import expostack.cli as cli
import expostack.paths as paths
from expostack import __version__
from expostack.services import ExternalCommandFailedError
from expostack.services.provision import ProvisionProjectDependencies

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def _strip_ansi(output: str) -> str:
    return ANSI_ESCAPE_RE.sub("", output)


@pytest.fixture
def commands(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> list[tuple[str, ...]]:
    recorded: list[tuple[str, ...]] = []

    def fake_run(cmd: list[str], cwd: Path | None = None, *, quiet: bool = False) -> None:
        recorded.append(tuple(cmd))

    monkeypatch.setattr(
        cli,
        "ProvisionProjectDependencies",
        lambda status: ProvisionProjectDependencies(status=status, run_command=fake_run),
    )
    monkeypatch.chdir(tmp_path)
    return recorded


def test_generates_project_and_prints_next_steps(
    commands: list[tuple[str, ...]], tmp_path: Path
) -> None:
    result = CliRunner().invoke(cli.app, ["demo", "--no-install", "--npm"], color=False)
    output = _strip_ansi(result.output)

    assert result.exit_code == 0, output
    project = tmp_path / "demo"
    assert json.loads((project / "package.json").read_text())["name"] == "demo"
    assert (project / ".gitignore").exists()
    assert (project / "assets" / "icon.png").exists()
    assert commands[0][:2] == ("npx", "prettier")
    assert commands[1] == ("git", "init", "--quiet")
    assert "Project initialized!" in output
    assert "1. cd demo" in output
    assert "2. npm install" in output
    assert "3. npm run ios" in output
    assert "sponsoring" in output


def test_install_path_uses_selected_manager(commands: list[tuple[str, ...]]) -> None:
    result = CliRunner().invoke(
        cli.app,
        ["demo", "--package-manager", "pnpm", "--no-git", "--styling", "unistyles", "--supabase"],
        color=False,
    )
    output = _strip_ansi(result.output)

    assert result.exit_code == 0, output
    assert commands == [
        ("pnpm", "install", "--silent"),
        ("pnpm", "add", "expo@latest", "--silent"),
        ("pnpm", "expo", "install", "--fix"),
        ("pnpm", "run", "format"),
    ]
    assert "https://database.new" in output
    assert "2. pnpm expo prebuild --clean" in output
    assert "3. pnpm run ios" in output


def test_user_config_defaults_apply(commands: list[tuple[str, ...]]) -> None:
    config_path = paths.user_config_path()
    config_path.parent.mkdir(parents=True)
    config_path.write_text(json.dumps({"package_manager": "bun", "no_git": True}))

    result = CliRunner().invoke(cli.app, ["demo", "--no-install"], color=False)

    assert result.exit_code == 0, result.output
    assert commands == [
        ("bunx", "prettier", "demo/**/*.{json,js,jsx,ts,tsx}", "--no-config", "--write")
    ]
    assert "3. bun run ios" in _strip_ansi(result.output)


def test_defaults_project_name_when_not_interactive(
    commands: list[tuple[str, ...]], tmp_path: Path
) -> None:
    result = CliRunner().invoke(cli.app, ["--no-install", "--no-git"], color=False)

    assert result.exit_code == 0, result.output
    assert (tmp_path / cli.DEFAULT_PROJECT_NAME / "package.json").exists()


def test_rejects_non_empty_target(commands: list[tuple[str, ...]], tmp_path: Path) -> None:
    (tmp_path / "demo").mkdir()
    (tmp_path / "demo" / "README.md").write_text("mine")

    result = CliRunner().invoke(cli.app, ["demo"], color=False)

    assert result.exit_code == 1
    assert "already exists" in _strip_ansi(result.output)
    assert commands == []


def test_rejects_target_that_is_a_file(commands: list[tuple[str, ...]], tmp_path: Path) -> None:
    (tmp_path / "demo").write_text("not a directory")

    result = CliRunner().invoke(cli.app, ["demo", "--no-install", "--no-git"], color=False)

    assert result.exit_code == 1
    assert "already exists" in _strip_ansi(result.output)
    assert not isinstance(result.exception, NotADirectoryError)
    assert commands == []


def test_rejects_conflicting_integrations(commands: list[tuple[str, ...]]) -> None:
    result = CliRunner().invoke(cli.app, ["demo", "--supabase", "--firebase"], color=False)

    assert result.exit_code == 1
    assert "--supabase or --firebase" in _strip_ansi(result.output)


def test_rejects_conflicting_package_manager_shortcuts(commands: list[tuple[str, ...]]) -> None:
    result = CliRunner().invoke(cli.app, ["demo", "--npm", "--bun"], color=False)

    assert result.exit_code == 1
    assert "--npm, --bun" in _strip_ansi(result.output)


def test_rejects_unknown_package_manager(commands: list[tuple[str, ...]]) -> None:
    result = CliRunner().invoke(cli.app, ["demo", "--package-manager", "cargo"], color=False)
    clean_output = _strip_ansi(result.output)

    assert result.exit_code != 0
    assert "--package-manager" in clean_output
    assert "expected one of" in clean_output.lower()


def test_invalid_user_config_is_reported(commands: list[tuple[str, ...]]) -> None:
    config_path = paths.user_config_path()
    config_path.parent.mkdir(parents=True)
    config_path.write_text("{broken")

    result = CliRunner().invoke(cli.app, ["demo"], color=False)

    assert result.exit_code == 1
    assert "invalid config" in _strip_ansi(result.output)


def test_unreadable_user_config_is_reported(commands: list[tuple[str, ...]]) -> None:
    paths.user_config_path().mkdir(parents=True)

    result = CliRunner().invoke(cli.app, ["demo"], color=False)

    assert result.exit_code == 1
    assert "invalid config" in _strip_ansi(result.output)
    assert commands == []


def test_command_failure_exits_non_zero(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    def failing_run(cmd: list[str], cwd: Path | None = None, *, quiet: bool = False) -> None:
        raise ExternalCommandFailedError("command failed: npm install --silent", argv=tuple(cmd))

    monkeypatch.setattr(
        cli,
        "ProvisionProjectDependencies",
        lambda status: ProvisionProjectDependencies(status=status, run_command=failing_run),
    )
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli.app, ["demo", "--npm"], color=False)
    output = _strip_ansi(result.output)

    assert result.exit_code == 1
    assert "error: command failed: npm install --silent" in output
    assert "Dependencies installed!" not in output
    assert (tmp_path / "demo" / "package.json").exists()


def test_log_level_flag_sets_runtime_level(
    commands: list[tuple[str, ...]], monkeypatch: pytest.MonkeyPatch
) -> None:
    levels: list[str | None] = []
    monkeypatch.setattr(cli.expostack_log, "set_level", levels.append)

    result = CliRunner().invoke(
        cli.app, ["demo", "--no-install", "--no-git", "--log-level", "debug"], color=False
    )

    assert result.exit_code == 0, result.output
    assert levels == ["debug"]


def test_version_flag() -> None:
    result = CliRunner().invoke(cli.app, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == f"expostack {__version__}"
