"""Command-line entry point for generating and provisioning an Expo project."""

from __future__ import annotations

import concurrent.futures
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from . import __version__, config, io, scaffold
from . import log as expostack_log
from .models import (
    PACKAGE_MANAGER_VALUES,
    STYLING_PACKAGE_VALUES,
    CliResults,
    CommandOptions,
    SelectedPackage,
)
from .services import ServiceFailure
from .services.provision import (
    ProvisionProjectDependencies,
    ProvisionProjectRequest,
    ProvisionProjectService,
)
from .status import Spinner

DEFAULT_PROJECT_NAME = "my-expo-app"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    help="Generate an Expo starter project, install it and commit it.",
)


def _choice_callback(name: str, values: tuple[str, ...]):
    def validate(value: str | None) -> str | None:
        if value is None:
            return None
        normalized = value.strip().lower()
        if normalized not in values:
            raise typer.BadParameter(f"expected one of: {', '.join(values)}", param_hint=name)
        return normalized

    return validate


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"expostack {__version__}")
        raise typer.Exit()


def _resolve_project_name(value: str | None) -> str:
    if value and value.strip():
        return value.strip()
    if io.interactive():
        answer = io.prompt("What is the name of your project?", default=DEFAULT_PROJECT_NAME)
        if answer is None:
            expostack_log.error("aborted")
            raise typer.Exit(code=1)
        return answer
    return DEFAULT_PROJECT_NAME


def _selected_packages(styling: str, supabase: bool, firebase: bool) -> list[SelectedPackage]:
    packages = [SelectedPackage(name=styling, type="styling")]
    if supabase:
        packages.append(SelectedPackage(name="supabase", type="authentication"))
    if firebase:
        packages.append(SelectedPackage(name="firebase", type="authentication"))
    return packages


def _fail(message: str, *, hint: str | None = None) -> NoReturn:
    expostack_log.error(f"error: {message}")
    if hint:
        expostack_log.info(hint)
    raise typer.Exit(code=1)


@app.command()
def create(
    project_name: Annotated[
        str | None, typer.Argument(help="Directory name for the new project.")
    ] = None,
    no_install: Annotated[
        bool, typer.Option("--no-install", help="Skip installing dependencies.")
    ] = False,
    no_git: Annotated[
        bool, typer.Option("--no-git", help="Skip git initialization.")
    ] = False,
    package_manager: Annotated[
        str | None,
        typer.Option(
            "--package-manager",
            help=f"Package manager to use ({', '.join(PACKAGE_MANAGER_VALUES)}).",
            callback=_choice_callback("--package-manager", PACKAGE_MANAGER_VALUES),
        ),
    ] = None,
    npm: Annotated[bool, typer.Option("--npm", help="Use npm.")] = False,
    yarn: Annotated[bool, typer.Option("--yarn", help="Use yarn.")] = False,
    pnpm: Annotated[bool, typer.Option("--pnpm", help="Use pnpm.")] = False,
    bun: Annotated[bool, typer.Option("--bun", help="Use bun.")] = False,
    styling: Annotated[
        str | None,
        typer.Option(
            "--styling",
            help=f"Styling package ({', '.join(STYLING_PACKAGE_VALUES)}).",
            callback=_choice_callback("--styling", STYLING_PACKAGE_VALUES),
        ),
    ] = None,
    supabase: Annotated[
        bool, typer.Option("--supabase", help="Add Supabase authentication.")
    ] = False,
    firebase: Annotated[
        bool, typer.Option("--firebase", help="Add Firebase authentication.")
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help=f"Log level ({', '.join(expostack_log.LOG_LEVEL_NAMES)}).",
            callback=_choice_callback("--log-level", expostack_log.LOG_LEVEL_NAMES),
        ),
    ] = None,
    no_color: Annotated[
        bool, typer.Option("--no-color", help="Disable colorized output.")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version", callback=_version_callback, is_eager=True, help="Show version."
        ),
    ] = False,
) -> None:
    """Generate a new Expo project in PROJECT_NAME and provision it."""
    del version
    if no_color:
        expostack_log.set_no_color(True)
    try:
        user_config = config.load_user_config()
    except config.ConfigError as exc:
        _fail(str(exc))
    level = log_level or user_config.log_level
    if level:
        expostack_log.set_level(level)

    if supabase and firebase:
        _fail("choose either --supabase or --firebase, not both")
    shortcuts = [
        name
        for name, chosen in (("npm", npm), ("yarn", yarn), ("pnpm", pnpm), ("bun", bun))
        if chosen
    ]
    if len(shortcuts) > 1:
        _fail("conflicting package manager options: " + ", ".join(f"--{s}" for s in shortcuts))

    name = _resolve_project_name(project_name)
    base_dir = Path.cwd()
    project_dir = base_dir / name
    if project_dir.exists() and (not project_dir.is_dir() or any(project_dir.iterdir())):
        _fail(
            f"{project_dir} already exists and is not empty",
            hint="Choose a different project name or remove the directory.",
        )

    options = CommandOptions(
        no_install=no_install,
        no_git=no_git,
        npm=npm,
        yarn=yarn,
        pnpm=pnpm,
        bun=bun,
    )
    override = package_manager or (shortcuts[0] if shortcuts else None)
    results = CliResults(
        project_name=name,
        flags=config.resolve_flags(user_config, options, package_manager=override),
        packages=_selected_packages(styling or user_config.styling, supabase, firebase),
    )
    expostack_log.debug(f"generating {name} in {base_dir}")

    spinner = Spinner()
    service = ProvisionProjectService(ProvisionProjectDependencies(status=spinner))
    with concurrent.futures.ThreadPoolExecutor(max_workers=8) as executor:
        pending = scaffold.write_files(
            executor, project_dir, scaffold.render_base_template(name)
        )
        try:
            service.run(
                ProvisionProjectRequest(
                    results=results,
                    options=options,
                    styling=results.styling_package(),
                    base_dir=base_dir,
                    pending_writes=pending,
                )
            )
        except ServiceFailure as exc:
            spinner.abandon()
            _fail(str(exc), hint=exc.recovery_hint)
        except OSError as exc:
            spinner.abandon()
            _fail(str(exc))


def main() -> None:
    app()
