from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import Future
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field

from ... import __version__, assets, guidance, package_managers, scaffold
from ... import exec as exec_util
from ...models import CliResults, CommandOptions, PackageManager, SelectedPackage
from ...status import StatusIndicator
from ..base import BaseService

STEP_WAIT = "wait"
STEP_COPY_ASSETS = "copy-assets"
STEP_RESOLVE_MANAGER = "resolve-manager"
STEP_INSTALL = "install"
STEP_UPGRADE_EXPO = "upgrade-expo"
STEP_FIX_DEPENDENCIES = "fix-dependencies"
STEP_FORMAT = "format"
STEP_FORMAT_NO_INSTALL = "format-no-install"
STEP_GIT_INIT = "git-init"

INSTALL_PATH_STEPS = (STEP_INSTALL, STEP_UPGRADE_EXPO, STEP_FIX_DEPENDENCIES, STEP_FORMAT)
FORMAT_GLOB = "**/*.{json,js,jsx,ts,tsx}"
COMMIT_SUBJECT = "Initial commit"

RunCommand = Callable[..., object]
DetectPackageManager = Callable[[CliResults, CommandOptions], PackageManager]
EmitLines = Callable[[Sequence[guidance.GuidanceLine]], None]


def commit_body() -> str:
    return f"Generated by expostack {__version__}."


class ProvisionProjectRequest(BaseModel):
    """Inputs for provisioning a freshly written scaffold.

    Attributes:
        results: Generation choices (project name, flags, packages).
        options: Raw command-line options.
        styling: Selected styling package.
        base_dir: Directory containing the project directory.
        pending_writes: Scaffold writes still in flight.
    """

    results: CliResults
    options: CommandOptions = Field(default_factory=CommandOptions)
    styling: SelectedPackage | None = None
    base_dir: Path
    pending_writes: list[Future] = Field(default_factory=list)
    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def project_name(self) -> str:
        return self.results.project_name

    @property
    def project_dir(self) -> Path:
        return self.base_dir / self.results.project_name

    @property
    def skip_install(self) -> bool:
        return self.options.no_install or self.results.flags.no_install

    @property
    def skip_git(self) -> bool:
        return self.options.no_git or self.results.flags.no_git


@dataclass(frozen=True)
class ProvisionProjectOutcome:
    project_dir: Path
    package_manager: PackageManager
    steps: tuple[str, ...]
    guidance_kind: guidance.GuidanceKind
    next_steps: tuple[str, ...]


@dataclass(frozen=True)
class ProvisionProjectDependencies:
    """Collaborators used by the provisioning sequence."""

    status: StatusIndicator
    wait_for_writes: Callable[[Sequence[Future]], object] = scaffold.wait_for_writes
    copy_base_assets: Callable[[Path], object] = assets.copy_base_assets
    detect_package_manager: DetectPackageManager = package_managers.detect_package_manager
    run_command: RunCommand = exec_util.run_inherited
    emit_lines: EmitLines = guidance.emit_lines


class ProvisionProjectService(BaseService[ProvisionProjectRequest, ProvisionProjectOutcome]):
    """Install, format, commit and explain a generated project.

    Every step runs to completion before the next starts. A failing step
    raises and leaves the project as-is; the status indicator is not
    resolved and reporting is up to the caller.
    """

    def __init__(self, dependencies: ProvisionProjectDependencies) -> None:
        self._deps = dependencies

    def run(self, request: ProvisionProjectRequest) -> ProvisionProjectOutcome:
        return self(request)

    def _run(self, request: ProvisionProjectRequest) -> ProvisionProjectOutcome:
        status = self._deps.status
        steps: list[str] = []
        project_dir = request.project_dir

        status.start("Initializing your project...")
        self._deps.wait_for_writes(request.pending_writes)
        status.stop("Project initialized!")
        steps.append(STEP_WAIT)

        status.start("Copying base assets...")
        self._deps.copy_base_assets(project_dir)
        status.stop("Base assets copied!")
        steps.append(STEP_COPY_ASSETS)

        package_manager = package_managers.explicit_package_manager(
            request.results, request.options
        )
        if package_manager is None:
            package_manager = self._deps.detect_package_manager(request.results, request.options)
        steps.append(STEP_RESOLVE_MANAGER)

        if request.skip_install:
            steps.extend(self._format_without_install(request, package_manager))
        else:
            steps.extend(self._install(project_dir, package_manager))

        if not request.skip_git:
            status.start("Initializing git...")
            self._deps.run_command(["git", "init", "--quiet"], project_dir)
            self._deps.run_command(["git", "add", "."], project_dir)
            self._deps.run_command(
                ["git", "commit", "-m", COMMIT_SUBJECT, "-m", commit_body(), "--quiet"],
                project_dir,
            )
            status.stop("Git initialized!")
            steps.append(STEP_GIT_INIT)

        kind = guidance.select_guidance(request.results.packages)
        self._deps.emit_lines(guidance.guidance_lines(kind))
        lines = guidance.next_steps(
            request.project_name,
            package_manager,
            install_skipped=request.skip_install,
            styling=request.styling or request.results.styling_package(),
        )
        self._deps.emit_lines([("highlight", line) for line in lines])
        self._deps.emit_lines([("info", ""), ("info", guidance.SPONSOR_MESSAGE)])
        return ProvisionProjectOutcome(
            project_dir=project_dir,
            package_manager=package_manager,
            steps=tuple(steps),
            guidance_kind=kind,
            next_steps=tuple(lines),
        )

    def _install(self, project_dir: Path, package_manager: str) -> tuple[str, ...]:
        status = self._deps.status
        run = self._deps.run_command

        status.start(f"Installing dependencies using {package_manager}...")
        run([*package_managers.install_command(package_manager), "--silent"], project_dir)
        status.stop("Dependencies installed!")

        status.start("Updating Expo to latest version...")
        run(
            [*package_managers.add_command(package_manager, "expo@latest"), "--silent"],
            project_dir,
            quiet=True,
        )
        status.stop("Latest version of Expo installed!")

        status.start("Updating packages to expo compatible versions...")
        run(
            [*package_managers.exec_command(package_manager), "expo", "install", "--fix"],
            project_dir,
            quiet=True,
        )
        status.stop("Packages updated!")

        status.start("Cleaning up your project...")
        run(
            list(package_managers.run_script_command(package_manager, "format")),
            project_dir,
            quiet=True,
        )
        status.stop("Project files formatted!")
        return INSTALL_PATH_STEPS

    def _format_without_install(
        self, request: ProvisionProjectRequest, package_manager: str
    ) -> tuple[str, ...]:
        runner = package_managers.runner_command(package_manager)
        runner_text = " ".join(runner)
        self._deps.status.start(
            f"No installation found.\nCleaning up your project using {runner_text}..."
        )
        # --no-config: project-local prettier plugins are not installed yet.
        self._deps.run_command(
            [
                *runner,
                "prettier",
                f"{request.project_name}/{FORMAT_GLOB}",
                "--no-config",
                "--write",
            ],
            request.base_dir,
            quiet=True,
        )
        self._deps.status.stop("Project files formatted!")
        return (STEP_FORMAT_NO_INSTALL,)
