"""Package manager detection and command phrasing."""

from __future__ import annotations

import os
from collections.abc import Mapping

from .models import PACKAGE_MANAGER_VALUES, CliResults, CommandOptions, PackageManager

DEFAULT_PACKAGE_MANAGER: PackageManager = "npm"
USER_AGENT_ENV = "npm_config_user_agent"

_RUNNERS: dict[str, tuple[str, ...]] = {
    "npm": ("npx",),
    "yarn": ("npx",),
    "pnpm": ("pnpm", "dlx"),
    "bun": ("bunx",),
}


def explicit_package_manager(
    results: CliResults, options: CommandOptions | None = None
) -> PackageManager | None:
    """Return the manager the user asked for, or ``None`` when detection is needed.

    An ``--npm``-style option wins over ``flags.package_manager``.

    Example:
        >>> from expostack.models import CliFlags
        >>> results = CliResults(project_name="x", flags=CliFlags(package_manager="yarn"))
        >>> explicit_package_manager(results, CommandOptions(bun=True))
        'bun'
    """
    if options is not None:
        for name in PACKAGE_MANAGER_VALUES:
            if getattr(options, name, False):
                return name
    return results.flags.package_manager


def _from_user_agent(user_agent: str) -> PackageManager:
    for name in ("yarn", "pnpm", "bun"):
        if user_agent.startswith(name):
            return name
    return DEFAULT_PACKAGE_MANAGER


def detect_package_manager(
    results: CliResults,
    options: CommandOptions | None = None,
    environ: Mapping[str, str] | None = None,
) -> PackageManager:
    """Pick the package manager for a generated project.

    Args:
        results: Generation choices; ``flags.package_manager`` is an override.
        options: Raw CLI options carrying ``--npm``-style shortcuts.
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        The package manager name.

    Example:
        >>> detect_package_manager(CliResults(project_name="x"), environ={})
        'npm'
        >>> detect_package_manager(
        ...     CliResults(project_name="x"),
        ...     environ={"npm_config_user_agent": "pnpm/9.1.0 npm/? node/v20"},
        ... )
        'pnpm'
    """
    override = explicit_package_manager(results, options)
    if override:
        return override
    env = os.environ if environ is None else environ
    user_agent = (env.get(USER_AGENT_ENV) or "").strip()
    if user_agent:
        return _from_user_agent(user_agent)
    return DEFAULT_PACKAGE_MANAGER


def runner_command(package_manager: str) -> tuple[str, ...]:
    """Return the zero-install runner prefix for a package manager.

    Example:
        >>> runner_command("pnpm")
        ('pnpm', 'dlx')
    """
    return _RUNNERS.get(package_manager, _RUNNERS[DEFAULT_PACKAGE_MANAGER])


def exec_command(package_manager: str) -> tuple[str, ...]:
    """Return the prefix that runs a binary installed in the project."""
    if package_manager == "npm":
        return ("npx",)
    return (package_manager,)


def install_command(package_manager: str) -> tuple[str, ...]:
    return (package_manager, "install")


def add_command(package_manager: str, *packages: str) -> tuple[str, ...]:
    """Return the command that adds packages to the project's dependencies.

    Example:
        >>> add_command("yarn", "expo@latest")
        ('yarn', 'add', 'expo@latest')
    """
    if package_manager == "npm":
        return ("npm", "install", *packages)
    return (package_manager, "add", *packages)


def run_script_command(package_manager: str, script: str) -> tuple[str, ...]:
    """Return the command that runs a ``package.json`` script.

    Example:
        >>> run_script_command("yarn", "ios")
        ('yarn', 'ios')
        >>> run_script_command("bun", "ios")
        ('bun', 'run', 'ios')
    """
    if package_manager == "yarn":
        return ("yarn", script)
    return (package_manager, "run", script)
