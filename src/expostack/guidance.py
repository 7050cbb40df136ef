"""Post-provisioning guidance: integration setup notes and next steps."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Literal

from . import log, package_managers
from .models import SelectedPackage

GuidanceKind = Literal["supabase", "firebase", "generic"]
LineStyle = Literal["success", "info", "highlight"]
GuidanceLine = tuple[LineStyle, str]

# Checked in order; the first present package wins.
GUIDED_INTEGRATIONS: tuple[GuidanceKind, ...] = ("supabase", "firebase")
PREBUILD_STYLING_PACKAGES = frozenset({"unistyles", "nativewindui"})

SPONSOR_MESSAGE = (
    "If you frequently use expostack, please consider sponsoring the project ❤️\n"
    "- https://github.com/sponsors/danstepanov"
)

_WHATS_NEXT = "\nSuccess! 🎉 Now, here's what's next:"
_ONCE_DONE = "Once you're done, run the following to get started: "

_TEMPLATES: dict[GuidanceKind, tuple[GuidanceLine, ...]] = {
    "supabase": (
        ("success", _WHATS_NEXT),
        ("info", ""),
        ("highlight", "Head over to https://database.new to create a new Supabase project."),
        ("info", ""),
        ("highlight", "Get the Project URL and anon key from the API settings:"),
        ("info", "1. Go to the API settings page in the Dashboard."),
        ("info", "2. Find your Project URL, anon, and service_role keys on this page."),
        ("info", "3. Copy these keys and paste them into your .env file."),
        ("info", "4. Optionally, follow one of these guides to get started with Supabase:"),
        ("highlight", "https://docs.expo.dev/guides/using-supabase/#next-steps"),
        ("info", ""),
        ("success", _ONCE_DONE),
        ("info", ""),
    ),
    "firebase": (
        ("success", _WHATS_NEXT),
        ("info", ""),
        (
            "highlight",
            "Head over to https://console.firebase.google.com/ to create a new Firebase project.",
        ),
        ("info", ""),
        ("highlight", "Get the API key and other unique identifiers:"),
        ("info", "1. Register a web app in your Firebase project:"),
        ("highlight", "https://firebase.google.com/docs/web/setup#register-app"),
        ("info", "2. Find your API key and other identifiers."),
        ("info", "3. Copy these keys and paste them into your .env file."),
        ("info", "4. Optionally, follow one of these guides to get started with Firebase:"),
        ("highlight", "https://docs.expo.dev/guides/using-firebase/#next-steps"),
        ("info", ""),
        ("success", _ONCE_DONE),
        ("info", ""),
    ),
    "generic": (
        ("success", "\nSuccess! 🎉 Now, just run the following to get started: "),
        ("info", ""),
    ),
}


def select_guidance(packages: Iterable[SelectedPackage]) -> GuidanceKind:
    """Choose the guidance template for the selected packages.

    Example:
        >>> select_guidance([SelectedPackage(name="firebase")])
        'firebase'
        >>> select_guidance([])
        'generic'
    """
    names = {package.name for package in packages}
    for kind in GUIDED_INTEGRATIONS:
        if kind in names:
            return kind
    return "generic"


def guidance_lines(kind: GuidanceKind) -> tuple[GuidanceLine, ...]:
    return _TEMPLATES[kind]


def requires_prebuild(styling: SelectedPackage | None) -> bool:
    return styling is not None and styling.name in PREBUILD_STYLING_PACKAGES


def next_steps(
    project_name: str,
    package_manager: str,
    *,
    install_skipped: bool,
    styling: SelectedPackage | None = None,
) -> list[str]:
    """Build the numbered command list shown after provisioning.

    Example:
        >>> next_steps("demo", "npm", install_skipped=True)
        ['1. cd demo', '2. npm install', '3. npm run ios']
    """
    commands = [f"cd {project_name}"]
    if install_skipped:
        commands.append(" ".join(package_managers.install_command(package_manager)))
    if requires_prebuild(styling):
        prebuild = (*package_managers.exec_command(package_manager), "expo", "prebuild", "--clean")
        commands.append(" ".join(prebuild))
    commands.append(" ".join(package_managers.run_script_command(package_manager, "ios")))
    return [f"{step}. {command}" for step, command in enumerate(commands, start=1)]


def emit_lines(lines: Sequence[GuidanceLine]) -> None:
    for style, text in lines:
        if style == "success":
            log.success(text)
        elif style == "highlight":
            log.highlight(text)
        else:
            log.info(text)
