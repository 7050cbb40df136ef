"""Pydantic models describing a generation request."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

PACKAGE_MANAGER_VALUES = ("npm", "yarn", "pnpm", "bun")
PackageManager = Literal["npm", "yarn", "pnpm", "bun"]

PACKAGE_TYPE_VALUES = (
    "navigation",
    "styling",
    "authentication",
    "internationalization",
    "state-management",
)
PackageType = Literal[
    "navigation",
    "styling",
    "authentication",
    "internationalization",
    "state-management",
]

STYLING_PACKAGE_VALUES = (
    "stylesheet",
    "nativewind",
    "nativewindui",
    "restyle",
    "tamagui",
    "unistyles",
)
AUTHENTICATION_PACKAGE_VALUES = ("supabase", "firebase")
DEFAULT_STYLING = "stylesheet"


def _normalize_name(value: object) -> object:
    if isinstance(value, str):
        return value.strip().lower()
    return value


class SelectedPackage(BaseModel):
    """An optional package chosen for the generated project.

    Attributes:
        name: Package slug (e.g. ``supabase``).
        type: Package category.
        options: Free-form package options.

    Example:
        >>> SelectedPackage(name=" Supabase ", type="authentication").name
        'supabase'
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str
    type: PackageType | None = None
    options: dict[str, object] = Field(default_factory=dict)

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, value: object) -> object:
        return _normalize_name(value)


class CliFlags(BaseModel):
    """Effective generation flags after user defaults are applied.

    Attributes:
        no_install: Skip dependency installation.
        no_git: Skip repository initialization.
        package_manager: Explicit package manager override.
    """

    model_config = ConfigDict(extra="forbid")

    no_install: bool = False
    no_git: bool = False
    package_manager: PackageManager | None = None

    @field_validator("package_manager", mode="before")
    @classmethod
    def normalize_package_manager(cls, value: object) -> object:
        if isinstance(value, str):
            normalized = value.strip().lower()
            return normalized or None
        return value


class CommandOptions(BaseModel):
    """Raw options as typed on the command line.

    Either an option or a flag can disable a provisioning step.
    """

    no_install: bool = False
    no_git: bool = False
    npm: bool = False
    yarn: bool = False
    pnpm: bool = False
    bun: bool = False


class CliResults(BaseModel):
    """Everything the generator learned from the user.

    Example:
        >>> results = CliResults(project_name="demo")
        >>> results.flags.no_git
        False
        >>> results.has_package("supabase")
        False
    """

    project_name: str
    flags: CliFlags = Field(default_factory=CliFlags)
    packages: list[SelectedPackage] = Field(default_factory=list)

    @field_validator("project_name", mode="before")
    @classmethod
    def normalize_project_name(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    def has_package(self, name: str) -> bool:
        return any(package.name == name for package in self.packages)

    def styling_package(self) -> SelectedPackage:
        for package in self.packages:
            if package.type == "styling":
                return package
        return SelectedPackage(name=DEFAULT_STYLING, type="styling")
