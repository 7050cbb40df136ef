"""Path helpers for locating expostack configuration and bundled templates."""

import os
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path

from platformdirs import user_config_dir

EXPOSTACK_APP_NAME = "expostack"
CONFIG_DIR_ENV = "EXPOSTACK_CONFIG_DIR"
USER_CONFIG_FILENAME = "config.json"
TEMPLATES_DIRNAME = "templates"
BASE_TEMPLATE_DIRNAME = "base"
ASSETS_DIRNAME = "assets"


def config_dir() -> Path:
    """Return the expostack configuration directory.

    ``EXPOSTACK_CONFIG_DIR`` overrides the platform default.

    Example:
        >>> isinstance(config_dir(), Path)
        True
    """
    override = os.environ.get(CONFIG_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return Path(user_config_dir(EXPOSTACK_APP_NAME))


def user_config_path() -> Path:
    """Return the path to the user defaults file.

    Example:
        >>> user_config_path().name == USER_CONFIG_FILENAME
        True
    """
    return config_dir() / USER_CONFIG_FILENAME


def templates_root() -> Traversable:
    return resources.files("expostack").joinpath(TEMPLATES_DIRNAME)


def base_template_root() -> Traversable:
    return templates_root().joinpath(BASE_TEMPLATE_DIRNAME)


def assets_root() -> Traversable:
    return templates_root().joinpath(ASSETS_DIRNAME)
