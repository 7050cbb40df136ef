"""Copy bundled static assets into a generated project."""

from __future__ import annotations

import shutil
from importlib.resources import as_file
from importlib.resources.abc import Traversable
from pathlib import Path

from . import log, paths


def copy_base_assets(project_dir: Path, *, source: Traversable | None = None) -> Path:
    """Copy the bundled ``assets`` directory into ``project_dir``.

    Existing files with the same names are overwritten; other files in the
    target are left alone. ``OSError`` propagates unchanged.

    Args:
        project_dir: Generated project root.
        source: Asset directory override.

    Returns:
        Path to the project's ``assets`` directory.
    """
    target = project_dir / paths.ASSETS_DIRNAME
    with as_file(source or paths.assets_root()) as asset_dir:
        shutil.copytree(asset_dir, target, dirs_exist_ok=True)
    log.trace(f"copied base assets to {target}")
    return target
