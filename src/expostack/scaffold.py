"""Bundled base template rendering and background file writes."""

from __future__ import annotations

import concurrent.futures
from collections.abc import Iterable, Iterator, Sequence
from importlib.resources.abc import Traversable
from pathlib import Path, PurePosixPath

from . import log, paths

PROJECT_NAME_TOKEN = "{{projectName}}"
# Dotfiles ship without the leading dot so packaging tools keep them.
_RENAMED_FILES = {"gitignore": ".gitignore"}

PendingWrite = concurrent.futures.Future[Path]


def _walk(node: Traversable, prefix: PurePosixPath) -> Iterator[tuple[PurePosixPath, Traversable]]:
    for child in sorted(node.iterdir(), key=lambda item: item.name):
        relative = prefix / child.name
        if child.is_dir():
            yield from _walk(child, relative)
        else:
            yield relative, child


def _target_path(relative: PurePosixPath) -> PurePosixPath:
    renamed = _RENAMED_FILES.get(relative.name)
    if renamed is None:
        return relative
    return relative.with_name(renamed)


def render_base_template(
    project_name: str, *, root: Traversable | None = None
) -> list[tuple[PurePosixPath, str]]:
    """Render the bundled base template for ``project_name``.

    Args:
        project_name: Name substituted for the ``{{projectName}}`` token.
        root: Template root override.

    Returns:
        ``(relative path, text)`` pairs in a stable order.
    """
    template_root = root or paths.base_template_root()
    rendered: list[tuple[PurePosixPath, str]] = []
    for relative, node in _walk(template_root, PurePosixPath()):
        text = node.read_text(encoding="utf-8")
        rendered.append((_target_path(relative), text.replace(PROJECT_NAME_TOKEN, project_name)))
    return rendered


def _write_file(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    log.trace(f"wrote {path}")
    return path


def write_files(
    executor: concurrent.futures.Executor,
    project_dir: Path,
    files: Iterable[tuple[PurePosixPath, str]],
) -> list[PendingWrite]:
    """Start one background write per file and return the pending futures.

    The caller must join the returned futures (see ``wait_for_writes``)
    before anything reads the project directory.
    """
    return [
        executor.submit(_write_file, project_dir.joinpath(*relative.parts), text)
        for relative, text in files
    ]


def wait_for_writes(pending: Sequence[PendingWrite]) -> list[Path]:
    """Block until every pending write finishes.

    Raises:
        Exception: The first failure among the writes, re-raised unchanged.
    """
    concurrent.futures.wait(pending)
    return [future.result() for future in pending]
