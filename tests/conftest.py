# ruff: noqa: E402

import sys
from pathlib import Path

import pytest
from _pytest.doctest import DoctestModule

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import expostack.io as io
import expostack.log as expostack_log

DOCTEST_MODULES = {
    ROOT / "src" / "expostack" / "__init__.py",
    ROOT / "src" / "expostack" / "config.py",
    ROOT / "src" / "expostack" / "exec.py",
    ROOT / "src" / "expostack" / "guidance.py",
    ROOT / "src" / "expostack" / "models.py",
    ROOT / "src" / "expostack" / "package_managers.py",
    ROOT / "src" / "expostack" / "paths.py",
}


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("EXPOSTACK_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.delenv("EXPOSTACK_LOG_LEVEL", raising=False)
    monkeypatch.delenv("npm_config_user_agent", raising=False)
    monkeypatch.setattr(io, "interactive", lambda: False)

    def fail_prompt(text: str, default: str | None = None) -> str | None:
        raise AssertionError("prompted unexpectedly")

    monkeypatch.setattr(io, "prompt", fail_prompt)
    monkeypatch.setattr(expostack_log, "_configured_level", None)
    monkeypatch.setattr(expostack_log, "_no_color_override", None)


def pytest_collect_file(
    parent: pytest.Collector, file_path: Path
) -> DoctestModule | None:
    path = file_path if isinstance(file_path, Path) else Path(str(file_path))
    if path in DOCTEST_MODULES:
        return DoctestModule.from_parent(parent, path=path)
    return None
