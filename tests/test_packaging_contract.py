#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for package layering and version management contracts.
"""

from pathlib import Path

import pytest

from papercut_rpc import __version__ as public_version
from papercut_rpc._version import __version__ as internal_version


PROJECT_ROOT = Path(__file__).resolve().parents[1]
PYPROJECT_PATH = PROJECT_ROOT / "pyproject.toml"


def _load_pyproject() -> dict:
    try:
        import tomllib  # Python 3.11+
    except ModuleNotFoundError:  # pragma: no cover
        tomllib = pytest.importorskip("tomli")

    return tomllib.loads(PYPROJECT_PATH.read_text(encoding="utf-8"))


def test_version_is_single_sourced_via_version_module():
    pyproject = _load_pyproject()
    project = pyproject["project"]

    assert project.get("dynamic") == ["version"]
    assert (
        pyproject["tool"]["setuptools"]["dynamic"]["version"]["attr"]
        == "papercut_rpc._version.__version__"
    )
    assert public_version == internal_version


def test_bundled_description_is_shipped_as_package_data():
    pyproject = _load_pyproject()
    package_data = pyproject["tool"]["setuptools"]["package-data"]

    assert "*.json" in package_data["papercut_rpc.data"]
    assert (PROJECT_ROOT / "papercut_rpc" / "data" / "papercut_api.json").is_file()


def test_uv_default_groups_cover_dev_and_test():
    pyproject = _load_pyproject()
    groups = pyproject["dependency-groups"]
    default_groups = pyproject["tool"]["uv"]["default-groups"]

    assert "dev" in groups
    assert "test" in groups
    assert "dev" in default_groups
    assert "test" in default_groups


def test_makefile_uses_uv_for_sync_and_tests():
    content = (PROJECT_ROOT / "Makefile").read_text(encoding="utf-8")

    assert "uv sync" in content
    assert "uv run pytest -q" in content


def test_lazy_exports_resolve():
    import papercut_rpc

    assert papercut_rpc.PaperCut.__name__ == "PaperCut"
    assert papercut_rpc.ParameterValidationError.__name__ == "ParameterValidationError"
    with pytest.raises(AttributeError):
        papercut_rpc.NotAThing
