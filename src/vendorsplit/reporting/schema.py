from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any, cast

from vendorsplit.core.config_loader import load_toml


def _release_version() -> str:
    try:
        return version("vendorsplit")
    except PackageNotFoundError:
        pyproject = Path(__file__).resolve().parents[3] / "pyproject.toml"
        if pyproject.exists():
            project = load_toml(pyproject).get("project")
            if isinstance(project, dict):
                project_version = cast(dict[str, Any], project).get("version")
                if isinstance(project_version, str):
                    return project_version
        return "0.0.0"


SCHEMA_VERSION = _release_version()
