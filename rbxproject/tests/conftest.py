"""Global pytest configuration and fixtures."""

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from rbxproject.core.settings.settings import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch, tmp_path):
    """Isolate every test from cached settings and any .env in the working directory."""
    for name in ("RBXPROJECT_LOG_LEVEL", "RBXPROJECT_DEFAULT_SERVE_PORT", "RBXPROJECT_LOG_DIAGNOSTICS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def write_project(tmp_path) -> Callable[..., Path]:
    """Write a project document to disk and return its path."""

    def _write(document: Any, name: str = "default.project.json", folder: Path | None = None) -> Path:
        folder = folder or tmp_path
        folder.mkdir(parents=True, exist_ok=True)
        path = folder / name
        if isinstance(document, str):
            path.write_text(document, encoding="utf-8")
        else:
            path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_document() -> dict[str, Any]:
    """A project touching every node field."""
    return {
        "name": "Sample",
        "servePort": 8000,
        "servePlaceIds": [1818, 2929],
        "tree": {
            "$className": "DataModel",
            "ReplicatedStorage": {
                "$className": "ReplicatedStorage",
                "Shared": {
                    "$path": "src/shared",
                },
            },
            "Workspace": {
                "$className": "Workspace",
                "$ignoreUnknownInstances": False,
                "$properties": {
                    "Gravity": 196.2,
                    "StreamingEnabled": True,
                },
                "Baseplate": {
                    "$className": "Part",
                    "$properties": {
                        "Anchored": True,
                        "Size": [512, 20, 512],
                        "Color": {"Type": "Color3", "Value": [0.38, 0.38, 0.38]},
                    },
                },
            },
        },
    }
