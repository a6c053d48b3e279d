from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# Allow importing wp_env from repository root
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from wp_env.config import HostSnapshot  # noqa: E402


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def make_snapshot(home_dir: Path):
    def _make(variables: dict | None = None, platform: str = "linux") -> HostSnapshot:
        return HostSnapshot(variables=variables or {}, platform=platform, home_directory=home_dir)

    return _make


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def write_config(project_dir: Path):
    def _write(payload, name: str = ".wp-env.json") -> Path:
        path = project_dir / name
        text = payload if isinstance(payload, str) else json.dumps(payload)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
