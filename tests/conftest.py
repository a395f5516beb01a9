#!/usr/bin/env python3
# CUI // SP-CTI
"""Shared pytest fixtures for the native-eject test suite.

Every fixture works inside tmp_path; nothing touches the real working
directory or the bundled templates.
"""

import json
import sys
from pathlib import Path

import pytest
from PIL import Image

# Ensure project root is on sys.path
BASE_DIR = Path(__file__).resolve().parent.parent
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from native_eject.settings import TEMPLATES_ENV_VAR, load_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _no_template_override(monkeypatch):
    """Tests always start from the bundled templates."""
    monkeypatch.delenv(TEMPLATES_ENV_VAR, raising=False)


@pytest.fixture
def settings():
    return load_settings()


@pytest.fixture
def project_root(tmp_path):
    root = tmp_path / "project"
    root.mkdir()
    return root


def make_png(path: Path, size=(256, 256), color=(200, 40, 40, 255)) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGBA", size, color).save(path)
    return path


@pytest.fixture
def icon_png(project_root):
    """A 256x256 icon at <project>/icon.png."""
    return make_png(project_root / "icon.png")


@pytest.fixture
def write_app_json(project_root):
    """Write app.json into the project root; returns its path."""
    def _write(data=None, raw=None):
        path = project_root / "app.json"
        if raw is not None:
            path.write_text(raw, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


def snapshot_tree(root: Path):
    """Relative paths of every file and directory under root."""
    return sorted(str(p.relative_to(root)) for p in root.rglob("*"))
