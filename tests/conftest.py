"""Shared fixtures."""

from pathlib import Path

import pytest


@pytest.fixture
def images_dir(tmp_path: Path) -> Path:
    path = tmp_path / "images"
    path.mkdir()
    return path
