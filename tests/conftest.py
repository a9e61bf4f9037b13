"""Shared test fixtures for the splitconf test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from splitconf import Category, SplitConfiguration


@pytest.fixture
def root(tmp_path: Path) -> Path:
    """A configuration root that does not exist yet."""
    return tmp_path / "config"


@pytest.fixture
def config(root: Path) -> SplitConfiguration:
    """A split configuration with one property per category."""
    cfg = SplitConfiguration(root)
    cfg.define(Category.SETTING, int, "volume", 50)
    cfg.define(Category.THEME, str, "fontColor", "black")
    return cfg
