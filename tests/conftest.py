"""Shared pytest fixtures for calcpad tests."""

from pathlib import Path

import pytest

from calcpad.core.config import CalcpadConfig


@pytest.fixture
def config_file(tmp_path: Path):
    """Return a writer that creates calcpad.toml in a temporary directory."""

    def write(content: str) -> Path:
        path = tmp_path / "calcpad.toml"
        path.write_text(content)
        return path

    return write


@pytest.fixture
def implicit_config() -> CalcpadConfig:
    """Return a configuration with implicit multiplication enabled."""
    return CalcpadConfig(implicit_multiplication=True)
