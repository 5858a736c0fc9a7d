"""
Calculator configuration models.

Configuration is loaded from the calcpad.toml [calculator] section.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from calcpad.core.errors import ConfigError
from calcpad.core.expression_lang.parser import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "calcpad.toml"


class CalcpadConfig(BaseModel):
    """Evaluation and session settings."""

    implicit_multiplication: bool = False
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, le=MAX_DEPTH_LIMIT)
    # Significant digits when printing results
    precision: int = Field(default=10, ge=1, le=17)
    history_size: int = Field(default=10, ge=1)
    max_expression_length: int = Field(default=1024, ge=1)


def find_config(start: Path) -> Path | None:
    """Return the calcpad.toml in ``start``, if there is one."""
    candidate = start / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    return None


def load_config(toml_path: Path | None) -> CalcpadConfig:
    """
    Load calculator configuration from calcpad.toml.

    Args:
        toml_path: Path to the file; None or a missing file gives defaults

    Returns:
        CalcpadConfig with values from file or defaults

    Raises:
        ConfigError: If the file cannot be read, is not valid TOML or has invalid values
    """
    if toml_path is None or not toml_path.exists():
        return CalcpadConfig()

    try:
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {toml_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {toml_path}: {e}") from e

    logger.debug("Loaded configuration from %s", toml_path)
    return _parse_config(data.get("calculator", {}), toml_path)


def _parse_config(data: dict[str, Any], source: Path) -> CalcpadConfig:
    """Parse the [calculator] table into CalcpadConfig."""
    try:
        return CalcpadConfig.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigError(f"Invalid configuration in {source}: {problems}") from e
