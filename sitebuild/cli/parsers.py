"""CLI argument parsers and validators."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import typer
import yaml

_INT_PATTERN = re.compile(r"^-?\d+$")
_FLOAT_PATTERN = re.compile(r"^-?\d+(?:\.\d+)?$")


def parse_render(value: str) -> tuple[Path, Path]:
    """Parse a render argument in format SOURCE=TARGET."""
    if "=" not in value:
        raise typer.BadParameter(f"Must be SOURCE=TARGET, got: {value!r}")
    source, target = value.split("=", 1)
    if not source or not target:
        raise typer.BadParameter(f"Must be SOURCE=TARGET, got: {value!r}")
    return Path(source), Path(target)


def coerce_value(value: str) -> bool | int | float | str:
    """Coerce a string value to its appropriate type.

    Args:
        value: String value to coerce

    Returns:
        Coerced value (bool, int, float, or str)
    """
    value_lower = value.lower()

    if value_lower in ("true", "false"):
        return value_lower == "true"

    if _INT_PATTERN.match(value):
        return int(value)

    if _FLOAT_PATTERN.match(value):
        return float(value)

    return value


def parse_assignment(value: str) -> tuple[str, Any]:
    """Parse a KEY=VALUE data override."""
    if "=" not in value:
        raise typer.BadParameter(f"Must be KEY=VALUE, got: {value!r}")
    key, raw = value.split("=", 1)
    if not key:
        raise typer.BadParameter(f"Empty key in {value!r}")
    return key, coerce_value(raw)


def load_data_file(path: Path) -> dict[str, Any]:
    """Load template data from a YAML or JSON file."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise typer.BadParameter(f"Cannot read data file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise typer.BadParameter(f"Invalid data file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise typer.BadParameter(f"Data file {path} must contain a mapping")
    return data
