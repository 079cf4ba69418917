"""YAML loader for the config subsystem.

``load_settings`` consumes one YAML file and validates it via models.py;
``apply_settings`` pushes the result into the process default timezone and
the format registry.

Example file::

    default_timezone: America/New_York
    log_level: INFO
    formats:
      iso: Y-m-d
      us_short: n/j/y g:ia
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from clockwork.core.errors import ConfigurationError
from clockwork.core.time_utils import set_default_timezone
from clockwork.formatting.registry import FormatRegistry, format_registry

from .models import ClockworkSettings

logger = logging.getLogger("clockwork.config")

_DEFAULT_CONFIG_PATH = Path("config") / "clockwork.yml"


def _read_yaml(path: Path) -> Mapping:
    """Read a YAML file and return a mapping (empty dict if file is blank)."""

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as fp:
        try:
            data = yaml.safe_load(fp) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Malformed YAML in {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"YAML root must be a mapping in {path}")
    return data


def load_settings(path: Path | str = _DEFAULT_CONFIG_PATH) -> ClockworkSettings:
    """Load and validate a clockwork settings file."""

    data = _read_yaml(Path(path))
    try:
        return ClockworkSettings.model_validate(data)
    except PydanticValidationError as exc:
        raise ConfigurationError(f"Invalid settings in {path}: {exc}") from exc


def apply_settings(settings: ClockworkSettings, registry: Optional[FormatRegistry] = None) -> None:
    """Make ``settings`` effective for the process."""

    target = registry or format_registry
    set_default_timezone(settings.default_timezone)
    for name, pattern in settings.formats.items():
        target.register(name, pattern)
    logger.info(
        "Applied clockwork settings",
        extra={
            "default_timezone": settings.default_timezone,
            "format_names": sorted(settings.formats),
        },
    )
