"""Configuration loading and validation package."""

from .loader import apply_settings, load_settings
from .models import ClockworkSettings

__all__ = ["ClockworkSettings", "apply_settings", "load_settings"]
