"""Runtime configuration for promcore (environment driven)."""
from __future__ import annotations

from .settings import MetricsSettings, load_settings

__all__ = ["MetricsSettings", "load_settings"]
