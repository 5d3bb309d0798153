"""Environment flag helpers.

Consolidates the common pattern of interpreting environment variables as boolean
feature flags using the canonical truthy set {"1","true","yes","on"} (case-insensitive).

Usage examples:
    from promcore.utils.env_flags import is_truthy_env
    if is_truthy_env('PROMCORE_LOG_REGISTRATIONS'):
        ...
"""
from __future__ import annotations

import os

TRUTHY_SET: set[str] = {"1","true","yes","on"}

def is_truthy(value: str | None) -> bool:
    if not value:
        return False
    return value.strip().lower() in TRUTHY_SET

def is_truthy_env(name: str, default: str | None = None) -> bool:
    return is_truthy(os.getenv(name, default or ''))

def env_str(name: str, default: str | None = None) -> str | None:
    """Return stripped value of ``name`` or ``default`` when unset/blank."""
    val = os.getenv(name)
    if val is None:
        return default
    val = val.strip()
    return val or default

__all__ = [
    'TRUTHY_SET',
    'is_truthy',
    'is_truthy_env',
    'env_str',
]
