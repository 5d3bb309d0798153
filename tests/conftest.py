"""Pytest configuration for promcore.

Responsibilities:
1. Ensure project root on sys.path.
2. Reset the process-wide default registry around every test so the
   ``*_default`` helpers never leak collectors between tests.
"""
import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from promcore.metrics import _singleton  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_default_registry():  # type: ignore
    previous = _singleton.swap_singleton(None)
    yield
    _singleton.swap_singleton(previous)


@pytest.fixture()
def clean_env(monkeypatch):
    """Strip every PROMCORE_* variable so settings fall back to defaults."""
    for key in list(os.environ):
        if key.startswith('PROMCORE_'):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch
