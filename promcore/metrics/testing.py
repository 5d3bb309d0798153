"""Testing helpers for default-registry isolation.

``isolated_default_registry()`` publishes a fresh ``Registry`` as the process
default for the duration of a ``with`` block and restores the previous one
afterwards, so tests using the ``*_default`` helpers never leak collectors
into each other.
"""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager

from . import _singleton as _anchor
from .registry import Registry, get_default_registry

__all__ = ["isolated_default_registry", "force_new_default_registry"]


@contextmanager
def isolated_default_registry(prefix: str | None = None,
                              labels: Mapping[str, str] | None = None) -> Iterator[Registry]:
    reg = Registry(prefix=prefix, labels=labels)
    previous = _anchor.swap_singleton(reg)
    try:
        yield reg
    finally:
        _anchor.swap_singleton(previous)


def force_new_default_registry() -> Registry:
    """Drop the current default registry and return a brand new one."""
    _anchor.clear_singleton()
    return get_default_registry()
