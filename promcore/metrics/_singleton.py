"""Central default-registry anchor.

Single source of truth for the process-wide default ``Registry``. The
``*_default`` collector helpers and the module-level ``try_register`` /
``gather`` functions all resolve the registry through here.

Initialization order: the first registry published wins. Call
``set_default_registry`` before anything touches the default registry to
install a custom one; afterwards it is a no-op returning the existing
instance. ``get_default_registry`` lazily creates one if none was published.
"""
from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .registry import Registry

REGISTRY_SINGLETON: Registry | None = None
_REGISTRY_LOCK = threading.Lock()


def set_singleton(reg: Registry) -> Registry:
    """Publish ``reg`` if nothing is published yet; return the effective registry."""
    global REGISTRY_SINGLETON  # noqa: PLW0603
    with _REGISTRY_LOCK:
        if REGISTRY_SINGLETON is None:
            REGISTRY_SINGLETON = reg
        return REGISTRY_SINGLETON


def create_if_absent(factory: Callable[[], Registry]) -> Registry:
    """Atomically create and publish the singleton using factory() if absent.

    The factory is only invoked inside the lock when the singleton is absent.
    """
    global REGISTRY_SINGLETON  # noqa: PLW0603
    existing = REGISTRY_SINGLETON
    if existing is not None:
        return existing
    with _REGISTRY_LOCK:
        if REGISTRY_SINGLETON is None:
            REGISTRY_SINGLETON = factory()
        return REGISTRY_SINGLETON


def swap_singleton(reg: Registry | None) -> Registry | None:
    """Replace the singleton unconditionally and return the previous one (tests)."""
    global REGISTRY_SINGLETON  # noqa: PLW0603
    with _REGISTRY_LOCK:
        previous = REGISTRY_SINGLETON
        REGISTRY_SINGLETON = reg
        return previous


def clear_singleton() -> None:
    """Forcefully clear the default registry; the next access creates a new one."""
    swap_singleton(None)


__all__ = ["set_singleton", "create_if_absent", "swap_singleton", "clear_singleton"]
