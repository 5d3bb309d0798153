"""Collector and Metric capabilities.

Every metric-like object that a registry can scrape implements ``Collector``:

    desc()     -> descriptors of everything the collector may emit (stable)
    collect()  -> point-in-time prometheus_client metric families

Implementers must make ``desc()`` and ``collect()`` safe to call from several
threads while the metric is updated concurrently; this module adds no locking.

Registration helpers come in two flavours over one fallible core:

    try_register / try_unregister (+ _default)  -> raise RegistrationError subclasses
    register / unregister (+ _default)          -> fail fast with WiringError

Fail-fast variants are meant for start-up wiring where a failure is a bug.
With PROMCORE_ABORT_ON_WIRING_ERROR set they abort the process instead of
raising.
"""
from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TypeVar

from prometheus_client.metrics_core import Metric as MetricFamily
from prometheus_client.samples import Sample

from promcore.config import load_settings
from promcore.utils.exceptions import MetricsError, WiringError

from .descriptors import Desc
from .registry import get_default_registry

if TYPE_CHECKING:  # pragma: no cover
    from .registry import Registry

logger = logging.getLogger(__name__)

__all__ = ["Collector", "Metric"]

C = TypeVar("C", bound="Collector")


def _fail_fast(operation: str, collector: object, exc: MetricsError) -> WiringError:
    logger.critical(
        "metrics.wiring.failed op=%s collector=%r error=%s",
        operation,
        collector,
        exc,
        extra={
            "event": "metrics.wiring.failed",
            "operation": operation,
            "error_type": type(exc).__name__,
        },
    )
    if load_settings().abort_on_wiring_error:
        os.abort()
    return WiringError(operation, collector, exc)


class Collector(ABC):
    """Interface for anything exposing descriptors and metric families."""

    @abstractmethod
    def desc(self) -> list[Desc]:
        """Return descriptors for metrics."""

    @abstractmethod
    def collect(self) -> list[MetricFamily]:
        """Collect metrics."""

    def try_register(self: C, registry: Registry) -> C:
        """Register with ``registry``; return self or raise ``RegistrationError``."""
        registry.try_register(self)
        return self

    def register(self: C, registry: Registry) -> C:
        """Register with ``registry``; any failure is a ``WiringError``."""
        try:
            return self.try_register(registry)
        except MetricsError as exc:
            raise _fail_fast("register", self, exc) from exc

    def try_register_default(self: C) -> C:
        return self.try_register(get_default_registry())

    def register_default(self: C) -> C:
        try:
            return self.try_register(get_default_registry())
        except MetricsError as exc:
            raise _fail_fast("register_default", self, exc) from exc

    def try_unregister(self: C, registry: Registry) -> C:
        """Unregister from ``registry``; raise ``NotRegisteredError`` if unknown."""
        registry.try_unregister(self)
        return self

    def unregister(self: C, registry: Registry) -> C:
        try:
            return self.try_unregister(registry)
        except MetricsError as exc:
            raise _fail_fast("unregister", self, exc) from exc

    def try_unregister_default(self: C) -> C:
        return self.try_unregister(get_default_registry())

    def unregister_default(self: C) -> C:
        try:
            return self.try_unregister(get_default_registry())
        except MetricsError as exc:
            raise _fail_fast("unregister_default", self, exc) from exc


class Metric(ABC):
    """A single sample series with its metadata, ready for export."""

    @abstractmethod
    def metric(self) -> list[Sample]:
        """Return the samples of this series."""
