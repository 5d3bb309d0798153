"""Collector registry.

``Registry`` keeps the set of registered collectors and enforces the
descriptor contract:

- a descriptor id (fully-qualified name + constant label values) may be
  registered only once -> ``AlreadyRegisteredError``
- every descriptor sharing a fully-qualified name must carry the same help
  text and label names -> ``InconsistentDescriptorError``
- a collector may not report the same descriptor twice -> ``DuplicateDescriptorError``

Collectors are identified by the sum of their descriptor ids, so any object
reporting the same descriptors (a clone) unregisters the original. A failed
registration leaves the registry untouched; unregistering restores the exact
descriptor set that existed before registration.

``gather()`` (aliased as ``collect()``) merges the families of all collectors,
sorts samples by their canonical label pairs and families by name. Because it
exposes ``collect()``, a ``Registry`` can be handed straight to
``prometheus_client.generate_latest`` or registered into a
``prometheus_client.CollectorRegistry``.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import TYPE_CHECKING

from prometheus_client.metrics_core import Metric as MetricFamily
from prometheus_client.samples import Sample

from promcore.config import load_settings
from promcore.utils.exceptions import (
    AlreadyRegisteredError,
    DescriptorError,
    DuplicateDescriptorError,
    InconsistentDescriptorError,
    NotRegisteredError,
)

from . import _singleton as _anchor
from .descriptors import Desc
from .label_pair import LabelPair, label_pairs_from, label_pairs_key
from .naming import is_valid_label_name, is_valid_metric_name

if TYPE_CHECKING:  # pragma: no cover
    from .collector import Collector

logger = logging.getLogger(__name__)

__all__ = [
    "Registry",
    "get_default_registry",
    "set_default_registry",
    "clear_default_registry",
    "try_register",
    "try_unregister",
    "gather",
]

_MASK64 = (1 << 64) - 1
# Labels that distinguish samples *within* one series (bucket bound, quantile).
_SERIES_INTERNAL_LABELS = frozenset({"le", "quantile"})


def _collector_id(descs: list[Desc]) -> int:
    total = 0
    for d in descs:
        total = (total + d.id) & _MASK64
    return total


class Registry:
    """Thread-safe set of collectors with descriptor collision checks."""

    def __init__(self, prefix: str | None = None, labels: Mapping[str, str] | None = None) -> None:
        if prefix is not None and not is_valid_metric_name(prefix):
            raise DescriptorError(f"{prefix!r} is not a valid registry prefix")
        for name in labels or {}:
            if not is_valid_label_name(name):
                raise DescriptorError(f"{name!r} is not a valid label name")
        self._prefix = prefix
        self._labels = dict(labels or {})
        self._lock = threading.RLock()
        self._collectors_by_id: dict[int, Collector] = {}
        self._descs_by_collector: dict[int, list[Desc]] = {}
        self._desc_ids: set[int] = set()
        self._dim_hashes_by_name: dict[str, int] = {}
        self._name_refs: dict[str, int] = {}

    @property
    def prefix(self) -> str | None:
        return self._prefix

    @property
    def labels(self) -> dict[str, str]:
        return dict(self._labels)

    def try_register(self, collector: Collector) -> None:
        descs = list(collector.desc())
        with self._lock:
            new_ids: set[int] = set()
            new_dims: dict[str, int] = {}
            for desc in descs:
                if desc.id in self._desc_ids:
                    self._reject(collector, desc)
                    raise AlreadyRegisteredError(
                        f"descriptor {desc.fq_name!r} {desc.const_labels} already registered"
                    )
                known = self._dim_hashes_by_name.get(desc.fq_name, new_dims.get(desc.fq_name))
                if known is not None and known != desc.dim_hash:
                    self._reject(collector, desc)
                    raise InconsistentDescriptorError(
                        f"a previously registered descriptor with the same fully-qualified name "
                        f"as {desc.fq_name!r} has different label names or a different help string"
                    )
                if desc.id in new_ids:
                    self._reject(collector, desc)
                    raise DuplicateDescriptorError(
                        f"collector reported descriptor {desc.fq_name!r} more than once"
                    )
                new_ids.add(desc.id)
                new_dims[desc.fq_name] = desc.dim_hash
            cid = _collector_id(descs)
            if cid in self._collectors_by_id:
                raise AlreadyRegisteredError(f"collector {collector!r} already registered")

            self._collectors_by_id[cid] = collector
            self._descs_by_collector[cid] = descs
            self._desc_ids.update(new_ids)
            for desc in descs:
                self._dim_hashes_by_name[desc.fq_name] = desc.dim_hash
                self._name_refs[desc.fq_name] = self._name_refs.get(desc.fq_name, 0) + 1

        if load_settings().log_registrations:
            for desc in descs:
                logger.debug("metrics.registry.registered name=%s", desc.fq_name,
                             extra={"event": "metrics.registry.registered", "metric": desc.fq_name})

    def try_unregister(self, collector: Collector) -> None:
        descs = list(collector.desc())
        cid = _collector_id(descs)
        with self._lock:
            if cid not in self._collectors_by_id:
                raise NotRegisteredError(f"collector {collector!r} is not registered")
            del self._collectors_by_id[cid]
            registered = self._descs_by_collector.pop(cid)
            for desc in registered:
                self._desc_ids.discard(desc.id)
                remaining = self._name_refs.get(desc.fq_name, 0) - 1
                if remaining > 0:
                    self._name_refs[desc.fq_name] = remaining
                else:
                    self._name_refs.pop(desc.fq_name, None)
                    self._dim_hashes_by_name.pop(desc.fq_name, None)
        logger.debug("metrics.registry.unregistered descs=%d", len(registered),
                     extra={"event": "metrics.registry.unregistered", "desc_count": len(registered)})

    def _reject(self, collector: Collector, desc: Desc) -> None:
        logger.debug("metrics.registry.rejected name=%s collector=%r", desc.fq_name, collector,
                     extra={"event": "metrics.registry.rejected", "metric": desc.fq_name})

    def descriptors(self) -> list[Desc]:
        with self._lock:
            descs = [d for ds in self._descs_by_collector.values() for d in ds]
        return sorted(descs, key=lambda d: (d.fq_name, tuple(p.value for p in d.const_label_pairs)))

    def collectors(self) -> list[Collector]:
        with self._lock:
            return list(self._collectors_by_id.values())

    def __contains__(self, collector: object) -> bool:
        desc = getattr(collector, 'desc', None)
        if not callable(desc):
            return False
        cid = _collector_id(list(desc()))
        with self._lock:
            return cid in self._collectors_by_id

    def __len__(self) -> int:
        with self._lock:
            return len(self._collectors_by_id)

    def gather(self) -> list[MetricFamily]:
        families: dict[str, MetricFamily] = {}
        for collector in self.collectors():
            for mf in collector.collect():
                if not mf.samples:
                    continue
                existing = families.get(mf.name)
                if existing is None:
                    families[mf.name] = self._copy_family(mf)
                    continue
                if existing.type != mf.type or existing.documentation != mf.documentation:
                    logger.warning(
                        "metrics.gather.inconsistent_family name=%s type=%s/%s",
                        mf.name, existing.type, mf.type,
                        extra={"event": "metrics.gather.inconsistent_family", "metric": mf.name},
                    )
                    continue
                existing.samples.extend(self._rewrite_sample(s) for s in mf.samples)
        out = []
        for name in sorted(families):
            family = families[name]
            family.samples.sort(key=_series_sort_key)
            out.append(family)
        return out

    collect = gather

    def _copy_family(self, mf: MetricFamily) -> MetricFamily:
        name = f"{self._prefix}_{mf.name}" if self._prefix else mf.name
        family = MetricFamily(name, mf.documentation, mf.type, getattr(mf, 'unit', ''))
        family.samples = [self._rewrite_sample(s) for s in mf.samples]
        return family

    def _rewrite_sample(self, sample: Sample) -> Sample:
        merged = dict(self._labels)
        merged.update(sample.labels)
        ordered = {p.name: p.value for p in label_pairs_from(merged)}
        name = f"{self._prefix}_{sample.name}" if self._prefix else sample.name
        return sample._replace(name=name, labels=ordered)

    def __repr__(self) -> str:
        return f"Registry(prefix={self._prefix!r}, collectors={len(self)})"


def _series_sort_key(sample: Sample) -> tuple[int, tuple[str, ...]]:
    pairs = [LabelPair(k, v) for k, v in sample.labels.items() if k not in _SERIES_INTERNAL_LABELS]
    return len(pairs), label_pairs_key(pairs)


def _new_default_registry() -> Registry:
    return Registry(prefix=load_settings().default_registry_prefix)


def get_default_registry() -> Registry:
    return _anchor.create_if_absent(_new_default_registry)


def set_default_registry(reg: Registry) -> Registry:
    effective = _anchor.set_singleton(reg)
    if effective is not reg:
        logger.warning("metrics.registry.default_already_set existing=%r", effective,
                       extra={"event": "metrics.registry.default_already_set"})
    return effective


def clear_default_registry() -> None:
    _anchor.clear_singleton()


def try_register(collector: Collector) -> None:
    """Register ``collector`` with the default registry."""
    get_default_registry().try_register(collector)


def try_unregister(collector: Collector) -> None:
    """Unregister ``collector`` from the default registry."""
    get_default_registry().try_unregister(collector)


def gather() -> list[MetricFamily]:
    return get_default_registry().gather()
