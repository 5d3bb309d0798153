#!/usr/bin/env python3
"""Build info collector.

Exposes a constant gauge:
  build_info{config_hash=...,git_commit=...,version=...} 1

Label values come from the constructor arguments, falling back to
PROMCORE_BUILD_VERSION / PROMCORE_BUILD_COMMIT / PROMCORE_BUILD_CONFIG_HASH
(with 'unknown' default). The labels are constant labels of the descriptor,
so two collectors reporting different builds can share one registry.
"""
from __future__ import annotations

import logging
from enum import Enum

from prometheus_client.metrics_core import GaugeMetricFamily
from prometheus_client.samples import Sample

from promcore.config import load_settings
from promcore.utils.exceptions import AlreadyRegisteredError

from .collector import Collector, Metric
from .descriptors import Desc
from .opts import Opts
from .registry import Registry, get_default_registry

logger = logging.getLogger(__name__)

__all__ = ["BuildInfoLabel", "BuildInfoCollector", "register_build_info"]


class BuildInfoLabel(str, Enum):
    version = "version"
    git_commit = "git_commit"
    config_hash = "config_hash"


class BuildInfoCollector(Collector, Metric):
    def __init__(self, version: str | None = None, git_commit: str | None = None,
                 config_hash: str | None = None, *, namespace: str = "") -> None:
        settings = load_settings()
        self._opts = (
            Opts.new("build_info", "Build information")
            .namespace(namespace)
            .const_label(BuildInfoLabel.version, version or settings.build_version)
            .const_label(BuildInfoLabel.git_commit, git_commit or settings.build_commit)
            .const_label(BuildInfoLabel.config_hash, config_hash or settings.build_config_hash)
            .build()
        )
        self._desc = self._opts.describe()

    @property
    def opts(self) -> Opts:
        return self._opts

    def desc(self) -> list[Desc]:
        return [self._desc]

    def metric(self) -> list[Sample]:
        return [Sample(self._desc.fq_name, self._desc.const_labels, 1.0)]

    def collect(self) -> list[GaugeMetricFamily]:
        pairs = self._desc.const_label_pairs
        family = GaugeMetricFamily(self._desc.fq_name, self._desc.help, labels=[p.name for p in pairs])
        family.add_metric([p.value for p in pairs], 1)
        return [family]

    def __repr__(self) -> str:
        return f"BuildInfoCollector({self._desc.const_labels!r})"


def register_build_info(registry: Registry | None = None, version: str | None = None,
                        git_commit: str | None = None, config_hash: str | None = None,
                        *, namespace: str = "") -> BuildInfoCollector:
    """Register a build info collector; re-registering the same build is a no-op.

    A different build (other label values) is registered alongside the first.
    """
    target = registry if registry is not None else get_default_registry()
    collector = BuildInfoCollector(version, git_commit, config_hash, namespace=namespace)
    try:
        collector.try_register(target)
        already_present = False
    except AlreadyRegisteredError:
        already_present = True
    logger.info(
        "metrics.build_info.registered",
        extra={
            "event": "metrics.build_info.registered",
            **collector.opts.const_labels,
            "already_present": already_present,
        },
    )
    return collector
