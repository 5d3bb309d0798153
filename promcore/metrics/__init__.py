"""Metrics package public interface.

Stable import surfaces:
    from promcore.metrics import Opts, labels, Collector, Registry
    from promcore.metrics.registry import get_default_registry
    from promcore.metrics.testing import isolated_default_registry
"""
from __future__ import annotations

from .build_info import BuildInfoCollector, register_build_info
from .collector import Collector, Metric
from .descriptors import Desc, Describer
from .exposition import CONTENT_TYPE_LATEST, render_text
from .label_pair import LabelPair, label_pairs_from
from .labels import Labels, Labels0, Labels1, Labels2, Labels3, Labels4, coerce_labels, labels, labels_for_arity
from .naming import SEPARATOR_BYTE, build_fq_name, is_valid_label_name, is_valid_metric_name
from .opts import Opts, OptsBuilder, as_opts
from .registry import (
    Registry,
    clear_default_registry,
    gather,
    get_default_registry,
    set_default_registry,
    try_register,
    try_unregister,
)

__all__ = [
    "BuildInfoCollector",
    "register_build_info",
    "Collector",
    "Metric",
    "Desc",
    "Describer",
    "CONTENT_TYPE_LATEST",
    "render_text",
    "LabelPair",
    "label_pairs_from",
    "Labels",
    "Labels0",
    "Labels1",
    "Labels2",
    "Labels3",
    "Labels4",
    "coerce_labels",
    "labels",
    "labels_for_arity",
    "SEPARATOR_BYTE",
    "build_fq_name",
    "is_valid_label_name",
    "is_valid_metric_name",
    "Opts",
    "OptsBuilder",
    "as_opts",
    "Registry",
    "clear_default_registry",
    "gather",
    "get_default_registry",
    "set_default_registry",
    "try_register",
    "try_unregister",
]
