"""promcore: naming, label-set and collector contracts for a Prometheus-style client."""
from __future__ import annotations

from .metrics import Collector, Opts, OptsBuilder, Registry, build_fq_name, labels
from .utils.exceptions import MetricsError, RegistrationError, WiringError

__version__ = "0.1.0"

__all__ = [
    "Collector",
    "Opts",
    "OptsBuilder",
    "Registry",
    "build_fq_name",
    "labels",
    "MetricsError",
    "RegistrationError",
    "WiringError",
    "__version__",
]
