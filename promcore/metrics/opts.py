"""Options bundle for constructing metrics.

``Opts`` is the immutable record handed to a metric constructor; it is built
through ``OptsBuilder``:

    opts = (
        Opts.new("requests_total", "Handled requests")
        .namespace("api")
        .subsystem("http")
        .const_label("instance", "a")
        .variable_labels(labels("method", "code"))
        .build()
    )
    opts.fq_name()   # 'api_http_requests_total'

namespace, subsystem and name are the components of the fully-qualified name
(joined with "_"); only name is mandatory. help is mandatory too, and metrics
sharing a fully-qualified name must share their help string and label names.
Those rules are enforced by ``Desc.new`` / the registry, not here.

const labels attach fixed labels to every sample. ``Opts`` stores them as a
name-sorted tuple of ``LabelPair`` so the record stays copyable and picklable;
``Opts.const_labels`` is a read-only mapping view over that tuple. Most labels vary during the
lifetime of a process and belong in variable_labels (used by metric vectors);
constant labels cover values that never change for a process (e.g. build
revision) or let several collectors export the same fully-qualified name with
distinct constant label values.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from .descriptors import Desc
from .label_pair import LabelPair, label_pairs_from
from .labels import Labels, coerce_labels, label_text
from .naming import build_fq_name

__all__ = ["Opts", "OptsBuilder", "as_opts"]


def _const_pairs(value: Any) -> tuple[LabelPair, ...]:
    if isinstance(value, Mapping):
        items = value.items()
    else:
        items = ((p.name, p.value) if isinstance(p, LabelPair) else p for p in value or ())
    return tuple(label_pairs_from({label_text(k): str(v) for k, v in items}))


@dataclass(frozen=True)
class Opts:
    name: str
    help: str
    namespace: str = ""
    subsystem: str = ""
    const_label_pairs: tuple[LabelPair, ...] = ()
    variable_labels: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Snapshot inputs so later changes to caller-owned objects never leak in.
        object.__setattr__(self, 'const_label_pairs', _const_pairs(self.const_label_pairs))
        object.__setattr__(self, 'variable_labels', coerce_labels(self.variable_labels).to_owned())

    @classmethod
    def new(cls, name: str, help: str) -> OptsBuilder:
        return OptsBuilder(name, help)

    @classmethod
    def new_with_label(cls, name: str, help: str, variable_labels: Any) -> OptsBuilder:
        return OptsBuilder(name, help, variable_labels)

    @classmethod
    def from_tuple(cls, options: tuple) -> Opts:
        """Build from ``(name, help)`` or ``(name, help, labels)``."""
        if len(options) == 2:
            name, help = options
            return OptsBuilder(name, help).build()
        if len(options) == 3:
            name, help, variable_labels = options
            return OptsBuilder(name, help, variable_labels).build()
        raise TypeError(f"expected (name, help[, labels]), got {len(options)} items")

    @property
    def const_labels(self) -> Mapping[str, str]:
        """Read-only name -> value view of ``const_label_pairs``."""
        return MappingProxyType({p.name: p.value for p in self.const_label_pairs})

    @property
    def arity(self) -> int:
        return len(self.variable_labels)

    def fq_name(self) -> str:
        return build_fq_name(self.namespace, self.subsystem, self.name)

    def describe(self) -> Desc:
        return Desc.new(
            self.fq_name(),
            self.help,
            list(self.variable_labels),
            dict(self.const_labels),
        )

    def to_builder(self) -> OptsBuilder:
        return (
            OptsBuilder(self.name, self.help, self.variable_labels)
            .namespace(self.namespace)
            .subsystem(self.subsystem)
            .const_labels(self.const_labels)
        )


class OptsBuilder:
    """Mutable, chainable builder producing an immutable ``Opts``."""

    __slots__ = ("_name", "_help", "_namespace", "_subsystem", "_const_labels", "_variable_labels")

    def __init__(self, name: str, help: str, variable_labels: Any = None) -> None:
        self._name = name
        self._help = help
        self._namespace = ""
        self._subsystem = ""
        self._const_labels: dict[str, str] = {}
        self._variable_labels: tuple[str, ...] = coerce_labels(variable_labels).to_owned()

    def namespace(self, namespace: str) -> OptsBuilder:
        self._namespace = namespace
        return self

    def subsystem(self, subsystem: str) -> OptsBuilder:
        self._subsystem = subsystem
        return self

    def const_labels(self, const_labels: Mapping[str, str]) -> OptsBuilder:
        self._const_labels = {label_text(k): str(v) for k, v in const_labels.items()}
        return self

    def const_label(self, name: Any, value: str) -> OptsBuilder:
        self._const_labels[label_text(name)] = str(value)
        return self

    def variable_labels(self, variable_labels: Labels | tuple | list) -> OptsBuilder:
        self._variable_labels = coerce_labels(variable_labels).to_owned()
        return self

    def fq_name(self) -> str:
        return build_fq_name(self._namespace, self._subsystem, self._name)

    def build(self) -> Opts:
        return Opts(
            name=self._name,
            help=self._help,
            namespace=self._namespace,
            subsystem=self._subsystem,
            const_label_pairs=tuple(label_pairs_from(self._const_labels)),
            variable_labels=self._variable_labels,
        )

    def describe(self) -> Desc:
        return self.build().describe()

    def __repr__(self) -> str:
        return f"OptsBuilder(fq_name={self.fq_name()!r}, variable_labels={self._variable_labels!r})"


def as_opts(value: Opts | OptsBuilder | tuple) -> Opts:
    """Accept the forms metric constructors take and return an ``Opts``."""
    if isinstance(value, Opts):
        return value
    if isinstance(value, OptsBuilder):
        return value.build()
    if isinstance(value, tuple):
        return Opts.from_tuple(value)
    raise TypeError(f"cannot convert {type(value).__name__} to Opts")
