"""Metric descriptors.

A ``Desc`` is the immutable metadata every collector reports for each metric
it may emit: fully-qualified name, help text, constant label pairs and the
names of the variable labels. Registries use ``id`` (name + constant label
values) to detect duplicates and ``dim_hash`` (help + all label names) to
detect two metrics sharing a name under a different contract.

``Desc.new`` is the single validation point:

- help must be non-empty
- the fully-qualified name must be a valid metric name
- every label name must be valid and unique
- a name may not appear both as constant and as variable label
"""
from __future__ import annotations

import hashlib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from promcore.utils.exceptions import DescriptorError

from .label_pair import LabelPair, label_pairs_from
from .naming import SEPARATOR_BYTE, is_valid_label_name, is_valid_metric_name

__all__ = ["Desc", "Describer"]

_SEP = bytes([SEPARATOR_BYTE])
# Variable label names are hashed with this marker so they never alias a
# constant label of the same spelling.
_VARIABLE_MARKER = "$"


def _hash64(parts: Sequence[str]) -> int:
    h = hashlib.blake2b(digest_size=8)
    for part in parts:
        h.update(part.encode('utf-8'))
        h.update(_SEP)
    return int.from_bytes(h.digest(), 'big')


@dataclass(frozen=True)
class Desc:
    fq_name: str
    help: str
    const_label_pairs: tuple[LabelPair, ...]
    variable_labels: tuple[str, ...]
    id: int = field(compare=False)
    dim_hash: int = field(compare=False)

    @classmethod
    def new(cls, fq_name: str, help: str, variable_labels: Sequence[str],
            const_labels: Mapping[str, str]) -> Desc:
        if not help:
            raise DescriptorError("empty help string")
        if not is_valid_metric_name(fq_name):
            raise DescriptorError(f"{fq_name!r} is not a valid metric name")

        const_names: set[str] = set()
        for label_name in const_labels:
            if not is_valid_label_name(label_name):
                raise DescriptorError(f"{label_name!r} is not a valid label name")
            const_names.add(label_name)

        seen_variable: set[str] = set()
        for label_name in variable_labels:
            if not is_valid_label_name(label_name):
                raise DescriptorError(f"{label_name!r} is not a valid label name")
            if label_name in seen_variable:
                raise DescriptorError(f"duplicate variable label name {label_name!r}")
            if label_name in const_names:
                raise DescriptorError(
                    f"label name {label_name!r} is both a constant and a variable label of {fq_name!r}"
                )
            seen_variable.add(label_name)

        pairs = tuple(label_pairs_from(const_labels))
        desc_id = _hash64([fq_name] + [p.value for p in pairs])
        dim_names = sorted(const_names | {_VARIABLE_MARKER + n for n in seen_variable})
        dim_hash = _hash64([help] + dim_names)
        return cls(
            fq_name=fq_name,
            help=help,
            const_label_pairs=pairs,
            variable_labels=tuple(variable_labels),
            id=desc_id,
            dim_hash=dim_hash,
        )

    @property
    def const_labels(self) -> dict[str, str]:
        return {p.name: p.value for p in self.const_label_pairs}

    def label_names(self) -> tuple[str, ...]:
        """Constant label names (canonical order) followed by variable names."""
        return tuple(p.name for p in self.const_label_pairs) + self.variable_labels


@runtime_checkable
class Describer(Protocol):
    """Anything able to produce a ``Desc`` (e.g. ``Opts``)."""

    def describe(self) -> Desc: ...
