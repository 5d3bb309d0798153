"""Label name/value pairs and their canonical ordering.

Ordering is keyed on the label *name* only (code-point order); the value never
participates. Encoders and the registry sort pairs with this rule so that
exposition output and descriptor hashes are deterministic.

Equality (``==``) still compares name and value, keeping pairs usable as
dict/set members; use ``compare()`` when the ordering notion of "equal" is
wanted (same name, any value).
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

__all__ = ["LabelPair", "label_pairs_from", "label_pairs_key"]


@dataclass(frozen=True)
class LabelPair:
    name: str
    value: str

    def compare(self, other: LabelPair) -> int:
        if self.name < other.name:
            return -1
        if self.name > other.name:
            return 1
        return 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LabelPair):
            return NotImplemented
        return self.name < other.name

    def __le__(self, other: object) -> bool:
        if not isinstance(other, LabelPair):
            return NotImplemented
        return self.name <= other.name

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, LabelPair):
            return NotImplemented
        return self.name > other.name

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, LabelPair):
            return NotImplemented
        return self.name >= other.name


def label_pairs_from(labels: Mapping[str, str]) -> list[LabelPair]:
    """Return the mapping as label pairs in canonical (name) order."""
    return sorted(LabelPair(k, v) for k, v in labels.items())


def label_pairs_key(pairs: Iterable[LabelPair]) -> tuple[str, ...]:
    """Sort key for a series: its label values taken in canonical name order."""
    return tuple(p.value for p in sorted(pairs))
