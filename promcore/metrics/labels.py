"""Fixed-cardinality label-name sets.

A ``Labels`` instance is an immutable, ordered collection of variable label
names whose arity is fixed by its class. ``Labels0`` .. ``Labels4`` cover the
common cases; ``labels_for_arity(n)`` synthesises (and caches) a class for any
larger arity. Constructing a set with the wrong number of names raises
``LabelArityError`` immediately.

Items may be plain ``str``, ``str``-valued ``Enum`` members or UTF-8 ``bytes``.
Two views are offered:

    as_slice()  -> the items exactly as supplied
    to_owned()  -> plain ``str`` copies, same order, same length

Usage:
    from promcore.metrics.labels import labels
    ls = labels("method", "code")      # Labels2
    ls.to_owned()                      # ('method', 'code')
"""
from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import Enum
from functools import lru_cache
from typing import Any, ClassVar

from promcore.utils.exceptions import LabelArityError

__all__ = [
    "Labels",
    "Labels0",
    "Labels1",
    "Labels2",
    "Labels3",
    "Labels4",
    "labels",
    "labels_for_arity",
    "coerce_labels",
    "label_text",
]


def label_text(item: Any) -> str:
    """Return the owned ``str`` form of a label-name-like item."""
    if isinstance(item, Enum):
        item = item.value
    if isinstance(item, str):
        return str(item)  # drops str subclasses
    if isinstance(item, (bytes, bytearray)):
        return bytes(item).decode('utf-8')
    raise TypeError(f"label name must be str-like, got {type(item).__name__}")


class Labels(Sequence):
    """Ordered label-name set with a class-level arity."""

    ARITY: ClassVar[int]

    __slots__ = ("_items",)

    def __init__(self, *items: Any) -> None:
        arity = getattr(type(self), 'ARITY', None)
        if arity is None:
            raise TypeError("use labels(...) or a LabelsN class, not Labels directly")
        if len(items) != arity:
            raise LabelArityError(
                f"{type(self).__name__} expects {arity} label name(s), got {len(items)}"
            )
        for item in items:
            label_text(item)  # type check only
        self._items = tuple(items)

    def as_slice(self) -> tuple[Any, ...]:
        return self._items

    def to_owned(self) -> tuple[str, ...]:
        return tuple(label_text(i) for i in self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index):  # type: ignore[override]
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Labels):
            return NotImplemented
        return self.to_owned() == other.to_owned()

    def __hash__(self) -> int:
        return hash(self.to_owned())

    def __repr__(self) -> str:
        return f"{type(self).__name__}{self.to_owned()!r}"


class Labels0(Labels):
    ARITY = 0
    __slots__ = ()


class Labels1(Labels):
    ARITY = 1
    __slots__ = ()


class Labels2(Labels):
    ARITY = 2
    __slots__ = ()


class Labels3(Labels):
    ARITY = 3
    __slots__ = ()


class Labels4(Labels):
    ARITY = 4
    __slots__ = ()


_BUILTIN: dict[int, type[Labels]] = {
    0: Labels0,
    1: Labels1,
    2: Labels2,
    3: Labels3,
    4: Labels4,
}


@lru_cache(maxsize=None)
def labels_for_arity(arity: int) -> type[Labels]:
    if arity < 0:
        raise ValueError(f"arity must be >= 0, got {arity}")
    cls = _BUILTIN.get(arity)
    if cls is not None:
        return cls
    return type(f"Labels{arity}", (Labels,), {"ARITY": arity, "__slots__": ()})


def labels(*names: Any) -> Labels:
    return labels_for_arity(len(names))(*names)


def coerce_labels(value: Any) -> Labels:
    """Normalize ``None``/tuple/list/Labels into a ``Labels`` instance."""
    if value is None:
        return Labels0()
    if isinstance(value, Labels):
        return value
    if isinstance(value, (str, bytes, bytearray)):
        raise TypeError("a single string is not a label set; wrap it in labels(...)")
    if isinstance(value, (tuple, list)):
        return labels(*value)
    raise TypeError(f"cannot build a label set from {type(value).__name__}")
