"""Fully-qualified metric name composition and name validation.

``build_fq_name`` joins the given three name components by "_". Empty name
components are ignored. If the name component itself is empty, an empty
string is returned no matter what; callers treat that as "no identity".
Metric implementations use this to derive the exported name from the
components held in their ``Opts``. Users only need it directly when they
build a ``Desc`` by hand.

Validation helpers are not used by ``build_fq_name``; they back descriptor
construction (see ``descriptors.Desc.new``).
"""
from __future__ import annotations

import re

__all__ = [
    "SEPARATOR_BYTE",
    "build_fq_name",
    "is_valid_metric_name",
    "is_valid_label_name",
]

# Separates hashed components (never valid inside a UTF-8 string).
SEPARATOR_BYTE = 0xFF

_METRIC_NAME_RE = re.compile(r'[a-zA-Z_:][a-zA-Z0-9_:]*')
_LABEL_NAME_RE = re.compile(r'[a-zA-Z_][a-zA-Z0-9_]*')
_RESERVED_LABEL_PREFIX = '__'


def build_fq_name(namespace: str, subsystem: str, name: str) -> str:
    if not name:
        return ""
    if namespace and subsystem:
        return f"{namespace}_{subsystem}_{name}"
    if namespace:
        return f"{namespace}_{name}"
    if subsystem:
        return f"{subsystem}_{name}"
    return name


def is_valid_metric_name(name: str) -> bool:
    return bool(name) and _METRIC_NAME_RE.fullmatch(name) is not None


def is_valid_label_name(name: str) -> bool:
    if not name or name.startswith(_RESERVED_LABEL_PREFIX):
        return False
    return _LABEL_NAME_RE.fullmatch(name) is not None
