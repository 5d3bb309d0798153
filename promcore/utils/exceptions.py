"""promcore exception hierarchy.

Recoverable conditions derive from ``MetricsError``; callers using the
``try_*`` registration entry points catch these. ``WiringError`` is raised
by the fail-fast entry points and deliberately sits outside that tree so a
broad ``except MetricsError`` never hides a wiring bug.
"""
from __future__ import annotations


class MetricsError(Exception):
    """Base class for all recoverable promcore errors."""


class LabelArityError(MetricsError, ValueError):
    """A label set received a number of names different from its arity."""


class DescriptorError(MetricsError, ValueError):
    """Descriptor construction failed (bad name, empty help, label clash)."""


class RegistrationError(MetricsError):
    """Base for registry registration/unregistration failures."""


class AlreadyRegisteredError(RegistrationError):
    """Descriptor or collector already present in the registry."""


class InconsistentDescriptorError(RegistrationError):
    """Same fully-qualified name registered with different help or label names."""


class DuplicateDescriptorError(RegistrationError):
    """A single collector reported the same descriptor twice."""


class NotRegisteredError(RegistrationError):
    """Unregistering a collector the registry does not know about."""


class WiringError(RuntimeError):
    """Unrecoverable registration failure raised by fail-fast entry points."""

    def __init__(self, operation: str, collector: object, cause: BaseException):
        super().__init__(operation, collector, cause)
        self.operation = operation
        self.collector = collector
        self.cause = cause

    def __str__(self) -> str:
        return f"{self.operation} failed for {self.collector!r}: {self.cause}"


__all__ = [
    "MetricsError",
    "LabelArityError",
    "DescriptorError",
    "RegistrationError",
    "AlreadyRegisteredError",
    "InconsistentDescriptorError",
    "DuplicateDescriptorError",
    "NotRegisteredError",
    "WiringError",
]
