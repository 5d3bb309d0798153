"""Text exposition of a registry via prometheus_client's encoder."""
from __future__ import annotations

from prometheus_client.exposition import CONTENT_TYPE_LATEST, generate_latest

from .registry import Registry, get_default_registry

__all__ = ["CONTENT_TYPE_LATEST", "render_text"]


def render_text(registry: Registry | None = None) -> bytes:
    """Render ``registry`` (default registry when omitted) in the text format."""
    return generate_latest(registry if registry is not None else get_default_registry())  # type: ignore[arg-type]
