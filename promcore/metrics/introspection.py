"""Descriptor introspection utilities.

Enumerates the descriptors registered on a ``Registry`` without scraping the
exposition format, and optionally dumps them as JSON.

Functions:
  build_descriptor_inventory(registry) -> list[dict]
  maybe_dump_introspection(registry)   -> path/'stdout'/None

PROMCORE_INTROSPECTION_DUMP accepted values:
  stdout  -> pretty JSON logged at INFO (any truthy value maps here)
  temp    -> writes promcore_descriptor_inventory.json to the temp dir
  <path>  -> writes JSON to the specified path
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from typing import Any

from promcore.config import load_settings

from .registry import Registry

logger = logging.getLogger(__name__)

__all__ = [
    "build_descriptor_inventory",
    "maybe_dump_introspection",
]


def build_descriptor_inventory(registry: Registry) -> list[dict[str, Any]]:
    """Return one dict per registered descriptor, sorted by name then constant labels."""
    inventory: list[dict[str, Any]] = []
    for desc in registry.descriptors():
        inventory.append({
            "name": desc.fq_name,
            "help": desc.help,
            "variable_labels": list(desc.variable_labels),
            "const_labels": desc.const_labels,
        })
    return inventory


def maybe_dump_introspection(registry: Registry) -> str | None:
    flag = load_settings().introspection_dump
    if not flag:
        return None
    inv = build_descriptor_inventory(registry)
    payload = {
        "generated_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "descriptor_count": len(inv),
        "inventory": inv,
    }
    if flag.lower() == "stdout":
        logger.info("METRICS_INTROSPECTION:\n%s", json.dumps(payload, indent=2, sort_keys=True))
        return "stdout"
    out_path = flag
    if flag.lower() == "temp":
        out_path = os.path.join(tempfile.gettempdir(), "promcore_descriptor_inventory.json")
    with open(out_path, "w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2, sort_keys=True)
    logger.info("Descriptor inventory written to %s (%d descriptors)", out_path, len(inv))
    return out_path
