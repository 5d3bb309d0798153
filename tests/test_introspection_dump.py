import json
import logging

from promcore.metrics import Registry
from promcore.metrics.introspection import build_descriptor_inventory, maybe_dump_introspection
from tests._helpers import gauge


def _registry():
    reg = Registry()
    gauge("zeta").try_register(reg)
    gauge("alpha", pool="b").try_register(reg)
    gauge("alpha", pool="a").try_register(reg)
    return reg


def test_inventory_sorted_by_name_then_const_values():
    inv = build_descriptor_inventory(_registry())
    assert [(e["name"], e["const_labels"]) for e in inv] == [
        ("alpha", {"pool": "a"}),
        ("alpha", {"pool": "b"}),
        ("zeta", {}),
    ]
    assert inv[0]["help"] == "help text"
    assert inv[0]["variable_labels"] == []


def test_dump_disabled_by_default(clean_env):
    assert maybe_dump_introspection(_registry()) is None


def test_dump_to_path(clean_env, tmp_path):
    out = tmp_path / "inv.json"
    clean_env.setenv("PROMCORE_INTROSPECTION_DUMP", str(out))
    assert maybe_dump_introspection(_registry()) == str(out)
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["descriptor_count"] == 3
    assert payload["inventory"][0]["name"] == "alpha"


def test_dump_to_stdout_logs(clean_env, caplog):
    clean_env.setenv("PROMCORE_INTROSPECTION_DUMP", "1")
    with caplog.at_level(logging.INFO, logger="promcore.metrics.introspection"):
        assert maybe_dump_introspection(_registry()) == "stdout"
    assert any("METRICS_INTROSPECTION" in r.getMessage() for r in caplog.records)
