import logging

import pytest
from prometheus_client import CollectorRegistry, generate_latest
from prometheus_client.metrics_core import CounterMetricFamily, HistogramMetricFamily

from promcore.metrics import Collector, Desc, Opts, Registry, labels, render_text
from promcore.utils.exceptions import DescriptorError
from tests._helpers import StaticCollector, gauge


def _vec(name, help="help text", **const):
    builder = Opts.new_with_label(name, help, labels("method", "code"))
    for k, v in const.items():
        builder.const_label(k, v)
    return builder.build()


def test_empty_registry_gathers_nothing():
    assert Registry().gather() == []


def test_families_sorted_by_name_and_empty_ones_dropped():
    reg = Registry()
    gauge("zeta").try_register(reg)
    gauge("alpha").try_register(reg)
    StaticCollector(Opts.new("empty", "h").build(), series={}).try_register(reg)
    assert len(reg) == 3
    assert [f.name for f in reg.gather()] == ["alpha", "zeta"]


def test_samples_sorted_by_canonical_label_values():
    reg = Registry()
    series = {("post", "500"): 1, ("get", "200"): 2, ("get", "404"): 3}
    StaticCollector(_vec("requests"), series).try_register(reg)
    (family,) = reg.gather()
    # canonical label order is code < method, so code values sort first
    assert [(s.labels["code"], s.labels["method"]) for s in family.samples] == [
        ("200", "get"), ("404", "get"), ("500", "post"),
    ]
    assert [list(s.labels) for s in family.samples] == [["code", "method"]] * 3


def test_families_sharing_a_name_are_merged():
    reg = Registry()
    gauge("jobs", pool="b").try_register(reg)
    gauge("jobs", pool="a").try_register(reg)
    (family,) = reg.gather()
    assert [s.labels["pool"] for s in family.samples] == ["a", "b"]


class _MismatchedHelp(Collector):
    def __init__(self):
        self._desc = Desc.new("jobs", "help text", [], {"pool": "c"})

    def desc(self):
        return [self._desc]

    def collect(self):
        fam = CounterMetricFamily("jobs", "help text", labels=["pool"])
        fam.add_metric(["c"], 1)
        return [fam]


def test_inconsistent_family_is_skipped_with_warning(caplog):
    reg = Registry()
    gauge("jobs", pool="a").try_register(reg)
    _MismatchedHelp().try_register(reg)
    with caplog.at_level(logging.WARNING, logger="promcore.metrics.registry"):
        families = reg.gather()
    assert len(families) == 1
    assert [s.labels["pool"] for s in families[0].samples] == ["a"]
    assert any("inconsistent_family" in r.getMessage() for r in caplog.records)


def test_prefix_and_common_labels_applied():
    reg = Registry(prefix="svc", labels={"zone": "eu", "app": "api"})
    gauge("jobs", pool="a").try_register(reg)
    (family,) = reg.gather()
    assert family.name == "svc_jobs"
    (sample,) = family.samples
    assert sample.name == "svc_jobs"
    assert list(sample.labels.items()) == [("app", "api"), ("pool", "a"), ("zone", "eu")]


def test_registry_rejects_bad_prefix_and_labels():
    with pytest.raises(DescriptorError):
        Registry(prefix="bad-prefix")
    with pytest.raises(DescriptorError):
        Registry(labels={"__x": "1"})


class _Histogram(Collector):
    def __init__(self):
        self._desc = Desc.new("latency", "Latency", ["route"], {})

    def desc(self):
        return [self._desc]

    def collect(self):
        fam = HistogramMetricFamily("latency", "Latency", labels=["route"])
        fam.add_metric(["/b"], buckets=[("0.1", 1), ("1.0", 2), ("+Inf", 3)], sum_value=2.5)
        fam.add_metric(["/a"], buckets=[("0.1", 0), ("1.0", 1), ("+Inf", 1)], sum_value=0.5)
        return [fam]


def test_bucket_order_preserved_within_series():
    reg = Registry()
    _Histogram().try_register(reg)
    (family,) = reg.gather()
    routes = [s.labels["route"] for s in family.samples]
    assert routes == sorted(routes)
    a_buckets = [s.labels["le"] for s in family.samples if s.labels["route"] == "/a" and s.name == "latency_bucket"]
    assert a_buckets == ["0.1", "1.0", "+Inf"]


def test_collect_alias_and_text_exposition():
    reg = Registry()
    StaticCollector(_vec("requests", instance="i1"), {("get", "200"): 7}).try_register(reg)
    assert [f.name for f in reg.collect()] == [f.name for f in reg.gather()]
    text = render_text(reg).decode()
    assert "# HELP requests help text" in text
    assert "# TYPE requests gauge" in text
    assert 'requests{code="200",instance="i1",method="get"} 7.0' in text
    assert generate_latest(reg) == render_text(reg)


def test_registry_bridges_into_prometheus_client_registry():
    reg = Registry()
    gauge("bridged").try_register(reg)
    prom = CollectorRegistry()
    prom.register(reg)
    assert "bridged 1.0" in generate_latest(prom).decode()
