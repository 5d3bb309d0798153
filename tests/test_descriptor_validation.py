import pytest

from promcore.metrics import Desc, LabelPair, Opts, labels
from promcore.utils.exceptions import DescriptorError


def test_empty_help_rejected():
    with pytest.raises(DescriptorError, match="empty help"):
        Desc.new("x", "", [], {})


@pytest.mark.parametrize("name", ["", "1abc", "a-b", "a b", "a\n"])
def test_invalid_metric_name_rejected(name):
    with pytest.raises(DescriptorError):
        Desc.new(name, "h", [], {})


def test_empty_fq_name_from_opts_is_a_descriptor_error():
    opts = Opts.new("", "h").namespace("ns").build()
    assert opts.fq_name() == ""
    with pytest.raises(DescriptorError):
        opts.describe()


@pytest.mark.parametrize("label", ["1a", "a-b", "__reserved", ""])
def test_invalid_label_names_rejected(label):
    with pytest.raises(DescriptorError):
        Desc.new("x", "h", [label], {})
    with pytest.raises(DescriptorError):
        Desc.new("x", "h", [], {label: "v"})


def test_duplicate_variable_label_rejected():
    with pytest.raises(DescriptorError, match="duplicate"):
        Desc.new("x", "h", ["a", "a"], {})


def test_constant_and_variable_collision_rejected():
    opts = Opts.new_with_label("x", "h", labels("zone")).const_label("zone", "eu").build()
    with pytest.raises(DescriptorError, match="both a constant and a variable"):
        opts.describe()


def test_const_label_pairs_sorted_by_name():
    d = Desc.new("x", "h", ["v"], {"zeta": "1", "alpha": "2"})
    assert d.const_label_pairs == (LabelPair("alpha", "2"), LabelPair("zeta", "1"))
    assert d.label_names() == ("alpha", "zeta", "v")


def test_id_depends_on_name_and_const_values():
    a = Desc.new("x", "h", [], {"k": "1"})
    b = Desc.new("x", "other help", ["v"], {"k": "1"})
    c = Desc.new("x", "h", [], {"k": "2"})
    d = Desc.new("y", "h", [], {"k": "1"})
    assert a.id == b.id
    assert a.id != c.id
    assert a.id != d.id


def test_dim_hash_depends_on_help_and_label_names_only():
    a = Desc.new("x", "h", ["v"], {"k": "1"})
    b = Desc.new("x", "h", ["v"], {"k": "2"})
    c = Desc.new("x", "h2", ["v"], {"k": "1"})
    d = Desc.new("x", "h", ["w"], {"k": "1"})
    assert a.dim_hash == b.dim_hash
    assert a.dim_hash != c.dim_hash
    assert a.dim_hash != d.dim_hash


def test_variable_and_constant_names_do_not_alias_in_dim_hash():
    const_only = Desc.new("x", "h", [], {"k": "1"})
    var_only = Desc.new("x", "h", ["k"], {})
    assert const_only.dim_hash != var_only.dim_hash


def test_variable_label_order_is_irrelevant_to_dim_hash():
    assert Desc.new("x", "h", ["a", "b"], {}).dim_hash == Desc.new("x", "h", ["b", "a"], {}).dim_hash
