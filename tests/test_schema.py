"""Tests for resource models and the identifier sanitizer."""

import pytest
from pydantic import ValidationError

from camgi._util import safe_identifier
from camgi.schema import Machine, MachineSet, Node, ReportModel, Resource


# ---------------------------------------------------------------------------
# safe_identifier
# ---------------------------------------------------------------------------

def test_safe_identifier_keeps_simple_names():
    assert safe_identifier("worker-0") == "worker-0"


def test_safe_identifier_replaces_dots():
    assert safe_identifier("ip-10-0-1-12.ec2.internal") == "ip-10-0-1-12_2e_ec2_2e_internal"


@pytest.mark.parametrize("a,b", [
    ("a.b", "a-b"),
    ("a_b", "a.b"),
    ("a b", "a_20_b"),
    ("x_2e_", "x."),
])
def test_safe_identifier_is_injective(a, b):
    assert safe_identifier(a) != safe_identifier(b)


def test_safe_identifier_only_safe_chars():
    token = safe_identifier('we"ird <name>/ü')
    assert all(c.isascii() and (c.isalnum() or c in "-_") for c in token)


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------

def test_models_satisfy_resource_protocol():
    for res in (Node(name="n"), Machine(name="m"), MachineSet(name="s")):
        assert isinstance(res, Resource)


def test_node_error_flag():
    assert Node(name="n", ready=True).is_error() is False
    assert Node(name="n", ready=False).is_error() is True


@pytest.mark.parametrize("phase,error", [
    ("Running", False),
    ("Provisioning", True),
    ("Failed", True),
    (None, True),
])
def test_machine_error_flag(phase, error):
    assert Machine(name="m", phase=phase).is_error() is error


def test_machineset_never_flagged():
    assert MachineSet(name="s", replicas=3, ready_replicas=0).is_error() is False


def test_safename_is_prefixed_by_kind():
    assert Node(name="host-1").safename() == "node-host-1"
    assert Machine(name="host-1").safename() == "machine-host-1"
    assert MachineSet(name="host-1").safename() == "machineset-host-1"


def test_safename_stable():
    node = Node(name="a.b")
    assert node.safename() == node.safename()


def test_raw_is_manifest_verbatim():
    manifest = "kind: Node\n  weird:  <spacing>\n"
    assert Node(name="n", manifest=manifest).raw() == manifest


def test_models_are_frozen():
    node = Node(name="n")
    with pytest.raises(ValidationError):
        node.name = "other"


def test_report_model_categories_order():
    model = ReportModel(
        title="t",
        nodes=[Node(name="n2"), Node(name="n1")],
        machines=[Machine(name="m")],
    )
    cats = model.categories()
    assert [title for title, _ in cats] == ["Nodes", "Machines", "MachineSets"]
    assert [n.name for n in cats[0][1]] == ["n2", "n1"]
    assert list(cats[2][1]) == []
