"""
Unit tests for the process model: type tag helpers, references, Bounds.
"""
from __future__ import annotations

import pytest

from subproc2bpmn.model.process import (
    Bounds,
    Flow,
    Node,
    element_tag,
    is_container_type,
    is_label_type,
    kind_of,
    ref_id,
)


@pytest.mark.parametrize("type_tag, expected", [
    ("bpmn:Task", "task"),
    ("bpmn:SubProcess", "subProcess"),
    ("bpmn:subProcess", "subProcess"),
    ("bpmn:ExclusiveGateway", "exclusiveGateway"),
    ("startEvent", "startEvent"),
    ("", "task"),
    (None, "task"),
])
def test_element_tag(type_tag, expected) -> None:
    assert element_tag(type_tag) == expected


def test_container_type_is_case_insensitive() -> None:
    assert is_container_type("bpmn:SubProcess")
    assert is_container_type("bpmn:subProcess")
    assert is_container_type("bpmn:SUBPROCESS")
    assert is_container_type("bpmn:Transaction")
    assert not is_container_type("bpmn:Task")
    assert not is_container_type(None)


def test_kind_of() -> None:
    assert kind_of("bpmn:UserTask") == "task"
    assert kind_of("bpmn:StartEvent") == "event"
    assert kind_of("bpmn:ParallelGateway") == "gateway"
    assert kind_of("bpmn:SubProcess") == "container"
    assert kind_of("bpmn:SequenceFlow") == "flow"
    assert kind_of("bpmn:CallActivity") == "task"


def test_is_label_type() -> None:
    assert is_label_type("label")
    assert is_label_type("bpmn:Label")
    assert not is_label_type("bpmn:Task")


def test_ref_id_accepts_objects_and_strings() -> None:
    node = Node(id="t1")
    assert ref_id(node) == "t1"
    assert ref_id("t2") == "t2"
    assert ref_id(None) == ""
    assert ref_id(object()) == ""


def test_node_reference_ids_skip_empty_entries() -> None:
    node = Node(id="t1", incoming=["f1", Flow(id="f2"), ""], outgoing=[None, "f3"])
    assert node.incoming_ids == ["f1", "f2"]
    assert node.outgoing_ids == ["f3"]


def test_node_child_split() -> None:
    t1 = Node(id="t1")
    f1 = Flow(id="f1")
    sp = Node(id="sp", type="bpmn:SubProcess", children=[t1, f1])
    assert sp.is_container
    assert sp.child_nodes() == [t1]
    assert sp.child_flows() == [f1]
    assert f1.kind == "flow"


def test_bounds_middles_and_translate() -> None:
    b = Bounds(100, 100, 100, 80)
    assert b.right_middle() == (200, 140)
    assert b.left_middle() == (100, 140)
    b.translate(-50, 10)
    assert (b.x, b.y, b.width, b.height) == (50, 110, 100, 80)
