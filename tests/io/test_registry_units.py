"""
Unit tests for the in-memory element registry.
"""
from __future__ import annotations

from subproc2bpmn.io.registry import ElementRegistry, RegistryElement
from subproc2bpmn.model.process import Bounds


def test_add_get_children_order() -> None:
    registry = ElementRegistry()
    registry.add(RegistryElement("a", "bpmn:Task", parent_id="p", x=1, y=2, width=3, height=4))
    registry.add(RegistryElement("f", "bpmn:SequenceFlow", parent_id="p", waypoints=[(0, 0), (1, 1)]))
    assert "a" in registry
    assert len(registry) == 2
    assert [e.id for e in registry.children("p")] == ["a", "f"]
    assert registry.children("nothing") == []
    assert registry.ids() == ["a", "f"]


def test_bounds_and_waypoints_lookup() -> None:
    registry = ElementRegistry()
    registry.add(RegistryElement("a", "bpmn:Task", x=1, y=2, width=3, height=4))
    registry.add(RegistryElement("f", "bpmn:SequenceFlow", waypoints=[(0, 0), (1, 1)]))
    registry.add(RegistryElement("g", "bpmn:SequenceFlow", waypoints=[]))
    assert registry.get_bounds("a") == Bounds(1, 2, 3, 4)
    assert registry.get_bounds("f") is None
    assert registry.get_bounds("missing") is None
    assert registry.get_waypoints("f") == [(0, 0), (1, 1)]
    assert registry.get_waypoints("g") is None
    assert registry.get_waypoints("a") is None


def test_returned_geometry_is_a_copy() -> None:
    registry = ElementRegistry()
    registry.add(RegistryElement("a", "bpmn:Task", x=1, y=2, width=3, height=4))
    registry.add(RegistryElement("f", "bpmn:SequenceFlow", waypoints=[(0, 0), (1, 1)]))
    registry.get_bounds("a").translate(100, 100)
    registry.get_waypoints("f").append((5, 5))
    assert registry.get_bounds("a") == Bounds(1, 2, 3, 4)
    assert registry.get_waypoints("f") == [(0, 0), (1, 1)]


def test_update_and_remove() -> None:
    registry = ElementRegistry()
    registry.add(RegistryElement("a", "bpmn:Task", parent_id="p"))
    registry.add(RegistryElement("f", "bpmn:SequenceFlow", parent_id="p", waypoints=[]))
    registry.update_bounds("a", Bounds(5, 6, 7, 8))
    registry.update_waypoints("f", [(1, 2), (3, 4)])
    assert registry.get_bounds("a") == Bounds(5, 6, 7, 8)
    assert registry.get_waypoints("f") == [(1, 2), (3, 4)]
    registry.remove("a")
    registry.remove("a")
    assert registry.get("a") is None
    assert [e.id for e in registry.children("p")] == ["f"]


def test_re_adding_replaces_entry() -> None:
    registry = ElementRegistry()
    registry.add(RegistryElement("a", "bpmn:Task", parent_id="p"))
    registry.add(RegistryElement("a", "bpmn:UserTask", parent_id="q"))
    assert registry.get("a").type == "bpmn:UserTask"
    assert registry.children("p") == []
    assert [e.id for e in registry.children("q")] == ["a"]


def test_subprocess_ids() -> None:
    registry = ElementRegistry()
    registry.add(RegistryElement("sp", "bpmn:SubProcess"))
    registry.add(RegistryElement("tx", "bpmn:transaction"))
    registry.add(RegistryElement("t", "bpmn:Task"))
    assert registry.subprocess_ids() == ["sp", "tx"]
