"""
Unit tests for bpmn_loader: BpmnLoader (load_file, load_string) and BpmnDocument.
"""
from __future__ import annotations

from pathlib import Path

from subproc2bpmn.extract.extractor import SubProcessExtractor
from subproc2bpmn.io.bpmn_loader import BpmnLoader, is_flow_node_name
from subproc2bpmn.model.process import Bounds, Flow, Node

_MINIMAL = """<?xml version="1.0" encoding="UTF-8"?>
<bpmn:definitions xmlns:bpmn="http://www.omg.org/spec/BPMN/20100524/MODEL"
    xmlns:bpmndi="http://www.omg.org/spec/BPMN/20100524/DI"
    xmlns:dc="http://www.omg.org/spec/DD/20100524/DC"
    xmlns:di="http://www.omg.org/spec/DD/20100524/DI" id="Defs_1">
  <bpmn:process id="P1">
    <bpmn:laneSet id="LaneSet_1" />
    <bpmn:task id="A" name="A &amp; B"><bpmn:outgoing>F1</bpmn:outgoing></bpmn:task>
    <bpmn:task id="B"><bpmn:incoming>F1</bpmn:incoming></bpmn:task>
    <bpmn:sequenceFlow id="F1" sourceRef="A" targetRef="B" />
    <bpmn:textAnnotation id="Note_1" />
  </bpmn:process>
  <bpmndi:BPMNDiagram id="D1">
    <bpmndi:BPMNPlane id="Plane_1" bpmnElement="P1">
      <bpmndi:BPMNShape id="A_di" bpmnElement="A"><dc:Bounds x="10" y="20" width="100" height="80" /></bpmndi:BPMNShape>
      <bpmndi:BPMNShape id="Note_di" bpmnElement="Note_1"><dc:Bounds x="0" y="0" width="10" height="10" /></bpmndi:BPMNShape>
      <bpmndi:BPMNEdge id="F1_di" bpmnElement="F1">
        <di:waypoint x="110" y="60" />
        <di:waypoint x="bad" y="60" />
        <di:waypoint x="200" y="60" />
      </bpmndi:BPMNEdge>
    </bpmndi:BPMNPlane>
  </bpmndi:BPMNDiagram>
</bpmn:definitions>
"""


def test_is_flow_node_name() -> None:
    assert is_flow_node_name("task")
    assert is_flow_node_name("serviceTask")
    assert is_flow_node_name("intermediateCatchEvent")
    assert is_flow_node_name("eventBasedGateway")
    assert is_flow_node_name("subProcess")
    assert is_flow_node_name("callActivity")
    assert not is_flow_node_name("laneSet")
    assert not is_flow_node_name("textAnnotation")
    assert not is_flow_node_name("sequenceFlow")


def test_load_string_builds_tree() -> None:
    document = BpmnLoader().load_string(_MINIMAL)
    assert document.definitions_id == "Defs_1"
    assert len(document.processes) == 1
    process = document.processes[0]
    assert process.id == "P1"
    assert [c.id for c in process.children] == ["A", "B", "F1"]

    a = document.find("A")
    assert isinstance(a, Node)
    assert a.type == "bpmn:Task"
    assert a.name == "A & B"
    assert a.outgoing == ["F1"]

    flow = document.find("F1")
    assert isinstance(flow, Flow)
    assert (flow.source_ref, flow.target_ref) == ("A", "B")
    assert document.find("Note_1") is None


def test_load_string_registry_and_stored_bounds() -> None:
    document = BpmnLoader().load_string(_MINIMAL.encode("utf-8"))
    registry = document.registry
    assert registry.get_bounds("A") == Bounds(10, 20, 100, 80)
    assert document.find("A").bounds == Bounds(10, 20, 100, 80)
    # no DI shape for B
    assert registry.get("B") is None
    assert document.find("B").bounds is None
    # invalid waypoint skipped
    assert registry.get_waypoints("F1") == [(110, 60), (200, 60)]
    assert registry.get("F1").parent_id == "P1"
    assert [c.id for c in registry.children("P1")] == ["A", "F1"]


def test_load_sample_nested_structure(sample_bpmn_path: Path) -> None:
    document = BpmnLoader().load_file(sample_bpmn_path)
    sp1 = document.find("SubProcess_1")
    assert isinstance(sp1, Node) and sp1.is_container
    assert [c.id for c in sp1.children] == [
        "StartEvent_2", "Task_1", "Gateway_1", "SubProcess_2", "EndEvent_2",
        "Flow_2", "Flow_3", "Flow_4", "Flow_6", "Flow_7",
    ]
    sp2 = document.find("SubProcess_2")
    assert [c.id for c in sp2.children] == ["Task_3", "Task_4", "Flow_5"]
    assert document.find("Task_1").type == "bpmn:ServiceTask"
    assert document.find("Gateway_1").outgoing == ["Flow_4", "Flow_7"]


def test_load_sample_registry_parents_and_labels(sample_bpmn_path: Path) -> None:
    registry = BpmnLoader().load_file(sample_bpmn_path).registry
    assert registry.get("Task_3").parent_id == "SubProcess_2"
    assert registry.get("Task_1").parent_id == "SubProcess_1"
    label = registry.get("StartEvent_2_label")
    assert label is not None and label.is_label
    assert label.parent_id == "SubProcess_1"
    assert registry.get("Flow_7_label").parent_id == "SubProcess_1"
    assert sorted(registry.subprocess_ids()) == ["SubProcess_1", "SubProcess_2"]


_MULTILINE = """<?xml version="1.0" encoding="UTF-8"?>
<bpmn:definitions xmlns:bpmn="http://www.omg.org/spec/BPMN/20100524/MODEL"
    xmlns:bpmndi="http://www.omg.org/spec/BPMN/20100524/DI"
    xmlns:dc="http://www.omg.org/spec/DD/20100524/DC" id="Defs_2">
  <bpmn:process id="P2">
    <bpmn:subProcess id="SP" name="Review&#10;phase">
      <bpmn:userTask id="U" name="Check&#10;the&#9;draft" />
    </bpmn:subProcess>
  </bpmn:process>
  <bpmndi:BPMNDiagram id="D2">
    <bpmndi:BPMNPlane id="Plane_2" bpmnElement="P2">
      <bpmndi:BPMNShape id="SP_di" bpmnElement="SP"><dc:Bounds x="0" y="0" width="300" height="200" /></bpmndi:BPMNShape>
      <bpmndi:BPMNShape id="U_di" bpmnElement="U"><dc:Bounds x="50" y="60" width="100" height="80" /></bpmndi:BPMNShape>
    </bpmndi:BPMNPlane>
  </bpmndi:BPMNDiagram>
</bpmn:definitions>
"""


def test_multiline_names_round_trip(logger) -> None:
    document = BpmnLoader(logger=logger).load_string(_MULTILINE)
    assert document.find("U").name == "Check\nthe\tdraft"

    result = SubProcessExtractor(document.registry, logger=logger).build("SP")
    assert result.name == "Review\nphase"

    reloaded = BpmnLoader(logger=logger).load_string(result.xml)
    assert reloaded.processes[0].name == "Review\nphase"
    assert reloaded.find("U").name == "Check\nthe\tdraft"
