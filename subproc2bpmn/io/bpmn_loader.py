"""
BPMN file loading and parsing module

Provides loading of .bpmn/.xml files, parsing of process definitions into the
flow element tree, and parsing of BPMN DI shapes/edges into the live element registry
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union
from lxml import etree as ET

from ..model.process import Bounds, Flow, FlowElement, Node, Waypoint, CONTAINER_TYPES
from ..logger import ExtractionLogger
from ..config import NAMESPACES, ExtractionConfig, default_config
from .registry import ElementRegistry, RegistryElement

PROCESS_TYPE = 'bpmn:Process'


def _local_name(elem: ET._Element) -> str:
    return ET.QName(elem).localname


def _type_tag(local_name: str) -> str:
    """Modeler-style type tag for a BPMN element name ("subProcess" -> "bpmn:SubProcess")"""
    return f"bpmn:{local_name[:1].upper()}{local_name[1:]}"


def is_flow_node_name(local_name: str) -> bool:
    lower = local_name.lower()
    if lower in CONTAINER_TYPES or lower == 'callactivity':
        return True
    return lower.endswith(('task', 'event', 'gateway'))


@dataclass
class BpmnDocument:
    """Loaded BPMN definitions"""
    definitions_id: Optional[str]
    processes: List[Node] = field(default_factory=list)
    registry: ElementRegistry = field(default_factory=ElementRegistry)

    def find(self, element_id: str) -> Optional[FlowElement]:
        """Find a flow element anywhere in the process trees"""
        stack: List[FlowElement] = list(self.processes)
        while stack:
            element = stack.pop()
            if element.id == element_id:
                return element
            if isinstance(element, Node):
                stack.extend(element.children)
        return None


class BpmnLoader:
    """BPMN file loading and parsing"""

    def __init__(self, logger: Optional[ExtractionLogger] = None, config: Optional[ExtractionConfig] = None):
        """
        Args:
            logger: ExtractionLogger instance
            config: ExtractionConfig instance (uses default_config if None)
        """
        self.config = config or default_config
        self.logger = logger

    def load_file(self, path: Path) -> BpmnDocument:
        """
        Load a BPMN file

        Args:
            path: File path

        Returns:
            BpmnDocument with process trees and the element registry
        """
        tree = ET.parse(str(path))
        return self._load_root(tree.getroot())

    def load_string(self, xml: Union[str, bytes]) -> BpmnDocument:
        """Load BPMN definitions from an XML string"""
        if isinstance(xml, str):
            xml = xml.encode("utf-8")
        return self._load_root(ET.fromstring(xml))

    def _load_root(self, root: ET._Element) -> BpmnDocument:
        document = BpmnDocument(definitions_id=root.attrib.get("id"))
        index: Dict[str, FlowElement] = {}
        parents: Dict[str, str] = {}

        for process_elem in root.findall("bpmn:process", NAMESPACES):
            process = Node(
                id=process_elem.attrib.get("id", ""),
                type=PROCESS_TYPE,
                name=process_elem.attrib.get("name"),
            )
            process.children = self._parse_flow_elements(process_elem, process.id, index, parents)
            document.processes.append(process)

        self._parse_diagram(root, index, parents, document.registry)

        if self.logger:
            self.logger.debug(
                f"Loaded {len(document.processes)} process(es), "
                f"{len(index)} flow element(s), {len(document.registry)} diagram element(s)"
            )
        return document

    def _parse_flow_elements(
        self,
        container: ET._Element,
        container_id: str,
        index: Dict[str, FlowElement],
        parents: Dict[str, str],
    ) -> List[FlowElement]:
        """Parse the flow elements directly contained in a process or subprocess"""
        elements: List[FlowElement] = []
        for child in container:
            if not isinstance(child.tag, str) or ET.QName(child).namespace != NAMESPACES["bpmn"]:
                continue
            local = _local_name(child)
            element_id = child.attrib.get("id")
            if not element_id:
                continue

            element: FlowElement
            if local == "sequenceFlow":
                element = Flow(
                    id=element_id,
                    name=child.attrib.get("name"),
                    source_ref=child.attrib.get("sourceRef"),
                    target_ref=child.attrib.get("targetRef"),
                )
            elif is_flow_node_name(local):
                node = Node(
                    id=element_id,
                    type=_type_tag(local),
                    name=child.attrib.get("name"),
                    incoming=[(e.text or "").strip() for e in child.findall("bpmn:incoming", NAMESPACES)],
                    outgoing=[(e.text or "").strip() for e in child.findall("bpmn:outgoing", NAMESPACES)],
                )
                if node.is_container:
                    node.children = self._parse_flow_elements(child, element_id, index, parents)
                element = node
            else:
                # Lanes, documentation, data objects, annotations ...
                continue

            index[element_id] = element
            parents[element_id] = container_id
            elements.append(element)
        return elements

    def _parse_bounds(self, elem: Optional[ET._Element]) -> Optional[Bounds]:
        """Parse dc:Bounds. Returns None if missing or invalid."""
        if elem is None:
            return None
        try:
            return Bounds(
                x=float(elem.attrib.get("x", "0") or 0),
                y=float(elem.attrib.get("y", "0") or 0),
                width=float(elem.attrib.get("width", "0") or 0),
                height=float(elem.attrib.get("height", "0") or 0),
            )
        except ValueError:
            return None

    def _parse_waypoints(self, edge_elem: ET._Element) -> List[Waypoint]:
        points: List[Waypoint] = []
        for wp in edge_elem.findall("di:waypoint", NAMESPACES):
            try:
                points.append((float(wp.attrib.get("x", "0")), float(wp.attrib.get("y", "0"))))
            except ValueError:
                if self.logger:
                    self.logger.debug(f"Invalid waypoint on {edge_elem.attrib.get('bpmnElement')}")
        return points

    def _register_label(
        self,
        di_elem: ET._Element,
        element: FlowElement,
        parent_id: Optional[str],
        registry: ElementRegistry,
    ) -> None:
        label = di_elem.find("bpmndi:BPMNLabel", NAMESPACES)
        if label is None:
            return
        bounds = self._parse_bounds(label.find("dc:Bounds", NAMESPACES))
        if bounds is None:
            return
        registry.add(RegistryElement(
            id=f"{element.id}_label",
            type="label",
            business_object=element,
            parent_id=parent_id,
            x=bounds.x, y=bounds.y, width=bounds.width, height=bounds.height,
        ))

    def _parse_diagram(
        self,
        root: ET._Element,
        index: Dict[str, FlowElement],
        parents: Dict[str, str],
        registry: ElementRegistry,
    ) -> None:
        """Parse BPMN DI into registry entries; shape bounds also become the stored layout"""
        for shape_elem in root.iterfind(".//bpmndi:BPMNShape", NAMESPACES):
            element_id = shape_elem.attrib.get("bpmnElement")
            element = index.get(element_id or "")
            if element is None:
                if self.logger:
                    self.logger.debug(f"Skipping shape for unsupported element: {element_id}")
                continue
            bounds = self._parse_bounds(shape_elem.find("dc:Bounds", NAMESPACES))
            if bounds is None:
                continue
            if isinstance(element, Node):
                element.bounds = Bounds(bounds.x, bounds.y, bounds.width, bounds.height)
            registry.add(RegistryElement(
                id=element.id,
                type=element.type,
                business_object=element,
                parent_id=parents.get(element.id),
                x=bounds.x, y=bounds.y, width=bounds.width, height=bounds.height,
            ))
            self._register_label(shape_elem, element, parents.get(element.id), registry)

        for edge_elem in root.iterfind(".//bpmndi:BPMNEdge", NAMESPACES):
            element_id = edge_elem.attrib.get("bpmnElement")
            element = index.get(element_id or "")
            if element is None:
                continue
            registry.add(RegistryElement(
                id=element.id,
                type=element.type,
                business_object=element,
                parent_id=parents.get(element.id),
                waypoints=self._parse_waypoints(edge_elem),
            ))
            self._register_label(edge_elem, element, parents.get(element.id), registry)
