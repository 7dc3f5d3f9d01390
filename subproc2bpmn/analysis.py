"""
Document analysis

Summarizes an extracted BPMN document: element counts, geometry extent and
flow references that do not resolve
"""
from dataclasses import dataclass, field
from typing import List, Optional

from lxml import etree as ET

from .config import NAMESPACES
from .errors import ExtractionError
from .io.bpmn_loader import is_flow_node_name


@dataclass
class DocumentSummary:
    """Counts and extent of a BPMN document"""
    node_count: int = 0
    flow_count: int = 0
    shape_count: int = 0
    edge_count: int = 0
    min_x: Optional[float] = None
    min_y: Optional[float] = None
    dangling_refs: List[str] = field(default_factory=list)


def analyze_document(xml: str) -> DocumentSummary:
    """
    Analyze a BPMN document

    Args:
        xml: Document text

    Returns:
        DocumentSummary

    Raises:
        ExtractionError: xml is not well-formed
    """
    try:
        root = ET.fromstring(xml.encode("utf-8"))
    except ET.XMLSyntaxError as e:
        raise ExtractionError(f"Document is not well-formed: {e}") from e

    summary = DocumentSummary()
    node_ids = set()
    for process in root.findall("bpmn:process", NAMESPACES):
        for elem in process.iter():
            if not isinstance(elem.tag, str) or ET.QName(elem).namespace != NAMESPACES["bpmn"]:
                continue
            local = ET.QName(elem).localname
            if is_flow_node_name(local):
                summary.node_count += 1
                node_ids.add(elem.attrib.get("id"))

    for flow in root.iterfind(".//bpmn:sequenceFlow", NAMESPACES):
        summary.flow_count += 1
        for attr in ("sourceRef", "targetRef"):
            ref = flow.attrib.get(attr)
            if ref not in node_ids:
                summary.dangling_refs.append(f"{flow.attrib.get('id')}.{attr}={ref}")

    xs: List[float] = []
    ys: List[float] = []
    for bounds in root.iterfind(".//bpmndi:BPMNShape/dc:Bounds", NAMESPACES):
        summary.shape_count += 1
        xs.append(float(bounds.attrib.get("x", "0")))
        ys.append(float(bounds.attrib.get("y", "0")))
    for edge in root.iterfind(".//bpmndi:BPMNEdge", NAMESPACES):
        summary.edge_count += 1
        for wp in edge.findall("di:waypoint", NAMESPACES):
            xs.append(float(wp.attrib.get("x", "0")))
            ys.append(float(wp.attrib.get("y", "0")))

    if xs:
        summary.min_x = min(xs)
        summary.min_y = min(ys)
    return summary


def print_summary(summary: DocumentSummary) -> None:
    """Print a document summary"""
    print("\nDocument analysis:")
    print(f"  Flow nodes:     {summary.node_count}")
    print(f"  Sequence flows: {summary.flow_count}")
    print(f"  DI shapes:      {summary.shape_count}")
    print(f"  DI edges:       {summary.edge_count}")
    if summary.min_x is not None:
        print(f"  Origin:         ({summary.min_x:g}, {summary.min_y:g})")
    if summary.dangling_refs:
        print(f"  Dangling refs ({len(summary.dangling_refs)}):")
        for ref in summary.dangling_refs:
            print(f"    - {ref}")
