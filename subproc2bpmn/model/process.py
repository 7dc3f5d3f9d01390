"""
Process graph model

Flow elements (nodes and sequence flows), node bounds, waypoints and the
extraction result. Container nodes own their child elements.
"""
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple, Union

# Ordered (x, y) point of a routed flow
Waypoint = Tuple[float, float]

KIND_TASK = 'task'
KIND_EVENT = 'event'
KIND_GATEWAY = 'gateway'
KIND_CONTAINER = 'container'
KIND_FLOW = 'flow'

CONTAINER_TYPES = {'subprocess', 'transaction', 'adhocsubprocess'}
FLOW_TYPES = {'sequenceflow'}
LABEL_TYPE = 'label'


def local_type(type_tag: Optional[str]) -> str:
    """Strip the namespace prefix from a type tag ("bpmn:Task" -> "Task")"""
    if not type_tag:
        return ""
    return type_tag.split(":", 1)[-1]


def element_tag(type_tag: Optional[str]) -> str:
    """
    Schema element name for a type tag

    Type tags are recorded with inconsistent casing ("bpmn:SubProcess" vs
    "bpmn:subProcess"); BPMN element names start with a lower-case letter.
    """
    name = local_type(type_tag)
    if not name:
        return "task"
    return name[0].lower() + name[1:]


def is_container_type(type_tag: Optional[str]) -> bool:
    return local_type(type_tag).lower() in CONTAINER_TYPES


def is_flow_type(type_tag: Optional[str]) -> bool:
    return local_type(type_tag).lower() in FLOW_TYPES


def is_label_type(type_tag: Optional[str]) -> bool:
    return LABEL_TYPE in (type_tag or "").lower()


def kind_of(type_tag: Optional[str]) -> str:
    """Classify a type tag as task, event, gateway, container or flow"""
    name = local_type(type_tag).lower()
    if name in CONTAINER_TYPES:
        return KIND_CONTAINER
    if name in FLOW_TYPES:
        return KIND_FLOW
    if name.endswith('event'):
        return KIND_EVENT
    if name.endswith('gateway'):
        return KIND_GATEWAY
    return KIND_TASK


def ref_id(ref: Any) -> str:
    """
    Identifier of a reference

    References occur both as element objects and as bare id strings.
    """
    if ref is None:
        return ""
    if isinstance(ref, str):
        return ref
    return getattr(ref, 'id', None) or ""


@dataclass
class Bounds:
    """Position and size of a node in diagram coordinates"""
    x: float
    y: float
    width: float
    height: float

    def translate(self, dx: float, dy: float) -> None:
        self.x += dx
        self.y += dy

    def right_middle(self) -> Waypoint:
        return (self.x + self.width, self.y + self.height / 2)

    def left_middle(self) -> Waypoint:
        return (self.x, self.y + self.height / 2)


@dataclass
class FlowElement:
    """Base class for process graph elements"""
    id: str
    type: str
    name: Optional[str] = None

    @property
    def kind(self) -> str:
        return kind_of(self.type)


@dataclass
class Flow(FlowElement):
    """Sequence flow between two sibling nodes"""
    type: str = 'bpmn:SequenceFlow'
    # Either a Node or a bare id; may be unset or stale in source data
    source_ref: Union[str, FlowElement, None] = None
    target_ref: Union[str, FlowElement, None] = None


@dataclass
class Node(FlowElement):
    """Task, event, gateway or container node"""
    type: str = 'bpmn:Task'
    incoming: List[Any] = field(default_factory=list)
    outgoing: List[Any] = field(default_factory=list)
    children: List[FlowElement] = field(default_factory=list)
    # Statically stored layout record
    bounds: Optional[Bounds] = None

    @property
    def is_container(self) -> bool:
        return is_container_type(self.type)

    @property
    def incoming_ids(self) -> List[str]:
        return [i for i in (ref_id(r) for r in self.incoming) if i]

    @property
    def outgoing_ids(self) -> List[str]:
        return [i for i in (ref_id(r) for r in self.outgoing) if i]

    def child_nodes(self) -> List['Node']:
        return [c for c in self.children if isinstance(c, Node)]

    def child_flows(self) -> List[Flow]:
        return [c for c in self.children if isinstance(c, Flow)]


@dataclass
class ExtractionResult:
    """Standalone process document produced from a subprocess"""
    xml: str
    name: str
    has_nested_subprocesses: bool
    element_count: int
