"""
Live diagram model

Element registry mapping element identifiers to the shapes and connections of
the current diagram, and the narrow provider interface the extraction engine
depends on
"""
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Protocol

from ..model.process import Bounds, FlowElement, Waypoint, is_container_type, is_label_type


@dataclass
class RegistryElement:
    """Shape or connection of the live diagram"""
    id: str
    type: str
    business_object: Optional[FlowElement] = None
    parent_id: Optional[str] = None
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    # Set for connections only
    waypoints: Optional[List[Waypoint]] = None

    @property
    def is_label(self) -> bool:
        return is_label_type(self.type)

    @property
    def is_connection(self) -> bool:
        return self.waypoints is not None


class DiagramModelProvider(Protocol):
    """Interface of the live diagram model"""

    # True when child shapes are positioned relative to their container
    relative_children: bool

    def get(self, element_id: str) -> Optional[RegistryElement]:
        ...

    def children(self, element_id: str) -> List[RegistryElement]:
        ...

    def get_bounds(self, element_id: str) -> Optional[Bounds]:
        ...

    def get_waypoints(self, element_id: str) -> Optional[List[Waypoint]]:
        ...


class ElementRegistry:
    """In-memory live diagram model"""

    def __init__(self, relative_children: bool = False):
        """
        Args:
            relative_children: Whether nested shapes are stored relative to their container
        """
        self.relative_children = relative_children
        self._elements: Dict[str, RegistryElement] = {}
        self._children: Dict[str, List[str]] = {}

    def __contains__(self, element_id: str) -> bool:
        return element_id in self._elements

    def __iter__(self) -> Iterator[RegistryElement]:
        return iter(self._elements.values())

    def __len__(self) -> int:
        return len(self._elements)

    def add(self, element: RegistryElement) -> RegistryElement:
        """Register a shape or connection (replaces an existing entry with the same id)"""
        if element.id in self._elements:
            self.remove(element.id)
        self._elements[element.id] = element
        if element.parent_id:
            self._children.setdefault(element.parent_id, []).append(element.id)
        return element

    def remove(self, element_id: str) -> None:
        element = self._elements.pop(element_id, None)
        if element is None or not element.parent_id:
            return
        siblings = self._children.get(element.parent_id, [])
        if element_id in siblings:
            siblings.remove(element_id)

    def get(self, element_id: str) -> Optional[RegistryElement]:
        return self._elements.get(element_id)

    def ids(self) -> List[str]:
        return list(self._elements)

    def children(self, element_id: str) -> List[RegistryElement]:
        """Direct children of an element, in registration order"""
        return [self._elements[cid] for cid in self._children.get(element_id, []) if cid in self._elements]

    def subprocess_ids(self) -> List[str]:
        """Ids of all container shapes"""
        return [e.id for e in self._elements.values() if not e.is_connection and is_container_type(e.type)]

    def get_bounds(self, element_id: str) -> Optional[Bounds]:
        """Current bounds of a shape (None for unknown ids and connections)"""
        element = self._elements.get(element_id)
        if element is None or element.is_connection:
            return None
        return Bounds(element.x, element.y, element.width, element.height)

    def get_waypoints(self, element_id: str) -> Optional[List[Waypoint]]:
        """Current routed path of a connection (None when not routed)"""
        element = self._elements.get(element_id)
        if element is None or not element.waypoints:
            return None
        return list(element.waypoints)

    def update_bounds(self, element_id: str, bounds: Bounds) -> None:
        element = self._elements[element_id]
        element.x, element.y = bounds.x, bounds.y
        element.width, element.height = bounds.width, bounds.height

    def update_waypoints(self, element_id: str, waypoints: List[Waypoint]) -> None:
        self._elements[element_id].waypoints = list(waypoints)
