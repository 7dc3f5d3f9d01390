"""
Geometry collection and coordinate normalization

Collects node bounds and flow waypoints for an extracted subtree and
re-anchors them so the extracted diagram starts at a fixed padding offset
"""
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import ExtractionConfig, default_config
from ..io.registry import DiagramModelProvider
from ..logger import ExtractionLogger
from ..model.process import Bounds, Flow, FlowElement, Node, Waypoint

BoundsMap = Dict[str, Bounds]
WaypointsMap = Dict[str, List[Waypoint]]


class GeometryCollector:
    """Collect bounds and waypoints from the live model with a stored-layout fallback"""

    def __init__(
        self,
        provider: DiagramModelProvider,
        config: Optional[ExtractionConfig] = None,
        logger: Optional[ExtractionLogger] = None,
    ):
        """
        Args:
            provider: Live diagram model
            config: ExtractionConfig instance (uses default_config if None)
            logger: ExtractionLogger instance (a new logger if None)
        """
        self.provider = provider
        self.config = config or default_config
        self.logger = logger or ExtractionLogger()

    def collect(
        self, elements: Sequence[FlowElement], offset: Tuple[float, float] = (0.0, 0.0)
    ) -> Tuple[BoundsMap, WaypointsMap]:
        """
        Collect geometry for a list of elements, recursing into containers

        Args:
            elements: Flow elements of the extraction root
            offset: Origin subtracted from every coordinate

        Returns:
            (bounds by node id, waypoints by flow id)
        """
        bounds_map: BoundsMap = {}
        waypoints_map: WaypointsMap = {}
        self._collect_into(elements, offset, bounds_map, waypoints_map)
        return bounds_map, waypoints_map

    def _collect_into(
        self,
        elements: Sequence[FlowElement],
        offset: Tuple[float, float],
        bounds_map: BoundsMap,
        waypoints_map: WaypointsMap,
    ) -> None:
        off_x, off_y = offset
        for element in elements:
            if isinstance(element, Flow):
                waypoints = self.provider.get_waypoints(element.id)
                if waypoints:
                    waypoints_map[element.id] = [(x - off_x, y - off_y) for x, y in waypoints]
                continue

            bounds = self.node_bounds(element)
            if bounds is not None:
                bounds.translate(-off_x, -off_y)
                bounds_map[element.id] = bounds
            else:
                self.logger.warn_missing_geometry(element.id, "no live shape or stored bounds; not drawn")

            if isinstance(element, Node) and element.is_container and element.children:
                self._collect_into(element.children, self._child_offset(element, offset), bounds_map, waypoints_map)

    def _child_offset(self, container: Node, offset: Tuple[float, float]) -> Tuple[float, float]:
        """Offset for a container's children, expressed against the extraction root"""
        if not getattr(self.provider, "relative_children", False):
            return offset
        live = self.provider.get_bounds(container.id)
        if live is None:
            return offset
        return (offset[0] - live.x, offset[1] - live.y)

    def node_bounds(self, element: FlowElement) -> Optional[Bounds]:
        """Live bounds, else stored bounds, else None. Returns a fresh Bounds."""
        live = self.provider.get_bounds(element.id)
        if live is not None:
            bounds = Bounds(live.x, live.y, live.width, live.height)
        else:
            stored = getattr(element, "bounds", None)
            if stored is None:
                return None
            bounds = Bounds(stored.x, stored.y, stored.width, stored.height)
        bounds.width = bounds.width or self.config.default_width
        bounds.height = bounds.height or self.config.default_height
        return bounds


def get_geometry_extent(bounds_map: BoundsMap, waypoints_map: WaypointsMap) -> Optional[Tuple[float, float]]:
    """Minimum x and y over all bounds and waypoints (None when empty)"""
    xs = [b.x for b in bounds_map.values()]
    ys = [b.y for b in bounds_map.values()]
    for points in waypoints_map.values():
        xs.extend(p[0] for p in points)
        ys.extend(p[1] for p in points)
    if not xs:
        return None
    return (min(xs), min(ys))


def normalize(bounds_map: BoundsMap, waypoints_map: WaypointsMap, padding: float = default_config.padding) -> None:
    """
    Translate all geometry in place so the minimum x and y equal padding

    Args:
        bounds_map: Node bounds (modified in place)
        waypoints_map: Flow waypoints (modified in place)
        padding: Target minimum coordinate
    """
    extent = get_geometry_extent(bounds_map, waypoints_map)
    if extent is None:
        return

    min_x, min_y = extent
    dx = padding - min_x
    dy = padding - min_y
    if dx == 0 and dy == 0:
        return

    for bounds in bounds_map.values():
        bounds.translate(dx, dy)
    for flow_id, points in waypoints_map.items():
        waypoints_map[flow_id] = [(x + dx, y + dy) for x, y in points]
