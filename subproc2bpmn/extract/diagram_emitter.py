"""
Diagram interchange emission

Serializes the same flow element tree into BPMN DI shape and edge records
"""
from typing import List, Optional, Sequence

from ..config import ExtractionConfig, default_config
from ..logger import ExtractionLogger
from ..model.process import Flow, FlowElement, Node, Waypoint
from .geometry import BoundsMap, WaypointsMap
from .process_emitter import resolve_level
from .xmltext import escape_attr, fmt_number


class DiagramEmitter:
    """Diagram XML emitter"""

    def __init__(self, config: Optional[ExtractionConfig] = None, logger: Optional[ExtractionLogger] = None):
        """
        Args:
            config: ExtractionConfig instance (uses default_config if None)
            logger: ExtractionLogger instance (a new logger if None)
        """
        self.config = config or default_config
        self.logger = logger or ExtractionLogger()

    def emit_shapes(self, elements: Sequence[FlowElement], bounds_map: BoundsMap, indent: str = "") -> str:
        """
        Emit one BPMNShape per node that has bounds

        Nodes without bounds stay in the process body but are not drawn.
        """
        lines: List[str] = []
        self._emit_shapes(elements, bounds_map, indent, lines)
        return "".join(lines)

    def _emit_shapes(self, elements: Sequence[FlowElement], bounds_map: BoundsMap, indent: str, lines: List[str]) -> None:
        inner = indent + self.config.indent
        for element in elements:
            if not isinstance(element, Node):
                continue
            has_children = element.is_container and bool(element.children)
            bounds = bounds_map.get(element.id)
            if bounds is not None:
                expanded = ' isExpanded="true"' if has_children else ""
                lines.append(
                    f'{indent}<bpmndi:BPMNShape id="{escape_attr(element.id)}_di" '
                    f'bpmnElement="{escape_attr(element.id)}"{expanded}>\n'
                )
                lines.append(
                    f'{inner}<dc:Bounds x="{fmt_number(bounds.x)}" y="{fmt_number(bounds.y)}" '
                    f'width="{fmt_number(bounds.width)}" height="{fmt_number(bounds.height)}" />\n'
                )
                lines.append(f"{indent}</bpmndi:BPMNShape>\n")
            if has_children:
                self._emit_shapes(element.children, bounds_map, indent, lines)

    def emit_edges(
        self,
        elements: Sequence[FlowElement],
        bounds_map: BoundsMap,
        waypoints_map: WaypointsMap,
        indent: str = "",
        origin: Waypoint = (0.0, 0.0),
    ) -> str:
        """
        Emit one BPMNEdge per resolvable flow

        Recorded waypoints are preferred. Without them the edge runs from the
        right middle of the source to the left middle of the target; without
        endpoint bounds the configured stub path is drawn, shifted to origin
        (the padding corner of a normalized diagram).
        """
        lines: List[str] = []
        self._emit_edges(elements, bounds_map, waypoints_map, indent, origin, lines)
        return "".join(lines)

    def _emit_edges(
        self,
        elements: Sequence[FlowElement],
        bounds_map: BoundsMap,
        waypoints_map: WaypointsMap,
        indent: str,
        origin: Waypoint,
        lines: List[str],
    ) -> None:
        inner = indent + self.config.indent
        refs = resolve_level(elements)
        for element in elements:
            if isinstance(element, Node):
                if element.is_container and element.children:
                    self._emit_edges(element.children, bounds_map, waypoints_map, indent, origin, lines)
                continue
            if not isinstance(element, Flow):
                continue

            flow_refs = refs[element.id]
            if not flow_refs.resolved:
                # Already reported by the process emitter
                self.logger.debug(f"No edge for unresolved flow {element.id}")
                continue

            points = self._edge_points(
                element, flow_refs.source_ref, flow_refs.target_ref, bounds_map, waypoints_map, origin
            )
            lines.append(
                f'{indent}<bpmndi:BPMNEdge id="{escape_attr(element.id)}_di" '
                f'bpmnElement="{escape_attr(element.id)}">\n'
            )
            for x, y in points:
                lines.append(f'{inner}<di:waypoint x="{fmt_number(x)}" y="{fmt_number(y)}" />\n')
            lines.append(f"{indent}</bpmndi:BPMNEdge>\n")

    def _edge_points(
        self,
        flow: Flow,
        source_id: str,
        target_id: str,
        bounds_map: BoundsMap,
        waypoints_map: WaypointsMap,
        origin: Waypoint,
    ) -> List[Waypoint]:
        recorded = waypoints_map.get(flow.id)
        if recorded and len(recorded) >= 2:
            return list(recorded)

        source = bounds_map.get(source_id)
        target = bounds_map.get(target_id)
        if source is not None and target is not None:
            return [source.right_middle(), target.left_middle()]

        self.logger.warn_missing_geometry(
            flow.id,
            f"missing bounds for {source_id if source is None else target_id}; drawing stub path",
            {'source_ref': source_id, 'target_ref': target_id},
        )
        ox, oy = origin
        return [(x + ox, y + oy) for x, y in self.config.stub_waypoints]
