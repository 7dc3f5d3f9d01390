"""
Subprocess extraction

Turns a subprocess of a larger diagram into a standalone BPMN document:
structure and geometry of the subprocess content, re-anchored at the padding offset
"""
import uuid
from typing import Optional, Set

from lxml import etree as ET

from ..config import BPMN_DI_NS, BPMN_MODEL_NS, DC_NS, DI_NS, XSI_NS, ExtractionConfig, default_config
from ..errors import CyclicContainmentError, ExtractionError, NotFoundError
from ..io.registry import DiagramModelProvider
from ..layout import AutoLayoutService, HttpAutoLayoutService
from ..logger import ExtractionLogger
from ..model.process import ExtractionResult, Node
from .detector import count_elements, has_nested_subprocesses
from .diagram_emitter import DiagramEmitter
from .geometry import GeometryCollector, normalize
from .process_emitter import ProcessEmitter
from .xmltext import escape_attr, name_attr


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def check_acyclic(root: Node) -> None:
    """Raise CyclicContainmentError if a container is its own transitive ancestor"""
    def _walk(node: Node, path: Set[int]) -> None:
        if id(node) in path:
            raise CyclicContainmentError(node.id)
        path.add(id(node))
        for child in node.child_nodes():
            _walk(child, path)
        path.discard(id(node))

    _walk(root, set())


class SubProcessExtractor:
    """Extract subprocesses of a live diagram as standalone processes"""

    def __init__(
        self,
        provider: DiagramModelProvider,
        layout_service: Optional[AutoLayoutService] = None,
        config: Optional[ExtractionConfig] = None,
        logger: Optional[ExtractionLogger] = None,
    ):
        """
        Args:
            provider: Live diagram model
            layout_service: Auto-layout service (built from config.layout_url if None)
            config: ExtractionConfig instance (uses default_config if None)
            logger: ExtractionLogger instance (a new logger if None)
        """
        self.provider = provider
        self.config = config or default_config
        self.logger = logger or ExtractionLogger()
        if layout_service is None and self.config.layout_url:
            layout_service = HttpAutoLayoutService(self.config.layout_url, self.config.layout_timeout)
        self.layout_service = layout_service
        self.process_emitter = ProcessEmitter(self.config, self.logger)
        self.diagram_emitter = DiagramEmitter(self.config, self.logger)

    def has_nested(self, container_id: str) -> bool:
        """Whether a direct child of the container is a subprocess"""
        return has_nested_subprocesses(self.provider, container_id, self.logger)

    def count_elements(self, container_id: str) -> int:
        """Number of meaningful direct children of the container"""
        return count_elements(self.provider, container_id)

    def _resolve_container(self, container_id: str) -> Node:
        element = self.provider.get(container_id)
        node = element.business_object if element is not None else None
        if not isinstance(node, Node):
            raise NotFoundError(container_id)
        return node

    def build(self, container_id: str, padding: Optional[float] = None) -> ExtractionResult:
        """
        Extract a subprocess without auto-layout

        Args:
            container_id: Subprocess element id
            padding: Minimum x/y of the extracted diagram (config.padding if None)

        Returns:
            ExtractionResult

        Raises:
            NotFoundError: container_id does not resolve
        """
        node = self._resolve_container(container_id)
        check_acyclic(node)
        name = node.name or self.config.default_name
        has_nested = self.has_nested(container_id)
        element_count = self.count_elements(container_id)

        collector = GeometryCollector(self.provider, self.config, self.logger)
        origin = collector.node_bounds(node)
        offset = (origin.x, origin.y) if origin is not None else (0.0, 0.0)
        bounds_map, waypoints_map = collector.collect(node.children, offset)
        padding = self.config.padding if padding is None else padding
        normalize(bounds_map, waypoints_map, padding)

        xml = self._compose(node, name, bounds_map, waypoints_map, padding)
        self._check_well_formed(xml)
        self.logger.info(
            f"Extracted {container_id} ({name}): {element_count} elements, "
            f"{len(bounds_map)} shapes, nested subprocesses: {has_nested}"
        )
        return ExtractionResult(
            xml=xml,
            name=name,
            has_nested_subprocesses=has_nested,
            element_count=element_count,
        )

    async def extract(
        self,
        container_id: str,
        use_auto_layout: bool = False,
        padding: Optional[float] = None,
    ) -> ExtractionResult:
        """
        Extract a subprocess, optionally re-laid-out by the auto-layout service

        A failing layout service leaves the geometry-normalized document in place.
        """
        result = self.build(container_id, padding)
        if not use_auto_layout:
            return result

        if self.layout_service is None:
            self.logger.warn_layout_failure(ExtractionError("no auto-layout service configured"))
            return result
        try:
            result.xml = await self.layout_service.layout(result.xml)
        except Exception as e:
            self.logger.warn_layout_failure(e)
        return result

    async def extract_with_auto_layout(self, container_id: str, padding: Optional[float] = None) -> ExtractionResult:
        return await self.extract(container_id, use_auto_layout=True, padding=padding)

    def _compose(self, node: Node, name: str, bounds_map, waypoints_map, padding: float) -> str:
        """Wrap the process body and DI records into a definitions document"""
        unit = self.config.indent
        definitions_id = _new_id("Definitions")
        process_id = _new_id("Process")
        diagram_id = _new_id("BPMNDiagram")
        plane_id = _new_id("BPMNPlane")

        body = self.process_emitter.emit_process_body(node.children, unit * 2)
        shapes = self.diagram_emitter.emit_shapes(node.children, bounds_map, unit * 3)
        edges = self.diagram_emitter.emit_edges(
            node.children, bounds_map, waypoints_map, unit * 3, origin=(padding, padding)
        )

        return (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            f'<bpmn:definitions xmlns:xsi="{XSI_NS}" xmlns:bpmn="{BPMN_MODEL_NS}" '
            f'xmlns:bpmndi="{BPMN_DI_NS}" xmlns:dc="{DC_NS}" xmlns:di="{DI_NS}" '
            f'id="{definitions_id}" targetNamespace="{escape_attr(self.config.target_namespace)}" '
            f'exporter="{escape_attr(self.config.exporter)}" '
            f'exporterVersion="{escape_attr(self.config.exporter_version)}">\n'
            f'{unit}<bpmn:process id="{process_id}"{name_attr(name)} isExecutable="false">\n'
            f'{body}'
            f'{unit}</bpmn:process>\n'
            f'{unit}<bpmndi:BPMNDiagram id="{diagram_id}">\n'
            f'{unit * 2}<bpmndi:BPMNPlane id="{plane_id}" bpmnElement="{process_id}">\n'
            f'{shapes}'
            f'{edges}'
            f'{unit * 2}</bpmndi:BPMNPlane>\n'
            f'{unit}</bpmndi:BPMNDiagram>\n'
            '</bpmn:definitions>\n'
        )

    def _check_well_formed(self, xml: str) -> None:
        try:
            ET.fromstring(xml.encode("utf-8"))
        except ET.XMLSyntaxError as e:
            raise ExtractionError(f"Composed document is not well-formed: {e}") from e
