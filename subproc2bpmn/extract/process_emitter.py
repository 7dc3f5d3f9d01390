"""
Process body emission

Serializes a flow element tree into the <bpmn:process> body: nodes with their
incoming/outgoing references, sequence flows with resolved refs, and nested
subprocesses as recursive blocks
"""
from typing import Dict, List, Optional, Sequence

from ..config import ExtractionConfig, default_config
from ..logger import ExtractionLogger
from ..model.process import Flow, FlowElement, Node, element_tag
from .resolver import FlowRefs, resolve_refs
from .xmltext import escape_attr, name_attr


def resolve_level(elements: Sequence[FlowElement]) -> Dict[str, FlowRefs]:
    """Resolve every flow of one containment level"""
    return {e.id: resolve_refs(e, elements) for e in elements if isinstance(e, Flow)}


class ProcessEmitter:
    """Structural XML emitter"""

    def __init__(self, config: Optional[ExtractionConfig] = None, logger: Optional[ExtractionLogger] = None):
        """
        Args:
            config: ExtractionConfig instance (uses default_config if None)
            logger: ExtractionLogger instance (a new logger if None)
        """
        self.config = config or default_config
        self.logger = logger or ExtractionLogger()

    def emit_process_body(self, elements: Sequence[FlowElement], indent: str = "") -> str:
        """
        Emit the process body for a list of flow elements

        Flows whose source or target cannot be resolved are dropped and logged.

        Args:
            elements: Flow elements of one containment level
            indent: Indentation prefix of the first level

        Returns:
            XML text, one element per line
        """
        lines: List[str] = []
        self._emit_level(elements, indent, lines)
        return "".join(lines)

    def _emit_level(self, elements: Sequence[FlowElement], indent: str, lines: List[str]) -> None:
        refs = resolve_level(elements)
        emitted_flows = {flow_id for flow_id, r in refs.items() if r.resolved}

        for element in elements:
            if isinstance(element, Flow):
                self._emit_flow(element, refs[element.id], indent, lines)
            elif isinstance(element, Node):
                self._emit_node(element, emitted_flows, indent, lines)

    def _emit_flow(self, flow: Flow, refs: FlowRefs, indent: str, lines: List[str]) -> None:
        if not refs.resolved:
            self.logger.warn_unresolved_reference(flow.id, refs.source_ref, refs.target_ref)
            return
        lines.append(
            f'{indent}<bpmn:sequenceFlow id="{escape_attr(flow.id)}"{name_attr(flow.name)} '
            f'sourceRef="{escape_attr(refs.source_ref)}" targetRef="{escape_attr(refs.target_ref)}" />\n'
        )

    def _emit_node(self, node: Node, emitted_flows: set, indent: str, lines: List[str]) -> None:
        tag = f"bpmn:{element_tag(node.type)}"
        open_tag = f'{indent}<{tag} id="{escape_attr(node.id)}"{name_attr(node.name)}'
        inner = indent + self.config.indent

        # References to dropped flows would dangle
        ref_lines = [
            f"{inner}<bpmn:incoming>{escape_attr(i)}</bpmn:incoming>\n"
            for i in node.incoming_ids if i in emitted_flows
        ] + [
            f"{inner}<bpmn:outgoing>{escape_attr(o)}</bpmn:outgoing>\n"
            for o in node.outgoing_ids if o in emitted_flows
        ]
        has_children = node.is_container and bool(node.children)

        if not ref_lines and not has_children:
            lines.append(f"{open_tag} />\n")
            return

        lines.append(f"{open_tag}>\n")
        lines.extend(ref_lines)
        if has_children:
            self._emit_level(node.children, inner, lines)
        lines.append(f"{indent}</{tag}>\n")
