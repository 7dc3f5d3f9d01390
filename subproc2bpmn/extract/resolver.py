"""
Flow reference resolution

Sequence flows may carry missing or stale source/target references (e.g. an
edge captured mid-drag). References are resolved per side by an ordered chain
of strategies; the first one that yields an id wins.
"""
from typing import Callable, Iterable, NamedTuple, Optional, Sequence

from ..model.process import Flow, FlowElement, Node, ref_id

SOURCE = 'source'
TARGET = 'target'

Strategy = Callable[[Flow, str, Sequence[FlowElement]], Optional[str]]


class FlowRefs(NamedTuple):
    source_ref: str
    target_ref: str

    @property
    def resolved(self) -> bool:
        return bool(self.source_ref and self.target_ref)


def _sibling_node_ids(siblings: Iterable[FlowElement]) -> set:
    return {s.id for s in siblings if isinstance(s, Node)}


def direct_reference(flow: Flow, side: str, siblings: Sequence[FlowElement]) -> Optional[str]:
    """The flow's own recorded reference, if it names a sibling node"""
    ref = ref_id(flow.source_ref if side == SOURCE else flow.target_ref)
    if not ref:
        return None
    if siblings and ref not in _sibling_node_ids(siblings):
        # Stale reference
        return None
    return ref


def sibling_inference(flow: Flow, side: str, siblings: Sequence[FlowElement]) -> Optional[str]:
    """The sibling node that lists the flow as outgoing (source) or incoming (target)"""
    for sibling in siblings:
        if not isinstance(sibling, Node):
            continue
        refs = sibling.outgoing_ids if side == SOURCE else sibling.incoming_ids
        if flow.id in refs:
            return sibling.id
    return None


DEFAULT_STRATEGIES = (direct_reference, sibling_inference)


def resolve_refs(
    flow: Flow,
    siblings: Sequence[FlowElement],
    strategies: Sequence[Strategy] = DEFAULT_STRATEGIES,
) -> FlowRefs:
    """
    Determine the source and target node ids of a flow

    Args:
        flow: Sequence flow
        siblings: Elements at the same containment level as the flow
        strategies: Resolution strategies in priority order

    Returns:
        FlowRefs; a side that cannot be resolved is an empty string
    """
    def _resolve(side: str) -> str:
        for strategy in strategies:
            ref = strategy(flow, side, siblings)
            if ref:
                return ref
        return ""

    return FlowRefs(_resolve(SOURCE), _resolve(TARGET))
