"""
Subprocess data extraction

Selects the activity configurations and variables that belong to a subprocess,
so a process created from the subprocess carries only what its nodes use
"""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set

from .io.registry import DiagramModelProvider
from .logger import ExtractionLogger
from .model.process import Node, is_flow_type

# ${name} or {{name}}
_VARIABLE_REF = re.compile(r'\$\{(\w+)\}|\{\{(\w+)\}\}')


@dataclass
class SubProcessData:
    """Activities and variables scoped to a subprocess"""
    activities: List[Dict[str, Any]] = field(default_factory=list)
    variables: Dict[str, Any] = field(default_factory=dict)
    node_ids: List[str] = field(default_factory=list)


def get_subprocess_node_ids(provider: DiagramModelProvider, container_id: str) -> List[str]:
    """Ids of the direct flow elements of a subprocess, sequence flows excluded"""
    element = provider.get(container_id)
    node = element.business_object if element is not None else None
    if not isinstance(node, Node):
        return []
    return [child.id for child in node.children if not is_flow_type(child.type)]


def filter_activities(activities: Optional[Iterable[Dict[str, Any]]], node_ids: Iterable[str]) -> List[Dict[str, Any]]:
    """Keep the activities whose activityID is one of node_ids"""
    if not activities:
        return []
    wanted = set(node_ids)
    return [a for a in activities if a.get("activityID") in wanted]


def _referenced_names(value: Any) -> Set[str]:
    if not isinstance(value, str):
        return set()
    return {a or b for a, b in _VARIABLE_REF.findall(value)}


def collect_variable_names(activities: Iterable[Dict[str, Any]]) -> Set[str]:
    """Variable names referenced by activity properties, parameters and mappings"""
    names: Set[str] = set()
    for activity in activities:
        for key in ("properties", "parameters"):
            for value in (activity.get(key) or {}).values():
                names |= _referenced_names(value)
        for key in ("inputMapping", "outputMapping"):
            names.update(activity.get(key) or {})
    return names


def filter_variables(variables: Optional[Dict[str, Any]], activities: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """Keep the variables used by the given activities"""
    if not variables:
        return {}
    used = collect_variable_names(activities)
    return {name: value for name, value in variables.items() if name in used}


def extract_subprocess_data(
    provider: DiagramModelProvider,
    container_id: str,
    activities: Optional[Iterable[Dict[str, Any]]],
    variables: Optional[Dict[str, Any]],
    logger: Optional[ExtractionLogger] = None,
) -> SubProcessData:
    """
    Collect everything a process created from a subprocess needs

    Args:
        provider: Live diagram model
        container_id: Subprocess element id
        activities: Activity configurations of the whole process
        variables: Variables of the whole process

    Returns:
        SubProcessData scoped to the subprocess
    """
    logger = logger or ExtractionLogger()
    node_ids = get_subprocess_node_ids(provider, container_id)
    scoped_activities = filter_activities(activities, node_ids)
    scoped_variables = filter_variables(variables, scoped_activities)
    logger.info(
        f"Subprocess data for {container_id}: {len(node_ids)} nodes, "
        f"{len(scoped_activities)} activities, {len(scoped_variables)} variables"
    )
    return SubProcessData(activities=scoped_activities, variables=scoped_variables, node_ids=node_ids)
