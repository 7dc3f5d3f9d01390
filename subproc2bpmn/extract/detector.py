"""
Nested subprocess detection and element counting
"""
from typing import Optional

from ..io.registry import DiagramModelProvider
from ..logger import ExtractionLogger
from ..model.process import is_container_type, is_label_type


def has_nested_subprocesses(
    provider: DiagramModelProvider,
    container_id: str,
    logger: Optional[ExtractionLogger] = None,
) -> bool:
    """
    Check whether any direct child of a container is itself a container

    Only direct children count. An id that does not resolve reports False.

    Args:
        provider: Live diagram model
        container_id: Container element id

    Returns:
        True if a direct child is a subprocess
    """
    logger = logger or ExtractionLogger()
    container = provider.get(container_id)
    if container is None:
        logger.warn_not_found(container_id)
        return False

    children = provider.children(container_id)
    nested = [child.id for child in children if is_container_type(child.type)]
    logger.debug(f"{container_id}: {len(children)} children, nested subprocesses: {nested or 'none'}")
    return bool(nested)


def count_elements(provider: DiagramModelProvider, container_id: str) -> int:
    """Count the meaningful direct children of a container (labels excluded)"""
    if provider.get(container_id) is None:
        return 0
    return sum(
        1 for child in provider.children(container_id)
        if child.type
        and not is_label_type(child.type)
        and child.type.lower().startswith("bpmn:")
    )
