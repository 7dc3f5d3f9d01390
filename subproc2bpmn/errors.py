"""
Exception hierarchy

Only a missing starting point (or a malformed containment tree) fails an extraction;
everything else is recovered locally and recorded as a warning.
"""
from typing import Optional


class ExtractionError(Exception):
    """Base error for subprocess extraction"""

    def __init__(self, message: str, element_id: Optional[str] = None):
        super().__init__(message)
        self.element_id = element_id


class NotFoundError(ExtractionError):
    """Requested container does not resolve in the diagram model"""

    def __init__(self, element_id: str):
        super().__init__(f"SubProcess not found: {element_id}", element_id)


class CyclicContainmentError(ExtractionError):
    """A container is its own transitive ancestor"""

    def __init__(self, element_id: str):
        super().__init__(f"Cyclic containment at: {element_id}", element_id)


class LayoutServiceError(ExtractionError):
    """Auto-layout service failed or returned an unusable document"""
