"""
Configuration module

Policy constants and the extraction configuration dataclass
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple

# BPMN 2.0 namespaces
BPMN_MODEL_NS = "http://www.omg.org/spec/BPMN/20100524/MODEL"
BPMN_DI_NS = "http://www.omg.org/spec/BPMN/20100524/DI"
DC_NS = "http://www.omg.org/spec/DD/20100524/DC"
DI_NS = "http://www.omg.org/spec/DD/20100524/DI"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"

NAMESPACES = {
    "bpmn": BPMN_MODEL_NS,
    "bpmndi": BPMN_DI_NS,
    "dc": DC_NS,
    "di": DI_NS,
}

# Size used when a shape exists but carries no width/height
DEFAULT_SHAPE_WIDTH = 100.0
DEFAULT_SHAPE_HEIGHT = 80.0

# Offset of the extracted diagram's bounding box from the origin
DEFAULT_PADDING = 100.0

# Path drawn for a flow whose endpoints have no geometry
STUB_WAYPOINTS: Tuple[Tuple[float, float], ...] = ((0.0, 0.0), (100.0, 0.0))


@dataclass
class ExtractionConfig:
    """Extraction configuration"""
    padding: float = DEFAULT_PADDING
    default_width: float = DEFAULT_SHAPE_WIDTH
    default_height: float = DEFAULT_SHAPE_HEIGHT
    stub_waypoints: Tuple[Tuple[float, float], ...] = field(default_factory=lambda: STUB_WAYPOINTS)
    default_name: str = "Untitled SubProcess"
    indent: str = "  "

    # Envelope attributes
    target_namespace: str = "http://bpmn.io/schema/bpmn"
    exporter: str = "subproc2bpmn"
    exporter_version: str = "0.1.0"

    # Auto-layout service (disabled when layout_url is None)
    layout_url: Optional[str] = None
    layout_timeout: float = 10.0


# Default configuration instance
default_config = ExtractionConfig()
