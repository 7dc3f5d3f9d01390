"""
Extract BPMN subprocesses as standalone process documents
"""
from .errors import CyclicContainmentError, ExtractionError, LayoutServiceError, NotFoundError
from .extract.extractor import SubProcessExtractor
from .io.bpmn_loader import BpmnDocument, BpmnLoader
from .io.registry import ElementRegistry, RegistryElement
from .model.process import Bounds, ExtractionResult, Flow, Node

__all__ = [
    "Bounds",
    "BpmnDocument",
    "BpmnLoader",
    "CyclicContainmentError",
    "ElementRegistry",
    "ExtractionError",
    "ExtractionResult",
    "Flow",
    "LayoutServiceError",
    "Node",
    "NotFoundError",
    "RegistryElement",
    "SubProcessExtractor",
]
