"""
Logging module

Records recoverable extraction problems (unresolvable flows, missing geometry,
layout service failures) as warnings and writes them to the standard logger
"""
import logging
from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field


@dataclass
class ExtractionWarning:
    """Warning during extraction"""
    element_id: Optional[str]
    warning_type: str  # 'unresolved_reference', 'missing_geometry', 'layout_failure', 'not_found'
    message: str
    details: Dict[str, Any] = field(default_factory=dict)


class ExtractionLogger:
    """Logger for the extraction process"""

    def __init__(self, name: str = 'subproc2bpmn'):
        """
        Args:
            name: Name of the underlying logging.Logger
        """
        self.warnings: List[ExtractionWarning] = []
        self.logger = logging.getLogger(name)

        # Logger configuration (default)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def _record(self, element_id: Optional[str], warning_type: str, message: str, details: Dict[str, Any]):
        warning = ExtractionWarning(
            element_id=element_id,
            warning_type=warning_type,
            message=message,
            details=details
        )
        self.warnings.append(warning)
        self.logger.warning(f"[{element_id}] {message}")

    def warn_unresolved_reference(self, flow_id: Optional[str], source_ref: str, target_ref: str):
        """Record a flow dropped because its source or target could not be determined"""
        message = (
            f"Sequence flow skipped: cannot determine refs "
            f"(source: {source_ref or '-'}, target: {target_ref or '-'})"
        )
        self._record(flow_id, 'unresolved_reference', message, {
            'source_ref': source_ref,
            'target_ref': target_ref,
        })

    def warn_missing_geometry(self, element_id: Optional[str], reason: str, details: Dict[str, Any] = None):
        """Record an element drawn with fallback geometry or not drawn at all"""
        message = f"Missing geometry: {reason}"
        self._record(element_id, 'missing_geometry', message, details or {})

    def warn_layout_failure(self, error: BaseException):
        """Record a failed auto-layout call"""
        message = f"Auto-layout failed, keeping original layout: {error}"
        self._record(None, 'layout_failure', message, {'error': repr(error)})

    def warn_not_found(self, element_id: Optional[str]):
        """Record a lookup for an element that is not in the diagram model"""
        self._record(element_id, 'not_found', "SubProcess not found", {})

    def info(self, message: str):
        """Info log"""
        self.logger.info(message)

    def debug(self, message: str):
        """Debug log"""
        self.logger.debug(message)

    def error(self, message: str):
        """Error log"""
        self.logger.error(message)

    def get_warnings(self) -> List[ExtractionWarning]:
        """Get warning list"""
        return self.warnings

    def clear_warnings(self):
        """Clear warning list"""
        self.warnings.clear()
