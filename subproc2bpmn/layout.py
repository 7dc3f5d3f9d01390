"""
Auto-layout service client

Sends a complete BPMN document to an external layout service and returns the
re-laid-out document
"""
import asyncio
import urllib.error
import urllib.request
from typing import Optional, Protocol

from lxml import etree as ET

from .config import BPMN_MODEL_NS
from .errors import LayoutServiceError


class AutoLayoutService(Protocol):
    """Recomputes the geometry of a well-formed BPMN document"""

    async def layout(self, xml: str) -> str:
        ...


def check_definitions(xml: str) -> None:
    """Raise LayoutServiceError unless xml is a well-formed BPMN definitions document"""
    try:
        root = ET.fromstring(xml.encode("utf-8"))
    except ET.XMLSyntaxError as e:
        raise LayoutServiceError(f"Layout service returned malformed XML: {e}") from e
    if root.tag != f"{{{BPMN_MODEL_NS}}}definitions":
        raise LayoutServiceError(f"Layout service returned unexpected root element: {root.tag}")


class HttpAutoLayoutService:
    """Auto-layout over HTTP: POST the document, read the laid-out document back"""

    def __init__(self, url: str, timeout: float = 10.0, user_agent: Optional[str] = None):
        """
        Args:
            url: Layout endpoint
            timeout: Seconds before the call is abandoned
            user_agent: User-Agent header value
        """
        self.url = url
        self.timeout = timeout
        self.user_agent = user_agent or "subproc2bpmn"

    def _post(self, xml: str) -> str:
        req = urllib.request.Request(
            self.url,
            data=xml.encode("utf-8"),
            method="POST",
            headers={
                "Content-Type": "application/xml; charset=utf-8",
                "Accept": "application/xml",
                "User-Agent": self.user_agent,
            },
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                charset = response.headers.get_content_charset() or "utf-8"
                return response.read().decode(charset)
        except (urllib.error.URLError, OSError) as e:
            raise LayoutServiceError(f"Layout service request failed: {e}") from e

    async def layout(self, xml: str) -> str:
        try:
            result = await asyncio.wait_for(asyncio.to_thread(self._post, xml), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise LayoutServiceError(f"Layout service timed out after {self.timeout}s") from e
        check_definitions(result)
        return result
