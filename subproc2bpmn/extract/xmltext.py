"""
Helpers for writing XML text
"""
from typing import Optional
from xml.sax.saxutils import escape

_ATTR_ENTITIES = {
    '"': "&quot;",
    "'": "&apos;",
    # Attribute value normalization turns raw whitespace characters into spaces
    "\n": "&#10;",
    "\r": "&#13;",
    "\t": "&#9;",
}


def escape_attr(value: str) -> str:
    """Escape a value for use inside a double-quoted attribute"""
    return escape(value, _ATTR_ENTITIES)


def name_attr(name: Optional[str]) -> str:
    """' name="..."' or an empty string when there is no name"""
    if not name:
        return ""
    return f' name="{escape_attr(name)}"'


def fmt_number(value: float) -> str:
    """Format a coordinate without a trailing .0 (140.0 -> "140", 12.345 -> "12.35")"""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")
