"""Serialise Python values as Bicep literals."""
import re
from enum import Enum
from typing import Any

from .models import BicepExpression, ModuleOutput

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

def quote(value: str) -> str:
    """Quote a string as a Bicep single-quoted literal."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("${", "\\${")
    )
    return f"'{escaped}'"

def _key(name: str) -> str:
    return name if _IDENTIFIER.match(name) else quote(name)

def to_bicep(value: Any, indent: int = 0) -> str:
    """Render a value as Bicep source.
    
    Args:
        value: Literal, expression, or nested dict/list of them. Objects with
            a ``to_bicep()`` method are rendered from its result.
        indent: Nesting level of the line the value starts on (two spaces each).
        
    Returns:
        str: Bicep source. Multi-line objects and arrays close at ``indent``.
    """
    if isinstance(value, (BicepExpression, ModuleOutput)):
        return value.text
    if hasattr(value, "to_bicep"):
        return to_bicep(value.to_bicep(), indent)
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return to_bicep(value.value, indent)
    if isinstance(value, float):
        raise TypeError("Bicep has no float literals; use an int or a string")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return quote(value)
    
    pad = "  " * (indent + 1)
    closing = "  " * indent
    if isinstance(value, dict):
        if not value:
            return "{}"
        lines = ["{"]
        for k, v in value.items():
            lines.append(f"{pad}{_key(str(k))}: {to_bicep(v, indent + 1)}")
        lines.append(f"{closing}}}")
        return "\n".join(lines)
    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        lines = ["["]
        for item in value:
            lines.append(f"{pad}{to_bicep(item, indent + 1)}")
        lines.append(f"{closing}]")
        return "\n".join(lines)
    
    raise TypeError(f"Cannot serialise {type(value).__name__} as Bicep")
