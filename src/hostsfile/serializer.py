"""
Serializer for the hosts file.

Converts lines back to hosts file text, and provides JSON round-trip
helpers (``from_dict`` / ``to_json``).
"""
from __future__ import annotations

from typing import Sequence

from core.host_line import HostLine, LineKind, MappingLine, NoteBlock
from hostsfile.parser import COMMENT_SEPARATOR, DISABLED_PREFIX, FIELD_SEPARATOR


def serialize_line(line: HostLine) -> str:
    """Render one line.  A disabled mapping always gets a fresh ``"# "`` prefix."""
    if isinstance(line, MappingLine):
        text = f"{line.address}{FIELD_SEPARATOR}{line.hostname}"
        if line.comment is not None and line.comment.strip():
            text = f"{text}{COMMENT_SEPARATOR}{line.comment}"
        return text if line.active else DISABLED_PREFIX + text
    if isinstance(line, NoteBlock):
        return line.text
    raise TypeError(f"Unsupported line type: {type(line).__name__}")


def serialize(lines: Sequence[HostLine]) -> str:
    """Join the rendered lines with ``\\n`` (no trailing newline)."""
    return "\n".join(serialize_line(line) for line in lines)


def from_dict(fields: dict) -> HostLine:
    """Build a line from a raw JSON dict, dispatching on ``"kind"``."""
    kind = LineKind(fields.get("kind", LineKind.MAPPING.value))
    if kind is LineKind.NOTE:
        return NoteBlock(text=str(fields.get("text", "")))
    comment = fields.get("comment")
    if comment == "":
        comment = None
    return MappingLine(
        address=str(fields.get("address", "")),
        hostname=str(fields.get("hostname", "")),
        comment=comment,
        active=bool(fields.get("active", True)),
    )


def to_json(line: HostLine) -> dict:
    """Convert a line to a JSON-safe dict tagged with ``"kind"``."""
    if isinstance(line, MappingLine):
        return {
            "kind": LineKind.MAPPING.value,
            "address": line.address,
            "hostname": line.hostname,
            "comment": line.comment,
            "active": line.active,
        }
    if isinstance(line, NoteBlock):
        return {"kind": LineKind.NOTE.value, "text": line.text}
    raise TypeError(f"Unsupported line type: {type(line).__name__}")
