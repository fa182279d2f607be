"""
HostLine — the unit of display for the hosts file.

A hosts file becomes an ordered sequence of two kinds of line:

- :class:`MappingLine` — one ``address hostname [# comment]`` record,
  either active or disabled (the whole record prefixed with ``#``).
- :class:`NoteBlock` — one or more consecutive raw comment lines kept
  verbatim as a single newline-joined block.

Both are frozen.  Edits swap in a replacement built with
``dataclasses.replace`` so the previous object can be restored by undo.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class LineKind(Enum):
    """Tag used to tell the two line kinds apart in JSON."""
    MAPPING = "mapping"
    NOTE = "note"


@dataclass(frozen=True, slots=True)
class MappingLine:
    """
    One address-to-hostname record.

    Attributes:
        address:  First field, normally an IPv4 / IPv6 literal.
        hostname: Second field.
        comment:  Trailing ``# ...`` annotation.  ``None`` means no
                  annotation; an empty string is kept as-is in memory
                  and dropped by the serializer.
        active:   ``False`` when the record is commented out.
    """
    address: str = ""
    hostname: str = ""
    comment: Optional[str] = None
    active: bool = True

    @property
    def kind(self) -> LineKind:
        return LineKind.MAPPING


@dataclass(frozen=True, slots=True)
class NoteBlock:
    """Free-form comment block; ``text`` keeps the original ``#`` characters."""
    text: str = ""

    @property
    def kind(self) -> LineKind:
        return LineKind.NOTE


HostLine = Union[MappingLine, NoteBlock]

# Editable attributes per line kind
MAPPING_FIELDS = ("address", "hostname", "comment", "active")
NOTE_FIELDS = ("text",)
