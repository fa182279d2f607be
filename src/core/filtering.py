"""
Filtering — a read-only projection over the line sequence.

The search row of the UI holds three queries (address, hostname,
comment).  They are carried in an immutable :class:`FilterQuery` and
evaluated by :func:`visible_indices`; nothing here mutates the document.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from core.host_line import HostLine, MappingLine, NoteBlock


@dataclass(frozen=True, slots=True)
class FilterQuery:
    """Case-insensitive substring queries.  Empty strings match everything."""
    address: str = ""
    hostname: str = ""
    comment: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.address.strip() or self.hostname.strip() or self.comment.strip())


def _contains(value: str, query: str) -> bool:
    needle = query.strip().lower()
    return not needle or needle in value.lower()


def matches(line: HostLine, query: FilterQuery) -> bool:
    """Return ``True`` if *line* should be shown under *query*.

    Note blocks are never hidden by field filters.
    """
    if isinstance(line, NoteBlock):
        return True
    if isinstance(line, MappingLine):
        return (
            _contains(line.address, query.address)
            and _contains(line.hostname, query.hostname)
            and _contains(line.comment or "", query.comment)
        )
    raise TypeError(f"Unsupported line type: {type(line).__name__}")


def visible_indices(lines: Sequence[HostLine], query: FilterQuery) -> set[int]:
    """Positions (in the full sequence) of the lines that pass *query*."""
    return {i for i, line in enumerate(lines) if matches(line, query)}
