"""
HostsDocument — the ordered sequence of hosts lines.

The document is the **single in-memory representation** of the hosts
file.  It is the source of truth for:

- The frontend viewer   → line fields + validation status for coloring
- The edit operations    → insert / update / delete / move
- The persistence layer  → serialize all lines back to text

Order is significant and is never changed implicitly: the position of a
line in the sequence is its position in the written file.  Lines are
frozen, so every edit swaps in a replacement object and the previous
one is kept on the undo stack.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Any, Iterable, Optional

from core.document_commands import (
    Command,
    InsertCmd,
    MoveCmd,
    MutationRecord,
    RemoveCmd,
    ReplaceCmd,
)
from core.errors import LinePositionError, UnknownFieldError
from core.host_line import MAPPING_FIELDS, NOTE_FIELDS, HostLine, MappingLine, NoteBlock
from core.reorder import move_range, normalize_indices

logger = logging.getLogger(__name__)

NEW_NOTE_TEXT = "# "


class HostsDocument:
    """
    Mutable ordered collection of :class:`HostLine` objects.

    Every public mutation validates its arguments before touching the
    sequence, so a failed call leaves the document exactly as it was.
    """

    __slots__ = ("source_path", "_lines", "_lines_cache", "_undo_stack", "_redo_stack")

    def __init__(
        self,
        lines: Optional[Iterable[HostLine]] = None,
        source_path: str = "",
    ):
        self.source_path: str = source_path
        self._lines: list[HostLine] = list(lines) if lines else []
        self._lines_cache: tuple[HostLine, ...] | None = None
        self._undo_stack: list[Command] = []
        self._redo_stack: list[Command] = []

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def lines(self) -> tuple[HostLine, ...]:
        """Return a cached tuple so callers cannot break internal ordering."""
        if self._lines_cache is None:
            self._lines_cache = tuple(self._lines)
        return self._lines_cache

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, position: int) -> HostLine:
        self._check_position(position)
        return self._lines[position]

    # ------------------------------------------------------------------
    # Edit operations (recorded to undo stack)
    # ------------------------------------------------------------------

    def insert_mapping(self) -> int:
        """Append an empty active mapping.  Returns its position."""
        return self._record(InsertCmd(len(self._lines), MappingLine()))

    def insert_note(self) -> int:
        """Append a fresh note block (``"# "``).  Returns its position."""
        return self._record(InsertCmd(len(self._lines), NoteBlock(text=NEW_NOTE_TEXT)))

    def update_field(self, position: int, field: str, value: Any) -> HostLine:
        """Replace one attribute of the line at *position*.

        Mapping lines accept ``address``, ``hostname``, ``comment`` and
        ``active``; note blocks accept ``text``.  Returns the replacement.
        """
        self._check_position(position)
        old_line = self._lines[position]
        _check_field(old_line, field, value)
        new_line = dataclasses.replace(old_line, **{field: value})
        self._record(ReplaceCmd(position, old_line, new_line))
        logger.debug("Set %s=%r at position %d", field, value, position)
        return new_line

    def delete_at(self, position: int) -> HostLine:
        """Remove and return the line at *position*."""
        self._check_position(position)
        removed = self._lines[position]
        self._record(RemoveCmd(position, removed))
        return removed

    def move_range(self, from_indices: Iterable[int], to_position: int) -> list[int]:
        """Move the lines at *from_indices* as one block.

        *to_position* is counted against the sequence after the moved
        lines have been taken out.  Lines outside the move (including
        rows hidden by a filter) keep their relative order.  Returns the
        new positions of the moved lines; an empty set is a no-op.
        """
        ordered = normalize_indices(from_indices, len(self._lines))
        if not ordered:
            return []
        remaining = len(self._lines) - len(ordered)
        if not (0 <= to_position <= remaining):
            raise LinePositionError(
                f"Target position {to_position} out of range 0..{remaining}"
            )
        self._record(MoveCmd(ordered, to_position))
        return list(range(to_position, to_position + len(ordered)))

    # ------------------------------------------------------------------
    # Undo / Redo
    # ------------------------------------------------------------------

    @property
    def can_undo(self) -> bool:
        """``True`` if there is at least one operation to undo."""
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        """``True`` if there is at least one operation to redo."""
        return bool(self._redo_stack)

    def undo(self) -> MutationRecord | None:
        """Undo the most recent mutation.

        Returns a :class:`MutationRecord` describing the *applied*
        reversal (e.g. undoing an insert returns a ``"remove"`` record),
        or ``None`` if the undo stack is empty.
        """
        if not self._undo_stack:
            return None
        cmd = self._undo_stack.pop()
        record = cmd.undo(self)
        self._redo_stack.append(cmd)
        logger.debug("Undo: %s at position %d", record.kind, record.position)
        return record

    def redo(self) -> MutationRecord | None:
        """Redo the most recently undone mutation.

        Returns a :class:`MutationRecord` describing the *applied*
        mutation, or ``None`` if the redo stack is empty.
        """
        if not self._redo_stack:
            return None
        cmd = self._redo_stack.pop()
        record = cmd.redo(self)
        self._undo_stack.append(cmd)
        logger.debug("Redo: %s at position %d", record.kind, record.position)
        return record

    # ------------------------------------------------------------------
    # Raw mutations (no recording — used by command undo/redo)
    # ------------------------------------------------------------------

    def _apply_insert(self, position: int, line: HostLine) -> None:
        self._lines.insert(position, line)
        self._lines_cache = None

    def _apply_remove(self, position: int) -> HostLine:
        removed = self._lines.pop(position)
        self._lines_cache = None
        return removed

    def _apply_replace(self, position: int, line: HostLine) -> None:
        self._lines[position] = line
        self._lines_cache = None

    def _apply_order(self, lines: list[HostLine]) -> None:
        self._lines = lines
        self._lines_cache = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _record(self, cmd: Command) -> int:
        record = cmd.redo(self)
        self._undo_stack.append(cmd)
        self._redo_stack.clear()
        return record.position

    def _check_position(self, position: int) -> None:
        if not (0 <= position < len(self._lines)):
            raise LinePositionError(
                f"Position {position} out of range (document has {len(self._lines)} lines)"
            )


def _check_field(line: HostLine, field: str, value: Any) -> None:
    """Reject fields the line kind does not have and values of the wrong type."""
    allowed = MAPPING_FIELDS if isinstance(line, MappingLine) else NOTE_FIELDS
    if field not in allowed:
        raise UnknownFieldError(
            f"{line.kind.value} lines have no field {field!r} "
            f"(expected one of: {', '.join(allowed)})"
        )
    if field == "active":
        if not isinstance(value, bool):
            raise ValueError("active must be true or false")
    elif field == "comment":
        if value is not None and not isinstance(value, str):
            raise ValueError("comment must be a string or null")
    elif not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
