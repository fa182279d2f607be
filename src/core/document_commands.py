"""Internal undo/redo command objects for :mod:`core.document`."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from core.host_line import HostLine
from core.reorder import move_range, unmove_range


@dataclass(frozen=True, slots=True)
class MutationRecord:
    """Describes a mutation that was applied to a :class:`HostsDocument`.

    Attributes:
        kind:      ``"insert"`` | ``"remove"`` | ``"replace"`` | ``"move"``
        position:  0-based line position at the time of the mutation.
                   For moves this is where the moved block starts.
        old_line:  The line that was removed or replaced (``None`` for
                   insert and move).
        new_line:  The line that was inserted or is the replacement
                   (``None`` for remove and move).
        positions: Positions of the moved lines after the move
                   (empty for every other kind).
    """
    kind: str
    position: int
    old_line: Optional[HostLine] = None
    new_line: Optional[HostLine] = None
    positions: tuple[int, ...] = ()


class DocumentCommandTarget(Protocol):
    """Minimal surface commands need from :class:`core.document.HostsDocument`."""

    _lines: list[HostLine]

    def _apply_insert(self, position: int, line: HostLine) -> None: ...

    def _apply_remove(self, position: int) -> HostLine: ...

    def _apply_replace(self, position: int, line: HostLine) -> None: ...

    def _apply_order(self, lines: list[HostLine]) -> None: ...


class Command(Protocol):
    """Reversible mutation: every command knows how to undo and redo itself."""

    def undo(self, doc: DocumentCommandTarget) -> MutationRecord: ...

    def redo(self, doc: DocumentCommandTarget) -> MutationRecord: ...


class InsertCmd:
    """Reversible insert: undo removes the line, redo re-inserts it."""

    __slots__ = ("_position", "_line")

    def __init__(self, position: int, line: HostLine) -> None:
        self._position = position
        self._line = line

    def undo(self, doc: DocumentCommandTarget) -> MutationRecord:
        doc._apply_remove(self._position)
        return MutationRecord("remove", self._position, old_line=self._line)

    def redo(self, doc: DocumentCommandTarget) -> MutationRecord:
        doc._apply_insert(self._position, self._line)
        return MutationRecord("insert", self._position, new_line=self._line)


class RemoveCmd:
    """Reversible remove: undo re-inserts the line, redo removes it."""

    __slots__ = ("_position", "_line")

    def __init__(self, position: int, line: HostLine) -> None:
        self._position = position
        self._line = line

    def undo(self, doc: DocumentCommandTarget) -> MutationRecord:
        doc._apply_insert(self._position, self._line)
        return MutationRecord("insert", self._position, new_line=self._line)

    def redo(self, doc: DocumentCommandTarget) -> MutationRecord:
        doc._apply_remove(self._position)
        return MutationRecord("remove", self._position, old_line=self._line)


class ReplaceCmd:
    """Reversible replace: undo restores the old line, redo reapplies."""

    __slots__ = ("_position", "_old_line", "_new_line")

    def __init__(self, position: int, old_line: HostLine, new_line: HostLine) -> None:
        self._position = position
        self._old_line = old_line
        self._new_line = new_line

    def undo(self, doc: DocumentCommandTarget) -> MutationRecord:
        doc._apply_replace(self._position, self._old_line)
        return MutationRecord(
            "replace", self._position, old_line=self._new_line, new_line=self._old_line
        )

    def redo(self, doc: DocumentCommandTarget) -> MutationRecord:
        doc._apply_replace(self._position, self._new_line)
        return MutationRecord(
            "replace", self._position, old_line=self._old_line, new_line=self._new_line
        )


class MoveCmd:
    """Reversible block move.

    ``from_indices`` must already be normalized (unique, ascending).
    """

    __slots__ = ("_from_indices", "_to_position")

    def __init__(self, from_indices: list[int], to_position: int) -> None:
        self._from_indices = tuple(from_indices)
        self._to_position = to_position

    def undo(self, doc: DocumentCommandTarget) -> MutationRecord:
        doc._apply_order(unmove_range(doc._lines, self._from_indices, self._to_position))
        return MutationRecord(
            "move", self._from_indices[0], positions=self._from_indices
        )

    def redo(self, doc: DocumentCommandTarget) -> MutationRecord:
        doc._apply_order(move_range(doc._lines, self._from_indices, self._to_position))
        count = len(self._from_indices)
        return MutationRecord(
            "move",
            self._to_position,
            positions=tuple(range(self._to_position, self._to_position + count)),
        )
