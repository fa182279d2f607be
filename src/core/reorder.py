"""
Reorder primitives used by drag-and-drop.

The UI reports a drag as "these positions, dropped before that
position".  :func:`drop_position` converts the drop index into the
post-removal coordinate :func:`move_range` expects.  Lines that are not
part of the move (including rows hidden by a filter) keep their
relative order.
"""
from __future__ import annotations

from typing import Iterable, Sequence, TypeVar

from core.errors import LinePositionError

T = TypeVar("T")


def normalize_indices(from_indices: Iterable[int], length: int) -> list[int]:
    """Return the unique indices in ascending order.

    Raises ``LinePositionError`` if any index lies outside ``0..length-1``.
    """
    ordered = sorted(set(from_indices))
    for idx in ordered:
        if not (0 <= idx < length):
            raise LinePositionError(f"Position {idx} out of range")
    return ordered


def move_range(
    items: Sequence[T],
    from_indices: Iterable[int],
    to_position: int,
) -> list[T]:
    """
    Return a new list with the items at *from_indices* moved as one block.

    The moved items keep their ascending original order and are
    reinserted starting at *to_position*, which is counted against the
    list *after* they have been removed.  The input is never modified;
    on an invalid index nothing is built and ``LinePositionError`` is raised.
    """
    moved_idx = normalize_indices(from_indices, len(items))
    if not moved_idx:
        return list(items)

    remaining_len = len(items) - len(moved_idx)
    if not (0 <= to_position <= remaining_len):
        raise LinePositionError(
            f"Target position {to_position} out of range 0..{remaining_len}"
        )

    moved_set = set(moved_idx)
    moved = [items[i] for i in moved_idx]
    remaining = [item for i, item in enumerate(items) if i not in moved_set]
    return remaining[:to_position] + moved + remaining[to_position:]


def drop_position(from_indices: Iterable[int], drop_index: int) -> int:
    """
    Convert an insert-before index in the original list into the
    post-removal target expected by :func:`move_range`.

    ``drop_index == len(items)`` means "after the last line".
    """
    return drop_index - sum(1 for i in set(from_indices) if i < drop_index)


def unmove_range(
    items: Sequence[T],
    from_indices: Iterable[int],
    to_position: int,
) -> list[T]:
    """
    Reverse a :func:`move_range` call.

    *items* is the list after the move; the block starting at
    *to_position* is put back at the original *from_indices*.
    """
    original = sorted(set(from_indices))
    end = to_position + len(original)
    block = list(items[to_position:end])
    restored = list(items[:to_position]) + list(items[end:])
    for idx, item in zip(original, block):
        restored.insert(idx, item)
    return restored
