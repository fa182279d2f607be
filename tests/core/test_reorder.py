import pytest

from core.errors import LinePositionError
from core.reorder import drop_position, move_range, normalize_indices, unmove_range


class TestNormalizeIndices:

    def test_sorted_unique(self):
        assert normalize_indices([3, 1, 3], 5) == [1, 3]

    def test_out_of_range(self):
        with pytest.raises(LinePositionError):
            normalize_indices([5], 5)


class TestMoveRange:

    def test_does_not_modify_input(self):
        items = ["a", "b", "c"]
        assert move_range(items, {0}, 2) == ["b", "c", "a"]
        assert items == ["a", "b", "c"]

    def test_move_to_front(self):
        assert move_range("abcde", {3, 4}, 0) == ["d", "e", "a", "b", "c"]

    def test_hidden_items_keep_relative_order(self):
        # 'b' and 'd' are hidden; visible 'a' and 'c' swap places
        assert move_range("abcd", {0}, 2) == ["b", "c", "a", "d"]

    @pytest.mark.parametrize("to_position", [-1, 3])
    def test_bad_target(self, to_position):
        with pytest.raises(LinePositionError):
            move_range("abc", {0}, to_position)


class TestDropPosition:

    def test_drop_after_last(self):
        # [A, B, C, D]: drag A below D
        assert drop_position({0}, 4) == 3

    def test_drop_before_moved_items(self):
        assert drop_position({2, 3}, 1) == 1

    def test_drop_between_moved_items(self):
        assert drop_position({0, 2}, 2) == 1


class TestUnmoveRange:

    @pytest.mark.parametrize(
        "from_indices, to_position",
        [({0}, 3), ({1, 3}, 0), ({0, 2, 4}, 1), ({2}, 2)],
    )
    def test_restores_original(self, from_indices, to_position):
        items = list("abcde")
        moved = move_range(items, from_indices, to_position)
        assert unmove_range(moved, from_indices, to_position) == items
