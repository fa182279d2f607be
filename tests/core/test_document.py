import pytest

from core import HostsDocument, LinePositionError, MappingLine, NoteBlock, UnknownFieldError
from core.document_commands import MutationRecord


A = MappingLine("10.0.0.1", "a.local")
B = MappingLine("10.0.0.2", "b.local", active=False)
C = NoteBlock("# c")
D = MappingLine("10.0.0.4", "d.local", "dee")


@pytest.fixture
def doc():
    return HostsDocument(lines=[A, B, C, D], source_path="/etc/hosts")


# ===========================================================
# Construction / read access
# ===========================================================

class TestDocumentConstruction:

    def test_empty_document(self):
        doc = HostsDocument()
        assert len(doc) == 0
        assert not doc.lines
        assert not doc.can_undo

    def test_from_lines(self, doc):
        assert len(doc) == 4
        assert doc[2] == C
        assert doc.source_path == "/etc/hosts"

    def test_lines_returns_immutable_view(self, doc):
        view = doc.lines
        assert isinstance(view, tuple)
        assert view == (A, B, C, D)

    def test_getitem_out_of_range(self, doc):
        with pytest.raises(LinePositionError):
            doc[4]

    def test_negative_position_is_out_of_range(self, doc):
        with pytest.raises(IndexError):
            doc[-1]


# ===========================================================
# Insert / delete
# ===========================================================

class TestInsertDelete:

    def test_insert_mapping_appends_empty_active(self, doc):
        pos = doc.insert_mapping()
        assert pos == 4
        assert doc[4] == MappingLine(address="", hostname="", comment=None, active=True)

    def test_insert_note_appends_hash(self, doc):
        pos = doc.insert_note()
        assert doc[pos] == NoteBlock(text="# ")

    def test_delete_at(self, doc):
        removed = doc.delete_at(1)
        assert removed == B
        assert doc.lines == (A, C, D)

    def test_delete_out_of_range_leaves_document(self, doc):
        with pytest.raises(LinePositionError):
            doc.delete_at(9)
        assert doc.lines == (A, B, C, D)
        assert not doc.can_undo


# ===========================================================
# update_field
# ===========================================================

class TestUpdateField:

    def test_toggle_active(self, doc):
        line = doc.update_field(1, "active", True)
        assert line == MappingLine("10.0.0.2", "b.local", active=True)
        assert doc[1].active is True

    def test_update_does_not_mutate_old_line(self, doc):
        doc.update_field(0, "hostname", "renamed.local")
        assert A.hostname == "a.local"
        assert doc[0].hostname == "renamed.local"

    def test_comment_can_be_cleared(self, doc):
        doc.update_field(3, "comment", None)
        assert doc[3].comment is None

    def test_note_text(self, doc):
        doc.update_field(2, "text", "# new\n# text")
        assert doc[2] == NoteBlock("# new\n# text")

    def test_unknown_field_on_note(self, doc):
        with pytest.raises(UnknownFieldError):
            doc.update_field(2, "address", "1.1.1.1")

    def test_unknown_field_on_mapping(self, doc):
        with pytest.raises(ValueError):
            doc.update_field(0, "text", "x")

    def test_active_must_be_bool(self, doc):
        with pytest.raises(ValueError):
            doc.update_field(0, "active", "yes")
        assert doc[0] == A

    def test_out_of_range(self, doc):
        with pytest.raises(IndexError):
            doc.update_field(4, "address", "1.1.1.1")
        assert doc.lines == (A, B, C, D)


# ===========================================================
# move_range
# ===========================================================

class TestMoveRange:

    def test_move_first_to_end(self, doc):
        positions = doc.move_range({0}, 3)
        assert doc.lines == (B, C, D, A)
        assert positions == [3]

    def test_move_block_keeps_order(self, doc):
        doc.move_range({3, 0}, 1)
        assert doc.lines == (B, A, D, C)

    def test_hidden_line_stays_with_neighbours(self, doc):
        # B hidden by a filter; A dragged after the last visible row
        doc.move_range({0}, 3)
        lines = doc.lines
        assert B in lines
        idx = lines.index(B)
        assert lines[idx + 1] == C

    def test_empty_set_is_noop(self, doc):
        assert doc.move_range(set(), 0) == []
        assert not doc.can_undo

    def test_target_out_of_range(self, doc):
        with pytest.raises(LinePositionError):
            doc.move_range({0}, 4)
        assert doc.lines == (A, B, C, D)

    def test_source_out_of_range(self, doc):
        with pytest.raises(LinePositionError):
            doc.move_range({0, 7}, 0)
        assert doc.lines == (A, B, C, D)


# ===========================================================
# Undo / redo
# ===========================================================

class TestUndoRedo:

    def test_nothing_to_undo(self, doc):
        assert doc.undo() is None
        assert doc.redo() is None

    def test_undo_insert(self, doc):
        doc.insert_mapping()
        record = doc.undo()
        assert isinstance(record, MutationRecord)
        assert record.kind == "remove"
        assert record.position == 4
        assert doc.lines == (A, B, C, D)

    def test_undo_redo_delete(self, doc):
        doc.delete_at(0)
        doc.undo()
        assert doc.lines == (A, B, C, D)
        record = doc.redo()
        assert record.kind == "remove"
        assert doc.lines == (B, C, D)

    def test_undo_replace(self, doc):
        doc.update_field(0, "address", "127.0.0.1")
        record = doc.undo()
        assert record.kind == "replace"
        assert record.new_line == A
        assert doc[0] == A

    def test_undo_move(self, doc):
        doc.move_range({0, 2}, 2)
        assert doc.lines == (B, D, A, C)
        record = doc.undo()
        assert record.kind == "move"
        assert record.positions == (0, 2)
        assert doc.lines == (A, B, C, D)
        doc.redo()
        assert doc.lines == (B, D, A, C)

    def test_new_mutation_clears_redo(self, doc):
        doc.delete_at(0)
        doc.undo()
        assert doc.can_redo
        doc.insert_note()
        assert not doc.can_redo
