"""
End-to-end scenarios: text → parse → edits → serialize → text.

Runs through the same path the UI uses (service + in-memory source)
and directly through parser/serializer where the point is the text
model itself.
"""
from __future__ import annotations

import pytest

from core import FilterQuery, HostsDocument, MappingLine, NoteBlock, drop_position, visible_indices
from hostsfile.parser import parse
from hostsfile.serializer import from_dict, serialize, to_json
from services.hosts_service import HostsDocumentService
from tests.mock_source import InMemoryHostsSource


SCENARIO_TEXT = (
    "127.0.0.1 localhost\n"
    "# 10.0.0.5 db.internal # staging\n"
    "\n"
    "# General notes\n"
    "# second note line\n"
)


class TestToggleScenario:

    def test_parse(self):
        assert parse(SCENARIO_TEXT) == [
            MappingLine("127.0.0.1", "localhost", None, True),
            MappingLine("10.0.0.5", "db.internal", "staging", False),
            NoteBlock("# General notes\n# second note line"),
        ]

    def test_toggle_and_serialize(self):
        doc = HostsDocument(parse(SCENARIO_TEXT))
        doc.update_field(1, "active", True)
        assert serialize(doc.lines) == (
            "127.0.0.1 localhost\n"
            "10.0.0.5 db.internal # staging\n"
            "# General notes\n"
            "# second note line"
        )

    def test_through_service(self):
        source = InMemoryHostsSource(SCENARIO_TEXT)
        service = HostsDocumentService(source)
        service.load()
        service.update_field(1, "active", True)
        service.save()
        assert source.content == (
            "127.0.0.1 localhost\n"
            "10.0.0.5 db.internal # staging\n"
            "# General notes\n"
            "# second note line\n"
        )

    def test_disable_again_restores_comment_form(self):
        doc = HostsDocument(parse(SCENARIO_TEXT))
        doc.update_field(0, "active", False)
        [first] = parse(serialize(doc.lines[:1]))
        assert first == MappingLine("127.0.0.1", "localhost", None, False)


class TestFilteredReorder:
    """Dragging visible rows while a filter hides others."""

    A = MappingLine("10.0.0.1", "app.lan", "web")
    B = MappingLine("10.0.0.2", "db.lan", "storage")
    C = MappingLine("10.0.0.3", "cache.lan", "web")
    D = MappingLine("10.0.0.4", "www.lan", "web")

    def test_filter_hides_only_b(self):
        lines = [self.A, self.B, self.C, self.D]
        assert visible_indices(lines, FilterQuery(comment="web")) == {0, 2, 3}

    def test_move_first_visible_below_last(self):
        doc = HostsDocument([self.A, self.B, self.C, self.D])
        # A is dropped after D, the last visible row
        doc.move_range({0}, drop_position({0}, 4))

        lines = list(doc.lines)
        assert lines == [self.B, self.C, self.D, self.A]
        assert self.B in lines
        # A was moved away, so C is B's only remaining original neighbour
        assert lines[lines.index(self.B) + 1] == self.C

    def test_move_is_undoable(self):
        doc = HostsDocument([self.A, self.B, self.C, self.D])
        doc.move_range({0}, 3)
        doc.undo()
        assert doc.lines == (self.A, self.B, self.C, self.D)


class TestNotesAndNewRows:

    def test_new_rows_serialize(self):
        doc = HostsDocument(parse("127.0.0.1 localhost"))
        doc.insert_note()
        pos = doc.insert_mapping()
        doc.update_field(pos, "address", "192.168.1.10")
        doc.update_field(pos, "hostname", "nas.lan")
        doc.update_field(pos, "comment", "")
        assert serialize(doc.lines) == "127.0.0.1 localhost\n# \n192.168.1.10 nas.lan"

    @pytest.mark.parametrize("text", [SCENARIO_TEXT, "# a\n\n# b\n1.1.1.1 one # x\n"])
    def test_json_round_trip_of_every_line(self, text):
        lines = parse(text)
        assert [from_dict(to_json(line)) for line in lines] == lines
