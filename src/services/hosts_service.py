"""
HostsDocumentService — the bridge between the API layer and the core domain.

Manages:
- The single loaded HostsDocument
- The status message shown in the UI and the unsaved-changes flag
- Single-flight load / save: at most one of them in flight at a time

The API layer addresses lines by 0-based position in the full
(unfiltered) sequence.  I/O failures are turned into a status string
here and never raised to the caller.
"""
from __future__ import annotations

import logging
import threading
from collections import Counter
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Optional

from core import (
    FilterQuery,
    HostLine,
    HostsDocument,
    IHostsSource,
    MutationRecord,
    OperationInProgressError,
    SourceUnavailableError,
    visible_indices,
)
from hostsfile import serializer, validator
from infrastructure import load_document, render_text

logger = logging.getLogger(__name__)

STATUS_IDLE = ""
STATUS_LOADING = "Loading..."
STATUS_LOADED = "Loaded."
STATUS_SAVING = "Saving..."
STATUS_SAVED = "Saved successfully."
ERROR_PREFIX = "Error: "


class HostsDocumentService:
    """
    Facade that the API layer calls. One instance per application.
    """

    def __init__(self, source: IHostsSource):
        self._source: IHostsSource = source
        self._document: HostsDocument = HostsDocument(source_path=source.location)
        self._status: str = STATUS_IDLE
        self._revision: int = 0
        self._saved_revision: int = 0
        self._io_lock = threading.Lock()
        self._io_kind: Optional[str] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def document(self) -> HostsDocument:
        return self._document

    @property
    def status(self) -> str:
        return self._status

    @property
    def has_unsaved_changes(self) -> bool:
        return self._revision != self._saved_revision

    @property
    def is_loading(self) -> bool:
        return self._io_kind == "load"

    @property
    def is_saving(self) -> bool:
        return self._io_kind == "save"

    def summary(self) -> dict:
        doc = self._document
        kinds = Counter(line.kind.value for line in doc.lines)
        return {
            "location": self._source.location,
            "total_lines": len(doc),
            "kind_counts": dict(kinds),
            "status": self._status,
            "has_unsaved_changes": self.has_unsaved_changes,
            "is_loading": self.is_loading,
            "is_saving": self.is_saving,
            "can_undo": doc.can_undo,
            "can_redo": doc.can_redo,
        }

    # ------------------------------------------------------------------
    # Load / Save
    # ------------------------------------------------------------------

    def load(self) -> dict:
        """Read and parse the hosts file, replacing the document wholesale.

        On failure the current document and unsaved flag are left alone
        and the error becomes the status message.
        """
        with self._single_flight("load"):
            self._status = STATUS_LOADING
            logger.info("Loading hosts file from %s", self._source.location)
            try:
                doc = load_document(self._source)
            except SourceUnavailableError as exc:
                return self._fail(exc)
            self._document = doc
            self._revision = self._saved_revision = 0
            self._status = STATUS_LOADED
            logger.info("Loaded %d lines from %s", len(doc), self._source.location)
            return self._result(ok=True)

    def save(self) -> dict:
        """Serialize the document and write it back.

        The text is rendered once, before the write starts, so edits
        made while the write is running go into the next save.
        """
        with self._single_flight("save"):
            self._status = STATUS_SAVING
            revision = self._revision
            text = render_text(self._document)
            logger.info("Saving %d lines to %s", len(self._document), self._source.location)
            try:
                self._source.write(text)
            except SourceUnavailableError as exc:
                return self._fail(exc)
            self._saved_revision = revision
            self._status = STATUS_SAVED
            return self._result(ok=True)

    def preview_text(self) -> str:
        """The text :meth:`save` would write right now."""
        return render_text(self._document)

    # ------------------------------------------------------------------
    # Line access
    # ------------------------------------------------------------------

    def get_lines(self, query: Optional[FilterQuery] = None) -> list[dict]:
        """Return the lines passing *query* with their full-sequence positions."""
        lines = self._document.lines
        if query is None or query.is_empty:
            positions: Iterable[int] = range(len(lines))
        else:
            positions = sorted(visible_indices(lines, query))
        return [self._serialize_line(pos, lines[pos]) for pos in positions]

    def get_line(self, position: int) -> dict:
        return self._serialize_line(position, self._document[position])

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def insert_mapping(self) -> dict:
        position = self._document.insert_mapping()
        self._touch()
        logger.info("Added mapping at pos=%d", position)
        return self.get_line(position)

    def insert_note(self) -> dict:
        position = self._document.insert_note()
        self._touch()
        logger.info("Added note at pos=%d", position)
        return self.get_line(position)

    def update_field(self, position: int, field: str, value: Any) -> dict:
        line = self._document.update_field(position, field, value)
        self._touch()
        logger.info("Updated %s at pos=%d", field, position)
        return self._serialize_line(position, line)

    def delete_line(self, position: int) -> dict:
        """Delete a line by its 0-based position. Returns the updated summary."""
        self._document.delete_at(position)
        self._touch()
        logger.info("Deleted line at pos=%d", position)
        return self.summary()

    def move_lines(self, from_positions: Iterable[int], to_position: int) -> dict:
        """Move a block of lines; *to_position* is counted after removal."""
        from_positions = list(from_positions)
        positions = self._document.move_range(from_positions, to_position)
        if positions:
            self._touch()
            logger.info("Moved lines %s to pos=%d", sorted(set(from_positions)), to_position)
        result = self.summary()
        result["positions"] = positions
        return result

    # ------------------------------------------------------------------
    # Undo / Redo
    # ------------------------------------------------------------------

    def undo(self) -> dict:
        """Undo the most recent edit.

        Raises ``ValueError`` when there is nothing to undo.
        """
        record = self._document.undo()
        if record is None:
            raise ValueError("Nothing to undo")
        self._touch()
        logger.info("Undo %s at pos=%d", record.kind, record.position)
        return self._mutation_response(record)

    def redo(self) -> dict:
        """Redo the most recently undone edit.

        Raises ``ValueError`` when there is nothing to redo.
        """
        record = self._document.redo()
        if record is None:
            raise ValueError("Nothing to redo")
        self._touch()
        logger.info("Redo %s at pos=%d", record.kind, record.position)
        return self._mutation_response(record)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @contextmanager
    def _single_flight(self, kind: str) -> Iterator[None]:
        # One load or save at a time, whichever kind
        if not self._io_lock.acquire(blocking=False):
            raise OperationInProgressError(
                f"Cannot {kind} while a {self._io_kind or 'request'} is in progress"
            )
        self._io_kind = kind
        try:
            yield
        finally:
            self._io_kind = None
            self._io_lock.release()

    def _touch(self) -> None:
        self._revision += 1

    def _fail(self, exc: SourceUnavailableError) -> dict:
        self._status = ERROR_PREFIX + str(exc)
        logger.warning("%s", self._status)
        return self._result(ok=False)

    def _result(self, ok: bool) -> dict:
        result = self.summary()
        result["ok"] = ok
        return result

    @staticmethod
    def _serialize_line(position: int, line: HostLine) -> dict:
        vr = validator.validate(line)
        return {
            "position": position,
            "kind": line.kind.value,
            "fields": serializer.to_json(line),
            "text": serializer.serialize_line(line),
            "status": vr.status.value,
            "errors": list(vr.errors),
            "warnings": list(vr.warnings),
        }

    def _mutation_response(self, record: MutationRecord) -> dict:
        """Build the JSON response for an undo/redo operation."""
        doc = self._document
        result: dict = {
            "action": record.kind,
            "position": record.position,
            "can_undo": doc.can_undo,
            "can_redo": doc.can_redo,
        }
        if record.kind == "move":
            result["positions"] = list(record.positions)
        elif record.kind != "remove":
            result["line"] = self._serialize_line(record.position, doc[record.position])
        return result
