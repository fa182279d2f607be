"""
API routes for the hosts editor.

Load / save failures are not HTTP errors: they come back as ``200`` with
``"ok": false`` and the status message.  HTTP errors are reserved for
requests the UI should never build (bad position, bad field) and for a
load / save that overlaps one already running.
"""
from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from core import FilterQuery, LinePositionError, OperationInProgressError, drop_position
from services.hosts_service import HostsDocumentService


router = APIRouter(prefix="/api/hosts")

# Singleton service — created in main.py and attached here
_service: Optional[HostsDocumentService] = None


def init_service(service: HostsDocumentService) -> None:
    global _service
    _service = service


def svc() -> HostsDocumentService:
    if _service is None:
        raise RuntimeError("HostsDocumentService not initialized")
    return _service


# ------------------------------------------------------------------
# Request models
# ------------------------------------------------------------------

class UpdateFieldRequest(BaseModel):
    field: str
    value: Any = None


class MoveRequest(BaseModel):
    from_positions: list[int]
    to_position: Optional[int] = None   # counted after the moved lines are removed
    drop_index: Optional[int] = None    # insert-before index in the current list


# ------------------------------------------------------------------
# Document
# ------------------------------------------------------------------

@router.get("")
def get_summary():
    """Location, line count, status message and history flags."""
    return svc().summary()


@router.post("/load")
def load():
    """Read the hosts file and replace the in-memory document."""
    try:
        return svc().load()
    except OperationInProgressError as e:
        raise HTTPException(409, str(e))


@router.post("/save")
def save():
    """Serialize the document and write the hosts file."""
    try:
        return svc().save()
    except OperationInProgressError as e:
        raise HTTPException(409, str(e))


@router.get("/text", response_class=PlainTextResponse)
def preview_text():
    """The text a save would write right now."""
    return svc().preview_text()


# ------------------------------------------------------------------
# Lines
# ------------------------------------------------------------------

@router.get("/lines")
def get_lines(address: str = "", hostname: str = "", comment: str = ""):
    """Visible lines under the given filters (notes are always visible)."""
    query = FilterQuery(address=address, hostname=hostname, comment=comment)
    return svc().get_lines(query)


@router.post("/lines/mapping")
def insert_mapping():
    """Append an empty active mapping."""
    return svc().insert_mapping()


@router.post("/lines/note")
def insert_note():
    """Append a new note block."""
    return svc().insert_note()


@router.post("/lines/move")
def move_lines(req: MoveRequest):
    """Move a block of lines (drag-and-drop)."""
    if (req.to_position is None) == (req.drop_index is None):
        raise HTTPException(422, "Give exactly one of to_position or drop_index")
    to_position = req.to_position
    if to_position is None:
        to_position = drop_position(req.from_positions, req.drop_index)
    try:
        return svc().move_lines(req.from_positions, to_position)
    except LinePositionError as e:
        raise HTTPException(404, str(e))


@router.get("/lines/{position}")
def get_line(position: int):
    """Get a single line by 0-based position."""
    try:
        return svc().get_line(position)
    except IndexError:
        raise HTTPException(404, f"Line not found: {position}")


@router.patch("/lines/{position}")
def update_field(position: int, req: UpdateFieldRequest):
    """Replace one field of a line."""
    try:
        return svc().update_field(position, req.field, req.value)
    except IndexError:
        raise HTTPException(404, f"Line not found: {position}")
    except ValueError as e:
        raise HTTPException(422, str(e))


@router.delete("/lines/{position}")
def delete_line(position: int):
    """Delete a line by 0-based position."""
    try:
        return svc().delete_line(position)
    except IndexError:
        raise HTTPException(404, f"Line not found: {position}")


# ------------------------------------------------------------------
# Undo / Redo
# ------------------------------------------------------------------

@router.post("/undo")
def undo():
    try:
        return svc().undo()
    except ValueError as e:
        raise HTTPException(422, str(e))


@router.post("/redo")
def redo():
    try:
        return svc().redo()
    except ValueError as e:
        raise HTTPException(422, str(e))
