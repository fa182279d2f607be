from core.line_status import LineStatus
from core.validation_result import ValidationResult
from core.host_line import HostLine, LineKind, MappingLine, NoteBlock
from core.document_commands import MutationRecord
from core.document import HostsDocument
from core.errors import (
    HostsError,
    LinePositionError,
    OperationInProgressError,
    SourceUnavailableError,
    UnknownFieldError,
)
from core.filtering import FilterQuery, visible_indices
from core.interfaces import IHostsSource
from core.reorder import drop_position, move_range

__all__ = [
    "LineStatus",
    "ValidationResult",
    "HostLine",
    "LineKind",
    "MappingLine",
    "NoteBlock",
    "MutationRecord",
    "HostsDocument",
    "HostsError",
    "LinePositionError",
    "OperationInProgressError",
    "SourceUnavailableError",
    "UnknownFieldError",
    "FilterQuery",
    "visible_indices",
    "IHostsSource",
    "drop_position",
    "move_range",
]
