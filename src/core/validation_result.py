from __future__ import annotations

from dataclasses import dataclass

from core.host_line import HostLine, NoteBlock
from core.line_status import LineStatus


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """
    Messages collected for one hosts line, and the status they imply.

    Errors win over warnings.  A line with neither shows its resting
    status: ``NOTE`` for a note block, ``DISABLED`` for a commented-out
    mapping, ``OK`` otherwise.  Use :meth:`for_line` so the resting
    status always matches the line it describes.
    """
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    resting: LineStatus = LineStatus.OK

    @classmethod
    def for_line(
        cls,
        line: HostLine,
        errors: tuple[str, ...] | list[str] = (),
        warnings: tuple[str, ...] | list[str] = (),
    ) -> ValidationResult:
        if isinstance(line, NoteBlock):
            resting = LineStatus.NOTE
        elif line.active:
            resting = LineStatus.OK
        else:
            resting = LineStatus.DISABLED
        return cls(tuple(errors), tuple(warnings), resting)

    @property
    def status(self) -> LineStatus:
        if self.errors:
            return LineStatus.ERROR
        if self.warnings:
            return LineStatus.WARNING
        return self.resting

    @property
    def is_valid(self) -> bool:
        return not self.errors
