"""
Per-line validation for the hosts file.

Used by the line listing (display coloring).  Validation never blocks
an edit or a save: an ERROR line is still written as-is.
"""
from core.host_line import HostLine, MappingLine, NoteBlock
from core.validation_result import ValidationResult
from hostsfile.parser import COMMENT_INDICATOR, is_address_like

_BREAKING_CHARS = (" ", "\t", "\n", "\r", COMMENT_INDICATOR)


def _has_breaking_char(value: str) -> bool:
    return any(ch in value for ch in _BREAKING_CHARS)


def validate_mapping(line: MappingLine) -> ValidationResult:
    errors: list[str] = []
    warnings: list[str] = []

    if not line.address:
        errors.append("Address cannot be empty.")
    elif _has_breaking_char(line.address):
        errors.append("Address cannot contain whitespace or '#'.")
    elif not is_address_like(line.address):
        warnings.append(f"'{line.address}' does not look like an IPv4 or IPv6 address.")

    if not line.hostname:
        errors.append("Hostname cannot be empty.")
    elif _has_breaking_char(line.hostname):
        errors.append("Hostname cannot contain whitespace or '#'.")

    if line.comment and ("\n" in line.comment or "\r" in line.comment):
        errors.append("Comment cannot span several lines.")

    return ValidationResult.for_line(line, errors, warnings)


def validate_note(line: NoteBlock) -> ValidationResult:
    # A note line without '#' is read by the resolver as a record
    uncommented = [
        raw for raw in line.text.split("\n")
        if raw.strip() and not raw.strip().startswith(COMMENT_INDICATOR)
    ]
    warnings = [f"Line '{raw.strip()}' is not commented out." for raw in uncommented]
    return ValidationResult.for_line(line, warnings=warnings)


def validate(line: HostLine) -> ValidationResult:
    """Validate one line of either kind."""
    if isinstance(line, MappingLine):
        return validate_mapping(line)
    if isinstance(line, NoteBlock):
        return validate_note(line)
    raise TypeError(f"Unsupported line type: {type(line).__name__}")
