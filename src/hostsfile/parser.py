"""
Parser for the hosts file.

Record format:   address hostname [# comment]
Disabled record: # address hostname [# comment]

Anything else that starts with ``#`` is a note.  Consecutive note lines
are gathered into one :class:`NoteBlock`; a blank line ends the block
and is not kept.
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from core.host_line import HostLine, MappingLine, NoteBlock

logger = logging.getLogger(__name__)


# ---- shared constants (parser + serializer + validator) ----

COMMENT_INDICATOR = "#"
FIELD_SEPARATOR = " "
COMMENT_SEPARATOR = " # "
DISABLED_PREFIX = "# "

_MAPPING_RE = re.compile(r"^([^\s#]+)\s+([^\s#]+)(?:\s*#\s*(.*))?$")
_DISABLED_PREFIX_RE = re.compile(r"^#+\s*")
_IPV4_RE = re.compile(r"^(?:[0-9]{1,3}\.){3}[0-9]{1,3}$")
# Hex groups never span a colon, so a failed match stays linear
_IPV6_RE = re.compile(r"^(?:[a-fA-F0-9]*:)+[a-fA-F0-9]+$")


def is_comment(text: str) -> bool:
    return text.strip().startswith(COMMENT_INDICATOR)


def is_empty(text: str) -> bool:
    return not text.strip()


def is_address_like(text: str) -> bool:
    """Coarse IPv4 / IPv6 shape check.  No range validation."""
    return bool(_IPV4_RE.match(text) or _IPV6_RE.match(text))


def match_mapping(body: str) -> Optional[tuple[str, str, Optional[str]]]:
    """
    Apply the ``address hostname [# comment]`` grammar to *body*.

    Returns ``(address, hostname, comment)`` or ``None``.  An empty
    trailing comment is reported as ``None``.
    """
    m = _MAPPING_RE.match(body)
    if m is None:
        return None
    address, hostname, comment = m.groups()
    return address, hostname, comment or None


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` and drop one trailing ``\\r`` per line."""
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def parse(text: str) -> list[HostLine]:
    """
    Parse hosts file text into an ordered list of lines.

    Never raises: a line that is neither a mapping nor a comment is kept
    verbatim as its own note block.
    """
    result: list[HostLine] = []
    pending: list[str] = []

    def flush() -> None:
        if pending:
            result.append(NoteBlock(text="\n".join(pending)))
            pending.clear()

    for line in split_lines(text):
        if is_empty(line):
            flush()
            continue

        if is_comment(line):
            fields = match_mapping(_DISABLED_PREFIX_RE.sub("", line.strip()))
            if fields is not None and is_address_like(fields[0]):
                flush()
                address, hostname, comment = fields
                result.append(MappingLine(address, hostname, comment, active=False))
            else:
                pending.append(line)
            continue

        flush()
        fields = match_mapping(line)
        if fields is not None:
            address, hostname, comment = fields
            result.append(MappingLine(address, hostname, comment, active=True))
        else:
            logger.debug("Keeping unrecognised line as a note: %r", line)
            result.append(NoteBlock(text=line))

    flush()
    return result
