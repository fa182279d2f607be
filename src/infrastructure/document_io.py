"""
Document I/O — read the hosts text into a HostsDocument, write it back.

This is a functional module.  HostsDocumentService delegates here for
the actual text ↔ document conversion.

Load flow:
    source.read() → parser.parse(text) → HostsDocument

Save flow:
    serializer.serialize(lines) → + "\\n" → source.write(text)
"""
from __future__ import annotations

import logging

from core.document import HostsDocument
from core.interfaces import IHostsSource
from hostsfile import parser, serializer

logger = logging.getLogger(__name__)


def document_from_text(text: str, source_path: str = "") -> HostsDocument:
    """Parse *text* into a fresh document with an empty history."""
    return HostsDocument(lines=parser.parse(text), source_path=source_path)


def render_text(document: HostsDocument) -> str:
    """
    The exact text :func:`save_document` writes.

    The serializer output gets one conventional end-of-file newline
    unless the document is empty.
    """
    text = serializer.serialize(document.lines)
    return text + "\n" if text else text


def load_document(source: IHostsSource) -> HostsDocument:
    """
    Read the hosts text and return a fully populated HostsDocument.

    Raises :class:`core.errors.SourceUnavailableError` if the source
    cannot be read.  Parsing itself never fails.
    """
    text = source.read()
    document = document_from_text(text, source.location)
    logger.info("Parsed %d lines from %s", len(document), source.location)
    return document


def save_document(document: HostsDocument, source: IHostsSource) -> str:
    """
    Write *document* through *source* and return the written text.

    Raises :class:`core.errors.SourceUnavailableError` if the write
    fails; the document itself is never touched.
    """
    text = render_text(document)
    source.write(text)
    return text
