"""
Base error hierarchy for the hosts editor.

All editor-specific errors inherit from ``HostsError`` so callers can
catch a single base type.  Parsing and serialization never raise.
"""
from __future__ import annotations


class HostsError(Exception):
    """Base class for all hosts editor errors."""


class SourceUnavailableError(HostsError):
    """Raised when the hosts file cannot be read or written."""


class LinePositionError(HostsError, IndexError):
    """Raised when an edit references a position outside the document."""


class UnknownFieldError(HostsError, ValueError):
    """Raised when an edit names a field the target line does not have."""


class OperationInProgressError(HostsError):
    """Raised when a load or save is requested while one is still running."""
