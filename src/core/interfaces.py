"""
Core interfaces for the hosts editor.

- IHostsSource: protocol for reading and persisting the raw hosts text
"""
from __future__ import annotations

from typing import Protocol


class IHostsSource(Protocol):
    """
    Protocol defining where the hosts text comes from and goes to.
    The service depends on this protocol, not the concrete implementation.

    Both methods raise :class:`core.errors.SourceUnavailableError` with a
    human-readable message on failure (permission denied, missing file,
    cancelled privilege prompt, ...).
    """

    @property
    def location(self) -> str: ...

    def read(self) -> str: ...

    def write(self, content: str) -> None: ...
