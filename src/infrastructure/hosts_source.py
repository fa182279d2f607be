"""
Hosts sources — where the raw hosts text is read from and written to.

- :class:`FileHostsSource`       — direct read, atomic temp-file + ``os.replace`` write
- :class:`PrivilegedHostsSource` — direct read, temp file copied over the
  hosts file by an elevated helper (``osascript`` / ``pkexec`` / ``sudo``)
- :func:`build_source`           — pick one from configuration

Every failure is raised as :class:`core.errors.SourceUnavailableError`
carrying a message the UI can show as-is.
"""
from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import sys
import tempfile
from pathlib import Path

from core.errors import SourceUnavailableError

logger = logging.getLogger(__name__)

ELEVATION_AUTO = "auto"
ELEVATION_NONE = "none"
ELEVATION_SUDO = "sudo"
ELEVATION_PKEXEC = "pkexec"
ELEVATION_OSASCRIPT = "osascript"

ELEVATION_MODES = {
    ELEVATION_AUTO, ELEVATION_NONE,
    ELEVATION_SUDO, ELEVATION_PKEXEC, ELEVATION_OSASCRIPT,
}

TEMP_PREFIX = "hosts_tmp_"


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceUnavailableError(f"Cannot read {path}: {exc}") from exc


class FileHostsSource:
    """Read and write the hosts file directly (no privilege escalation)."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def location(self) -> str:
        return str(self._path)

    def read(self) -> str:
        return _read_text(self._path)

    def write(self, content: str) -> None:
        """Write through a temp file in the same directory, then replace."""
        tmp_path: str | None = None
        try:
            fd, tmp_path = tempfile.mkstemp(prefix=TEMP_PREFIX, dir=self._path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            if self._path.exists():
                shutil.copymode(self._path, tmp_path)
            os.replace(tmp_path, self._path)
            tmp_path = None
        except OSError as exc:
            raise SourceUnavailableError(f"Cannot write {self._path}: {exc}") from exc
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
        logger.info("Wrote %d characters to %s", len(content), self._path)


class PrivilegedHostsSource:
    """
    Read directly, write with elevated privileges.

    The new text goes to a temp file first; an elevated ``cp`` then puts
    it over the hosts file.  The temp file is always removed.  A non-zero
    exit (a cancelled password prompt included) is a write failure.
    """

    def __init__(self, path: str | Path, elevation: str = ELEVATION_SUDO):
        if elevation not in (ELEVATION_SUDO, ELEVATION_PKEXEC, ELEVATION_OSASCRIPT):
            raise ValueError(f"Unsupported elevation helper: {elevation!r}")
        self._path = Path(path)
        self._elevation = elevation

    @property
    def location(self) -> str:
        return str(self._path)

    @property
    def elevation(self) -> str:
        return self._elevation

    def read(self) -> str:
        return _read_text(self._path)

    def write(self, content: str) -> None:
        try:
            fd, tmp_path = tempfile.mkstemp(prefix=TEMP_PREFIX)
        except OSError as exc:
            raise SourceUnavailableError(f"Cannot create temp file: {exc}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            self._copy_elevated(tmp_path)
        except OSError as exc:
            raise SourceUnavailableError(f"Cannot write {self._path}: {exc}") from exc
        finally:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
        logger.info("Wrote %d characters to %s via %s", len(content), self._path, self._elevation)

    def copy_command(self, src: str) -> list[str]:
        """The command line that copies *src* over the hosts file."""
        if self._elevation == ELEVATION_OSASCRIPT:
            shell = f"cp {shlex.quote(src)} {shlex.quote(str(self._path))}"
            script = f'do shell script "{shell}" with administrator privileges'
            return ["osascript", "-e", script]
        return [self._elevation, "cp", src, str(self._path)]

    def _copy_elevated(self, src: str) -> None:
        cmd = self.copy_command(src)
        logger.debug("Running %s", cmd)
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except FileNotFoundError as exc:
            raise SourceUnavailableError(f"{cmd[0]} is not available: {exc}") from exc
        if proc.returncode != 0:
            detail = proc.stderr.strip() or f"exit status {proc.returncode}"
            raise SourceUnavailableError(f"{cmd[0]} failed: {detail}")


def build_source(path: str | Path, elevation: str = ELEVATION_AUTO):
    """
    Pick the source implementation for *elevation*.

    ``"auto"`` selects ``osascript`` on macOS, ``pkexec`` when it is on
    ``PATH`` on other POSIX systems, and a direct write otherwise.
    """
    if elevation not in ELEVATION_MODES:
        raise ValueError(
            f"Unknown elevation mode {elevation!r} "
            f"(expected one of: {', '.join(sorted(ELEVATION_MODES))})"
        )
    if elevation == ELEVATION_AUTO:
        if sys.platform == "darwin":
            elevation = ELEVATION_OSASCRIPT
        elif os.name == "posix" and shutil.which(ELEVATION_PKEXEC):
            elevation = ELEVATION_PKEXEC
        else:
            elevation = ELEVATION_NONE
    if elevation == ELEVATION_NONE:
        logger.info("Using direct writes for %s", path)
        return FileHostsSource(path)
    logger.info("Using %s for writes to %s", elevation, path)
    return PrivilegedHostsSource(path, elevation)
