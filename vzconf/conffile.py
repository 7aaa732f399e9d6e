"""Per-container config files (<veid>.conf) of the OpenVZ runtime.

The files hold shell-style KEY=VALUE or KEY="VALUE" lines. Later lines
override earlier ones, so lookups scan the whole file.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator, Optional, Sequence

from .config import MAX_LINE, UUID_MARKER, conf_dirs
from .errors import (
    ConfigIOError,
    ConfigIOErrorCode,
    ErrorSink,
    LoggingErrorSink,
    report,
)

logger = logging.getLogger(__name__)

_VALUE_SEPARATORS = re.compile(r'["\t=\n]+')
_CONF_NAME = re.compile(r"^(-?\d+)\.conf$")


class ConfigLineStore:
    """Reads and appends to container config files.

    Attributes:
        candidates: Directories probed, in order, for the config directory
        max_line: Longest line accepted, in characters (newline excluded)
    """

    def __init__(
        self,
        candidates: Optional[Sequence[Path | str]] = None,
        sink: Optional[ErrorSink] = None,
        max_line: int = MAX_LINE,
    ):
        if candidates is None:
            candidates = conf_dirs()
        self.candidates = [Path(c) for c in candidates]
        self.sink = sink or LoggingErrorSink()
        self.max_line = max_line
        self._conf_dir: Optional[Path] = None

    @property
    def conf_dir(self) -> Path:
        """First existing candidate directory, resolved once.

        Raises:
            ConfigIOError: NO_CONFIG_DIR if no candidate exists
        """
        if self._conf_dir is None:
            for candidate in self.candidates:
                if candidate.exists():
                    self._conf_dir = candidate
                    logger.debug(f"Using config directory {candidate}")
                    break
            else:
                searched = ", ".join(str(c) for c in self.candidates)
                raise self._fail(
                    ConfigIOErrorCode.NO_CONFIG_DIR,
                    f"No OpenVZ config directory found (searched: {searched})",
                )
        return self._conf_dir

    def refresh(self) -> None:
        """Forget the resolved directory so the next access probes again."""
        self._conf_dir = None

    def conf_file(self, veid: int) -> Path:
        return self.conf_dir / f"{veid}.conf"

    def iter_lines(self, veid: int) -> Iterator[str]:
        """Yield the lines of a container's config file, newlines kept.

        Raises:
            ConfigIOError: READ_FAILED if the file can't be read,
                LINE_TOO_LONG for a line longer than max_line
        """
        path = self.conf_file(veid)
        try:
            with open(path, encoding="utf-8", errors="replace") as f:
                lineno = 0
                while True:
                    line = f.readline(self.max_line + 2)
                    if not line:
                        return
                    lineno += 1
                    if len(line.rstrip("\n")) > self.max_line:
                        raise self._fail(
                            ConfigIOErrorCode.LINE_TOO_LONG,
                            f"{path}:{lineno}: line longer than {self.max_line} characters",
                        )
                    yield line
        except OSError as e:
            raise self._fail(
                ConfigIOErrorCode.READ_FAILED, f"Cannot read {path}: {e.strerror or e}"
            ) from e

    def find_param(self, veid: int, param: str) -> tuple[bool, str]:
        """Look up a parameter, e.g. find_param(133, "OSTEMPLATE").

        The last assignment in the file wins.

        Returns:
            (found, value); (False, "") if the parameter is not set
        """
        found = False
        value = ""
        for line in self.iter_lines(veid):
            if not line.startswith(param):
                continue
            rest = line[len(param):]
            if not rest.startswith("="):
                continue
            tokens = [t for t in _VALUE_SEPARATORS.split(rest) if t]
            if tokens:
                found = True
                value = tokens[0]
        return found, value

    def find_uuid_record(self, veid: int) -> Optional[str]:
        """Text of the first "#UUID: <uuid>" line, or None if there is none."""
        for line in self.iter_lines(veid):
            fields = line.split()
            if fields and fields[0] == UUID_MARKER:
                return fields[1] if len(fields) > 1 else ""
        return None

    def append_raw(self, veid: int, text: str) -> None:
        """Append text to a container's config file in a single write.

        Raises:
            ConfigIOError: WRITE_FAILED if the write or close fails
        """
        path = self.conf_file(veid)
        try:
            with open(path, "a", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            raise self._fail(
                ConfigIOErrorCode.WRITE_FAILED, f"Cannot write {path}: {e.strerror or e}"
            ) from e

    def list_ids(self) -> list[int]:
        """Ids of containers that have a config file, sorted.

        0.conf belongs to the host and is never listed.
        """
        conf_dir = self.conf_dir
        try:
            entries = list(conf_dir.iterdir())
        except OSError as e:
            logger.warning(f"Cannot list {conf_dir}: {e}")
            return []

        ids = []
        for entry in entries:
            match = _CONF_NAME.match(entry.name)
            if match and int(match.group(1)) > 0:
                ids.append(int(match.group(1)))
        return sorted(ids)

    def _fail(self, code: ConfigIOErrorCode, message: str) -> ConfigIOError:
        return report(self.sink, ConfigIOError(code, message))
