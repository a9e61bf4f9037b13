"""Base text-file persistence store."""

from __future__ import annotations

import os
from pathlib import Path

from ..errors import ParseError
from ..log import logger


class FileStore:
    """A store backed by one UTF-8 text file, written atomically.

    Unlike a cache, read and write errors propagate: callers decide whether a
    broken file is fatal.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    # -- core I/O -------------------------------------------------------------

    def read_raw(self) -> str | None:
        """Return the file contents, or None when the file does not exist.

        Raises ParseError when the file is not valid UTF-8.
        """
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(self.path, 0, f"not valid UTF-8: {exc}") from exc

    def write_raw(self, text: str) -> None:
        """Replace the file contents with *text* via a temp file + rename."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp.write_text(text, encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError:
            logger.debug("atomic write to %s failed", self.path, exc_info=True)
            tmp.unlink(missing_ok=True)
            raise
