"""Single-file property store.

A :class:`Configuration` holds typed, defaulted properties and persists them
to one ``key=value`` text file.  Properties must be defined before ``load()``;
keys found in the file but never defined are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..errors import DuplicateKeyError, KeyNotFoundError, ParseError, StoreStateError
from ..log import logger
from ..types import TypeParser
from ._base import FileStore


def read_entries(text: str, path: Path) -> dict[str, str]:
    """Parse ``key=value`` lines into a dict of raw (unconverted) values.

    Blank lines and ``#`` comments are skipped.  Raises ParseError on a line
    without ``=``, an empty key, or a key that appears twice.
    """
    entries: dict[str, str] = {}
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        key, sep, value = stripped.partition("=")
        key = key.strip()
        if not sep:
            raise ParseError(path, lineno, f"expected key=value, got {stripped!r}")
        if not key:
            raise ParseError(path, lineno, "empty key")
        if key in entries:
            raise ParseError(path, lineno, f"duplicate key {key!r}")
        entries[key] = value.strip()
    return entries


def _check_key(key: str) -> None:
    if not isinstance(key, str) or not key:
        raise ValueError("property key must be a non-empty string")
    if key != key.strip() or key.startswith("#"):
        raise ValueError(f"invalid property key {key!r}")
    if any(ch in key for ch in "=\r\n"):
        raise ValueError(f"invalid property key {key!r}")


@dataclass
class _Property:
    type: type
    value: Any


class Configuration(FileStore):
    """Typed properties persisted to a single ``key=value`` file."""

    def __init__(self, path: Path, parser: TypeParser | None = None) -> None:
        super().__init__(path)
        self.parser = parser or TypeParser()
        self._properties: dict[str, _Property] = {}
        self._dirty = False

    # -- definitions ----------------------------------------------------------

    def define(self, key: str, type_: type, default: Any) -> None:
        """Define *key* holding values of *type_*, starting at *default*."""
        _check_key(key)
        if key in self._properties:
            raise DuplicateKeyError(key)
        if not self.parser.supports(type_):
            raise TypeError(f"unsupported property type {type_!r}")
        self._check_value(key, type_, default)
        self._properties[key] = _Property(type_, default)
        self._dirty = True

    def undefine(self, key: str) -> None:
        if key not in self._properties:
            raise KeyNotFoundError(key)
        del self._properties[key]
        self._dirty = True

    def has(self, key: str) -> bool:
        return key in self._properties

    def keys(self) -> list[str]:
        """Defined keys, in definition order."""
        return list(self._properties)

    # -- values ---------------------------------------------------------------

    def get(self, key: str) -> Any:
        prop = self._properties.get(key)
        if prop is None:
            raise KeyNotFoundError(key)
        return prop.value

    def set(self, key: str, value: Any) -> None:
        """Assign *value* (or None) to a defined property and mark the store dirty."""
        prop = self._properties.get(key)
        if prop is None:
            raise KeyNotFoundError(key)
        self._check_value(key, prop.type, value)
        prop.value = value
        self._dirty = True

    def has_unsaved_changes(self) -> bool:
        return self._dirty

    def _check_value(self, key: str, type_: type, value: Any) -> None:
        if value is None:
            return
        # bool is an int subclass; only bool properties accept it
        if not isinstance(value, type_) or (
            isinstance(value, bool) and type_ is not bool
        ):
            raise TypeError(
                f"property {key!r} expects {type_.__name__}, "
                f"got {type(value).__name__}"
            )
        text = self.parser.format(type_, value)
        if "\n" in text or "\r" in text:
            raise ValueError(f"value for {key!r} cannot span multiple lines")
        # read_entries strips values, so surrounding whitespace would not reload
        if text != text.strip():
            raise ValueError(
                f"value for {key!r} cannot start or end with whitespace"
            )

    # -- persistence ----------------------------------------------------------

    def load(self) -> None:
        """Read property values from the file.

        The whole file is converted before anything is assigned, so a
        ParseError leaves the in-memory values as they were.
        """
        if not self._properties:
            raise StoreStateError(f"no properties defined for {self.path}")
        text = self.read_raw()
        if text is None:
            logger.debug("%s does not exist, keeping defaults", self.path)
            return

        entries = read_entries(text, self.path)
        values: dict[str, Any] = {}
        for key, raw in entries.items():
            prop = self._properties.get(key)
            if prop is None:
                logger.debug("discarding undefined property %r in %s", key, self.path)
                continue
            try:
                values[key] = self.parser.parse(prop.type, raw)
            except ValueError as exc:
                lineno = _line_of(text, key)
                raise ParseError(self.path, lineno, str(exc)) from exc

        for key, value in values.items():
            self._properties[key].value = value
        # Keys missing from the file still differ from what is on disk.
        self._dirty = any(key not in values for key in self._properties)

    def save(self) -> None:
        """Write all properties to the file if anything changed."""
        if not self._dirty:
            logger.debug("%s has no unsaved changes", self.path)
            return
        lines = [
            f"{key}={self.parser.format(prop.type, prop.value)}\n"
            for key, prop in self._properties.items()
        ]
        self.write_raw("".join(lines))
        self._dirty = False


def _line_of(text: str, key: str) -> int:
    for lineno, line in enumerate(text.splitlines(), start=1):
        name, sep, _ = line.strip().partition("=")
        if sep and name.strip() == key:
            return lineno
    return 0
