"""Exceptions raised by splitconf.

Misuse of the API (bad root, duplicate or unknown keys) raises immediately.
Per-file I/O and parse problems during ``load()``/``save()`` are collected by
:class:`~splitconf.split.SplitConfiguration` instead of propagating.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class SplitConfigError(Exception):
    """Base class for every splitconf error."""


class RootError(Enum):
    """Why a configuration root was rejected."""

    INVALID_ROOT = "invalid_root"
    DIRECTORY_CREATE_FAILED = "directory_create_failed"


class ConfigurationError(SplitConfigError):
    """The configuration root directory cannot be used."""

    def __init__(self, reason: RootError, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class InvalidCategoryError(SplitConfigError, ValueError):
    """A property was defined against something that is not a Category."""


class DuplicateKeyError(SplitConfigError, ValueError):
    """A key is already defined somewhere in the configuration."""

    def __init__(self, key: str) -> None:
        super().__init__(f"duplicate property {key!r}")
        self.key = key


class KeyNotFoundError(SplitConfigError, KeyError):
    """No category defines the requested key."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"property {self.key!r} not found"


class ParseError(SplitConfigError):
    """A category file could not be parsed."""

    def __init__(self, path: Path, line: int, message: str) -> None:
        super().__init__(f"{path}:{line}: {message}")
        self.path = path
        self.line = line


class StoreStateError(SplitConfigError):
    """A store was used in a state that does not allow the operation."""
