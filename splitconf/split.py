"""Configuration split across one file per category.

:class:`SplitConfiguration` presents a single namespace of properties while
each :class:`~splitconf.categories.Category` persists to its own file under a
common root.  A key lives in exactly one category; ``define()`` enforces that
across all of them, since no single file store can.

``load()`` and ``save()`` are best-effort: a broken file only affects its own
category.  Failures are logged, passed to the optional ``on_failure``
callback, and returned to the caller.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from .categories import Category
from .errors import (
    ConfigurationError,
    DuplicateKeyError,
    InvalidCategoryError,
    KeyNotFoundError,
    ParseError,
    RootError,
    StoreStateError,
)
from .log import logger
from .persistence import Configuration
from .types import TypeParser


@dataclass(frozen=True)
class CategoryFailure:
    """A category whose file could not be loaded or saved."""

    category: Category
    operation: str  # "load" or "save"
    path: Path
    error: Exception

    @property
    def message(self) -> str:
        return (
            f"Failed to {self.operation} {self.path}: "
            f"{type(self.error).__name__}: {self.error}"
        )


FailureCallback = Callable[[CategoryFailure], None]

_LOAD_ERRORS = (OSError, ParseError, StoreStateError)
_SAVE_ERRORS = (OSError,)


def _prepare_root(root: Path | str | None) -> Path:
    if root is None or str(root) == "":
        raise ConfigurationError(RootError.INVALID_ROOT, "root is empty")
    path = Path(root)
    if path.exists():
        if not path.is_dir():
            raise ConfigurationError(
                RootError.INVALID_ROOT, f"root must be a directory: {path}"
            )
        if not os.access(path, os.R_OK | os.W_OK):
            raise ConfigurationError(
                RootError.INVALID_ROOT, f"read/write access denied to {path}"
            )
        return path
    try:
        path.mkdir(parents=True)
    except OSError as exc:
        raise ConfigurationError(
            RootError.DIRECTORY_CREATE_FAILED, f"failed to create {path}: {exc}"
        ) from exc
    logger.info("created configuration root %s", path)
    return path


class SplitConfiguration:
    """Properties partitioned into one file-backed store per category."""

    def __init__(
        self,
        root: Path | str,
        parser: TypeParser | None = None,
        on_failure: FailureCallback | None = None,
    ) -> None:
        self.root = _prepare_root(root)
        self.on_failure = on_failure
        parser = parser or TypeParser()
        self._configurations: dict[Category, Configuration] = {
            category: Configuration(self.root / category.path, parser)
            for category in Category.values()
        }

    def configuration(self, category: Category) -> Configuration:
        """Return the store backing *category*."""
        return self._configurations[category]

    # -- definitions ----------------------------------------------------------

    def define(self, category: Category, type_: type, key: str, default: Any) -> None:
        """Define a property in *category*.

        Raises DuplicateKeyError when another category already owns *key*.
        """
        if not isinstance(category, Category):
            raise InvalidCategoryError(f"not a category: {category!r}")
        if self._exists_elsewhere(category, key):
            raise DuplicateKeyError(key)
        self._configurations[category].define(key, type_, default)

    def undefine(self, key: str) -> None:
        """Remove *key* from whichever category owns it; unknown keys are ignored."""
        for configuration in self._configurations.values():
            if configuration.has(key):
                configuration.undefine(key)

    def has(self, key: str) -> bool:
        """True if any category defines *key*."""
        return any(c.has(key) for c in self._configurations.values())

    def category_of(self, key: str) -> Category | None:
        for category, configuration in self._configurations.items():
            if configuration.has(key):
                return category
        return None

    def _exists_elsewhere(self, category: Category, key: str) -> bool:
        return any(
            configuration.has(key)
            for other, configuration in self._configurations.items()
            if other is not category
        )

    # -- values ---------------------------------------------------------------

    def get(self, key: str) -> Any:
        """Return the value of *key*.

        The caller is responsible for expecting the type the property was
        defined with.
        """
        return self._owner(key).get(key)

    def set(self, key: str, value: Any) -> None:
        """Assign *value* (None allowed) to *key*, marking its category unsaved."""
        self._owner(key).set(key, value)

    def _owner(self, key: str) -> Configuration:
        for configuration in self._configurations.values():
            if configuration.has(key):
                return configuration
        raise KeyNotFoundError(key)

    def get_unsaved_categories(self) -> list[Category]:
        return [
            category
            for category, configuration in self._configurations.items()
            if configuration.has_unsaved_changes()
        ]

    # -- persistence ----------------------------------------------------------

    def load(self) -> list[CategoryFailure]:
        """Load every category from its file.

        Call once all properties are defined; undefined keys in the files are
        discarded.  Returns the categories that failed (empty on success).
        """
        failures: list[CategoryFailure] = []
        for category, configuration in self._configurations.items():
            logger.info("Parsing %s", configuration.path)
            try:
                configuration.load()
            except _LOAD_ERRORS as exc:
                failures.append(self._fail(category, "load", exc))
        return failures

    def save(self) -> list[CategoryFailure]:
        """Save every category with unsaved changes to its file."""
        failures: list[CategoryFailure] = []
        for category, configuration in self._configurations.items():
            if configuration.has_unsaved_changes():
                logger.info("Writing %s", configuration.path)
            try:
                configuration.save()
            except _SAVE_ERRORS as exc:
                failures.append(self._fail(category, "save", exc))
        return failures

    def _fail(self, category: Category, operation: str, exc: Exception) -> CategoryFailure:
        failure = CategoryFailure(
            category, operation, self._configurations[category].path, exc
        )
        logger.error("%s", failure.message)
        if self.on_failure is not None:
            self.on_failure(failure)
        return failure
