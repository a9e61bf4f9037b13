"""Configuration categories.

Each category is persisted to its own file under the configuration root.
The set is closed: adding a category means adding a member here.
"""

from __future__ import annotations

from enum import Enum


class Category(Enum):
    """A partition of the configuration namespace, bound to one file."""

    SETTING = "settings.cfg"
    THEME = "theme.cfg"

    @property
    def path(self) -> str:
        """Relative file name of this category under the root."""
        return self.value

    @classmethod
    def values(cls) -> list[Category]:
        """All categories, in declaration order."""
        return list(cls)

    def __str__(self) -> str:
        return self.value


def category_path(category: Category) -> str:
    return category.path
