"""splitconf: typed configuration properties split across per-category files."""

from .categories import Category, category_path
from .errors import (
    ConfigurationError,
    DuplicateKeyError,
    InvalidCategoryError,
    KeyNotFoundError,
    ParseError,
    RootError,
    SplitConfigError,
    StoreStateError,
)
from .split import CategoryFailure, SplitConfiguration
from .types import Color, TypeParser

__version__ = "0.1.0"

__all__ = [
    "Category",
    "CategoryFailure",
    "Color",
    "ConfigurationError",
    "DuplicateKeyError",
    "InvalidCategoryError",
    "KeyNotFoundError",
    "ParseError",
    "RootError",
    "SplitConfigError",
    "SplitConfiguration",
    "StoreStateError",
    "TypeParser",
    "category_path",
]
