"""Persistence layer – each store owns its file path, data format, and I/O."""

from ._base import FileStore
from .configuration import Configuration, read_entries

__all__ = [
    "Configuration",
    "FileStore",
    "read_entries",
]
