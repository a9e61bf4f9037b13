"""Value types for configuration properties.

:class:`TypeParser` converts between the Python value of a property and the
text stored after ``key=`` in a category file.  Scalars use their
constructors, booleans follow YAML 1.1 (``yes``/``no``/``on``/``off`` work),
and lists/dicts are written in YAML flow style so they stay on one line.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable

import yaml

# Named colors accepted wherever a Color is expected.
COLOR_NAMES: dict[str, str] = {
    "black": "#000000",
    "white": "#ffffff",
    "gray": "#888888",
    "grey": "#888888",
    "silver": "#c0c0c0",
    "red": "#cc3333",
    "green": "#44aa44",
    "blue": "#5599dd",
    "cyan": "#00cccc",
    "magenta": "#cc00cc",
    "yellow": "#ffaa00",
    "orange": "#cb7700",
    "purple": "#665588",
    "teal": "#448899",
}

_HEX_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


def resolve_color(value: str) -> str | None:
    """Return a ``#rrggbb`` string for a color name or hex code.

    Names are case-insensitive.  Returns None for anything unrecognised,
    including 3-digit hex shorthand.
    """
    value = value.strip()
    if _HEX_RE.match(value):
        return value
    return COLOR_NAMES.get(value.lower())


@dataclass(frozen=True)
class Color:
    """An RGB color stored as ``#rrggbb``."""

    hex: str

    def __post_init__(self) -> None:
        if not _HEX_RE.match(self.hex):
            raise ValueError(f"not a #rrggbb color: {self.hex!r}")

    @classmethod
    def parse(cls, text: str) -> Color:
        resolved = resolve_color(text)
        if resolved is None:
            raise ValueError(f"unknown color {text!r}")
        return cls(resolved)

    def __str__(self) -> str:
        return self.hex


Parse = Callable[[str], Any]
Format = Callable[[Any], str]


def _parse_bool(text: str) -> bool:
    node = yaml.safe_load(text)
    if not isinstance(node, bool):
        raise ValueError(f"not a boolean: {text!r}")
    return node


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


def _yaml_loader(container: type) -> Parse:
    def load(text: str) -> Any:
        node = yaml.safe_load(text)
        if not isinstance(node, container):
            raise ValueError(f"expected a {container.__name__}, got {text!r}")
        return node

    return load


def _format_yaml(value: Any) -> str:
    return yaml.safe_dump(
        value, default_flow_style=True, sort_keys=False, width=float("inf")
    ).strip()


class TypeParser:
    """Registry of parse/format functions keyed by property type."""

    def __init__(self) -> None:
        self._converters: dict[type, tuple[Parse, Format]] = {}
        self.register(str, str, str)
        self.register(int, int, str)
        self.register(float, float, str)
        self.register(bool, _parse_bool, _format_bool)
        self.register(Path, Path, str)
        self.register(list, _yaml_loader(list), _format_yaml)
        self.register(dict, _yaml_loader(dict), _format_yaml)
        self.register(Color, Color.parse, str)

    def register(self, type_: type, parse: Parse, format_: Format) -> None:
        """Add or replace the converter for *type_*."""
        self._converters[type_] = (parse, format_)

    def _lookup(self, type_: type) -> tuple[Parse, Format] | None:
        entry = self._converters.get(type_)
        if entry is None and isinstance(type_, type) and issubclass(type_, Enum):
            return (lambda text: type_[text], lambda value: value.name)
        return entry

    def supports(self, type_: type) -> bool:
        return self._lookup(type_) is not None

    def parse(self, type_: type, text: str) -> Any:
        """Convert stored *text* to a value of *type_*.

        Empty text is None, except for ``str`` where it is the empty string.
        Raises ValueError when the text does not describe a valid value.
        """
        entry = self._lookup(type_)
        if entry is None:
            raise TypeError(f"unsupported property type {type_!r}")
        text = text.strip()
        if not text:
            return "" if type_ is str else None
        try:
            return entry[0](text)
        except (ValueError, TypeError, KeyError, yaml.YAMLError) as exc:
            raise ValueError(
                f"invalid {type_.__name__} value {text!r}: {exc}"
            ) from exc

    def format(self, type_: type, value: Any) -> str:
        """Convert *value* to the text stored after ``key=``.

        Raises TypeError when YAML cannot represent the value.
        """
        entry = self._lookup(type_)
        if entry is None:
            raise TypeError(f"unsupported property type {type_!r}")
        if value is None:
            return ""
        try:
            return entry[1](value)
        except yaml.YAMLError as exc:
            raise TypeError(
                f"cannot store {type(value).__name__} value "
                f"as {type_.__name__}: {exc}"
            ) from exc
