"""Entry point for the splitconf CLI.

Inspects a configuration root without needing property definitions:
``paths`` lists the category files, ``show`` prints their raw entries, and
``check`` verifies that every existing file parses.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .categories import Category
from .errors import ParseError
from .log import logger
from .persistence import FileStore, read_entries
from .platform import splitconf_home


def _read_category(root: Path, category: Category) -> dict[str, str] | None:
    """Return raw entries for *category*, or None when its file is absent."""
    store = FileStore(root / category.path)
    text = store.read_raw()
    if text is None:
        return None
    return read_entries(text, store.path)


def _cmd_paths(root: Path) -> int:
    for category in Category.values():
        path = root / category.path
        state = "exists" if path.exists() else "missing"
        print(f"{category.name.lower():10s} {path} [{state}]")
    return 0


def _cmd_show(root: Path) -> int:
    status = 0
    for category in Category.values():
        try:
            entries = _read_category(root, category)
        except (OSError, ParseError) as exc:
            print(f"{category.path}: {exc}", file=sys.stderr)
            status = 1
            continue
        print(f"[{category.path}]")
        if entries is None:
            print("  (no file)")
            continue
        for key, value in entries.items():
            print(f"  {key} = {value}")
    return status


def _cmd_check(root: Path) -> int:
    failed = 0
    for category in Category.values():
        try:
            entries = _read_category(root, category)
        except (OSError, ParseError) as exc:
            logger.debug("check failed for %s", category.path, exc_info=True)
            print(f"  [!!] {category.path:14s}  {type(exc).__name__}: {exc}")
            failed += 1
            continue
        if entries is None:
            print(f"  [--] {category.path:14s}  no file")
        else:
            print(f"  [ok] {category.path:14s}  {len(entries)} entries")
    return 1 if failed else 0


_COMMANDS = {
    "paths": _cmd_paths,
    "show": _cmd_show,
    "check": _cmd_check,
}


def main(argv: list[str] | None = None) -> None:
    """Run the splitconf CLI."""
    parser = argparse.ArgumentParser(
        prog="splitconf", description="Inspect a split configuration directory"
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"splitconf {__version__}",
    )
    parser.add_argument(
        "--root",
        "-r",
        type=Path,
        default=None,
        help="Configuration root (default: $SPLITCONF_HOME or ~/.splitconf)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument("command", choices=sorted(_COMMANDS))

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    root = args.root or splitconf_home()
    if args.command != "paths" and not root.is_dir():
        print(f"No configuration directory at {root}", file=sys.stderr)
        sys.exit(1)

    sys.exit(_COMMANDS[args.command](root))


if __name__ == "__main__":
    main()
