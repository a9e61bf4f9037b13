"""Filesystem locations used by splitconf.

The default configuration root is ``~/.splitconf``.  Set ``SPLITCONF_HOME``
to point it somewhere else (handy for tests and portable installs).
"""

from __future__ import annotations

import os
from pathlib import Path

HOME_ENV_VAR = "SPLITCONF_HOME"


def splitconf_home() -> Path:
    """Return the default root directory for category files."""
    override = os.environ.get(HOME_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".splitconf"
