"""Package logger for splitconf."""

from __future__ import annotations

import logging

logger = logging.getLogger("splitconf")
logger.addHandler(logging.NullHandler())
