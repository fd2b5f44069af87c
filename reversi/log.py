"""Logging setup shared by the CLI and the API."""

import logging
from typing import Optional

from reversi.config import CONFIG

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None):
    """Configure the root logger once; later calls only adjust the level."""
    lvl = getattr(logging, (level or CONFIG.log_level).upper(), logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=lvl, format=LOG_FORMAT)
    root.setLevel(lvl)
