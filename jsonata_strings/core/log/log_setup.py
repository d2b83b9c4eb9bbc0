from __future__ import annotations

import sys

from loguru import logger

# Library code stays quiet until an application opts in.
logger.disable("jsonata_strings")


def setup_console_logging(level: str = "WARNING") -> None:
    logger.remove()
    logger.enable("jsonata_strings")
    logger.add(lambda msg: sys.stderr.write(msg), level=level.upper())
