# src/qst/util/log.py: Logging setup.
# Plain line-oriented logging on stderr, so it interleaves sensibly with the
# output of the managed command, which shares the same terminal.

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger for the application."""
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )

def get_logger(name):
    return logging.getLogger(name)
