"""Health check state file"""

import logging
import os
from typing import Optional

from .exceptions import StateWriteError

MASTER = "MASTER"


def record_state(path: str, state: str, logger: Optional[logging.Logger] = None) -> None:
    """
    Overwrite the health check file with the current VRRP state

    The token is written as the raw bytes keepalived passed on the
    command line. The file is created if absent and truncated otherwise.
    The write is not atomic.

    Args:
        path: Health check file path
        state: State token as received from keepalived
        logger: Optional logger instance

    Raises:
        StateWriteError: If the file cannot be written
    """
    logger = logger or logging.getLogger(__name__)
    try:
        data = os.fsencode(state)
    except UnicodeError as e:
        raise StateWriteError(f"Cannot encode state {state!r} for {path}: {e}")

    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise StateWriteError(f"Failed to write health check path {path}: {e}")
    logger.info(f"Wrote state '{state}' to '{path}'")
