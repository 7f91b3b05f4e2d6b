import logging
import os

from ppro_bridge.bridge.schemas import COMMAND_PREFIX, RESPONSE_PREFIX

logger = logging.getLogger("ppro.janitor")


def sweep(directory: os.PathLike) -> int:
    """
    Remove stale command/response files left by a previous session.

    Runs at startup, before the error handling around it is wired up, so it
    never raises. Files not named like a command or response are left alone.

    Returns:
        Number of files removed.
    """
    removed = 0
    try:
        if not os.path.isdir(directory):
            return 0
        with os.scandir(directory) as entries:
            for entry in entries:
                if not entry.name.startswith((COMMAND_PREFIX, RESPONSE_PREFIX)):
                    continue
                try:
                    os.unlink(entry.path)
                    removed += 1
                except OSError as e:
                    logger.debug(f"Could not remove {entry.path}: {e}")
    except OSError as e:
        logger.warning(f"Skipping sweep of {directory}: {e}")
        return removed

    if removed:
        logger.info(f"Removed {removed} stale file(s) from {directory}")
    return removed
