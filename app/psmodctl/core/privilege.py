"""Process privilege detection."""

import logging
import os
import sys

logger = logging.getLogger(__name__)


def is_elevated() -> bool:
    """Check whether the current process runs with administrative privilege.

    On Windows this asks the shell whether the user token is an
    administrator; elsewhere it checks for an effective uid of 0.

    Returns:
        True if elevated, False otherwise (including when undeterminable).
    """
    if sys.platform == "win32":
        import ctypes

        try:
            return bool(ctypes.windll.shell32.IsUserAnAdmin())  # type: ignore[attr-defined]
        except (AttributeError, OSError) as e:
            logger.debug("IsUserAnAdmin unavailable: %s", e)
            return False

    return os.geteuid() == 0
