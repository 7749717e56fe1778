import json
import logging

from fittrack.core.config import settings

logger = logging.getLogger("fittrack")


def log_debug(event: str, data: dict):
    """
    Logs structured debug info if enabled.
    """
    if not settings.DEBUG_MODE:
        return

    logger.debug("[DEBUG] %s: %s", event, json.dumps(data, indent=2, default=str))
