# Logging setup + debug trace helper

import logging

from events_main.utils.config import CONFIG

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger("events_main")


def configure_logging(debug: bool | None = None) -> None:
    """Configure root logging once; debug defaults to CONFIG['debug_mode']."""
    if debug is None:
        debug = CONFIG.get("debug_mode", False)
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=_LOG_FORMAT,
    )


def debug_log(msg: str, *args) -> None:
    if CONFIG.get("debug_mode", False):
        logger.debug(msg, *args)
