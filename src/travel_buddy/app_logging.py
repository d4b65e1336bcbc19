"""Logging setup for the travel_buddy logger tree."""

import logging

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Attach one stream handler to ``travel_buddy`` and apply ``level``.

    Repeated calls only adjust the level.
    """
    logger = logging.getLogger("travel_buddy")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
