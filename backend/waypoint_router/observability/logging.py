from __future__ import annotations

import logging

from waypoint_router.config import settings

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the ``waypoint_router`` logger tree once per process."""
    root = logging.getLogger("waypoint_router")
    root.setLevel((level or settings.log_level).upper())
    if root.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)
    root.propagate = False
