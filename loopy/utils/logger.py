"""Logging utilities tailored for the loop puzzle engine.

Propagation runs on every search branch, so the rule modules only log at
DEBUG. The search trace has its own logger, ``loopy.engine.solver``, which
can be turned up on its own to follow the guesses without the rule chatter.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"
SEARCH_LOGGER = "loopy.engine.solver"

Level = Union[int, str]


def parse_level(level: Level) -> int:
    """Turn ``"debug"``, ``"INFO"`` or a numeric level into a logging level.

    Unknown names fall back to INFO.
    """

    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def set_search_level(level: Optional[Level]) -> None:
    """Set the level of the search trace alone; ``None`` defers to the root level."""

    logger = logging.getLogger(SEARCH_LOGGER)
    logger.setLevel(logging.NOTSET if level is None else parse_level(level))


class _ConsoleHandler(logging.StreamHandler):
    """The one handler ``configure_logging`` owns; replaced on every call."""


def configure_logging(level: Level = logging.INFO, search_level: Optional[Level] = None) -> None:
    """Send every ``loopy`` record through one stream handler on the root logger."""

    handler = _ConsoleHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    root.handlers = [h for h in root.handlers if not isinstance(h, _ConsoleHandler)]
    root.addHandler(handler)
    root.setLevel(parse_level(level))
    set_search_level(search_level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``loopy`` namespace, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "loopy")
