from __future__ import annotations

import logging

from .config import LOG_LEVEL


def resolve_level(level: str | None = None) -> int:
    name = (level or LOG_LEVEL).upper()
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level {name!r}")
    return value


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=resolve_level(level),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
