"""Shared logging helpers."""

from __future__ import annotations

import logging
import os

from .errors import ConfigurationError

LOG_LEVEL_ENV = "MEMBERORDERS_LOG_LEVEL"


def resolve_log_level(level: int | str | None = None) -> int:
    """Return the numeric level for ``level``, or for ``MEMBERORDERS_LOG_LEVEL`` when unset.

    Unknown level names raise ``ConfigurationError``; INFO is the default.
    """

    if isinstance(level, int):
        return level
    raw = level if level is not None else os.getenv(LOG_LEVEL_ENV, "")
    name = raw.strip().upper() or "INFO"
    resolved = logging.getLevelNamesMapping().get(name)
    if resolved is None:
        source = "log level" if level is not None else LOG_LEVEL_ENV
        raise ConfigurationError(f"Unknown {source}: {raw!r}")
    return resolved


def configure_logging(*, level: int | str | None = None, force: bool = False) -> None:
    """Initialise the root logger once with a terse format for scheduled-job output.

    Pass ``force=True`` to reconfigure during tests.
    """

    logging.basicConfig(
        level=resolve_log_level(level),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
