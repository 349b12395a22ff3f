"""Logging utilities tailored for the magic rectangle search."""

from __future__ import annotations

import logging
from typing import Optional

PACKAGE_LOGGER = __name__.split(".")[0]


def configure_logging(level: int = logging.INFO) -> None:
    """Install one stream handler on the root logger at ``level``.

    Callers may reconfigure before building a generator; the CLI does so
    from ``--log-level``.
    """

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the package namespace, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or PACKAGE_LOGGER)
