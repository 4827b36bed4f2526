# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for djclient."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("DJCLIENT_LOG_LEVEL", "WARNING").upper()
PACKAGE_LOGGER = "djclient"
# httpx/httpcore log every request at INFO/DEBUG; keep them out unless asked for.
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str | None = None, *, transport_debug: bool = False) -> None:
    """Configure standard logging for CLI/library use."""
    effective_level = getattr(logging, (level or DEFAULT_LOG_LEVEL).upper(), logging.WARNING)
    logging.basicConfig(
        level=effective_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(effective_level)
    transport_level = effective_level if transport_debug else max(effective_level, logging.WARNING)
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)


__all__ = ["PACKAGE_LOGGER", "setup_logging"]
