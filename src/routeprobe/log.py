# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for routeprobe."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("ROUTEPROBE_LOG_LEVEL", "WARNING").upper()


def resolve_log_level(level: str | None = None) -> int:
    """Map a level name to its numeric value; unknown names fall back to WARNING."""
    effective_level = (level or DEFAULT_LOG_LEVEL).strip().upper()
    value = logging.getLevelName(effective_level)
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for CLI/library use (stderr, never the report stream)."""
    logging.basicConfig(
        level=resolve_log_level(level),
        format="%(levelname)s %(name)s: %(message)s",
    )


__all__ = ["resolve_log_level", "setup_logging"]
