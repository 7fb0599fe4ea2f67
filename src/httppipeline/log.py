# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for httppipeline."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("HTTPPIPELINE_LOG_LEVEL", "WARNING").upper()


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for library or script use."""
    effective_level = (level or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the package namespace."""
    if not name:
        return logging.getLogger("httppipeline")
    if name == "httppipeline" or name.startswith("httppipeline."):
        return logging.getLogger(name)
    return logging.getLogger(f"httppipeline.{name}")


__all__ = ["get_logger", "setup_logging"]
