# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_provenance

"""
Logging configuration.

Configures the shared loguru logger with a human-readable stderr sink and a
rotating JSON file sink under ``logs/``.
"""

import os
import sys
from pathlib import Path

from loguru import logger

__all__ = ["logger"]

LOG_DIR = Path("logs")
LOG_FILE = LOG_DIR / "coreason_provenance.log"

# Remove default handler so repeated imports/reloads do not duplicate sinks
logger.remove()

logger.add(
    sys.stderr,
    level=os.getenv("COREASON_LOG_LEVEL", "INFO").upper(),
    format=(
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    ),
)

if not LOG_DIR.exists():
    LOG_DIR.mkdir(parents=True, exist_ok=True)

logger.add(
    str(LOG_FILE),
    rotation="10 MB",
    retention="7 days",
    serialize=True,
    enqueue=True,
    level="DEBUG",
)
