# -*- coding: utf-8 -*-

# Tether
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Loguru sink setup for applications built on Tether.

Library code only ever calls ``logger``; installing sinks is left to the
application, which can call :func:`setup_logging` once at startup.
"""

import sys
from typing import Optional

from loguru import logger

from tether.config import LOG_LEVEL

_LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(level: Optional[str] = None) -> int:
    """
    Replace loguru's default sink with a single stderr sink.

    Args:
        level: Log level name; defaults to LOG_LEVEL from config

    Returns:
        Sink id returned by loguru (can be passed to logger.remove())
    """
    logger.remove()
    return logger.add(
        sys.stderr,
        level=(level or LOG_LEVEL).upper(),
        format=_LOG_FORMAT,
        colorize=True,
    )
