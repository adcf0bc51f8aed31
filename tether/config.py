# -*- coding: utf-8 -*-

# Tether
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""
Tether Configuration.

Centralized storage for process-wide settings and constants.
Loads environment variables and provides typed access to them.

Every value here is read once at import time. Client definitions pick
them up when they are finalized, so changing the environment afterwards
does not affect already-compiled clients.
"""

import os
from typing import Tuple

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(var_name: str, default: str) -> bool:
    """
    Read a boolean flag from the environment.

    Args:
        var_name: Environment variable name
        default: Raw default used when the variable is not set

    Returns:
        True for "true", "1", "yes", "enabled" or "on" (case-insensitive)
    """
    return os.getenv(var_name, default).lower() in (
        "true",
        "1",
        "yes",
        "enabled",
        "on",
    )


# ==================================================================================================
# Application
# ==================================================================================================

APP_NAME: str = "tether"
APP_VERSION: str = "0.4.0"

# ==================================================================================================
# Logging Settings
# ==================================================================================================

# Log level for the loguru sink installed by tether.logging_config.setup_logging().
# Available levels: TRACE, DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ==================================================================================================
# HTTP Verbs
# ==================================================================================================

# Verbs whose entry points never accept a request body.
SIMPLE_METHODS: Tuple[str, ...] = ("head", "get", "delete", "trace", "options")

# Verbs whose entry points take a body right after the URL.
BODY_METHODS: Tuple[str, ...] = ("post", "put", "patch")

ALL_METHODS: Tuple[str, ...] = SIMPLE_METHODS + BODY_METHODS

# ==================================================================================================
# Adapter Settings
# ==================================================================================================

# Process-wide default adapter, used by every client definition that does not
# declare its own adapter. Must be a dotted import path to a unit exposing
# call(env, options).
#
# Bare names (e.g. TETHER_DEFAULT_ADAPTER=httpx) were accepted as adapter
# aliases in the past. They no longer resolve and fail the build.
DEFAULT_ADAPTER: str = os.getenv(
    "TETHER_DEFAULT_ADAPTER", "tether.adapters.httpx_adapter.HttpxAdapter"
)

# Duplicate adapter declarations inside one client definition.
# true (default): the second declaration fails the build.
# false: a warning is logged and the last declaration wins.
STRICT_ADAPTER: bool = _env_flag("TETHER_STRICT_ADAPTER", "true")

# ==================================================================================================
# Method Surface Settings
# ==================================================================================================

# Attach generated docstrings to verb entry points.
# Disable to keep help() output short for very large client modules.
GENERATE_DOCS: bool = _env_flag("TETHER_DOCS", "true")

# ==================================================================================================
# Default HTTP Adapter (httpx)
# ==================================================================================================

# Request timeout in seconds for the default httpx adapter.
HTTP_TIMEOUT: float = float(os.getenv("TETHER_HTTP_TIMEOUT", "30"))

# TLS certificate verification for upstream HTTPS connections.
# Default is secure (verification enabled).
# Set to true only when a proxy performs TLS interception with untrusted certs.
ALLOW_UNTRUSTED_TLS: bool = _env_flag("ALLOW_UNTRUSTED_TLS", "false")
