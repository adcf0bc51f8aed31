# -*- coding: utf-8 -*-

# Tether
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Default adapter: sends the request with httpx.

Options (an ordered list of (key, value) pairs, or None):
    timeout   - seconds, default HTTP_TIMEOUT from config
    verify    - TLS verification, default ``not ALLOW_UNTRUSTED_TLS``
    transport - custom httpx transport (e.g. httpx.MockTransport in tests)

Per-request ``opts`` pairs named ``adapter_timeout`` override ``timeout``.
"""

from dataclasses import replace
from typing import Any, Dict, Optional

import httpx
from loguru import logger

from tether import config
from tether.models import Env


def _options_dict(options: Any) -> Dict[str, Any]:
    if options is None:
        return {}
    return dict(options)


class HttpxAdapter:
    """Adapter unit backed by a short-lived ``httpx.Client``."""

    @staticmethod
    def call(env: Env, options: Any = None) -> Env:
        """
        Send ``env`` and return it with the response filled in.

        Args:
            env: Request context
            options: Adapter options, see module docstring

        Returns:
            Env with status, response headers (ordered pairs) and body bytes

        Raises:
            httpx.HTTPError: Transport-level failure
        """
        settings = _options_dict(options)
        request_opts = dict(env.opts)

        timeout: Optional[float] = request_opts.get(
            "adapter_timeout", settings.get("timeout", config.HTTP_TIMEOUT)
        )
        client_kwargs: Dict[str, Any] = {
            "timeout": timeout,
            "verify": settings.get("verify", not config.ALLOW_UNTRUSTED_TLS),
        }
        if settings.get("transport") is not None:
            client_kwargs["transport"] = settings["transport"]

        content = env.body
        if content is not None and not isinstance(content, (bytes, str)):
            raise TypeError(
                f"HttpxAdapter sends bytes or str bodies, got {type(content).__name__}; "
                "plug an encoding middleware before the adapter"
            )

        with httpx.Client(**client_kwargs) as client:
            response = client.request(
                env.method.upper(),
                env.url,
                params=list(env.query) or None,
                headers=list(env.headers) or None,
                content=content,
            )

        logger.debug(
            "[HttpxAdapter] {} {} -> {}",
            env.method.upper(),
            env.url,
            response.status_code,
        )
        return replace(
            env,
            status=response.status_code,
            headers=tuple(response.headers.multi_items()),
            body=response.content,
        )
