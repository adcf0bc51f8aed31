# -*- coding: utf-8 -*-

# Tether
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Runtime clients: extra middleware layered around a compiled pipeline.

A Client is built at call sites, not at definition time:

    >>> client = compose(
    ...     [(BaseUrl, "https://api.github.com"), (Headers, [("authorization", "token xyz")])],
    ...     [Logger],
    ... )
    >>> GitHubApi.get(client, "/user")

Steps run as ``client.pre`` -> definition middleware -> ``client.post`` ->
adapter. Both lists go through the same validator and compiler as
definition-time declarations.
"""

from dataclasses import dataclass, replace
from typing import Any, Iterable, Optional, Tuple

from tether.compiler import compile_declarations
from tether.declarations import MIDDLEWARE, as_declarations, capture_site
from tether.models import ExecutableStep


@dataclass(frozen=True)
class Client:
    """
    Two ordered step lists wrapped around a compiled pipeline.

    Attributes:
        pre: Steps run before the definition's middleware
        post: Steps run after the definition's middleware, before the adapter
    """

    pre: Tuple[ExecutableStep, ...] = ()
    post: Tuple[ExecutableStep, ...] = ()

    def wrap(self, inner: "Client") -> "Client":
        """
        Nest ``inner`` inside this client.

        Outer ``pre`` runs before inner ``pre``; inner ``post`` runs before
        outer ``post``, so each layer surrounds the one it wraps.
        """
        return Client(pre=self.pre + inner.pre, post=inner.post + self.post)

    def plan(self, middleware: Tuple[ExecutableStep, ...]) -> Tuple[ExecutableStep, ...]:
        """Full middleware plan for one request: pre, ``middleware``, post."""
        return self.pre + tuple(middleware) + self.post


DEFAULT_CLIENT = Client()


def compose(
    pre: Optional[Iterable[Any]] = None,
    post: Optional[Iterable[Any]] = None,
    scope: Optional[str] = None,
) -> Client:
    """
    Build a Client from two raw step lists.

    Each item is a unit, a ``(unit, options)`` pair, or an inline function.

    Args:
        pre: Steps to run before the definition's middleware
        post: Steps to run after it
        scope: Name used in diagnostics; the calling function by default

    Returns:
        Immutable Client

    Raises:
        BuildError: First invalid item, attributed to the compose() call site
    """
    site = capture_site(MIDDLEWARE, scope or "", stacklevel=2)
    if scope is None:
        site = replace(site, scope=site.function)

    return Client(
        pre=compile_declarations(as_declarations(list(pre or ()), site)),
        post=compile_declarations(as_declarations(list(post or ()), site)),
    )
