# -*- coding: utf-8 -*-

# Tether
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Error taxonomy for client definitions and generated entry points.

Two failure moments exist and are kept apart on purpose:

- Build time: raised by ``ApiBuilder.finalize()`` / ``compose()`` while a
  declaration list is validated. All are subclasses of ``BuildError`` and
  carry the offending declaration's ``kind`` and ``site``. No partial
  pipeline is ever exposed after one of these.
- Call time: raised synchronously by a generated entry point. Only that
  one call is aborted.

Example:
    >>> try:
    ...     builder.plug("json")
    ...     builder.finalize()
    ... except UnresolvedLocalReference as exc:
    ...     print(exc.site)
    api.py:12
"""

from typing import Any, Optional

from tether.models import SourceContext


class TetherError(Exception):
    """Base class for every error raised by Tether."""


class BuildError(TetherError):
    """
    A declaration could not be compiled.

    Attributes:
        kind: "middleware" or "adapter"
        site: Where the offending declaration was written
        detail: Human-readable explanation and fix
    """

    def __init__(self, detail: str, site: Optional[SourceContext] = None):
        self.site = site
        self.kind = site.kind if site is not None else None
        self.detail = detail
        super().__init__(self._format())

    def _format(self) -> str:
        if self.site is None:
            return self.detail
        return f"{self.site} ({self.kind} in {self.site.scope}): {self.detail}"


class UnresolvedLocalReference(BuildError):
    """A middleware or adapter name does not resolve to a concrete unit."""

    def __init__(self, name: Any, site: Optional[SourceContext] = None):
        self.name = name
        kind = site.kind if site is not None else "middleware"
        verb = "plug" if kind == "middleware" else "adapter"
        super().__init__(
            f"{name!r} does not resolve to a {kind} unit. "
            f"Local {kind} names are no longer supported; "
            f"pass the unit itself or its dotted import path instead, "
            f"e.g. {verb}(mypackage.{kind}s.MyUnit)",
            site,
        )


class DeprecatedHeaderShape(BuildError):
    """Headers were declared as a mapping instead of ordered pairs."""

    def __init__(self, unit: Any, site: Optional[SourceContext] = None):
        self.unit = unit
        unit_name = getattr(unit, "__qualname__", None) or getattr(
            unit, "__name__", repr(unit)
        )
        super().__init__(
            f"headers for {unit_name} must be a list of (name, value) pairs, "
            "not a dict. Header order and repeated names are significant "
            'and a dict cannot keep them: use [("content-type", "text/plain")]',
            site,
        )


class DuplicateAdapterDeclaration(BuildError):
    """More than one adapter was declared for one client definition."""

    def __init__(self, site: Optional[SourceContext] = None, first: Optional[SourceContext] = None):
        self.first = first
        where = f" (first declared at {first})" if first is not None else ""
        super().__init__(
            f"adapter declared more than once{where}. "
            "A client definition takes exactly one adapter",
            site,
        )


class DeprecatedClientFunctionUsage(TetherError, TypeError):
    """A bare callable was passed where a compiled Client value was expected."""

    def __init__(self, method: str, fun: Any):
        self.method = method
        self.fun = fun
        super().__init__(
            f"{method}() got a function {fun!r} as its client argument. "
            "Using functions as clients has been removed; "
            "build one with tether.compose(pre, post) instead"
        )


class InvalidRequestOptions(TetherError, TypeError):
    """Request options were not an ordered sequence of known (key, value) pairs."""


class DefinitionPhaseError(TetherError, RuntimeError):
    """A builder was used outside its declaration phase."""


class InlineFunctionOptionsIgnored(UserWarning):
    """Options were supplied next to an inline function and will never be used."""
