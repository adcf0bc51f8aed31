# -*- coding: utf-8 -*-

# Tether
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Declaration store: the append-only accumulator behind one client definition.

The store only records. Validation happens later in the compiler so the
two can be tested apart.
"""

import sys
from dataclasses import dataclass
from typing import Any, List, Tuple

from tether.errors import DefinitionPhaseError
from tether.models import NOT_SET, SourceContext

MIDDLEWARE = "middleware"
ADAPTER = "adapter"
KINDS = (MIDDLEWARE, ADAPTER)


@dataclass(frozen=True)
class Declaration:
    """
    One raw middleware or adapter declaration.

    Attributes:
        kind: "middleware" or "adapter"
        target: Unit, dotted path, inline callable, or anything else the user passed
        options: Options value, or NOT_SET when none were given
        site: Declaration site used in diagnostics
    """

    kind: str
    target: Any
    options: Any
    site: SourceContext

    @property
    def has_options(self) -> bool:
        return self.options is not NOT_SET


def capture_site(kind: str, scope: str, stacklevel: int = 2) -> SourceContext:
    """
    Build a SourceContext for the caller ``stacklevel`` frames up.

    Args:
        kind: "middleware" or "adapter"
        scope: Client definition name
        stacklevel: 1 is the caller of capture_site(), 2 its caller, and so on

    Returns:
        SourceContext pointing at the declaring line
    """
    try:
        frame = sys._getframe(stacklevel)
    except ValueError:
        return SourceContext(kind=kind, scope=scope)
    code = frame.f_code
    return SourceContext(
        kind=kind,
        scope=scope,
        filename=code.co_filename,
        lineno=frame.f_lineno,
        function=code.co_name,
    )


class DeclarationStore:
    """
    Ordered per-kind list of declarations for one client definition.

    Every adapter declaration is kept as well; whether a second one is an
    error or overrides the first is decided when compiling.

    Example:
        >>> store = DeclarationStore("GitHubApi")
        >>> store.record("middleware", BaseUrl, "https://api.github.com", site)
        >>> [d.target for d in store.middleware]
        [<class 'BaseUrl'>]
    """

    def __init__(self, scope: str):
        self.scope = scope
        self._entries = {MIDDLEWARE: [], ADAPTER: []}
        self._sealed = False

    def record(self, kind: str, target: Any, options: Any, site: SourceContext) -> Declaration:
        """
        Append one declaration.

        Args:
            kind: "middleware" or "adapter"
            target: Declared unit or callable
            options: Options value or NOT_SET
            site: Declaration site

        Returns:
            The recorded Declaration

        Raises:
            ValueError: Unknown kind
            DefinitionPhaseError: The store was already compiled
        """
        if kind not in KINDS:
            raise ValueError(f"Unknown declaration kind: {kind!r}")
        if self._sealed:
            raise DefinitionPhaseError(
                f"{site}: cannot declare {kind} on {self.scope} after it was finalized"
            )
        declaration = Declaration(kind=kind, target=target, options=options, site=site)
        self._entries[kind].append(declaration)
        return declaration

    def seal(self) -> None:
        """Forbid further declarations."""
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def middleware(self) -> Tuple[Declaration, ...]:
        """Middleware declarations in declared order."""
        return tuple(self._entries[MIDDLEWARE])

    @property
    def adapters(self) -> Tuple[Declaration, ...]:
        """Adapter declarations in declared order (normally zero or one)."""
        return tuple(self._entries[ADAPTER])

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._entries.values())


def as_declarations(items: List[Any], site: SourceContext) -> List[Declaration]:
    """
    Turn composition-time items into declarations sharing one site.

    Items may be a unit, a ``(unit, options)`` pair, or an inline callable.

    Args:
        items: Ordered step items
        site: Site of the composing call

    Returns:
        Declarations in the same order
    """
    declarations = []
    for item in items:
        if isinstance(item, tuple) and len(item) == 2:
            target, options = item
        else:
            target, options = item, NOT_SET
        declarations.append(Declaration(kind=site.kind, target=target, options=options, site=site))
    return declarations
