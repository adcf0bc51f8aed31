# -*- coding: utf-8 -*-

# Tether
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Core value types shared by the builder, compiler and entry points.

Everything produced by compilation is a frozen dataclass holding tuples,
so compiled values can be read from any number of threads without locks.
Only ``Env`` is mutable: it is the per-request context walked by the
execution engine and never leaves a single request.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, Union

Pairs = Tuple[Tuple[str, Any], ...]


class _NotSet:
    """Marker for 'no options given' (None is a legal options value)."""

    _instance: Optional["_NotSet"] = None

    def __new__(cls) -> "_NotSet":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_SET"

    def __bool__(self) -> bool:
        return False


NOT_SET = _NotSet()


@dataclass(frozen=True)
class SourceContext:
    """
    Where a declaration was written.

    Attributes:
        kind: "middleware" or "adapter"
        scope: Name of the client definition (or composing function)
        filename: Source file of the declaring call
        lineno: Line of the declaring call
        function: Function (or "<module>") the declaring call ran in
    """

    kind: str
    scope: str
    filename: str = "<unknown>"
    lineno: int = 0
    function: str = "<module>"

    def __str__(self) -> str:
        return f"{self.filename}:{self.lineno}"


@dataclass(frozen=True)
class CallUnit:
    """Invoke a named unit's ``call`` entry point with ``options``."""

    target: Any
    options: Any = None


@dataclass(frozen=True)
class CallFunction:
    """Invoke an inline callable directly."""

    target: Callable[..., Any]


ExecutableStep = Union[CallUnit, CallFunction]


@dataclass(frozen=True)
class CompiledPipeline:
    """Static pipeline of one client definition. ``adapter`` is never None."""

    middleware: Tuple[ExecutableStep, ...]
    adapter: ExecutableStep


@dataclass(frozen=True)
class RequestDescriptor:
    """
    Canonical description of one API call.

    ``query`` and ``headers`` are ordered (name, value) pairs; duplicate
    names are kept. Absent fields are None.
    """

    method: str
    url: str
    query: Optional[Pairs] = None
    headers: Optional[Pairs] = None
    body: Any = None
    opts: Optional[Pairs] = None


@dataclass
class Env:
    """
    Request/response context passed through middleware and the adapter.

    Request fields are filled from a RequestDescriptor; the adapter fills
    ``status``, replaces ``headers`` with the response headers and
    ``body`` with the response body.
    """

    method: str
    url: str
    query: Pairs = ()
    headers: Pairs = ()
    body: Any = None
    opts: Pairs = ()
    status: Optional[int] = None
    client: Any = None
    api: Any = None
