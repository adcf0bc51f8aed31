# -*- coding: utf-8 -*-

# Tether
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Declaration validator.

Classifies every raw declaration into exactly one shape of a closed set,
or raises a build error naming the declaration site:

    UNIT_WITH_OPTIONS  - named unit plus options     plug(BaseUrl, "https://...")
    UNIT_BARE          - named unit without options  plug(JSON)
    INLINE_FUNCTION    - inline callable             plug(lambda env: env)
    (unresolved)       - anything else               plug("json")

A named unit is a module, class or object exposing a callable ``call``
attribute. String targets are symbolic references: a dotted path is
imported here and must land on a named unit, a bare name never resolves.
"""

import importlib
import warnings
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import ModuleType
from typing import Any

from loguru import logger

from tether.declarations import Declaration
from tether.errors import (
    DeprecatedHeaderShape,
    InlineFunctionOptionsIgnored,
    UnresolvedLocalReference,
)


class DeclarationShape(Enum):
    """Accepted declaration shapes, in recognition priority order."""

    UNIT_WITH_OPTIONS = "unit_with_options"
    UNIT_BARE = "unit_bare"
    INLINE_FUNCTION = "inline_function"


@dataclass(frozen=True)
class Classified:
    """A declaration that passed validation, with its target resolved."""

    shape: DeclarationShape
    target: Any
    declaration: Declaration


def is_unit(target: Any) -> bool:
    """Check whether ``target`` exposes a callable ``call`` entry point."""
    return callable(getattr(target, "call", None))


def resolve_reference(name: str) -> Any:
    """
    Import a dotted path like ``"package.module.Unit"``.

    Args:
        name: Dotted path; the last segment may be an attribute of a module

    Returns:
        Resolved object, or None when it cannot be imported
    """
    # Relative and malformed paths ("..json", "json.", "a..b") never resolve
    if "." not in name or not all(name.split(".")):
        return None

    module_path, _, attr = name.rpartition(".")
    try:
        module = importlib.import_module(module_path)
    except ImportError:
        module = None
    if module is not None and hasattr(module, attr):
        return getattr(module, attr)

    # The path may name a submodule that is itself the unit
    try:
        return importlib.import_module(name)
    except ImportError:
        return None


def _resolve_target(declaration: Declaration) -> Any:
    """Resolve string references; raise for anything that is not a unit or function."""
    target = declaration.target

    if isinstance(target, str):
        resolved = resolve_reference(target)
        if resolved is None or not is_unit(resolved):
            raise UnresolvedLocalReference(target, declaration.site)
        logger.debug("[Validator] Resolved {!r} -> {!r}", target, resolved)
        return resolved

    if is_unit(target):
        return target

    # Classes and modules are callable (or importable) but are not units without call()
    if isinstance(target, (type, ModuleType)) or not callable(target):
        raise UnresolvedLocalReference(target, declaration.site)

    return target


def check_header_shape(unit: Any, options: Any, declaration: Declaration) -> None:
    """
    Reject header collections given as a mapping.

    Units that take headers as options mark themselves with a truthy
    ``accepts_headers`` attribute.

    Raises:
        DeprecatedHeaderShape: ``options`` is a Mapping for a header-taking unit
    """
    if getattr(unit, "accepts_headers", False) and isinstance(options, Mapping):
        raise DeprecatedHeaderShape(unit, declaration.site)


def classify(declaration: Declaration) -> Classified:
    """
    Classify one declaration.

    Args:
        declaration: Raw declaration from a DeclarationStore or compose()

    Returns:
        Classified declaration with the resolved target

    Raises:
        UnresolvedLocalReference: Target is a local name or does not resolve
        DeprecatedHeaderShape: Header options given as a mapping
    """
    target = _resolve_target(declaration)

    if is_unit(target):
        if declaration.has_options:
            check_header_shape(target, declaration.options, declaration)
            return Classified(DeclarationShape.UNIT_WITH_OPTIONS, target, declaration)
        return Classified(DeclarationShape.UNIT_BARE, target, declaration)

    if declaration.has_options:
        site = declaration.site
        logger.warning(
            "[Validator] {}: options given with an inline {} function are ignored",
            site,
            site.kind,
        )
        warnings.warn_explicit(
            InlineFunctionOptionsIgnored(
                f"options {declaration.options!r} given with an inline {site.kind} "
                f"function in {site.scope} are ignored; inline functions take no options"
            ),
            InlineFunctionOptionsIgnored,
            site.filename,
            site.lineno,
        )
    return Classified(DeclarationShape.INLINE_FUNCTION, target, declaration)
