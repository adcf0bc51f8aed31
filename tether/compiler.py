# -*- coding: utf-8 -*-

# Tether
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Pipeline compiler.

Turns validated declarations into executable steps:

    UNIT_WITH_OPTIONS -> CallUnit(unit, options)
    UNIT_BARE         -> CallUnit(unit, None)
    INLINE_FUNCTION   -> CallFunction(fn)

Compilation is pure and deterministic: the same declarations always give
an equal CompiledPipeline, in declared order. The first invalid
declaration aborts the whole client definition.
"""

from typing import Any, Iterable, Optional, Sequence, Tuple

from loguru import logger

from tether import config
from tether.declarations import ADAPTER, Declaration, DeclarationStore
from tether.errors import DuplicateAdapterDeclaration, UnresolvedLocalReference
from tether.models import CallFunction, CallUnit, CompiledPipeline, ExecutableStep, SourceContext
from tether.validator import Classified, DeclarationShape, classify, is_unit, resolve_reference


def compile_step(classified: Classified) -> ExecutableStep:
    """
    Emit the executable step for one classified declaration.

    Args:
        classified: Validator output

    Returns:
        CallUnit or CallFunction
    """
    shape = classified.shape
    if shape is DeclarationShape.UNIT_WITH_OPTIONS:
        return CallUnit(target=classified.target, options=classified.declaration.options)
    if shape is DeclarationShape.UNIT_BARE:
        return CallUnit(target=classified.target, options=None)
    if shape is DeclarationShape.INLINE_FUNCTION:
        return CallFunction(target=classified.target)
    raise AssertionError(f"unhandled declaration shape: {shape!r}")


def compile_declarations(declarations: Iterable[Declaration]) -> Tuple[ExecutableStep, ...]:
    """
    Validate and compile declarations, keeping their order.

    Args:
        declarations: Declarations in declared order

    Returns:
        Tuple of executable steps in the same order

    Raises:
        BuildError: First invalid declaration
    """
    return tuple(compile_step(classify(declaration)) for declaration in declarations)


def default_adapter_step(scope: str, default_adapter: Any = None) -> CallUnit:
    """
    Resolve the process-wide default adapter into a step.

    Args:
        scope: Client definition name, used in diagnostics
        default_adapter: Unit or dotted path; DEFAULT_ADAPTER from config when None

    Returns:
        CallUnit for the default adapter

    Raises:
        UnresolvedLocalReference: Configured adapter is a bare alias or does not import
    """
    reference = config.DEFAULT_ADAPTER if default_adapter is None else default_adapter
    site = SourceContext(kind=ADAPTER, scope=scope, filename="<config:TETHER_DEFAULT_ADAPTER>")

    unit = resolve_reference(reference) if isinstance(reference, str) else reference
    if unit is None or not is_unit(unit):
        raise UnresolvedLocalReference(reference, site)
    return CallUnit(target=unit, options=None)


def compile_adapter(
    adapters: Sequence[Declaration],
    scope: str,
    strict: bool = True,
    default_adapter: Any = None,
) -> ExecutableStep:
    """
    Compile the adapter declarations of one client definition.

    Args:
        adapters: Adapter declarations in declared order
        scope: Client definition name
        strict: Raise on more than one declaration instead of keeping the last
        default_adapter: Override for the configured default adapter

    Returns:
        Adapter step; the default adapter when nothing was declared

    Raises:
        DuplicateAdapterDeclaration: More than one adapter in strict mode
    """
    if not adapters:
        return default_adapter_step(scope, default_adapter)

    if len(adapters) > 1:
        if strict:
            raise DuplicateAdapterDeclaration(adapters[1].site, first=adapters[0].site)
        logger.warning(
            "[Compiler] {} declares {} adapters, using the last one ({})",
            scope,
            len(adapters),
            adapters[-1].site,
        )

    # Discarded declarations are validated too
    classified = [classify(declaration) for declaration in adapters]
    return compile_step(classified[-1])


def compile_pipeline(
    store: DeclarationStore,
    strict_adapter: Optional[bool] = None,
    default_adapter: Any = None,
) -> CompiledPipeline:
    """
    Compile a whole client definition.

    Args:
        store: Declarations collected for the definition
        strict_adapter: Duplicate adapter policy; STRICT_ADAPTER from config when None
        default_adapter: Override for the configured default adapter

    Returns:
        Immutable CompiledPipeline

    Raises:
        BuildError: First invalid declaration
    """
    strict = config.STRICT_ADAPTER if strict_adapter is None else strict_adapter

    adapter = compile_adapter(store.adapters, store.scope, strict, default_adapter)
    middleware = compile_declarations(store.middleware)

    logger.debug(
        "[Compiler] {}: compiled {} middleware step(s), adapter {!r}",
        store.scope,
        len(middleware),
        adapter,
    )
    return CompiledPipeline(middleware=middleware, adapter=adapter)
