# -*- coding: utf-8 -*-

# Tether
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Reference execution engine.

Walks one request through a compiled plan:

    client.pre -> definition middleware -> client.post -> adapter

Middleware units are called as ``Unit.call(env, next, options)`` and must
call ``next(env)`` to continue; inline middleware ``fn(env)`` runs before
the rest of the chain. The adapter is called as ``Unit.call(env, options)``
or ``fn(env)`` and ends the chain.
"""

from typing import Any, Sequence

from loguru import logger

from tether.models import CallFunction, CallUnit, Env, ExecutableStep, RequestDescriptor


def env_from_descriptor(descriptor: RequestDescriptor, api: Any = None, client: Any = None) -> Env:
    """Create a fresh Env for one request."""
    return Env(
        method=descriptor.method,
        url=descriptor.url,
        query=descriptor.query or (),
        headers=descriptor.headers or (),
        body=descriptor.body,
        opts=descriptor.opts or (),
        client=client,
        api=api,
    )


def run_adapter(env: Env, step: ExecutableStep) -> Env:
    """Invoke the adapter step."""
    if isinstance(step, CallUnit):
        return step.target.call(env, step.options)
    if isinstance(step, CallFunction):
        return step.target(env)
    raise TypeError(f"not an executable step: {step!r}")


def run(env: Env, steps: Sequence[ExecutableStep], adapter: ExecutableStep) -> Env:
    """
    Run ``steps`` in order, then the adapter.

    Args:
        env: Request context
        steps: Middleware steps in execution order
        adapter: Terminal step

    Returns:
        Env returned by the outermost step
    """
    if not steps:
        return run_adapter(env, adapter)

    step, rest = steps[0], steps[1:]

    def next_step(next_env: Env) -> Env:
        return run(next_env, rest, adapter)

    if isinstance(step, CallUnit):
        return step.target.call(env, next_step, step.options)
    if isinstance(step, CallFunction):
        return next_step(step.target(env))
    raise TypeError(f"not an executable step: {step!r}")


def execute(api: Any, client: Any, descriptor: RequestDescriptor) -> Env:
    """
    Default perform operation for ApiClient.

    Args:
        api: Finalized ApiClient
        client: Client whose pre/post steps surround the definition's middleware
        descriptor: Request to perform

    Returns:
        Env after the adapter and all middleware have run
    """
    plan = client.plan(api.middleware)
    logger.debug(
        "[Engine] {} {} {} ({} step(s))",
        api.name,
        descriptor.method.upper(),
        descriptor.url,
        len(plan),
    )
    env = env_from_descriptor(descriptor, api=api, client=client)
    return run(env, plan, api.adapter)
