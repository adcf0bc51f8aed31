# -*- coding: utf-8 -*-

# Tether
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Two-phase client definitions.

Phase 1 - declare: an ApiBuilder collects middleware and adapter
declarations in order. Nothing is validated yet.

Phase 2 - finalize: ``finalize()`` validates and compiles everything once
and returns an immutable ApiClient with the generated verb entry points.

Example:
    >>> builder = ApiBuilder("GitHubApi")
    >>> builder.plug(BaseUrl, "https://api.github.com")
    >>> builder.plug(JSON)
    >>> builder.adapter(HttpxAdapter, [("timeout", 10)])
    >>> GitHubApi = builder.finalize()
    >>> GitHubApi.get("/users/octocat")
"""

from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from loguru import logger

from tether import config
from tether.client import DEFAULT_CLIENT, Client
from tether.compiler import compile_pipeline
from tether.declarations import ADAPTER, MIDDLEWARE, DeclarationStore, capture_site
from tether.engine import execute
from tether.errors import DefinitionPhaseError, DeprecatedClientFunctionUsage, InvalidRequestOptions
from tether.methods import build_descriptor, build_entry_points
from tether.models import NOT_SET, CompiledPipeline, ExecutableStep, RequestDescriptor

Perform = Callable[["ApiClient", Client, RequestDescriptor], Any]


class ApiClient:
    """
    A finalized client definition.

    Exposes the compiled pipeline through two read-only properties,
    ``middleware`` and ``adapter``, one entry point per generated verb
    (``api.get``, ``api.post``, ...) and the generic ``request``.
    Instances cannot be modified after construction.
    """

    def __init__(
        self,
        name: str,
        pipeline: CompiledPipeline,
        perform: Perform = execute,
        only: Optional[Iterable[str]] = None,
        exclude: Iterable[str] = (),
        docs: Optional[bool] = None,
    ):
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_pipeline", pipeline)
        object.__setattr__(self, "_perform", perform)

        methods = build_entry_points(self.request, only=only, exclude=exclude, docs=docs)
        object.__setattr__(self, "_methods", methods)
        for method, entry_point in methods.items():
            object.__setattr__(self, method, entry_point)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{self._name} is finalized and cannot be modified")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{self._name} is finalized and cannot be modified")

    def __repr__(self) -> str:
        return (
            f"<ApiClient {self._name}: {len(self._pipeline.middleware)} middleware, "
            f"methods={list(self._methods)}>"
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def middleware(self) -> Tuple[ExecutableStep, ...]:
        """Compiled middleware steps, in declared order."""
        return self._pipeline.middleware

    @property
    def adapter(self) -> ExecutableStep:
        """Compiled adapter step (the default adapter when none was declared)."""
        return self._pipeline.adapter

    @property
    def pipeline(self) -> CompiledPipeline:
        return self._pipeline

    @property
    def methods(self) -> Tuple[str, ...]:
        """Verbs that have entry points."""
        return tuple(self._methods)

    def request(self, *args: Any, **fields: Any) -> Any:
        """
        Perform a request.

        Accepted shapes:
            request(descriptor)
            request(client, descriptor)
            request(method="get", url="/users", query=[("page", "1")])
            request(client, method="get", url="/users")

        Fields:
            method: one of head, get, delete, trace, options, post, put, patch
            url: full URL, or a path when a base URL middleware is plugged
            query: list of (name, value) pairs
            headers: list of (name, value) pairs
            body: request body, passed through untouched
            opts: list of (key, value) pairs for middleware and adapter options

        Returns:
            Whatever the perform operation returns (an Env for the default engine)

        Raises:
            DeprecatedClientFunctionUsage: A function was passed as the client
            InvalidRequestOptions: Arguments match none of the shapes
        """
        client: Any = DEFAULT_CLIENT
        if args and not isinstance(args[0], RequestDescriptor):
            client, args = args[0], args[1:]
            if not isinstance(client, Client):
                if callable(client) and not isinstance(client, (str, type)):
                    raise DeprecatedClientFunctionUsage("request", client)
                raise InvalidRequestOptions(f"request() expected a Client, got {client!r}")

        if len(args) == 1 and isinstance(args[0], RequestDescriptor) and not fields:
            descriptor = args[0]
        elif not args and fields:
            descriptor = self._descriptor_from_fields(fields)
        else:
            raise InvalidRequestOptions(
                "request() takes a RequestDescriptor or method/url keyword fields, "
                f"got args={args!r} fields={sorted(fields)!r}"
            )

        return self._perform(self, client, descriptor)

    @staticmethod
    def _descriptor_from_fields(fields: Dict[str, Any]) -> RequestDescriptor:
        fields = dict(fields)
        method = fields.pop("method", None)
        url = fields.pop("url", None)
        if method not in config.ALL_METHODS:
            raise InvalidRequestOptions(
                f"request() method must be one of {', '.join(config.ALL_METHODS)}, got {method!r}"
            )
        if not isinstance(url, str):
            raise InvalidRequestOptions(f"request() url must be a string, got {url!r}")
        return build_descriptor(method, url, list(fields.items()))


class ApiBuilder:
    """
    Declaration phase of one client definition.

    Args:
        name: Definition name, used in diagnostics and logs
        only: Verbs to generate entry points for (default: all)
        exclude: Verbs to leave out
        docs: Attach docstrings to entry points (default: GENERATE_DOCS)
    """

    def __init__(
        self,
        name: str,
        only: Optional[Iterable[str]] = None,
        exclude: Iterable[str] = (),
        docs: Optional[bool] = None,
    ):
        self.name = name
        self._store = DeclarationStore(name)
        self._only = None if only is None else tuple(only)
        self._exclude = tuple(exclude)
        self._docs = docs
        self._api: Optional[ApiClient] = None

    def plug(self, middleware: Any, options: Any = NOT_SET) -> "ApiBuilder":
        """
        Declare a middleware step.

        Args:
            middleware: Unit with ``call(env, next, options)``, its dotted
                import path, or an inline function ``fn(env) -> env``
            options: Passed to the unit untouched; omit for none

        Returns:
            self, so declarations can be chained
        """
        site = capture_site(MIDDLEWARE, self.name)
        self._store.record(MIDDLEWARE, middleware, options, site)
        return self

    def adapter(self, adapter: Any, options: Any = NOT_SET) -> "ApiBuilder":
        """
        Declare the adapter.

        Args:
            adapter: Unit with ``call(env, options)``, its dotted import path,
                or an inline function ``fn(env) -> env``
            options: Passed to the unit untouched; omit for none

        Returns:
            self, so declarations can be chained
        """
        site = capture_site(ADAPTER, self.name)
        self._store.record(ADAPTER, adapter, options, site)
        return self

    @property
    def finalized(self) -> bool:
        return self._api is not None

    @property
    def api(self) -> ApiClient:
        """The finalized client. Only available after finalize()."""
        if self._api is None:
            raise DefinitionPhaseError(f"{self.name} has not been finalized yet")
        return self._api

    def finalize(
        self,
        perform: Perform = execute,
        strict_adapter: Optional[bool] = None,
        default_adapter: Any = None,
    ) -> ApiClient:
        """
        Validate and compile all declarations.

        Args:
            perform: Request operation called as perform(api, client, descriptor)
            strict_adapter: Duplicate adapter policy (default: STRICT_ADAPTER)
            default_adapter: Adapter used when none was declared
                (default: DEFAULT_ADAPTER)

        Returns:
            Immutable ApiClient

        Raises:
            BuildError: First invalid declaration; nothing is produced
            DefinitionPhaseError: Already finalized
        """
        if self._api is not None:
            raise DefinitionPhaseError(f"{self.name} is already finalized")

        pipeline = compile_pipeline(
            self._store,
            strict_adapter=strict_adapter,
            default_adapter=default_adapter,
        )
        api = ApiClient(
            self.name,
            pipeline,
            perform=perform,
            only=self._only,
            exclude=self._exclude,
            docs=self._docs,
        )
        self._store.seal()
        self._api = api

        logger.debug(
            "[Builder] {} finalized: {} middleware, methods: {}",
            self.name,
            len(pipeline.middleware),
            ", ".join(api.methods),
        )
        return api
