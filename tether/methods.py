# -*- coding: utf-8 -*-

# Tether
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Per-verb entry points.

Every verb gets one function accepting four argument shapes:

    simple verbs (head, get, delete, trace, options)
        get(client, url, options)    get(client, url)
        get(url, options)            get(url)

    body verbs (post, put, patch)
        post(client, url, body, options)    post(client, url, body)
        post(url, body, options)            post(url, body)

The shapes live in one table (VARIANTS) consumed by a single generic
factory. Each entry point builds a RequestDescriptor and hands it to the
definition's ``request``; it keeps no state between calls.

Options are an ordered sequence of (key, value) pairs, always last:

    >>> api.get("/users", [("query", [("page", "1")])])
    >>> api.get("/users", query=[("page", "1")])   # same thing

Query parameters always sit under the "query" key; a bare pair list such as
``[("page", "1")]`` is read as option keys and rejected.
"""

from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from tether import config
from tether.client import Client
from tether.errors import DeprecatedClientFunctionUsage, InvalidRequestOptions
from tether.models import RequestDescriptor

Variant = Tuple[str, ...]

# Most specific shape first; a shape with a client slot always wins over
# the same-length shape without one.
VARIANTS: Dict[str, Tuple[Variant, ...]] = {
    "simple": (
        ("client", "url", "options"),
        ("client", "url"),
        ("url", "options"),
        ("url",),
    ),
    "body": (
        ("client", "url", "body", "options"),
        ("client", "url", "body"),
        ("url", "body", "options"),
        ("url", "body"),
    ),
}

# Keys accepted by build_descriptor() and request()
OPTION_KEYS = ("query", "headers", "body", "opts")

# Keys accepted in entry point options; the body is only ever positional
ENTRY_OPTION_KEYS = ("query", "headers", "opts")

# Fields that take ordered pairs rather than an opaque value
_PAIR_FIELDS = ("query", "headers", "opts")


def variants_for(method: str) -> Tuple[Variant, ...]:
    """Return the argument shapes of ``method``."""
    if method in config.BODY_METHODS:
        return VARIANTS["body"]
    if method in config.SIMPLE_METHODS:
        return VARIANTS["simple"]
    raise ValueError(f"Unknown HTTP method: {method!r}")


def _is_pair_sequence(value: Any) -> bool:
    """True for a list/tuple whose items are all 2-tuples or 2-lists."""
    if not isinstance(value, (list, tuple)):
        return False
    return all(isinstance(item, (list, tuple)) and len(item) == 2 for item in value)


def _is_client_function(value: Any) -> bool:
    """A plain callable in the client slot (the removed calling convention)."""
    return callable(value) and not isinstance(value, (Client, str, type))


def _as_pairs(name: str, value: Any) -> Tuple[Tuple[str, Any], ...]:
    if isinstance(value, Mapping):
        raise InvalidRequestOptions(
            f"{name} must be a list of (name, value) pairs, not {type(value).__name__}"
        )
    if not _is_pair_sequence(value):
        raise InvalidRequestOptions(f"{name} must be a list of (name, value) pairs, got {value!r}")
    return tuple((key, item) for key, item in value)


def build_descriptor(
    method: str,
    url: str,
    options: Sequence[Tuple[str, Any]] = (),
    body: Any = None,
) -> RequestDescriptor:
    """
    Normalize one call's arguments into a RequestDescriptor.

    Args:
        method: HTTP verb
        url: Full URL or path
        options: Ordered (key, value) pairs; keys from OPTION_KEYS
        body: Positional body of body-bearing verbs

    Returns:
        RequestDescriptor

    Raises:
        InvalidRequestOptions: Unknown key or malformed pair list
    """
    fields: Dict[str, Any] = {"body": body}
    for key, value in options:
        if key not in OPTION_KEYS:
            raise InvalidRequestOptions(
                f"{method}(): unknown request option {key!r}; expected one of {', '.join(OPTION_KEYS)}"
            )
        if key in _PAIR_FIELDS:
            # Repeated keys append, keeping order
            fields[key] = fields.get(key, ()) + _as_pairs(key, value)
        else:
            fields[key] = value

    return RequestDescriptor(method=method, url=url, **fields)


def _merge_options(positional: Any, keywords: Dict[str, Any]) -> List[Tuple[str, Any]]:
    """Positional option pairs followed by keyword options, in call order."""
    pairs: List[Tuple[str, Any]] = [tuple(item) for item in positional or ()]
    pairs.extend(keywords.items())
    return pairs


def _match(method: str, variants: Iterable[Variant], args: Tuple[Any, ...]) -> Optional[Dict[str, Any]]:
    """
    Bind ``args`` to the first variant whose slots accept them.

    Raises:
        DeprecatedClientFunctionUsage: A function sits in a client slot of a
            variant that otherwise matches
    """
    for variant in variants:
        if len(variant) != len(args):
            continue
        bound = dict(zip(variant, args))
        if "options" in bound and not _is_pair_sequence(bound["options"]):
            continue
        if "client" in bound:
            client = bound["client"]
            if _is_client_function(client):
                raise DeprecatedClientFunctionUsage(method, client)
            if not isinstance(client, Client):
                continue
        return bound
    return None


def _signature_help(method: str) -> str:
    return " | ".join(f"{method}({', '.join(variant)})" for variant in variants_for(method))


def make_entry_point(
    method: str,
    request: Callable[..., Any],
    docs: bool = True,
) -> Callable[..., Any]:
    """
    Create the entry point for one verb.

    Args:
        method: HTTP verb
        request: Generic request operation, called as request(descriptor)
            or request(client, descriptor)
        docs: Attach a generated docstring

    Returns:
        Entry point function
    """
    variants = variants_for(method)

    def entry_point(*args: Any, **option_kwargs: Any) -> Any:
        bound = _match(method, variants, args)
        if bound is None:
            raise InvalidRequestOptions(
                f"{method}() got arguments {args!r}; accepted shapes: {_signature_help(method)}"
            )

        options = _merge_options(bound.get("options"), option_kwargs)
        for key, _ in options:
            if key not in ENTRY_OPTION_KEYS:
                raise InvalidRequestOptions(
                    f"{method}(): unknown option {key!r}; expected one of {', '.join(ENTRY_OPTION_KEYS)}"
                    f" (query parameters go under (\"query\", [(name, value), ...]))"
                )

        descriptor = build_descriptor(method, bound["url"], options, body=bound.get("body"))
        if "client" in bound:
            return request(bound["client"], descriptor)
        return request(descriptor)

    entry_point.__name__ = method
    entry_point.__qualname__ = method
    entry_point.__doc__ = _docstring(method) if docs else None
    return entry_point


def _docstring(method: str) -> str:
    has_body = method in config.BODY_METHODS
    example_args = '"/users", {"name": "Jon"}' if has_body else '"/users"'
    return (
        f"Perform a {method.upper()} request.\n\n"
        f"Accepted shapes: {_signature_help(method)}\n\n"
        "Options are (key, value) pairs with keys query, headers and opts; "
        "they may also be passed as keyword arguments. Query parameters go under "
        'the query key: [("query", [("page", "1")])], never a bare [("page", "1")].\n\n'
        "Example:\n"
        f"    api.{method}({example_args})\n"
        f'    api.{method}(client, {example_args}, [("query", [("scope", "admin")])])\n'
    )


def select_methods(only: Optional[Iterable[str]] = None, exclude: Iterable[str] = ()) -> Tuple[str, ...]:
    """
    Resolve the verbs to generate: ``only`` minus ``exclude``.

    Args:
        only: Verbs to include; all known verbs when None
        exclude: Verbs to leave out

    Returns:
        Verbs in canonical order

    Raises:
        ValueError: Unknown verb in either list
    """
    only_set = set(config.ALL_METHODS if only is None else only)
    exclude_set = set(exclude)
    unknown = (only_set | exclude_set) - set(config.ALL_METHODS)
    if unknown:
        raise ValueError(f"Unknown HTTP method(s): {', '.join(sorted(unknown))}")
    return tuple(m for m in config.ALL_METHODS if m in only_set and m not in exclude_set)


def build_entry_points(
    request: Callable[..., Any],
    only: Optional[Iterable[str]] = None,
    exclude: Iterable[str] = (),
    docs: Optional[bool] = None,
) -> Dict[str, Callable[..., Any]]:
    """
    Generate entry points for the selected verbs.

    Args:
        request: Generic request operation
        only: Verbs to include; all known verbs when None
        exclude: Verbs to leave out
        docs: Attach docstrings; GENERATE_DOCS from config when None

    Returns:
        Mapping verb -> entry point
    """
    with_docs = config.GENERATE_DOCS if docs is None else docs
    methods = select_methods(only, exclude)
    logger.debug("[Methods] Generating entry points: {}", ", ".join(methods))
    return {method: make_entry_point(method, request, with_docs) for method in methods}
