# -*- coding: utf-8 -*-

# Tether
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""
Tether - declarative HTTP API clients from ordered middleware plus one adapter.

Modules:
    - config: Process-wide settings loaded from the environment
    - declarations: Declaration store for one client definition
    - validator: Declaration shape classification and deprecation checks
    - compiler: Declarations -> immutable executable steps
    - client: Runtime clients (compose) layered around a compiled pipeline
    - methods: Per-verb, multi-shape entry points
    - builder: ApiBuilder (declare) -> ApiClient (finalized)
    - engine: Reference execution engine
    - adapters: Default httpx adapter
    - errors: Build-time and call-time error taxonomy
"""

# Version is imported from config.py - the single source of truth
from tether.config import APP_VERSION as __version__

__author__ = "Jwadow"

from tether.builder import ApiBuilder, ApiClient
from tether.client import DEFAULT_CLIENT, Client, compose
from tether.compiler import compile_declarations, compile_pipeline
from tether.declarations import Declaration, DeclarationStore
from tether.errors import (
    BuildError,
    DefinitionPhaseError,
    DeprecatedClientFunctionUsage,
    DeprecatedHeaderShape,
    DuplicateAdapterDeclaration,
    InlineFunctionOptionsIgnored,
    InvalidRequestOptions,
    TetherError,
    UnresolvedLocalReference,
)
from tether.models import (
    NOT_SET,
    CallFunction,
    CallUnit,
    CompiledPipeline,
    Env,
    RequestDescriptor,
    SourceContext,
)
from tether.validator import DeclarationShape, classify

__all__ = [
    # Version
    "__version__",

    # Definition
    "ApiBuilder",
    "ApiClient",
    "Client",
    "DEFAULT_CLIENT",
    "compose",

    # Compilation
    "Declaration",
    "DeclarationStore",
    "DeclarationShape",
    "classify",
    "compile_declarations",
    "compile_pipeline",

    # Models
    "NOT_SET",
    "CallFunction",
    "CallUnit",
    "CompiledPipeline",
    "Env",
    "RequestDescriptor",
    "SourceContext",

    # Errors
    "TetherError",
    "BuildError",
    "UnresolvedLocalReference",
    "DeprecatedHeaderShape",
    "DuplicateAdapterDeclaration",
    "DeprecatedClientFunctionUsage",
    "InvalidRequestOptions",
    "DefinitionPhaseError",
    "InlineFunctionOptionsIgnored",
]
