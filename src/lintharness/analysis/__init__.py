# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lightweight analysis collaborators wired by the default configuration."""

from __future__ import annotations

from .errors import AnalysisError
from .extensions import (
    ClassReflectionExtensionRegistryProvider,
    DynamicReturnTypeExtensionRegistryProvider,
    OperatorTypeSpecifyingExtensionRegistryProvider,
)
from .file_helper import FileHelper
from .parser import PrettyPrinter, SourceParser
from .reflection import Broker, ReflectionProvider, Reflector, RuntimeStubRegistry
from .runtime_version import RuntimeVersion
from .scope import DirectScopeFactory, MutatingScope, NodeScopeResolver, PropertyReflectionFinder, TypeSpecifier
from .types import TypeAliasResolver, TypeNodeResolver, TypeStringResolver

__all__ = [
    "AnalysisError",
    "Broker",
    "ClassReflectionExtensionRegistryProvider",
    "DirectScopeFactory",
    "DynamicReturnTypeExtensionRegistryProvider",
    "FileHelper",
    "MutatingScope",
    "NodeScopeResolver",
    "OperatorTypeSpecifyingExtensionRegistryProvider",
    "PrettyPrinter",
    "PropertyReflectionFinder",
    "ReflectionProvider",
    "Reflector",
    "RuntimeStubRegistry",
    "RuntimeVersion",
    "SourceParser",
    "TypeAliasResolver",
    "TypeNodeResolver",
    "TypeSpecifier",
    "TypeStringResolver",
]
