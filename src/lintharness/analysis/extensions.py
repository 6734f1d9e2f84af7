# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Registry providers for analysis extensions declared in configuration."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from ..core.imports import import_object


@dataclass(frozen=True, slots=True)
class ExtensionRegistry:
    """Immutable collection of instantiated extensions."""

    extensions: tuple[object, ...] = ()

    def __iter__(self) -> Iterator[object]:
        return iter(self.extensions)

    def __len__(self) -> int:
        return len(self.extensions)


class ExtensionRegistryProvider:
    """Instantiate configured extensions on first access.

    Entries are either import paths to zero-argument classes or ready-made
    extension objects.
    """

    def __init__(self, extensions: Sequence[str | object] = ()) -> None:
        self._declared = tuple(extensions)
        self._registry: ExtensionRegistry | None = None

    def get_registry(self) -> ExtensionRegistry:
        if self._registry is None:
            self._registry = ExtensionRegistry(tuple(_instantiate(entry) for entry in self._declared))
        return self._registry


class DynamicReturnTypeExtensionRegistryProvider(ExtensionRegistryProvider):
    """Provide extensions that compute call return types."""


class OperatorTypeSpecifyingExtensionRegistryProvider(ExtensionRegistryProvider):
    """Provide extensions that compute operator result types."""


class ClassReflectionExtensionRegistryProvider(ExtensionRegistryProvider):
    """Provide extensions that contribute class members to reflection."""


def _instantiate(entry: str | object) -> object:
    if isinstance(entry, str):
        return import_object(entry)()
    return entry


__all__ = [
    "ClassReflectionExtensionRegistryProvider",
    "DynamicReturnTypeExtensionRegistryProvider",
    "ExtensionRegistry",
    "ExtensionRegistryProvider",
    "OperatorTypeSpecifyingExtensionRegistryProvider",
]
