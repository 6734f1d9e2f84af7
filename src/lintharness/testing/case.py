# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Base class for pytest test classes that need a wired analysis container."""

from __future__ import annotations

import os
import warnings
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import ClassVar, Final, cast

import pytest

from ..analysis.errors import AnalysisError
from ..analysis.extensions import ClassReflectionExtensionRegistryProvider
from ..analysis.file_helper import FileHelper
from ..analysis.parser import SourceParser
from ..analysis.reflection import (
    Broker,
    ClassReflector,
    ConstantReflector,
    FunctionReflector,
    ReflectionProvider,
    Reflector,
)
from ..analysis.scope import DirectScopeFactory, TypeSpecifier
from ..analysis.types import TypeAliasResolver
from ..cache import ContainerCache, default_container_cache
from ..core.runtime import ServiceContainer
from ..errors import WorkingDirectoryError
from . import builders

CONFIG_DIRECTORY: Final[Path] = Path(__file__).resolve().parent / "config"
HARNESS_CONFIG_FILE: Final[Path] = CONFIG_DIRECTORY / "case.toml"
STATIC_REFLECTION_CONFIG_FILE: Final[Path] = CONFIG_DIRECTORY / "case-static-reflection.toml"
REFLECTOR_SERVICE_KEY: Final[str] = "reflector"


class AnalysisTestCase:
    """Give test classes access to a cached, fully wired service container.

    Subclasses contribute configuration through :meth:`get_additional_config_files`.
    The container for a given configuration list is built once per process
    and shared by every test class requesting the same list.
    """

    use_static_reflection_provider: ClassVar[bool] = False
    container_cache: ClassVar[ContainerCache | None] = None

    @classmethod
    def get_container(cls) -> ServiceContainer:
        """Return the container for this class's configuration.

        The harness configuration is appended after the subclass files, followed
        by the static reflection configuration when
        :attr:`use_static_reflection_provider` is enabled at call time.

        Returns:
            ServiceContainer: Shared container instance.
        """

        config_files = [*cls.get_additional_config_files(), str(HARNESS_CONFIG_FILE)]
        if AnalysisTestCase.use_static_reflection_provider:
            config_files.append(str(STATIC_REFLECTION_CONFIG_FILE))
        cache = AnalysisTestCase.container_cache
        if cache is None:
            cache = default_container_cache()
        try:
            return cast(ServiceContainer, cache.get_container(config_files))
        except WorkingDirectoryError as exc:
            pytest.fail(str(exc))

    @classmethod
    def get_additional_config_files(cls) -> list[str]:
        """Return extra configuration files merged before the harness defaults."""

        return []

    def get_parser(self) -> SourceParser:
        """Return the shared source parser of the container."""

        return cast(SourceParser, self.get_container().resolve(builders.PARSER_SERVICE_KEY))

    def create_broker(self) -> Broker:
        """Return the legacy broker facade.

        Deprecated: use :meth:`create_reflection_provider`.
        """

        warnings.warn(
            "create_broker() is deprecated, use create_reflection_provider() instead",
            DeprecationWarning,
            stacklevel=2,
        )
        return Broker(self.create_reflection_provider())

    def create_reflection_provider(self) -> ReflectionProvider:
        """Return the reflection provider selected by the current configuration.

        Returns:
            ReflectionProvider: Runtime provider by default, static provider when
            :attr:`use_static_reflection_provider` is enabled.
        """

        return self.get_container().get_by_type(ReflectionProvider)

    @classmethod
    def get_reflector(cls) -> Reflector:
        """Return the combined class, function and constant reflector."""

        return cast(Reflector, cls.get_container().resolve(REFLECTOR_SERVICE_KEY))

    @classmethod
    def get_reflectors(cls) -> tuple[ClassReflector, FunctionReflector, ConstantReflector]:
        """Return the individual reflectors.

        Deprecated: use :meth:`get_reflector`.
        """

        warnings.warn("get_reflectors() is deprecated, use get_reflector() instead", DeprecationWarning, stacklevel=2)
        reflector = cls.get_reflector()
        return reflector.class_reflector, reflector.function_reflector, reflector.constant_reflector

    def get_class_reflection_extension_registry_provider(self) -> ClassReflectionExtensionRegistryProvider:
        """Return the provider of configured class reflection extensions."""

        return self.get_container().get_by_type(ClassReflectionExtensionRegistryProvider)

    def create_scope_factory(
        self,
        reflection_provider: ReflectionProvider,
        type_specifier: TypeSpecifier,
    ) -> DirectScopeFactory:
        """Return a freshly wired scope factory.

        Args:
            reflection_provider: Provider used by created scopes.
            type_specifier: Specifier narrowing scopes on conditions.

        Returns:
            DirectScopeFactory: New factory honouring
            :meth:`should_treat_doc_types_as_certain`.
        """

        return builders.create_scope_factory(
            self.get_container(),
            reflection_provider,
            type_specifier,
            treat_doc_types_as_certain=self.should_treat_doc_types_as_certain(),
        )

    def create_type_alias_resolver(
        self,
        global_type_aliases: Mapping[str, str],
        reflection_provider: ReflectionProvider,
    ) -> TypeAliasResolver:
        """Return a resolver for ``global_type_aliases``.

        Args:
            global_type_aliases: Alias names mapped to annotation strings.
            reflection_provider: Provider deciding which names are real classes.

        Returns:
            TypeAliasResolver: Newly wired resolver.
        """

        return builders.create_type_alias_resolver(self.get_container(), global_type_aliases, reflection_provider)

    def should_treat_doc_types_as_certain(self) -> bool:
        """Return whether documented types count as declared types; override to disable."""

        return True

    def get_file_helper(self) -> FileHelper:
        """Return the container file helper."""

        return self.get_container().get_by_type(FileHelper)

    def assert_same_paths(self, expected: str, actual: str, message: str = "") -> None:
        """Compare two paths ignoring separator differences."""

        file_helper = self.get_file_helper()
        normalized_expected = file_helper.normalize_path(expected)
        normalized_actual = file_helper.normalize_path(actual)
        assert normalized_expected == normalized_actual, message or (
            f"{normalized_actual!r} is not the same path as {normalized_expected!r}"
        )

    def assert_no_errors(self, errors: Sequence[AnalysisError | str]) -> None:
        """Fail listing every emitted error when ``errors`` is not empty."""

        if not errors:
            return
        messages = [error.describe() if isinstance(error, AnalysisError) else error for error in errors]
        pytest.fail(
            f"Expected no errors, got {len(errors)}.\n\nEmitted errors:\n" + "\n".join(messages),
        )

    def skip_if_not_on_windows(self) -> None:
        """Skip the current test unless paths use Windows separators."""

        if os.sep == "\\":
            return
        pytest.skip("requires Windows path semantics")

    def skip_if_not_on_unix(self) -> None:
        """Skip the current test unless paths use Unix separators."""

        if os.sep == "/":
            return
        pytest.skip("requires Unix path semantics")


__all__ = [
    "HARNESS_CONFIG_FILE",
    "STATIC_REFLECTION_CONFIG_FILE",
    "AnalysisTestCase",
]
