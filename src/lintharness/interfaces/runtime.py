# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Interfaces describing service registration, resolution and container builds."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol, TypeVar, runtime_checkable

ServiceT = TypeVar("ServiceT")


@runtime_checkable
class ServiceProvider(Protocol):
    """Deferred lookup of one named service."""

    @abstractmethod
    def __call__(self) -> Any:
        """Resolve the bound service name against its container."""

        raise NotImplementedError


@runtime_checkable
class ServiceFactory(Protocol):
    """Build a service, pulling its collaborators from the container."""

    @abstractmethod
    def __call__(self, container: ServiceRegistryProtocol) -> Any:
        """Return a new service instance.

        Args:
            container: Registry used to resolve references and parameters.

        Returns:
            Any: Constructed service.
        """

        raise NotImplementedError


@runtime_checkable
class ServiceRegistryProtocol(Protocol):
    """Describe the behaviour required from service registries."""

    @abstractmethod
    def register(
        self,
        key: str,
        factory: ServiceFactory,
        *,
        singleton: bool = True,
        replace: bool = False,
        provided_type: type | None = None,
        autowired: bool = True,
    ) -> None:
        """Register ``factory`` under ``key``.

        Args:
            key: Unique service identifier.
            factory: Factory callable responsible for creating the service.
            singleton: When ``True`` cache the instance after first resolution.
            replace: When ``True`` replace an existing registration for ``key``.
            provided_type: Declared type used for by-type lookups.
            autowired: When ``False`` hide the service from by-type lookups.
        """
        raise NotImplementedError("ServiceRegistryProtocol.register must be implemented")

    @abstractmethod
    def resolve(self, key: str) -> Any:
        """Return the service registered under ``key``.

        Args:
            key: Unique service identifier.

        Returns:
            Any: Service bound to ``key``.
        """
        raise NotImplementedError("ServiceRegistryProtocol.resolve must be implemented")

    @abstractmethod
    def get_by_type(self, service_type: type[ServiceT]) -> ServiceT:
        """Return the single autowired service declared as ``service_type``.

        Args:
            service_type: Class the service must be an instance of.

        Returns:
            ServiceT: Service bound to the matching registration.
        """
        raise NotImplementedError("ServiceRegistryProtocol.get_by_type must be implemented")

    @abstractmethod
    def get_parameter(self, name: str) -> Any:
        """Return the configuration parameter called ``name``.

        Args:
            name: Parameter identifier.

        Returns:
            Any: Parameter value.
        """
        raise NotImplementedError("ServiceRegistryProtocol.get_parameter must be implemented")

    @property
    @abstractmethod
    def parameters(self) -> Mapping[str, Any]:
        """Return a read-only view over every configuration parameter."""
        raise NotImplementedError("ServiceRegistryProtocol.parameters must be implemented")

    @abstractmethod
    def provide(self, key: str) -> ServiceProvider:
        """Return a lazily resolving provider for ``key``.

        Args:
            key: Unique service identifier.

        Returns:
            ServiceProvider: Zero-argument provider that resolves the service.
        """
        raise NotImplementedError("ServiceRegistryProtocol.provide must be implemented")

    @abstractmethod
    def __contains__(self, key: str) -> bool:
        """Return whether ``key`` has a registered service."""
        raise NotImplementedError("ServiceRegistryProtocol.__contains__ must be implemented")

    @abstractmethod
    def __len__(self) -> int:
        """Return the number of registered services."""
        raise NotImplementedError("ServiceRegistryProtocol.__len__ must be implemented")


@runtime_checkable
class ContainerBuilder(Protocol):
    """Build a fully wired registry from an ordered configuration list."""

    @abstractmethod
    def __call__(self, working_directory: Path, config_files: Sequence[str]) -> ServiceRegistryProtocol:
        """Return a new registry wired from ``config_files``.

        Args:
            working_directory: Shared directory for generated artefacts.
            config_files: Ordered configuration identifiers.

        Returns:
            ServiceRegistryProtocol: Registry ready for service lookups.
        """

        raise NotImplementedError


__all__ = [
    "ContainerBuilder",
    "ServiceFactory",
    "ServiceProvider",
    "ServiceRegistryProtocol",
    "ServiceT",
]
