# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Service container handed to analysis test cases."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import dataclass
from functools import partial
from types import MappingProxyType
from typing import Any, cast

from ...errors import ContainerFrozenError, ServiceResolutionError
from ...interfaces.runtime import ServiceFactory, ServiceProvider, ServiceRegistryProtocol, ServiceT


@dataclass(frozen=True)
class _ServiceRecord:
    """Store metadata about a registered service factory."""

    factory: ServiceFactory
    singleton: bool
    provided_type: type | None
    autowired: bool


@dataclass(frozen=True, slots=True)
class ServiceDescription:
    """Summarise a registration for diagnostics output."""

    name: str
    provided_type: type | None
    singleton: bool
    autowired: bool


@dataclass(frozen=True, slots=True)
class _InstanceFactory:
    """Return a pre-built instance from the factory protocol."""

    instance: object

    def __call__(self, container: ServiceRegistryProtocol) -> object:
        return self.instance

    def __repr__(self) -> str:
        return f"instance({type(self.instance).__name__})"


class ServiceContainer(ServiceRegistryProtocol):
    """Provide a registry of named services and configuration parameters.

    Registrations are accepted until :meth:`freeze` is called; afterwards the
    container only answers lookups. Singleton services are still created
    lazily on first resolution, at most once even when several threads
    resolve the same key concurrently.
    """

    def __init__(self, parameters: Mapping[str, Any] | None = None) -> None:
        """Initialise an empty service registry.

        Args:
            parameters: Configuration parameters exposed through :meth:`get_parameter`.
        """

        self._factories: dict[str, _ServiceRecord] = {}
        self._singletons: dict[str, Any] = {}
        self._parameters: dict[str, Any] = dict(parameters or {})
        self._frozen = False
        self._singleton_lock = threading.RLock()

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
            key: Unique service identifier used during lookups.
            factory: Callable responsible for constructing the service instance.
            singleton: When ``True`` the service is cached after the first resolution.
            replace: When ``True`` replace an existing registration for ``key``.
            provided_type: Declared class used by :meth:`get_by_type`.
            autowired: When ``False`` the service is only reachable by name.

        Raises:
            ContainerFrozenError: If the container has already been frozen.
            ValueError: If a service is already registered and ``replace`` is ``False``.
        """

        if self._frozen:
            raise ContainerFrozenError(f"cannot register '{key}' on a frozen container")
        if not replace and key in self._factories:
            raise ValueError(f"service '{key}' already registered")
        self._factories[key] = _ServiceRecord(
            factory=factory,
            singleton=singleton,
            provided_type=provided_type,
            autowired=autowired,
        )
        if replace and key in self._singletons:
            self._singletons.pop(key, None)

    def register_instance(self, key: str, instance: object, *, autowired: bool = True) -> None:
        """Register an already constructed ``instance`` under ``key``."""

        self.register(
            key,
            _InstanceFactory(instance),
            provided_type=type(instance),
            autowired=autowired,
        )

    def freeze(self) -> None:
        """Reject any further registrations."""

        self._frozen = True

    @property
    def frozen(self) -> bool:
        """Return whether the container still accepts registrations."""

        return self._frozen

    def resolve(self, key: str) -> Any:
        """Resolve the service registered under ``key``.

        Args:
            key: Unique service identifier.

        Returns:
            Any: Concrete instance produced by the registered factory.

        Raises:
            ServiceResolutionError: If no factory is registered for ``key``.
        """

        record = self._factories.get(key)
        if record is None:
            raise ServiceResolutionError(f"service '{key}' is not registered")
        if record.singleton:
            with self._singleton_lock:
                if key not in self._singletons:
                    self._singletons[key] = record.factory(self)
                return self._singletons[key]
        return record.factory(self)

    def find_service_names_by_type(self, service_type: type) -> list[str]:
        """Return autowired service names whose declared type matches ``service_type``."""

        return [
            key
            for key, record in self._factories.items()
            if record.autowired and record.provided_type is not None and issubclass(record.provided_type, service_type)
        ]

    def get_by_type(self, service_type: type[ServiceT]) -> ServiceT:
        """Resolve the single autowired service declared as ``service_type``.

        Args:
            service_type: Class the requested service is declared as.

        Returns:
            ServiceT: Service instance bound to the matching registration.

        Raises:
            ServiceResolutionError: If no service or more than one service matches.
        """

        names = self.find_service_names_by_type(service_type)
        if not names:
            raise ServiceResolutionError(f"no service of type {service_type.__qualname__} is registered")
        if len(names) > 1:
            joined = ", ".join(sorted(names))
            raise ServiceResolutionError(
                f"multiple services of type {service_type.__qualname__} are registered: {joined}"
            )
        return cast(ServiceT, self.resolve(names[0]))

    def has_service(self, key: str) -> bool:
        """Return whether ``key`` corresponds to a registered service."""

        return key in self._factories

    def provide(self, key: str) -> ServiceProvider:
        """Return a zero-argument provider that resolves ``key`` lazily.

        Args:
            key: Unique service identifier.

        Returns:
            ServiceProvider: Provider function that returns the service on demand.
        """

        return partial(self.resolve, key)

    def get_parameter(self, name: str) -> Any:
        """Return the configuration parameter ``name``.

        Raises:
            ServiceResolutionError: If the parameter is unknown.
        """

        try:
            return self._parameters[name]
        except KeyError as exc:
            raise ServiceResolutionError(f"parameter '{name}' is not defined") from exc

    def has_parameter(self, name: str) -> bool:
        """Return whether the parameter ``name`` is defined."""

        return name in self._parameters

    @property
    def parameters(self) -> Mapping[str, Any]:
        """Return a read-only view over every configuration parameter."""

        return MappingProxyType(self._parameters)

    def describe(self) -> list[ServiceDescription]:
        """Return a description of every registration in name order."""

        return [
            ServiceDescription(
                name=key,
                provided_type=record.provided_type,
                singleton=record.singleton,
                autowired=record.autowired,
            )
            for key, record in sorted(self._factories.items())
        ]

    def __contains__(self, key: str) -> bool:
        """Return whether ``key`` corresponds to a registered service."""

        return key in self._factories

    def __len__(self) -> int:
        """Return the number of services registered with the container."""

        return len(self._factories)

    def __repr__(self) -> str:
        """Return a developer-facing representation summarising registrations."""

        keys = ", ".join(sorted(self._factories))
        return f"ServiceContainer(keys=[{keys}])"


__all__ = ["ServiceContainer", "ServiceDescription"]
