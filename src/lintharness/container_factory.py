# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Build service containers from TOML configuration files."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

from .analysis.file_helper import FileHelper
from .analysis.runtime_version import RuntimeVersion
from .config import BOOTSTRAP_FILES_KEY, ServiceDefinition, load_container_definition
from .core.imports import import_object
from .core.runtime import ServiceContainer
from .errors import ConfigError
from .fingerprint import fingerprint
from .interfaces.runtime import ServiceRegistryProtocol

CONFIG_DIRECTORY: Final[Path] = Path(__file__).resolve().parent / "config" / "defaults"
BASE_CONFIG_FILE: Final[str] = "base.toml"
CONTAINER_SERVICE_KEY: Final[str] = "container"
CONTAINERS_SUBDIRECTORY: Final[str] = "containers"

_PLACEHOLDER: Final[re.Pattern[str]] = re.compile(r"%([A-Za-z_][A-Za-z0-9_]*)%")
_SERVICE_PREFIX: Final[str] = "@"

LOGGER = logging.getLogger(__name__)


class _ParameterExpander:
    """Expand ``%name%`` placeholders against a parameter table."""

    def __init__(self, raw: Mapping[str, Any]) -> None:
        self._raw = dict(raw)
        self._expanded: dict[str, Any] = {}
        self._stack: list[str] = []

    def expand_all(self) -> dict[str, Any]:
        return {name: self.parameter(name) for name in self._raw}

    def parameter(self, name: str) -> Any:
        if name in self._expanded:
            return self._expanded[name]
        if name not in self._raw:
            raise ConfigError(f"Unknown parameter '%{name}%'")
        if name in self._stack:
            chain = " -> ".join((*self._stack, name))
            raise ConfigError(f"Circular parameter reference: {chain}")
        self._stack.append(name)
        try:
            value = self.expand(self._raw[name])
        finally:
            self._stack.pop()
        self._expanded[name] = value
        return value

    def expand(self, value: Any) -> Any:
        if isinstance(value, str):
            whole = _PLACEHOLDER.fullmatch(value)
            if whole:
                return self.parameter(whole.group(1))
            return _PLACEHOLDER.sub(lambda match: str(self.parameter(match.group(1))), value)
        if isinstance(value, Mapping):
            return {key: self.expand(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self.expand(item) for item in value]
        return value


@dataclass(frozen=True, slots=True)
class _ServiceReference:
    name: str


@dataclass(frozen=True, slots=True)
class _DefinitionServiceFactory:
    """Construct a service from its configuration definition."""

    name: str
    target: Any
    arguments: Any

    def __call__(self, container: ServiceRegistryProtocol) -> Any:
        """Return the service built with references resolved against ``container``."""

        resolved = _resolve_references(self.arguments, container)
        if isinstance(resolved, Mapping):
            return self.target(**resolved)
        return self.target(*resolved)

    def __repr__(self) -> str:
        return f"{self.name}_factory"


class ContainerFactory:
    """Create frozen :class:`ServiceContainer` instances from configuration files."""

    def __init__(self, root_dir: str | Path) -> None:
        """Initialise the factory.

        Args:
            root_dir: Directory exposed to configuration as ``%root_dir%``.
        """

        file_helper = FileHelper(Path.cwd())
        self._root_dir = file_helper.normalize_path(file_helper.absolutize_path(root_dir), "/")
        self._current_working_directory = file_helper.working_directory

    @property
    def root_dir(self) -> str:
        return self._root_dir

    @property
    def config_directory(self) -> Path:
        """Return the directory holding the packaged default configuration."""

        return CONFIG_DIRECTORY

    @property
    def base_config_file(self) -> Path:
        return self.config_directory / BASE_CONFIG_FILE

    def create(
        self,
        tmp_dir: str | Path,
        config_files: Sequence[str | Path],
        analysed_paths: Sequence[str] = (),
    ) -> ServiceContainer:
        """Build a container wired from ``config_files``.

        Args:
            tmp_dir: Shared working directory for generated artefacts.
            config_files: Ordered configuration files, later ones overriding earlier ones.
            analysed_paths: Paths under analysis exposed as ``%analysed_paths%``.

        Returns:
            ServiceContainer: Frozen container with every service registered.

        Raises:
            ConfigError: If any configuration file or service definition is invalid.
        """

        paths = [Path(entry) for entry in config_files]
        definition = load_container_definition(paths)
        container_dir = Path(tmp_dir) / CONTAINERS_SUBDIRECTORY / fingerprint([str(path) for path in paths])
        container_dir.mkdir(parents=True, exist_ok=True)

        builtin = {
            "root_dir": self._root_dir,
            "tmp_dir": str(tmp_dir),
            "container_dir": str(container_dir),
            "current_working_directory": self._current_working_directory,
            "analysed_paths": list(analysed_paths),
            "runtime_version": str(RuntimeVersion.current()),
        }
        expander = _ParameterExpander({BOOTSTRAP_FILES_KEY: [], **definition.parameters, **builtin})
        parameters = expander.expand_all()
        parameters[BOOTSTRAP_FILES_KEY] = [
            FileHelper(self._root_dir).absolutize_path(str(entry)) for entry in parameters[BOOTSTRAP_FILES_KEY]
        ]

        container = ServiceContainer(parameters)
        container.register_instance(CONTAINER_SERVICE_KEY, container)
        for name, service in definition.services.items():
            target = import_object(service.target)
            container.register(
                name,
                _DefinitionServiceFactory(name, target, _prepare_arguments(service.arguments, expander)),
                singleton=service.shared,
                provided_type=_provided_type(service, target),
                autowired=service.autowired,
            )
        container.freeze()
        LOGGER.debug("built container with %d services from %s", len(container), ", ".join(definition.sources))
        return container


@dataclass(slots=True)
class DefaultContainerBuilder:
    """Build containers from the packaged base configuration plus caller files."""

    root_dir: str | Path = field(default_factory=Path.cwd)
    analysed_paths: tuple[str, ...] = ()

    def __call__(self, working_directory: Path, config_files: Sequence[str]) -> ServiceContainer:
        factory = ContainerFactory(self.root_dir)
        return factory.create(
            working_directory,
            [str(factory.base_config_file), *config_files],
            self.analysed_paths,
        )


def _prepare_arguments(arguments: Any, expander: _ParameterExpander) -> Any:
    if isinstance(arguments, str):
        if arguments.startswith(_SERVICE_PREFIX):
            return _ServiceReference(arguments[len(_SERVICE_PREFIX) :])
        return expander.expand(arguments)
    if isinstance(arguments, Mapping):
        return {key: _prepare_arguments(value, expander) for key, value in arguments.items()}
    if isinstance(arguments, list):
        return [_prepare_arguments(value, expander) for value in arguments]
    return arguments


def _resolve_references(arguments: Any, container: ServiceRegistryProtocol) -> Any:
    if isinstance(arguments, _ServiceReference):
        return container.resolve(arguments.name)
    if isinstance(arguments, Mapping):
        return {key: _resolve_references(value, container) for key, value in arguments.items()}
    if isinstance(arguments, list):
        return [_resolve_references(value, container) for value in arguments]
    return arguments


def _provided_type(service: ServiceDefinition, target: Any) -> type | None:
    if service.service_type is not None:
        declared = import_object(service.service_type)
        if not isinstance(declared, type):
            raise ConfigError(f"'{service.service_type}' is not a class")
        return declared
    if isinstance(target, type):
        return target
    return None


__all__ = [
    "BASE_CONFIG_FILE",
    "CONFIG_DIRECTORY",
    "CONTAINER_SERVICE_KEY",
    "ContainerFactory",
    "DefaultContainerBuilder",
]
