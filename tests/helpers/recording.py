# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Recording doubles for the container cache collaborators."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

from lintharness.bootstrap import BootstrapRunner, RuntimeCapability
from lintharness.core.runtime import ServiceContainer
from lintharness.errors import ConfigError
from lintharness.interfaces.runtime import ServiceRegistryProtocol


class RecordingBuilder:
    def __init__(self, *, bootstrap_files: Sequence[str] = (), failures: int = 0) -> None:
        self.bootstrap_files = list(bootstrap_files)
        self.failures = failures
        self.calls: list[tuple[Path, tuple[str, ...]]] = []
        self.built: list[ServiceContainer] = []

    def __call__(self, working_directory: Path, config_files: Sequence[str]) -> ServiceContainer:
        self.calls.append((working_directory, tuple(config_files)))
        if self.failures:
            self.failures -= 1
            raise ConfigError("broken configuration")
        container = ServiceContainer({"bootstrap_files": list(self.bootstrap_files)})
        container.freeze()
        self.built.append(container)
        return container


class RecordingExecutor:
    def __init__(
        self,
        *,
        failures: int = 0,
        side_effect: Callable[[Path, ServiceRegistryProtocol], None] | None = None,
    ) -> None:
        self.failures = failures
        self.side_effect = side_effect
        self.calls: list[tuple[Path, ServiceRegistryProtocol]] = []

    def __call__(self, path: Path, container: ServiceRegistryProtocol) -> None:
        self.calls.append((path, container))
        if self.side_effect is not None:
            self.side_effect(path, container)
        if self.failures:
            self.failures -= 1
            raise RuntimeError(f"bootstrap {path.name} exploded")


NEVER = RuntimeCapability("never", (99, 0))
ALWAYS = RuntimeCapability("always", (0, 0))


def recording_runner(
    executor: RecordingExecutor,
    *,
    stubs: Sequence[Path] = (),
    capability: RuntimeCapability = NEVER,
) -> BootstrapRunner:
    return BootstrapRunner(capability=capability, runtime_stub_files=tuple(stubs), executor=executor)
