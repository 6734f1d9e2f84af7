# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""One-time bootstrap actions executed when a container entry is built."""

from __future__ import annotations

import logging
import runpy
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from .config import BOOTSTRAP_FILES_KEY
from .errors import BootstrapError
from .interfaces.runtime import ServiceRegistryProtocol

RUNTIME_STUBS_DIRECTORY: Final[Path] = Path(__file__).resolve().parent / "stubs" / "runtime"
RUNTIME_STUB_FILES: Final[tuple[str, ...]] = (
    "base_exception_group.py",
    "exception_group.py",
    "task_group.py",
)
BOOTSTRAP_ORIGIN: Final[str] = "bootstrap_files"
RUNTIME_STUB_ORIGIN: Final[str] = "runtime stubs"

LOGGER = logging.getLogger(__name__)

VersionInfo = Callable[[], Sequence[int]]
BootstrapExecutor = Callable[[Path, ServiceRegistryProtocol], object]


def _interpreter_version() -> Sequence[int]:
    return tuple(sys.version_info[:3])


@dataclass(frozen=True, slots=True)
class RuntimeCapability:
    """Predicate describing a feature of the running interpreter."""

    name: str
    minimum_version: tuple[int, int]
    version_info: VersionInfo = _interpreter_version

    def available(self) -> bool:
        return tuple(self.version_info()[:2]) >= self.minimum_version


EXCEPTION_GROUPS: Final[RuntimeCapability] = RuntimeCapability("exception-groups", (3, 11))


@dataclass(frozen=True, slots=True)
class BootstrapAction:
    """A single file executed once while a container entry is built."""

    path: Path
    origin: str


def run_bootstrap_file(path: Path, container: ServiceRegistryProtocol) -> object:
    """Execute ``path`` with ``container`` available as a module global."""

    return runpy.run_path(str(path), init_globals={"container": container}, run_name="__lintharness_bootstrap__")


@dataclass(slots=True)
class BootstrapRunner:
    """Run the bootstrap files of a container plus capability-gated runtime stubs."""

    capability: RuntimeCapability = EXCEPTION_GROUPS
    runtime_stub_files: tuple[Path, ...] = field(
        default_factory=lambda: tuple(RUNTIME_STUBS_DIRECTORY / name for name in RUNTIME_STUB_FILES)
    )
    executor: BootstrapExecutor = run_bootstrap_file

    def plan(self, container: ServiceRegistryProtocol) -> list[BootstrapAction]:
        """Return the actions to execute for ``container``, in order.

        The capability predicate is evaluated once per call.
        """

        declared = container.parameters.get(BOOTSTRAP_FILES_KEY, [])
        actions = [BootstrapAction(Path(path), BOOTSTRAP_ORIGIN) for path in declared]
        if self.capability.available():
            actions.extend(BootstrapAction(path, RUNTIME_STUB_ORIGIN) for path in self.runtime_stub_files)
        return actions

    def run(self, container: ServiceRegistryProtocol) -> tuple[BootstrapAction, ...]:
        """Execute every planned action once, stopping at the first failure.

        Args:
            container: Freshly built container handed to each bootstrap file.

        Returns:
            tuple[BootstrapAction, ...]: Actions that were executed.

        Raises:
            BootstrapError: If any action raises.
        """

        executed: list[BootstrapAction] = []
        for action in self.plan(container):
            LOGGER.debug("running bootstrap file %s (%s)", action.path, action.origin)
            try:
                self.executor(action.path, container)
            except Exception as exc:
                raise BootstrapError(action.path, action.origin) from exc
            executed.append(action)
        return tuple(executed)


__all__ = [
    "EXCEPTION_GROUPS",
    "RUNTIME_STUB_FILES",
    "RUNTIME_STUBS_DIRECTORY",
    "BootstrapAction",
    "BootstrapRunner",
    "RuntimeCapability",
    "run_bootstrap_file",
]
