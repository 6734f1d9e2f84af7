# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Process-wide cache of containers keyed by configuration fingerprint.

Each distinct ordered configuration list is built exactly once per process:
the shared working directory is provisioned, the container is built, its
bootstrap actions run, and only then is the entry stored. Failed builds leave
nothing behind, so the next request retries from scratch.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .bootstrap import BootstrapAction, BootstrapRunner
from .container_factory import DefaultContainerBuilder
from .errors import WorkingDirectoryError
from .fingerprint import fingerprint
from .interfaces.runtime import ContainerBuilder, ServiceRegistryProtocol
from .settings import HarnessSettings

WORKING_DIRECTORY_MODE: Final[int] = 0o777

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A built container together with the inputs that produced it."""

    fingerprint: str
    container: ServiceRegistryProtocol
    config_files: tuple[str, ...]
    bootstrap_actions: tuple[BootstrapAction, ...] = ()


def ensure_working_directory(path: Path) -> Path:
    """Create ``path`` unless it already exists.

    Args:
        path: Directory shared by every container build.

    Returns:
        Path: The provisioned directory.

    Raises:
        WorkingDirectoryError: If creation fails and the directory does not exist.
    """

    try:
        path.mkdir(mode=WORKING_DIRECTORY_MODE, parents=True)
    except OSError as exc:
        if not path.is_dir():
            raise WorkingDirectoryError(path) from exc
    return path


class ContainerCache:
    """Memoize containers per configuration fingerprint.

    The check/build/store sequence runs under a re-entrant lock. A bootstrap
    file that requests the container currently being built receives that
    in-construction container instead of starting a second build.
    """

    def __init__(
        self,
        *,
        builder: ContainerBuilder | None = None,
        bootstrap_runner: BootstrapRunner | None = None,
        working_directory: Path | None = None,
        settings: HarnessSettings | None = None,
    ) -> None:
        """Initialise an empty cache.

        Args:
            builder: Callable building a container from a working directory and config list.
            bootstrap_runner: Runner executing one-time actions for new entries.
            working_directory: Shared directory handed to the builder.
            settings: Settings used for whichever of the above are omitted.
        """

        resolved_settings = settings or HarnessSettings.from_env()
        self._builder: ContainerBuilder = builder or DefaultContainerBuilder(resolved_settings.root_dir)
        self._bootstrap_runner = bootstrap_runner or BootstrapRunner()
        self._working_directory = working_directory or resolved_settings.tmp_dir
        self._entries: dict[str, CacheEntry] = {}
        self._pending: dict[str, ServiceRegistryProtocol] = {}
        self._lock = threading.RLock()

    @property
    def working_directory(self) -> Path:
        return self._working_directory

    def get_container(self, config_files: Sequence[str]) -> ServiceRegistryProtocol:
        """Return the container for ``config_files``, building it on first use.

        Args:
            config_files: Ordered configuration identifiers.

        Returns:
            ServiceRegistryProtocol: The same instance for every equal list.

        Raises:
            WorkingDirectoryError: If the working directory cannot be provisioned.
            BootstrapError: If a bootstrap action fails.
            ConfigError: If the builder rejects the configuration.
        """

        files = tuple(str(entry) for entry in config_files)
        key = fingerprint(files)
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                LOGGER.debug("container cache hit for %s", key)
                return entry.container
            pending = self._pending.get(key)
            if pending is not None:
                LOGGER.debug("re-entrant request for container %s under construction", key)
                return pending
            entry = self._build_entry(key, files)
            self._entries[key] = entry
            return entry.container

    def _build_entry(self, key: str, files: tuple[str, ...]) -> CacheEntry:
        LOGGER.debug("building container %s from %s", key, ", ".join(files))
        ensure_working_directory(self._working_directory)
        container = self._builder(self._working_directory, files)
        self._pending[key] = container
        try:
            actions = self._bootstrap_runner.run(container)
        finally:
            self._pending.pop(key, None)
        return CacheEntry(fingerprint=key, container=container, config_files=files, bootstrap_actions=actions)

    def entries(self) -> tuple[CacheEntry, ...]:
        with self._lock:
            return tuple(self._entries.values())

    def reset(self) -> None:
        """Forget every cached entry."""

        with self._lock:
            self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ContainerCache(entries={len(self._entries)}, working_directory={self._working_directory})"


_default_cache: ContainerCache | None = None
_default_lock = threading.Lock()


def default_container_cache() -> ContainerCache:
    """Return the process-wide cache, creating it on first use."""

    global _default_cache  # noqa: PLW0603
    if _default_cache is not None:
        return _default_cache
    with _default_lock:
        if _default_cache is None:
            _default_cache = ContainerCache()
        return _default_cache


def reset_container_cache() -> None:
    """Drop the process-wide cache so the next request starts empty."""

    global _default_cache  # noqa: PLW0603
    with _default_lock:
        _default_cache = None


__all__ = [
    "WORKING_DIRECTORY_MODE",
    "CacheEntry",
    "ContainerCache",
    "default_container_cache",
    "ensure_working_directory",
    "reset_container_cache",
]
