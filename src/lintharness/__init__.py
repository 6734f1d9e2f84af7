# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration-keyed container cache for static-analysis test suites."""

from __future__ import annotations

from .cache import CacheEntry, ContainerCache, default_container_cache, reset_container_cache
from .container_factory import ContainerFactory, DefaultContainerBuilder
from .core.runtime import ServiceContainer
from .errors import (
    BootstrapError,
    ConfigError,
    ContainerFrozenError,
    HarnessError,
    ServiceResolutionError,
    WorkingDirectoryError,
)
from .fingerprint import fingerprint

__all__ = [
    "BootstrapError",
    "CacheEntry",
    "ConfigError",
    "ContainerCache",
    "ContainerFactory",
    "ContainerFrozenError",
    "DefaultContainerBuilder",
    "HarnessError",
    "ServiceContainer",
    "ServiceResolutionError",
    "WorkingDirectoryError",
    "default_container_cache",
    "fingerprint",
    "reset_container_cache",
]
