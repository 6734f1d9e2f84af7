# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the container cache and its collaborators."""

from __future__ import annotations

from pathlib import Path


class HarnessError(Exception):
    """Base class for failures raised while acquiring analysis containers."""


class ConfigError(HarnessError):
    """Raised when container configuration input is missing or invalid."""


class WorkingDirectoryError(HarnessError):
    """Raised when the shared working directory cannot be provisioned."""

    def __init__(self, path: Path) -> None:
        """Record the directory that could not be created.

        Args:
            path: Directory the cache attempted to create.
        """

        super().__init__(f"Cannot create temp directory {path}")
        self.path = path


class ServiceResolutionError(HarnessError, KeyError):
    """Raise when a requested service or parameter has not been registered."""

    def __str__(self) -> str:
        """Return the message without the quoting ``KeyError`` applies."""

        return str(self.args[0]) if self.args else ""


class ContainerFrozenError(HarnessError):
    """Raised when a registration is attempted on a fully built container."""


class BootstrapError(HarnessError):
    """Raised when a bootstrap action fails while a container entry is built."""

    def __init__(self, path: Path, origin: str) -> None:
        """Describe the bootstrap file that failed.

        Args:
            path: Bootstrap file whose execution raised.
            origin: Label describing where the action was declared.
        """

        super().__init__(f"Bootstrap file {path} ({origin}) failed")
        self.path = path
        self.origin = origin


__all__ = [
    "BootstrapError",
    "ConfigError",
    "ContainerFrozenError",
    "HarnessError",
    "ServiceResolutionError",
    "WorkingDirectoryError",
]
