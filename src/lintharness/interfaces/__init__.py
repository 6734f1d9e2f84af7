# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Protocols shared between the container cache and its collaborators."""

from __future__ import annotations

from .runtime import ContainerBuilder, ServiceFactory, ServiceProvider, ServiceRegistryProtocol

__all__ = [
    "ContainerBuilder",
    "ServiceFactory",
    "ServiceProvider",
    "ServiceRegistryProtocol",
]
