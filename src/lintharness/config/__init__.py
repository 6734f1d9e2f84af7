# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Container configuration models and TOML loading helpers."""

from __future__ import annotations

from .loaders import BOOTSTRAP_FILES_KEY, INCLUDE_KEY, load_container_definition, load_document
from .models import ContainerDefinition, ServiceDefinition

__all__ = [
    "BOOTSTRAP_FILES_KEY",
    "INCLUDE_KEY",
    "ContainerDefinition",
    "ServiceDefinition",
    "load_container_definition",
    "load_document",
]
