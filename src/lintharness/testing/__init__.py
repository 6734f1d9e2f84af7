# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Test-harness entry points."""

from __future__ import annotations

from .builders import create_scope_factory, create_type_alias_resolver
from .case import HARNESS_CONFIG_FILE, STATIC_REFLECTION_CONFIG_FILE, AnalysisTestCase

__all__ = [
    "HARNESS_CONFIG_FILE",
    "STATIC_REFLECTION_CONFIG_FILE",
    "AnalysisTestCase",
    "create_scope_factory",
    "create_type_alias_resolver",
]
