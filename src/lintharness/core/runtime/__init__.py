# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Runtime service container exports."""

from __future__ import annotations

from .di import ServiceContainer, ServiceDescription

__all__ = ["ServiceContainer", "ServiceDescription"]
