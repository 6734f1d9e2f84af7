# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Python runtime version targeted by the analysis."""

from __future__ import annotations

import sys
from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class RuntimeVersion:
    """Major/minor Python version the analysed code runs on."""

    major: int
    minor: int

    @classmethod
    def parse(cls, value: str) -> RuntimeVersion:
        """Build a version from ``"3.12"`` style strings.

        Raises:
            ValueError: If ``value`` is not ``major.minor``.
        """

        major, _, minor = str(value).partition(".")
        if not major.isdigit() or not minor.isdigit():
            raise ValueError(f"invalid runtime version '{value}'")
        return cls(int(major), int(minor))

    @classmethod
    def current(cls) -> RuntimeVersion:
        """Return the version of the running interpreter."""

        return cls(sys.version_info.major, sys.version_info.minor)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


__all__ = ["RuntimeVersion"]
