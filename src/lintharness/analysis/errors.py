# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Analysis error records reported to test assertions."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AnalysisError:
    """Describe a single error emitted while analysing a file."""

    message: str
    file: str
    line: int | None = None
    identifier: str | None = None

    def describe(self) -> str:
        """Return the message formatted for failure reports."""

        return f"- {self.message.rstrip('.')}\n  in {self.file} on line {self.line or 0}\n"


__all__ = ["AnalysisError"]
