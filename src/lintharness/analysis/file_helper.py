# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Separator-agnostic path helpers."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Final

_DRIVE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z]:")


class FileHelper:
    """Normalise and absolutise paths relative to a working directory."""

    def __init__(self, working_directory: str | Path) -> None:
        self._working_directory = self.normalize_path(str(working_directory))

    @property
    def working_directory(self) -> str:
        """Return the normalised working directory."""

        return self._working_directory

    def absolutize_path(self, path: str | Path) -> str:
        """Return ``path`` anchored at the working directory when relative."""

        raw = str(path)
        if raw.startswith(("/", "\\")) or _DRIVE_PATTERN.match(raw):
            return raw
        return f"{self._working_directory.rstrip('/' + os.sep)}{os.sep}{raw}"

    def normalize_path(self, original_path: str | Path, directory_separator: str = os.sep) -> str:
        """Collapse ``.``/``..`` segments and unify separators.

        Args:
            original_path: Path using any mix of ``/`` and ``\\``.
            directory_separator: Separator used in the result.

        Returns:
            str: Normalised path. Leading ``..`` segments of relative paths are kept.
        """

        path = str(original_path).replace("\\", "/")
        prefix = ""
        if drive := _DRIVE_PATTERN.match(path):
            prefix = drive.group(0)
            path = path[len(prefix) :]
        absolute = path.startswith("/")
        parts: list[str] = []
        for part in path.split("/"):
            if part in ("", "."):
                continue
            if part == "..":
                if parts and parts[-1] != "..":
                    parts.pop()
                    continue
                if absolute:
                    continue
            parts.append(part)
        body = directory_separator.join(parts)
        if absolute:
            return f"{prefix}{directory_separator}{body}"
        return f"{prefix}{body}"


__all__ = ["FileHelper"]
