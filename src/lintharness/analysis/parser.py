# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Source parsing and printing built on :mod:`ast`."""

from __future__ import annotations

import ast
from pathlib import Path

from .file_helper import FileHelper


class SourceParser:
    """Parse Python sources into statement lists, caching per file."""

    def __init__(self, file_helper: FileHelper) -> None:
        self._file_helper = file_helper
        self._cache: dict[tuple[str, int], list[ast.stmt]] = {}

    def parse_file(self, path: str | Path) -> list[ast.stmt]:
        """Return the statements of ``path``.

        Raises:
            SyntaxError: If the file is not valid Python.
        """

        file = Path(self._file_helper.absolutize_path(path))
        key = (str(file), file.stat().st_mtime_ns)
        if key not in self._cache:
            self._cache[key] = self.parse_string(file.read_text(encoding="utf-8"), filename=str(file))
        return self._cache[key]

    def parse_string(self, source: str, *, filename: str = "<string>") -> list[ast.stmt]:
        """Return the statements of ``source``."""

        return ast.parse(source, filename=filename).body


class PrettyPrinter:
    """Render expressions back to source text."""

    def print_expr(self, node: ast.AST) -> str:
        return ast.unparse(node)


__all__ = ["PrettyPrinter", "SourceParser"]
