# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from lintharness.cache import reset_container_cache
from lintharness.settings import TMP_DIR_ENV
from lintharness.testing import AnalysisTestCase

WriteConfig = Callable[[str, str], Path]


@pytest.fixture(autouse=True)
def isolated_container_cache(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[Path]:
    """Point the shared cache at a per-test working directory and start it empty."""

    working_directory = tmp_path / "lintharness-tests"
    monkeypatch.setenv(TMP_DIR_ENV, str(working_directory))
    monkeypatch.setattr(AnalysisTestCase, "container_cache", None)
    monkeypatch.setattr(AnalysisTestCase, "use_static_reflection_provider", False)
    reset_container_cache()
    yield working_directory
    reset_container_cache()


@pytest.fixture
def write_config(tmp_path: Path) -> WriteConfig:
    """Return a helper writing TOML documents below ``tmp_path``."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
