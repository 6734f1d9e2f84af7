# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from lintharness.settings import ROOT_DIR_ENV, TMP_DIR_ENV, HarnessSettings, default_tmp_dir


def test_defaults_use_platform_temp_directory() -> None:
    settings = HarnessSettings.from_env({})

    assert settings.tmp_dir == Path(tempfile.gettempdir()) / "lintharness-tests"
    assert settings.tmp_dir == default_tmp_dir()
    assert settings.root_dir == Path.cwd()


def test_environment_overrides(tmp_path: Path) -> None:
    settings = HarnessSettings.from_env({TMP_DIR_ENV: str(tmp_path / "tmp"), ROOT_DIR_ENV: str(tmp_path)})

    assert settings.tmp_dir == tmp_path / "tmp"
    assert settings.root_dir == tmp_path


def test_empty_environment_values_are_ignored() -> None:
    assert HarnessSettings.from_env({TMP_DIR_ENV: ""}).tmp_dir == default_tmp_dir()


def test_settings_are_immutable() -> None:
    settings = HarnessSettings()

    with pytest.raises(ValidationError):
        settings.tmp_dir = Path("/elsewhere")  # type: ignore[misc]
