# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Environment driven settings for the container cache."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

TMP_DIR_ENV: Final[str] = "LINTHARNESS_TMP_DIR"
ROOT_DIR_ENV: Final[str] = "LINTHARNESS_ROOT_DIR"
DEFAULT_TMP_DIR_NAME: Final[str] = "lintharness-tests"


def default_tmp_dir() -> Path:
    """Return the shared working directory under the platform temp area."""

    return Path(tempfile.gettempdir()) / DEFAULT_TMP_DIR_NAME


class HarnessSettings(BaseModel):
    """Locations used when building containers for tests."""

    model_config = ConfigDict(frozen=True)

    tmp_dir: Path = Field(default_factory=default_tmp_dir)
    root_dir: Path = Field(default_factory=Path.cwd)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> HarnessSettings:
        """Build settings honouring ``LINTHARNESS_*`` overrides.

        Args:
            env: Optional environment mapping; defaults to ``os.environ``.

        Returns:
            HarnessSettings: Settings with environment overrides applied.
        """

        source = os.environ if env is None else env
        overrides: dict[str, Path] = {}
        if tmp_dir := source.get(TMP_DIR_ENV):
            overrides["tmp_dir"] = Path(tmp_dir)
        if root_dir := source.get(ROOT_DIR_ENV):
            overrides["root_dir"] = Path(root_dir)
        return cls(**overrides)


__all__ = ["DEFAULT_TMP_DIR_NAME", "ROOT_DIR_ENV", "TMP_DIR_ENV", "HarnessSettings", "default_tmp_dir"]
