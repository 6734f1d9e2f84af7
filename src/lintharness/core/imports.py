# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve ``module:attribute`` import paths used in configuration files."""

from __future__ import annotations

import importlib
from typing import Any

from ..errors import ConfigError


def import_object(path: str) -> Any:
    """Return the object referenced by ``path``.

    Args:
        path: ``package.module:Attribute`` where the attribute may be dotted.

    Returns:
        Any: Imported object.

    Raises:
        ConfigError: If the module or attribute cannot be found.
    """

    module_name, sep, attribute = path.partition(":")
    if not sep or not module_name or not attribute:
        raise ConfigError(f"Import path '{path}' must look like 'package.module:Attribute'")
    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"Cannot import module '{module_name}' for '{path}'") from exc
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ConfigError(f"'{path}' does not resolve: missing attribute '{part}'") from exc
    return target


__all__ = ["import_object"]
