# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Load and merge TOML container configuration files."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Iterable, Mapping, MutableMapping, Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from ..errors import ConfigError
from .models import ContainerDefinition

INCLUDE_KEY: Final[str] = "includes"
PARAMETERS_KEY: Final[str] = "parameters"
SERVICES_KEY: Final[str] = "services"
BOOTSTRAP_FILES_KEY: Final[str] = "bootstrap_files"

LOGGER = logging.getLogger(__name__)


def load_document(path: Path, stack: tuple[Path, ...] = ()) -> dict[str, Any]:
    """Return the TOML document at ``path`` with its includes merged in.

    Included files are merged first so the including document wins.

    Args:
        path: Configuration file to read.
        stack: Include chain leading to ``path`` used for cycle detection.

    Returns:
        dict[str, Any]: Merged document without the include declaration.

    Raises:
        ConfigError: If the file is missing, unparsable, or includes itself.
    """

    resolved = path.resolve()
    if resolved in stack:
        include_chain = " -> ".join(str(entry) for entry in (*stack, resolved))
        raise ConfigError(f"Circular include detected: {include_chain}")
    if not resolved.is_file():
        raise ConfigError(f"Configuration file {path} does not exist")
    try:
        with resolved.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Configuration file {path} is not valid TOML: {exc}") from exc
    document: dict[str, Any] = dict(data)
    _anchor_bootstrap_files(document, resolved.parent)
    includes = document.pop(INCLUDE_KEY, None)
    merged: dict[str, Any] = {}
    for include_path in _coerce_includes(includes, resolved.parent):
        merged = merge_documents(merged, load_document(include_path, (*stack, resolved)))
    return merge_documents(merged, document)


def merge_documents(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge two configuration documents.

    Parameters are deep merged except ``bootstrap_files`` which accumulate in
    order. Service definitions are replaced as a whole.

    Args:
        base: Earlier document.
        override: Later document taking precedence.

    Returns:
        dict[str, Any]: New merged document.
    """

    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key == PARAMETERS_KEY and isinstance(value, Mapping):
            result[key] = _merge_parameters(result.get(key, {}), value)
        elif key == SERVICES_KEY and isinstance(value, Mapping):
            services = dict(result.get(key, {}))
            services.update(value)
            result[key] = services
        else:
            result[key] = value
    return result


def load_container_definition(paths: Sequence[Path]) -> ContainerDefinition:
    """Load ``paths`` in order and validate the merged result.

    Args:
        paths: Configuration files, later files overriding earlier ones.

    Returns:
        ContainerDefinition: Validated container configuration.

    Raises:
        ConfigError: If any file is invalid or the merged result fails validation.
    """

    merged: dict[str, Any] = {}
    for path in paths:
        LOGGER.debug("loading container configuration %s", path)
        merged = merge_documents(merged, load_document(Path(path)))
    merged["sources"] = tuple(str(path) for path in paths)
    try:
        return ContainerDefinition.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid container configuration: {exc}") from exc


def _merge_parameters(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result = _deep_merge(base, override)
    if BOOTSTRAP_FILES_KEY in base and BOOTSTRAP_FILES_KEY in override:
        result[BOOTSTRAP_FILES_KEY] = [
            *_coerce_list(base[BOOTSTRAP_FILES_KEY], BOOTSTRAP_FILES_KEY),
            *_coerce_list(override[BOOTSTRAP_FILES_KEY], BOOTSTRAP_FILES_KEY),
        ]
    return result


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _coerce_list(value: Any, context: str) -> list[Any]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise ConfigError(f"{context} must be an array")
    return list(value)


def _anchor_bootstrap_files(document: dict[str, Any], base_dir: Path) -> None:
    """Make relative bootstrap paths relative to the declaring file."""

    parameters = document.get(PARAMETERS_KEY)
    if not isinstance(parameters, Mapping) or BOOTSTRAP_FILES_KEY not in parameters:
        return
    anchored = [
        entry if entry.startswith("%") else str(_resolve_path(Path(entry), base_dir))
        for entry in (str(item) for item in _coerce_list(parameters[BOOTSTRAP_FILES_KEY], BOOTSTRAP_FILES_KEY))
    ]
    document[PARAMETERS_KEY] = {**parameters, BOOTSTRAP_FILES_KEY: anchored}


def _coerce_includes(raw: Any, base_dir: Path) -> Iterable[Path]:
    if raw is None:
        return []
    if isinstance(raw, str):
        return [_resolve_path(Path(raw), base_dir)]
    if isinstance(raw, MutableMapping):
        return [_resolve_path(Path(value), base_dir) for value in raw.values()]
    if isinstance(raw, Iterable):
        return [_resolve_path(Path(item), base_dir) for item in raw]
    raise ConfigError(f"Unsupported include declaration: {raw!r}")


def _resolve_path(path: Path, base_dir: Path) -> Path:
    return path if path.is_absolute() else (base_dir / path)


__all__ = [
    "BOOTSTRAP_FILES_KEY",
    "INCLUDE_KEY",
    "PARAMETERS_KEY",
    "SERVICES_KEY",
    "load_container_definition",
    "load_document",
    "merge_documents",
]
