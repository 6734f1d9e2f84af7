# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pydantic models describing merged container configuration."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ServiceDefinition(BaseModel):
    """Describe how a single service is constructed.

    Exactly one of ``class`` or ``factory`` must be given. Both are import
    paths of the form ``package.module:Attribute`` where the attribute part
    may be dotted (``Klass.classmethod``).
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    class_path: str | None = Field(default=None, alias="class")
    factory: str | None = None
    service_type: str | None = Field(default=None, alias="type")
    arguments: list[Any] | dict[str, Any] = Field(default_factory=list)
    shared: bool = True
    autowired: bool = True

    @model_validator(mode="after")
    def _check_target(self) -> ServiceDefinition:
        if (self.class_path is None) == (self.factory is None):
            raise ValueError("exactly one of 'class' or 'factory' must be set")
        return self

    @property
    def target(self) -> str:
        """Return the import path of the callable that builds the service."""

        return self.class_path if self.class_path is not None else str(self.factory)


class ContainerDefinition(BaseModel):
    """Merged configuration used to build a service container."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    parameters: dict[str, Any] = Field(default_factory=dict)
    services: dict[str, ServiceDefinition] = Field(default_factory=dict)
    sources: tuple[str, ...] = ()


__all__ = ["ContainerDefinition", "ServiceDefinition"]
