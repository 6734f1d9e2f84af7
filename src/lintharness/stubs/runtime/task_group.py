# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Expose ``asyncio.TaskGroup`` to reflection."""

from asyncio import TaskGroup

container.resolve("runtime_stubs").register("TaskGroup", TaskGroup)  # type: ignore[name-defined]  # noqa: F821
