# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Expose ``ExceptionGroup`` to reflection."""

container.resolve("runtime_stubs").register("ExceptionGroup", ExceptionGroup)  # type: ignore[name-defined]  # noqa: F821
