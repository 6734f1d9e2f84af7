# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Expose ``BaseExceptionGroup`` to reflection."""

container.resolve("runtime_stubs").register("BaseExceptionGroup", BaseExceptionGroup)  # type: ignore[name-defined]  # noqa: F821
