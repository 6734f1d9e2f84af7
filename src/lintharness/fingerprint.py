# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Derive cache keys from ordered configuration source lists."""

from __future__ import annotations

import hashlib
from collections.abc import Sequence
from typing import Final

_HASH_ENCODING: Final[str] = "utf-8"
_SEPARATOR: Final[str] = "\n"


def fingerprint(sources: Sequence[str]) -> str:
    """Return the digest identifying ``sources``.

    Order is significant and duplicates are kept, so two lists that contain
    the same entries in a different order produce different keys.

    Args:
        sources: Ordered configuration identifiers.

    Returns:
        str: Hex encoded SHA-1 digest of the newline-joined identifiers.
    """

    payload = _SEPARATOR.join(str(source) for source in sources)
    return hashlib.sha1(payload.encode(_HASH_ENCODING), usedforsecurity=False).hexdigest()


__all__ = ["fingerprint"]
