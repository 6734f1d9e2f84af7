# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich consoles used by the command line."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from functools import cache
from typing import Literal

from rich.console import Console


def detect_tty() -> bool:
    """Return ``True`` when stdout is attached to a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@dataclass(frozen=True, slots=True)
class ConsoleOptions:
    """Output preferences a console is built for."""

    color: bool = True
    tty: bool = field(default_factory=detect_tty)

    @property
    def color_system(self) -> Literal["auto"] | None:
        return "auto" if self.color and self.tty else None


class RichConsoleManager:
    """Hand out one Rich :class:`Console` per set of output options."""

    def __init__(self) -> None:
        self._consoles: dict[ConsoleOptions, Console] = {}

    def get(self, *, color: bool = True) -> Console:
        """Return the console matching ``color`` and the current terminal state.

        Args:
            color: ``False`` forces plain output even on a terminal.

        Returns:
            Console: Console shared by every caller with the same options.
        """

        options = ConsoleOptions(color=color)
        console = self._consoles.get(options)
        if console is None:
            console = Console(
                color_system=options.color_system,
                force_terminal=options.tty,
                no_color=options.color_system is None,
                highlight=False,
                soft_wrap=True,
            )
            self._consoles[options] = console
        return console


@cache
def get_console_manager() -> RichConsoleManager:
    return RichConsoleManager()


__all__ = ["ConsoleOptions", "RichConsoleManager", "detect_tty", "get_console_manager"]
