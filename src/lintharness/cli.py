# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line helpers for inspecting configuration fingerprints and containers."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich import box
from rich.markup import escape
from rich.table import Table

from .cache import ensure_working_directory
from .console import get_console_manager
from .container_factory import DefaultContainerBuilder
from .errors import HarnessError
from .fingerprint import fingerprint
from .settings import HarnessSettings
from .testing.case import HARNESS_CONFIG_FILE, STATIC_REFLECTION_CONFIG_FILE

app = typer.Typer(
    name="lintharness",
    help="Inspect analysis containers built for tests.",
    no_args_is_help=True,
    add_completion=False,
)


@app.command("fingerprint")
def fingerprint_command(
    config_files: Annotated[list[str], typer.Argument(help="Ordered configuration files.")],
) -> None:
    """Print the cache key derived from CONFIG_FILES."""

    console = get_console_manager().get()
    console.print(fingerprint(config_files))


@app.command("services")
def services_command(
    config_files: Annotated[
        list[Path] | None, typer.Argument(help="Configuration files merged after the defaults.")
    ] = None,
    tmp_dir: Annotated[
        Path | None, typer.Option("--tmp-dir", help="Working directory for generated artefacts.")
    ] = None,
    root_dir: Annotated[Path | None, typer.Option("--root-dir", help="Directory exposed as %root_dir%.")] = None,
    harness: Annotated[
        bool, typer.Option("--harness/--no-harness", help="Append the test harness configuration.")
    ] = False,
    static_reflection: Annotated[
        bool, typer.Option("--static-reflection", help="Append the static reflection configuration.")
    ] = False,
) -> None:
    """Build a container and list the services it registers."""

    console = get_console_manager().get()
    settings = HarnessSettings.from_env()
    working_directory = tmp_dir or settings.tmp_dir
    files = [str(path) for path in config_files or []]
    if harness:
        files.append(str(HARNESS_CONFIG_FILE))
    if static_reflection:
        files.append(str(STATIC_REFLECTION_CONFIG_FILE))
    try:
        ensure_working_directory(working_directory)
        container = DefaultContainerBuilder(root_dir or settings.root_dir)(working_directory, files)
    except HarnessError as exc:
        console.print(f"[red]Failed to build container:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    table = Table(title=f"Services for {fingerprint(files)[:12]}", box=box.SIMPLE, expand=True)
    table.add_column("Service", style="bold")
    table.add_column("Type", overflow="fold")
    table.add_column("Shared")
    table.add_column("Autowired")
    for description in container.describe():
        provided = description.provided_type
        type_name = f"{provided.__module__}.{provided.__qualname__}" if provided is not None else "-"
        table.add_row(
            description.name,
            type_name,
            "yes" if description.singleton else "no",
            "yes" if description.autowired else "no",
        )
    console.print(table)


__all__ = ["app"]
