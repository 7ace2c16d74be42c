# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI command listing the scanners available to configuration files."""

from __future__ import annotations

import typer
from rich.table import Table

from ..logging import get_console
from ..plugins import available_scanners
from ..scanners import BUILTIN_SCANNERS
from ..scanners.base import is_async_scanner


def scanners_command(
    no_color: bool = typer.Option(False, "--no-color", help="Disable coloured output."),
) -> None:
    """List built-in and plugin scanners."""

    table = Table(title="Available scanners")
    table.add_column("Name")
    table.add_column("Kind")
    table.add_column("Source")
    for name, scanner in available_scanners().items():
        kind = "async" if is_async_scanner(scanner) else "sync"
        source = "built-in" if name in BUILTIN_SCANNERS else f"{scanner.__module__}:{scanner.__qualname__}"
        table.add_row(name, kind, source)
    get_console(color=not no_color, emoji=False).print(table)


__all__ = ["scanners_command"]
