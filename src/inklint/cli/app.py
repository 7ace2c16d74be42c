# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

import typer

from .catalog import scanners_command
from .lint import lint_command

app = typer.Typer(
    name="inklint",
    help="Lint rich-text documents and report annotated issues.",
    add_completion=False,
    no_args_is_help=True,
)
app.command("lint")(lint_command)
app.command("scanners")(scanners_command)


def main() -> None:
    app()


__all__ = ["app", "main"]
