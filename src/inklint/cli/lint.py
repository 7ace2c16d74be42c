# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI command scanning a JSON document with the configured scanners."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Final

import typer
from rich.table import Table

from ..config import LinterConfig
from ..config_loader import load_config, resolve_scanner_reference
from ..document import Node
from ..errors import DocumentError, InklintError, ScannerRunError
from ..execution import Orchestrator, OrchestratorHooks, ScannerFailure
from ..fixes import describe_fix
from ..linter import Linter
from ..logging import configure_logging, fail, get_console, info, ok, section, warn
from ..models import Issue
from ..scanners import BUILTIN_SCANNERS

OUTPUT_FORMATS: Final[tuple[str, ...]] = ("text", "json")
EXIT_ISSUES: Final[int] = 1
EXIT_USAGE: Final[int] = 2


def read_document(path: Path) -> Node:
    """Parse the ProseMirror-style JSON document at ``path``.

    Raises:
        DocumentError: If the file is unreadable or does not describe a document.
    """

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise DocumentError(f"cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DocumentError(f"{path} is not valid JSON: {exc}") from exc
    return Node.from_json(payload)


def build_run_config(config: LinterConfig, extra_scanners: Sequence[str]) -> LinterConfig:
    """Return ``config`` with CLI scanners appended and automatic runs enabled.

    When neither the configuration nor the command line names a scanner the
    built-in scanners are used.
    """

    scanners = [*config.scanners, *(resolve_scanner_reference(ref) for ref in extra_scanners)]
    if not scanners:
        scanners = list(BUILTIN_SCANNERS.values())
    return LinterConfig(
        scanners=tuple(scanners),
        auto_run=True,
        custom_severities=config.custom_severities,
    )


async def collect_issues(linter: Linter, doc: Node, only: str | None) -> list[Issue]:
    """Run the configured scanners, or just ``only`` on demand.

    Raises:
        ScannerRunError: If the on-demand scanner itself fails.
    """

    if only is not None:
        scanner = resolve_scanner_reference(only)
        try:
            return await linter.run_rule(scanner, doc)
        except InklintError:
            raise
        except Exception as exc:
            raise ScannerRunError(only, exc) from exc
    await linter.update(doc, content_changed=True)
    return linter.get_issues()


def render_table(issues: Sequence[Issue], *, use_color: bool) -> None:
    table = Table(title="inklint issues", show_lines=False)
    table.add_column("From", justify="right")
    table.add_column("To", justify="right")
    table.add_column("Severity")
    table.add_column("Message")
    table.add_column("Fix")
    for issue in issues:
        table.add_row(str(issue.from_), str(issue.to), issue.severity, issue.message, describe_fix(issue.fix) or "")
    get_console(color=use_color, emoji=False).print(table)


def lint_command(
    document: Path = typer.Argument(..., metavar="DOCUMENT", help="ProseMirror JSON document to scan."),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="inklint.toml or pyproject.toml to load."),
    scanner: list[str] | None = typer.Option(
        None,
        "--scanner",
        "-s",
        help="Additional scanner (built-in name, plugin name or module:attr). Repeatable.",
    ),
    only: str | None = typer.Option(None, "--only", help="Run just this scanner on demand."),
    output_format: str = typer.Option("text", "--format", "-f", help="Output format: text or json."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable coloured output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log scanner activity."),
) -> None:
    """Scan DOCUMENT and report the issues found."""

    if output_format not in OUTPUT_FORMATS:
        raise typer.BadParameter(f"format must be one of: {', '.join(OUTPUT_FORMATS)}", param_hint="--format")
    configure_logging(logging.DEBUG if verbose else logging.WARNING)
    use_color = not no_color
    try:
        doc = read_document(document)
        base_config = load_config(config_path, root=document.resolve().parent)
        failures: list[ScannerFailure] = []
        linter = Linter(
            build_run_config(base_config, scanner or ()),
            orchestrator=Orchestrator(OrchestratorHooks(on_failure=failures.append)),
        )
        issues = asyncio.run(collect_issues(linter, doc, only))
    except InklintError as exc:
        fail(str(exc), use_emoji=use_color, use_color=use_color)
        raise typer.Exit(code=EXIT_USAGE) from exc

    if output_format == "json":
        typer.echo(json.dumps([issue.to_payload() for issue in issues], indent=2))
        raise typer.Exit(code=EXIT_ISSUES if issues else 0)

    section(document.name, use_color=use_color)
    for failure in failures:
        warn(f"scanner {failure.scanner} failed: {failure.error}", use_emoji=use_color, use_color=use_color)
    if issues:
        render_table(issues, use_color=use_color)
        info(f"{len(issues)} issue(s) found", use_emoji=use_color, use_color=use_color)
    else:
        ok("No issues found", use_emoji=use_color, use_color=use_color)
    raise typer.Exit(code=EXIT_ISSUES if issues else 0)


__all__ = ["build_run_config", "collect_issues", "lint_command", "read_document", "render_table"]
