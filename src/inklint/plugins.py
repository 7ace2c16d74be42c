# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Entry-point plugin loading helpers.

Third-party packages contribute scanners by declaring entry points in the
``inklint.scanners`` group, for example::

    [project.entry-points."inklint.scanners"]
    passive-voice = "my_package.scanners:PassiveVoice"

The entry-point name is the reference used in configuration files.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from importlib import metadata
from importlib.metadata import EntryPoint, EntryPoints
from typing import Final, TypeAlias, cast

from .errors import InvalidScannerError
from .scanners import BUILTIN_SCANNERS
from .scanners.base import validate_scanner

SCANNER_PLUGIN_GROUP: Final[str] = "inklint.scanners"

LOGGER = logging.getLogger(__name__)

_EntryPointSource: TypeAlias = EntryPoints | Mapping[str, Sequence[EntryPoint]]


@dataclass(frozen=True, slots=True)
class ScannerPlugin:
    """Scanner class contributed through an entry point."""

    name: str
    scanner: type
    origin: str


def _select_entry_points(entries: _EntryPointSource, group: str) -> Iterable[EntryPoint]:
    """Return entry points exposed under ``group`` from ``entries``.

    Args:
        entries: Raw entry-point container returned by :func:`metadata.entry_points`.
        group: Name of the entry-point group to extract.

    Returns:
        Iterable[EntryPoint]: Entry points belonging to ``group``; empty when
        the container lacks the group.
    """

    if isinstance(entries, Mapping):
        return entries.get(group, ())
    if hasattr(entries, "select"):
        return entries.select(group=group)
    return ()


def _load_scanner(entry: EntryPoint) -> ScannerPlugin:
    scanner = validate_scanner(entry.load())
    return ScannerPlugin(name=entry.name, scanner=scanner, origin=entry.value)


def _discover(
    group: str,
    loader: Callable[[EntryPoint], ScannerPlugin],
    entries: _EntryPointSource | None = None,
) -> tuple[ScannerPlugin, ...]:
    source = entries if entries is not None else cast(_EntryPointSource, metadata.entry_points())
    plugins: list[ScannerPlugin] = []
    for entry in _select_entry_points(source, group):
        try:
            plugins.append(loader(entry))
        except (AttributeError, ImportError, ValueError, InvalidScannerError) as exc:
            LOGGER.warning("skipping scanner plugin %s: %s", entry.name, exc)
    return tuple(plugins)


def load_scanner_plugins(entries: _EntryPointSource | None = None) -> tuple[ScannerPlugin, ...]:
    """Return scanner plugins discovered via entry points.

    Args:
        entries: Optional entry-point container; the installed distributions
            are inspected when omitted.

    Returns:
        tuple[ScannerPlugin, ...]: Loaded plugins. Entries that fail to import
        or do not satisfy the scanner contract are skipped with a warning.
    """

    return _discover(SCANNER_PLUGIN_GROUP, _load_scanner, entries)


def available_scanners(entries: _EntryPointSource | None = None) -> dict[str, type]:
    """Return built-in scanners followed by plugin scanners, keyed by reference name.

    Built-in names take precedence over plugins declaring the same name.
    """

    catalog: dict[str, type] = dict(BUILTIN_SCANNERS)
    for plugin in load_scanner_plugins(entries):
        if plugin.name in catalog:
            LOGGER.warning("scanner plugin %s shadows an existing scanner; ignored", plugin.name)
            continue
        catalog[plugin.name] = plugin.scanner
    return catalog


__all__ = [
    "SCANNER_PLUGIN_GROUP",
    "ScannerPlugin",
    "available_scanners",
    "load_scanner_plugins",
]
