# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Translate visible issues into overlay ranges and markers."""

from __future__ import annotations

from collections.abc import Collection, Iterable
from typing import Final

from ..models import IgnoreEntry, Issue, IssueKey, Overlay, OverlayMarker, OverlayRange
from ..severity import SeverityRegistry

RANGE_CLASS_PREFIX: Final[str] = "problem"
MARKER_CLASS_PREFIX: Final[str] = "lint-icon"


def range_class(severity: str) -> str:
    """Return the inline highlight class for ``severity``."""

    return f"{RANGE_CLASS_PREFIX} {RANGE_CLASS_PREFIX}--{severity}"


def marker_class(severity: str) -> str:
    """Return the marker class for ``severity``."""

    return f"{MARKER_CLASS_PREFIX} {MARKER_CLASS_PREFIX}--{severity}"


def ignored_keys(ignored: Iterable[IgnoreEntry]) -> frozenset[IssueKey]:
    return frozenset(entry.key for entry in ignored)


def visible(issues: Iterable[Issue], ignored: Collection[IssueKey]) -> list[Issue]:
    """Return ``issues`` whose ``(from, to, message)`` key is not ignored."""

    return [issue for issue in issues if issue.key not in ignored]


def build_overlay(
    issues: Iterable[Issue],
    *,
    ignored: Iterable[IgnoreEntry] = (),
    registry: SeverityRegistry | None = None,
    version: int = 0,
) -> Overlay:
    """Build a fresh overlay for ``issues``.

    Args:
        issues: Merged issues in display order.
        ignored: Ignore entries; matching issues are left out.
        registry: Severity registry used to resolve style severities.
        version: Token identifying the new overlay.

    Returns:
        Overlay: One range and one marker per visible issue.
    """

    resolver = registry if registry is not None else SeverityRegistry()
    keys = ignored_keys(ignored)
    ranges: list[OverlayRange] = []
    markers: list[OverlayMarker] = []
    for issue in visible(issues, keys):
        severity = resolver.resolve(issue.severity)
        ranges.append(OverlayRange(from_=issue.from_, to=issue.to, style_class=range_class(severity)))
        markers.append(OverlayMarker(position=issue.from_, style_class=marker_class(severity), issue=issue))
    return Overlay(version=version, ranges=tuple(ranges), markers=tuple(markers))


__all__ = [
    "MARKER_CLASS_PREFIX",
    "RANGE_CLASS_PREFIX",
    "build_overlay",
    "ignored_keys",
    "marker_class",
    "range_class",
    "visible",
]
