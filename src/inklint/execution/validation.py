# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Geometry checks applied to scanner output before it reaches the overlay."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..models import Issue

LOGGER = logging.getLogger(__name__)


def is_valid_issue(issue: Issue, doc_size: int) -> bool:
    """Return ``True`` when ``issue`` covers a non-empty range inside the document.

    Args:
        issue: Issue produced by a scanner.
        doc_size: Content size of the document the issue was produced for.

    Returns:
        bool: ``False`` for negative positions, empty or inverted ranges and
        ranges ending past ``doc_size``.
    """

    return issue.has_valid_range(doc_size)


def filter_valid_issues(issues: Iterable[Issue], doc_size: int) -> list[Issue]:
    """Return ``issues`` without the ones whose range is invalid, preserving order."""

    kept: list[Issue] = []
    for issue in issues:
        if is_valid_issue(issue, doc_size):
            kept.append(issue)
        else:
            LOGGER.debug("dropping issue with invalid range [%d, %d): %s", issue.from_, issue.to, issue.message)
    return kept


__all__ = ["filter_valid_issues", "is_valid_issue"]
