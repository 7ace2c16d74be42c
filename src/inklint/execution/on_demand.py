# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run a single scanner on request, independent of its configured run mode."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..interfaces import DocumentNode
from ..models import Issue
from ..scanners.base import scanner_name, validate_scanner
from .orchestrator import Orchestrator

if TYPE_CHECKING:
    from ..annotations.state import AnnotationState

LOGGER = logging.getLogger(__name__)


async def run_rule(
    scanner: object,
    doc: DocumentNode,
    *,
    orchestrator: Orchestrator | None = None,
    state: AnnotationState | None = None,
    apply_results: bool = False,
) -> list[Issue]:
    """Execute ``scanner`` once against ``doc`` and return its issues.

    Args:
        scanner: Scanner class to run. Its configured run mode is irrelevant.
        doc: Document snapshot to scan.
        orchestrator: Orchestrator providing the single-scanner path.
        state: Annotation state updated when ``apply_results`` is set.
        apply_results: Replace the displayed issues with the returned ones,
            unless the state moved to a newer generation while scanning.

    Returns:
        list[Issue]: Issues of ``scanner`` only, with invalid ranges removed.

    Raises:
        InvalidScannerError: If ``scanner`` does not satisfy the scanner contract.
        ValueError: If ``apply_results`` is requested without a ``state``.
        Exception: Whatever the scanner raises, unchanged.
    """

    scanner_cls = validate_scanner(scanner)
    if apply_results and state is None:
        raise ValueError("apply_results requires an annotation state")
    runner = orchestrator or Orchestrator()
    start = state.generation if state is not None else None
    issues = await runner.run_scanner(scanner_cls, doc)
    LOGGER.debug("on-demand scanner %s produced %d issue(s)", scanner_name(scanner_cls), len(issues))
    if apply_results and state is not None:
        state.replace(issues, expected_generation=start)
    return issues


__all__ = ["run_rule"]
