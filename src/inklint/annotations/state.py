# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Issue lifecycle and overlay reuse/rebuild state machine."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable
from enum import Enum

from ..models import IgnoreEntry, Issue, Overlay
from ..severity import SeverityRegistry
from .overlay import build_overlay, ignored_keys, visible

LOGGER = logging.getLogger(__name__)


class AnnotationPhase(str, Enum):
    """Enumerate whether a recomputation is outstanding."""

    STABLE = "stable"
    RECOMPUTING = "recomputing"


class AnnotationState:
    """Own the merged issues, the ignore list and the current overlay.

    Every recomputation is tagged with a generation token obtained from
    :meth:`begin_recompute`. Results committed under an older token are
    discarded so a slow run can never overwrite a newer one.
    """

    def __init__(self, registry: SeverityRegistry | None = None) -> None:
        self._registry = registry if registry is not None else SeverityRegistry()
        self._versions = itertools.count(1)
        self._issues: tuple[Issue, ...] = ()
        self._ignored: list[IgnoreEntry] = []
        self._generation = 0
        self._phase = AnnotationPhase.STABLE
        self._overlay = Overlay(version=0)

    @property
    def registry(self) -> SeverityRegistry:
        return self._registry

    @property
    def issues(self) -> list[Issue]:
        """Return the merged issues, including ignored ones."""
        return list(self._issues)

    @property
    def ignored(self) -> list[IgnoreEntry]:
        """Return the ignore list in insertion order."""
        return list(self._ignored)

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def phase(self) -> AnnotationPhase:
        return self._phase

    @property
    def overlay(self) -> Overlay:
        return self._overlay

    @property
    def visible_issues(self) -> list[Issue]:
        """Return the merged issues that are not ignored."""
        return visible(self._issues, ignored_keys(self._ignored))

    def reuse(self) -> Overlay:
        """Return the current overlay untouched."""

        return self._overlay

    def begin_recompute(self) -> int:
        """Start a recomputation and return its generation token."""

        self._generation += 1
        self._phase = AnnotationPhase.RECOMPUTING
        return self._generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def commit(self, generation: int, issues: Iterable[Issue], *, final: bool = True) -> Overlay | None:
        """Apply ``issues`` produced under ``generation``.

        Args:
            generation: Token returned by :meth:`begin_recompute`.
            issues: Merged issues for that generation.
            final: ``False`` keeps the state in the recomputing phase, for a
                provisional overlay awaiting asynchronous results.

        Returns:
            Overlay | None: The rebuilt overlay, or ``None`` when ``generation``
            has been superseded and the results were discarded.
        """

        if not self.is_current(generation):
            LOGGER.debug("discarding results of stale generation %d (current %d)", generation, self._generation)
            return None
        self._issues = tuple(issues)
        if final:
            self._phase = AnnotationPhase.STABLE
        return self._rebuild()

    def replace(self, issues: Iterable[Issue], *, expected_generation: int | None = None) -> Overlay | None:
        """Display exactly ``issues``, superseding any in-flight recomputation.

        Args:
            issues: Issues to display.
            expected_generation: Generation observed when ``issues`` started
                computing. When given and no longer current, the document has
                changed since and nothing is replaced.

        Returns:
            Overlay | None: The rebuilt overlay, or ``None`` for stale results.
        """

        if expected_generation is not None and not self.is_current(expected_generation):
            LOGGER.debug(
                "discarding replacement computed under generation %d (current %d)",
                expected_generation,
                self._generation,
            )
            return None
        self.begin_recompute()
        self._issues = tuple(issues)
        self._phase = AnnotationPhase.STABLE
        return self._rebuild()

    def ignore(self, issue: Issue) -> Overlay:
        """Add ``issue`` to the ignore list and rebuild the overlay."""

        self._ignored.append(IgnoreEntry.from_issue(issue))
        return self._rebuild()

    def clear_ignored(self) -> Overlay:
        """Empty the ignore list and rebuild the overlay."""

        self._ignored.clear()
        return self._rebuild()

    def issues_at(self, from_: int, to: int) -> list[Issue]:
        """Return every visible issue covering exactly ``[from_, to)``."""

        return [issue for issue in self.visible_issues if issue.from_ == from_ and issue.to == to]

    def _rebuild(self) -> Overlay:
        self._overlay = build_overlay(
            self._issues,
            ignored=self._ignored,
            registry=self._registry,
            version=next(self._versions),
        )
        return self._overlay


__all__ = ["AnnotationPhase", "AnnotationState"]
