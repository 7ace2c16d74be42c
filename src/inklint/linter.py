# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Editor-facing facade tying configuration, execution and annotation state."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .annotations.remap import EditMapping, remap_issues
from .annotations.state import AnnotationState
from .config import LinterConfig, ScannerDescriptor
from .execution.on_demand import run_rule
from .execution.orchestrator import Orchestrator
from .execution.validation import filter_valid_issues
from .fixes import apply_fix, delete_issue_text, replace_issue_text
from .interfaces import DocumentNode, SupportsEditing
from .models import Issue, Overlay

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _PendingRun:
    """Synchronous results waiting for the asynchronous phase of a generation."""

    generation: int
    doc: DocumentNode
    sync_issues: tuple[Issue, ...]


class Linter:
    """Run configured scanners on document changes and maintain the overlay.

    A mutation is handled in two phases. :meth:`on_mutation` runs the
    synchronous scanners and returns a provisional overlay straight away;
    :meth:`settle` then awaits the asynchronous scanners and replaces the
    overlay with the merged result, unless a newer mutation arrived first.

    Edits dispatched by fixes are reported with ``linter_fix=True``; they only
    re-run the synchronous scanners and carry the asynchronous issues over.
    """

    def __init__(
        self,
        config: LinterConfig | None = None,
        *,
        state: AnnotationState | None = None,
        orchestrator: Orchestrator | None = None,
    ) -> None:
        """Create the engine.

        Args:
            config: Engine configuration; defaults to no scanners with auto-run on.
            state: Annotation state to drive; one is created from the
                configured severities when omitted.
            orchestrator: Orchestrator used for every scanner run.

        Raises:
            ConfigError: If a configured scanner entry is invalid.
        """

        self._config = config if config is not None else LinterConfig()
        self._descriptors = self._config.descriptors()
        self._state = state if state is not None else AnnotationState(self._config.severity_registry())
        self._orchestrator = orchestrator if orchestrator is not None else Orchestrator()
        self._pending: _PendingRun | None = None
        self._carried: tuple[Issue, ...] = ()

    @property
    def config(self) -> LinterConfig:
        return self._config

    @property
    def descriptors(self) -> tuple[ScannerDescriptor, ...]:
        return self._descriptors

    @property
    def state(self) -> AnnotationState:
        return self._state

    @property
    def overlay(self) -> Overlay:
        return self._state.overlay

    @property
    def has_pending(self) -> bool:
        """Return ``True`` while asynchronous results are outstanding."""
        return self._pending is not None

    def attach(self, doc: DocumentNode) -> Overlay:
        """Run the initial synchronous pass for a newly attached document."""

        return self.on_mutation(doc, content_changed=True)

    def on_mutation(
        self,
        doc: DocumentNode,
        *,
        content_changed: bool,
        linter_fix: bool = False,
        mapping: EditMapping | None = None,
    ) -> Overlay:
        """Handle a document mutation synchronously.

        Args:
            doc: Document snapshot after the mutation.
            content_changed: ``False`` for selection-only or metadata changes.
            linter_fix: ``True`` when the mutation is an edit dispatched by a
                fix. Asynchronous results that the edit left alone are moved
                through ``mapping`` and kept, and no asynchronous run is
                scheduled.
            mapping: Steps of the edit, used with ``linter_fix``. Omitting it
                keeps the carried issues at their current positions.

        Returns:
            Overlay: The reused overlay, or the overlay built from the
            synchronous scanners (plus carried issues for a linter fix).
        """

        if not content_changed:
            return self._state.reuse()
        if not self._config.auto_run:
            return self._state.overlay
        if linter_fix:
            return self._apply_linter_fix(doc, mapping if mapping is not None else EditMapping())
        generation = self._state.begin_recompute()
        report = self._orchestrator.run_sync(doc, self._descriptors)
        sync_issues = filter_valid_issues(report.issues, doc.content_size)
        awaiting_async = self._orchestrator.has_async(self._descriptors)
        self._carried = ()
        if awaiting_async:
            self._pending = _PendingRun(generation=generation, doc=doc, sync_issues=tuple(sync_issues))
        else:
            self._pending = None
        overlay = self._state.commit(generation, sync_issues, final=not awaiting_async)
        return overlay if overlay is not None else self._state.overlay

    def _apply_linter_fix(self, doc: DocumentNode, mapping: EditMapping) -> Overlay:
        generation = self._state.begin_recompute()
        self._pending = None
        report = self._orchestrator.run_sync(doc, self._descriptors)
        sync_issues = filter_valid_issues(report.issues, doc.content_size)
        kept = remap_issues(self._carried, mapping, doc.content_size)
        LOGGER.debug("linter fix kept %d of %d carried issue(s)", len(kept), len(self._carried))
        self._carried = tuple(kept)
        overlay = self._state.commit(generation, [*sync_issues, *kept])
        return overlay if overlay is not None else self._state.overlay

    async def settle(self) -> Overlay:
        """Run the asynchronous scanners of the latest mutation and commit the merge.

        Returns:
            Overlay: The current overlay after the merge, or unchanged when the
            generation was superseded while the scanners ran.
        """

        pending = self._pending
        if pending is None:
            return self._state.overlay
        report = await self._orchestrator.run_async(pending.doc, self._descriptors)
        if self._pending is pending:
            self._pending = None
        async_issues = filter_valid_issues(report.issues, pending.doc.content_size)
        overlay = self._state.commit(pending.generation, [*pending.sync_issues, *async_issues])
        if overlay is None:
            LOGGER.debug("asynchronous results for generation %d superseded", pending.generation)
            return self._state.overlay
        self._carried = tuple(async_issues)
        return overlay

    async def update(
        self,
        doc: DocumentNode,
        *,
        content_changed: bool,
        linter_fix: bool = False,
        mapping: EditMapping | None = None,
    ) -> Overlay:
        """Run both phases of a mutation and return the settled overlay."""

        self.on_mutation(doc, content_changed=content_changed, linter_fix=linter_fix, mapping=mapping)
        return await self.settle()

    async def run_rule(self, scanner: object, doc: DocumentNode, *, apply_results: bool = False) -> list[Issue]:
        """Run one scanner on demand.

        Args:
            scanner: Scanner class to run.
            doc: Document snapshot to scan.
            apply_results: Replace the displayed issues with the results. The
                results are discarded when the document changed meanwhile.

        Returns:
            list[Issue]: Issues of ``scanner`` only.

        Raises:
            InvalidScannerError: If ``scanner`` does not satisfy the contract.
        """

        start = self._state.generation
        issues = await run_rule(scanner, doc, orchestrator=self._orchestrator)
        if not apply_results:
            return issues
        if self._state.replace(issues, expected_generation=start) is not None:
            self._pending = None
            self._carried = tuple(issues)
        return issues

    def ignore_issue(self, issue: Issue) -> Overlay:
        return self._state.ignore(issue)

    def clear_ignored_issues(self) -> Overlay:
        return self._state.clear_ignored()

    def get_issues(self) -> list[Issue]:
        """Return the visible issues of the current overlay."""
        return self._state.visible_issues

    def issues_at(self, from_: int, to: int) -> list[Issue]:
        return self._state.issues_at(from_, to)

    def apply_fix(self, editor: SupportsEditing, issue: Issue) -> bool:
        """Apply the fix attached to ``issue``; ``False`` when it has none."""
        return apply_fix(editor, issue)

    def delete_text(self, editor: SupportsEditing, issue: Issue) -> None:
        delete_issue_text(editor, issue)

    def replace_text(self, editor: SupportsEditing, issue: Issue, text: str) -> None:
        replace_issue_text(editor, issue, text)

    def stylesheet(self) -> str:
        """Return CSS rules for the configured custom severities."""
        return self._state.registry.stylesheet()


__all__ = ["Linter"]
