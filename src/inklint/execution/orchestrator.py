# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""High level orchestration for running configured scanners."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from ..config import ScannerDescriptor
from ..interfaces import DocumentNode
from ..models import Issue
from ..scanners.base import validate_scanner
from .validation import filter_valid_issues

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScannerFailure:
    """Describe a scanner that failed during an automatic run."""

    scanner: str
    error: BaseException


@dataclass
class OrchestratorHooks:
    """Optional hooks to observe orchestration."""

    before_scanner: Callable[[str], None] | None = None
    after_scanner: Callable[[str, list[Issue]], None] | None = None
    on_failure: Callable[[ScannerFailure], None] | None = None


@dataclass(slots=True)
class RunReport:
    """Merged issues plus the failures isolated while producing them."""

    issues: list[Issue] = field(default_factory=list)
    failures: list[ScannerFailure] = field(default_factory=list)


def auto_descriptors(descriptors: Sequence[ScannerDescriptor]) -> tuple[ScannerDescriptor, ...]:
    """Return the descriptors that take part in automatic runs, in order."""

    return tuple(descriptor for descriptor in descriptors if descriptor.is_auto)


class Orchestrator:
    """Run scanners against a document snapshot and merge their issues.

    Synchronous scanners run one after another; asynchronous scanners are
    started together and awaited together. A failing scanner is logged and
    left out of the merge without affecting the others.
    """

    def __init__(self, hooks: OrchestratorHooks | None = None) -> None:
        self._hooks = hooks or OrchestratorHooks()

    @property
    def hooks(self) -> OrchestratorHooks:
        return self._hooks

    @staticmethod
    def partition(
        descriptors: Sequence[ScannerDescriptor],
    ) -> tuple[tuple[ScannerDescriptor, ...], tuple[ScannerDescriptor, ...]]:
        """Split the automatic descriptors into ``(sync, async)`` groups."""

        selected = auto_descriptors(descriptors)
        return (
            tuple(descriptor for descriptor in selected if not descriptor.is_async),
            tuple(descriptor for descriptor in selected if descriptor.is_async),
        )

    def has_async(self, descriptors: Sequence[ScannerDescriptor]) -> bool:
        """Return ``True`` when at least one automatic scanner is asynchronous."""

        return bool(self.partition(descriptors)[1])

    def run_sync(self, doc: DocumentNode, descriptors: Sequence[ScannerDescriptor]) -> RunReport:
        """Run the synchronous automatic scanners sequentially.

        Args:
            doc: Document snapshot handed to every scanner.
            descriptors: Configured scanner descriptors.

        Returns:
            RunReport: Issues in configuration then recording order, unfiltered.
        """

        report = RunReport()
        for descriptor in self.partition(descriptors)[0]:
            self._notify_before(descriptor.name)
            try:
                issues = self._scan_sync(descriptor, doc)
            except Exception as exc:  # noqa: BLE001 - scanner faults are isolated per scanner
                self._record_failure(report, descriptor.name, exc)
                continue
            if issues is None:
                continue
            self._notify_after(descriptor.name, issues)
            report.issues.extend(issues)
        return report

    async def run_async(self, doc: DocumentNode, descriptors: Sequence[ScannerDescriptor]) -> RunReport:
        """Run the asynchronous automatic scanners concurrently.

        Every scanner settles before merging; one rejection never cancels the
        others.

        Args:
            doc: Document snapshot handed to every scanner.
            descriptors: Configured scanner descriptors.

        Returns:
            RunReport: Issues in configuration then recording order, unfiltered.
        """

        selected = self.partition(descriptors)[1]
        report = RunReport()
        if not selected:
            return report
        for descriptor in selected:
            self._notify_before(descriptor.name)
        outcomes = await asyncio.gather(
            *(self._scan_any(descriptor.scanner, doc) for descriptor in selected),
            return_exceptions=True,
        )
        for descriptor, outcome in zip(selected, outcomes, strict=True):
            if isinstance(outcome, Exception):
                self._record_failure(report, descriptor.name, outcome)
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            self._notify_after(descriptor.name, outcome)
            report.issues.extend(outcome)
        return report

    async def run(self, doc: DocumentNode, descriptors: Sequence[ScannerDescriptor]) -> RunReport:
        """Run every automatic scanner and merge sync issues before async issues.

        Issues with invalid geometry are dropped from the merged list.
        """

        sync_report = self.run_sync(doc, descriptors)
        async_report = await self.run_async(doc, descriptors)
        return RunReport(
            issues=filter_valid_issues([*sync_report.issues, *async_report.issues], doc.content_size),
            failures=[*sync_report.failures, *async_report.failures],
        )

    async def run_scanner(self, scanner: object, doc: DocumentNode) -> list[Issue]:
        """Run exactly one scanner, whatever its configured run mode.

        Args:
            scanner: Scanner class to execute.
            doc: Document snapshot to scan.

        Returns:
            list[Issue]: The scanner's issues with invalid ranges removed.

        Raises:
            InvalidScannerError: If ``scanner`` does not satisfy the contract.
            Exception: Whatever the scanner raises, unchanged.
        """

        scanner_cls = validate_scanner(scanner)
        issues = await self._scan_any(scanner_cls, doc)
        return filter_valid_issues(issues, doc.content_size)

    @staticmethod
    def _scan_sync(descriptor: ScannerDescriptor, doc: DocumentNode) -> list[Issue] | None:
        instance = descriptor.scanner(doc)
        result = instance.scan()
        if inspect.isawaitable(result):
            close = getattr(result, "close", None)
            if callable(close):
                close()
            LOGGER.warning("scanner %s returned an awaitable from a synchronous run; skipped", descriptor.name)
            return None
        return list(instance.get_results())

    @staticmethod
    async def _scan_any(scanner: type, doc: DocumentNode) -> list[Issue]:
        instance = scanner(doc)
        result = instance.scan()
        if inspect.isawaitable(result):
            await result
        return list(instance.get_results())

    def _record_failure(self, report: RunReport, name: str, error: BaseException) -> None:
        LOGGER.warning("scanner %s failed: %s", name, error, exc_info=error)
        failure = ScannerFailure(scanner=name, error=error)
        report.failures.append(failure)
        if self._hooks.on_failure:
            self._hooks.on_failure(failure)

    def _notify_before(self, name: str) -> None:
        if self._hooks.before_scanner:
            self._hooks.before_scanner(name)

    def _notify_after(self, name: str, issues: list[Issue]) -> None:
        if self._hooks.after_scanner:
            self._hooks.after_scanner(name, issues)


__all__ = [
    "Orchestrator",
    "OrchestratorHooks",
    "RunReport",
    "ScannerFailure",
    "auto_descriptors",
]
