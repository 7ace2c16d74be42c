# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for automatic scanner orchestration."""

from __future__ import annotations

import asyncio
import logging
from typing import Self

import pytest

from inklint.config import RunMode, ScannerDescriptor, normalize_scanners
from inklint.document import doc, paragraph
from inklint.execution import Orchestrator, OrchestratorHooks, ScannerFailure, filter_valid_issues
from inklint.models import Issue
from inklint.scanners import AsyncScanner, Scanner

DOC = doc(paragraph("abcdefghij"))


class SyncA(Scanner):
    name = "sync-a"

    def scan(self) -> Self:
        self.record("sync-a", 1, 2)
        return self


class SyncB(Scanner):
    name = "sync-b"

    def scan(self) -> Self:
        self.record("sync-b", 2, 3)
        return self


class Exploding(Scanner):
    name = "exploding"

    def scan(self) -> Self:
        raise RuntimeError("boom")


class SlowAsync(AsyncScanner):
    name = "slow-async"

    async def scan(self) -> Self:
        await asyncio.sleep(0.02)
        self.record("slow-async", 3, 4)
        return self


class FastAsync(AsyncScanner):
    name = "fast-async"

    async def scan(self) -> Self:
        self.record("fast-async", 4, 5)
        return self


class RejectingAsync(AsyncScanner):
    name = "rejecting-async"

    async def scan(self) -> Self:
        await asyncio.sleep(0)
        raise ValueError("rejected")


class OutOfBounds(Scanner):
    name = "out-of-bounds"

    def scan(self) -> Self:
        self.record("negative", -1, 2)
        self.record("empty", 3, 3)
        self.record("past-end", 5, 99)
        self.record("ok", 1, 12)
        return self


class OnDemandOnly(Scanner):
    def scan(self) -> Self:
        self.record("on-demand", 1, 2)
        return self


def _messages(issues: list[Issue]) -> list[str]:
    return [issue.message for issue in issues]


@pytest.mark.asyncio
async def test_merge_order_sync_then_async_in_configuration_order() -> None:
    descriptors = normalize_scanners([SlowAsync, SyncB, FastAsync, SyncA])

    report = await Orchestrator().run(DOC, descriptors)

    assert _messages(report.issues) == ["sync-b", "sync-a", "slow-async", "fast-async"]
    assert report.failures == []


@pytest.mark.asyncio
async def test_failures_are_isolated(caplog: pytest.LogCaptureFixture) -> None:
    descriptors = normalize_scanners([Exploding, SyncA, RejectingAsync, FastAsync])

    with caplog.at_level(logging.WARNING, logger="inklint.execution.orchestrator"):
        report = await Orchestrator().run(DOC, descriptors)

    assert _messages(report.issues) == ["sync-a", "fast-async"]
    assert [failure.scanner for failure in report.failures] == ["exploding", "rejecting-async"]
    assert "exploding" in caplog.text


@pytest.mark.asyncio
async def test_on_demand_scanners_are_skipped() -> None:
    descriptors = normalize_scanners([{"scanner": OnDemandOnly, "run_mode": "onDemand"}, SyncA])

    report = await Orchestrator().run(DOC, descriptors)

    assert _messages(report.issues) == ["sync-a"]


@pytest.mark.asyncio
async def test_invalid_geometry_is_dropped() -> None:
    report = await Orchestrator().run(DOC, normalize_scanners([OutOfBounds]))

    assert _messages(report.issues) == ["ok"]


def test_run_sync_skips_async_scanners() -> None:
    report = Orchestrator().run_sync(DOC, normalize_scanners([FastAsync, SyncA]))

    assert _messages(report.issues) == ["sync-a"]


def test_sync_descriptor_returning_awaitable_is_skipped() -> None:
    mislabelled = ScannerDescriptor(scanner=FastAsync, run_mode=RunMode.AUTO, is_async=False)

    report = Orchestrator().run_sync(DOC, [mislabelled])

    assert report.issues == []
    assert report.failures == []


def test_partition_splits_auto_descriptors() -> None:
    descriptors = normalize_scanners([SyncA, FastAsync, {"scanner": SyncB, "run_mode": "onDemand"}])

    sync, async_ = Orchestrator.partition(descriptors)

    assert [d.scanner for d in sync] == [SyncA]
    assert [d.scanner for d in async_] == [FastAsync]


@pytest.mark.asyncio
async def test_hooks_observe_each_scanner() -> None:
    events: list[str] = []
    failures: list[ScannerFailure] = []
    hooks = OrchestratorHooks(
        before_scanner=lambda name: events.append(f"before:{name}"),
        after_scanner=lambda name, issues: events.append(f"after:{name}:{len(issues)}"),
        on_failure=failures.append,
    )

    await Orchestrator(hooks).run(DOC, normalize_scanners([SyncA, Exploding]))

    assert events == ["before:sync-a", "after:sync-a:1", "before:exploding"]
    assert [failure.scanner for failure in failures] == ["exploding"]
    assert isinstance(failures[0].error, RuntimeError)


@pytest.mark.asyncio
async def test_run_scanner_propagates_errors() -> None:
    with pytest.raises(RuntimeError, match="boom"):
        await Orchestrator().run_scanner(Exploding, DOC)
    with pytest.raises(ValueError, match="rejected"):
        await Orchestrator().run_scanner(RejectingAsync, DOC)


@pytest.mark.asyncio
async def test_run_scanner_handles_both_kinds() -> None:
    assert _messages(await Orchestrator().run_scanner(SyncA, DOC)) == ["sync-a"]
    assert _messages(await Orchestrator().run_scanner(SlowAsync, DOC)) == ["slow-async"]


def test_filter_valid_issues_preserves_order() -> None:
    issues = [Issue(message=str(index), from_=index, to=index + 1) for index in range(5)]

    assert _messages(filter_valid_issues(issues, 3)) == ["0", "1", "2"]


class Handshake:
    """Events exchanged by the two handshake scanners."""

    left: asyncio.Event
    right: asyncio.Event


class LeftHandshake(AsyncScanner):
    name = "left"

    async def scan(self) -> Self:
        Handshake.left.set()
        await Handshake.right.wait()
        self.record("left", 1, 2)
        return self


class RightHandshake(AsyncScanner):
    name = "right"

    async def scan(self) -> Self:
        Handshake.right.set()
        await Handshake.left.wait()
        self.record("right", 2, 3)
        return self


@pytest.mark.asyncio
async def test_async_scanners_run_concurrently() -> None:
    Handshake.left = asyncio.Event()
    Handshake.right = asyncio.Event()
    descriptors = normalize_scanners([LeftHandshake, RightHandshake])

    report = await asyncio.wait_for(Orchestrator().run_async(DOC, descriptors), timeout=1)

    assert _messages(report.issues) == ["left", "right"]
