# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for carrying issues across fix edits."""

from __future__ import annotations

import pytest

from inklint.annotations import EditMapping, EditStep, remap_issues
from inklint.models import Issue


def _issue(message: str, from_: int, to: int) -> Issue:
    return Issue(message=message, from_=from_, to=to)


@pytest.mark.parametrize(
    ("step", "pos", "expected"),
    [
        (EditStep(5, 8, 1), 3, 3),
        (EditStep(5, 8, 1), 5, 5),
        (EditStep(5, 8, 1), 6, 5),
        (EditStep(5, 8, 1), 8, 6),
        (EditStep(5, 8, 1), 10, 8),
        (EditStep(4, 4, 3), 4, 7),
    ],
)
def test_step_maps_positions(step: EditStep, pos: int, expected: int) -> None:
    assert step.map(pos) == expected


def test_step_rejects_inverted_range() -> None:
    with pytest.raises(ValueError):
        EditStep(5, 3)


def test_remap_drops_touched_and_moves_the_rest() -> None:
    issues = [_issue("before", 1, 3), _issue("edited", 4, 7), _issue("after", 9, 12)]

    kept = remap_issues(issues, EditMapping.of(EditStep(5, 8, 0)), doc_size=20)

    assert [(issue.message, issue.from_, issue.to) for issue in kept] == [("before", 1, 3), ("after", 6, 9)]


def test_remap_applies_steps_in_sequence() -> None:
    mapping = EditMapping.of(EditStep(1, 1, 2), EditStep(10, 12, 0))
    issues = [_issue("moved", 5, 7), _issue("hit by second step", 9, 11)]

    kept = remap_issues(issues, mapping, doc_size=30)

    assert [(issue.message, issue.from_, issue.to) for issue in kept] == [("moved", 7, 9)]


def test_remap_drops_ranges_outside_new_document() -> None:
    kept = remap_issues([_issue("tail", 8, 12)], EditMapping(), doc_size=10)

    assert kept == []


def test_remap_keeps_issue_fields() -> None:
    original = Issue(message="m", from_=6, to=8, severity="error")

    (moved,) = remap_issues([original], EditMapping.of(EditStep(1, 3, 0)), doc_size=10)

    assert (moved.from_, moved.to, moved.severity, moved.message) == (4, 6, "error", "m")
