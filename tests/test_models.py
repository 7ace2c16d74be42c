# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for issue and overlay models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from inklint.fixes import ReplaceText, SetNodeAttributes
from inklint.models import IgnoreEntry, Issue
from inklint.severity import Severity


def test_issue_defaults_and_aliases() -> None:
    issue = Issue.model_validate({"message": "m", "from": 1, "to": 3})

    assert issue.from_ == 1
    assert issue.severity == "warning"
    assert issue.fix is None
    assert issue.key == (1, 3, "m")


def test_issue_severity_coercion() -> None:
    assert Issue(message="m", from_=0, to=1, severity=Severity.ERROR).severity == "error"
    assert Issue(message="m", from_=0, to=1, severity=None).severity == "warning"


@pytest.mark.parametrize(
    ("from_", "to", "valid"),
    [(0, 1, True), (3, 10, True), (-1, 2, False), (4, 4, False), (5, 3, False), (2, 11, False)],
)
def test_issue_range_validity(from_: int, to: int, valid: bool) -> None:
    assert Issue(message="m", from_=from_, to=to).has_valid_range(10) is valid


def test_issue_payload_uses_public_names() -> None:
    issue = Issue(message="m", from_=2, to=4, fix=ReplaceText(text="x"))

    payload = issue.to_payload()

    assert payload["from"] == 2
    assert payload["fix"] == {"kind": "replace-text", "text": "x"}


def test_fix_union_is_discriminated() -> None:
    issue = Issue.model_validate(
        {"message": "m", "from": 0, "to": 5, "fix": {"kind": "set-node-attributes", "position": 0, "attrs": {"level": 2}}},
    )

    assert isinstance(issue.fix, SetNodeAttributes)
    assert issue.fix.attrs == {"level": 2}


def test_issue_is_frozen() -> None:
    issue = Issue(message="m", from_=0, to=1)
    with pytest.raises(ValidationError):
        issue.message = "other"  # type: ignore[misc]


def test_ignore_entry_matches_issue_key() -> None:
    issue = Issue(message="m", from_=0, to=1)

    assert IgnoreEntry.from_issue(issue).key == issue.key
