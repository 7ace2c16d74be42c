# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for fix operations."""

from __future__ import annotations

from inklint.fixes import (
    DeleteText,
    ReplaceText,
    SetNodeAttributes,
    apply_fix,
    delete_issue_text,
    describe_fix,
    replace_issue_text,
)
from inklint.models import Issue


def test_replace_text_fix_targets_issue_range(editor) -> None:
    issue = Issue(message="m", from_=4, to=6, fix=ReplaceText(text=","))

    assert apply_fix(editor, issue) is True
    assert editor.replacements == [(4, 6, ",", True)]


def test_delete_text_fix(editor) -> None:
    issue = Issue(message="m", from_=1, to=3, fix=DeleteText())

    apply_fix(editor, issue)

    assert editor.replacements == [(1, 3, "", True)]


def test_set_node_attributes_fix(editor) -> None:
    issue = Issue(message="m", from_=7, to=13, fix=SetNodeAttributes(position=7, attrs={"level": 2}))

    apply_fix(editor, issue)

    assert editor.attribute_updates == [(7, {"level": 2}, True)]
    assert editor.replacements == []


def test_apply_fix_without_fix_is_noop(editor) -> None:
    assert apply_fix(editor, Issue(message="m", from_=0, to=1)) is False
    assert editor.replacements == []


def test_manual_delete_and_replace_ignore_attached_fix(editor) -> None:
    issue = Issue(message="m", from_=2, to=5, fix=ReplaceText(text="zzz"))

    delete_issue_text(editor, issue)
    replace_issue_text(editor, issue, "abc")

    assert editor.replacements == [(2, 5, "", True), (2, 5, "abc", True)]


def test_describe_fix() -> None:
    assert describe_fix(None) is None
    assert describe_fix(ReplaceText(text=".")) == "replace with '.'"
    assert describe_fix(DeleteText()) == "delete text"
    assert describe_fix(SetNodeAttributes(position=0, attrs={"level": 2})) == "set level=2"
