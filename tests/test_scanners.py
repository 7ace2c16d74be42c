# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the scanner contract and the built-in scanners."""

from __future__ import annotations

from typing import Self

import pytest

from inklint.document import Node, doc, heading, paragraph, text
from inklint.errors import InvalidScannerError
from inklint.fixes import ReplaceText, SetNodeAttributes
from inklint.scanners import (
    BUILTIN_SCANNERS,
    AsyncScanner,
    BadWords,
    HeadingLevel,
    Punctuation,
    Scanner,
    is_async_scanner,
    is_scanner_class,
    scanner_name,
    validate_scanner,
)


class _Recorder(Scanner):
    def scan(self) -> Self:
        self.record("first", 0, 1)
        self.record("second", 1, 2, "error")
        return self


def test_record_preserves_order_and_defaults() -> None:
    results = _Recorder(doc(paragraph("ab"))).scan().get_results()

    assert [(issue.message, issue.severity) for issue in results] == [("first", "warning"), ("second", "error")]


def test_get_results_returns_copy() -> None:
    scanner = _Recorder(doc(paragraph("ab"))).scan()

    scanner.get_results().clear()

    assert len(scanner.get_results()) == 2


def test_bad_words_reports_each_match(hedging_doc: Node) -> None:
    issues = BadWords(hedging_doc).scan().get_results()

    assert [(issue.from_, issue.to, issue.message) for issue in issues] == [
        (9, 18, 'Avoid using "obviously"'),
        (26, 33, 'Avoid using "Clearly"'),
    ]
    assert {issue.severity for issue in issues} == {"warning"}


def test_bad_words_requires_whole_words() -> None:
    issues = BadWords(doc(paragraph("Simplyfied and unclearly, but simply."))).scan().get_results()

    assert [issue.message for issue in issues] == ['Avoid using "simply"']


def test_bad_words_scans_every_text_leaf() -> None:
    root = doc(paragraph(text("clearly "), text("evidently", "em")))

    issues = BadWords(root).scan().get_results()

    assert [(issue.from_, issue.to) for issue in issues] == [(1, 8), (9, 18)]


def test_punctuation_reports_space_before_marks() -> None:
    issues = Punctuation(doc(paragraph("Hello , world ."))).scan().get_results()

    assert [(issue.from_, issue.to, issue.message) for issue in issues] == [
        (6, 8, 'Unexpected space before ","'),
        (14, 16, 'Unexpected space before "."'),
    ]
    assert [issue.fix for issue in issues] == [ReplaceText(text=","), ReplaceText(text=".")]


def test_heading_level_flags_skipped_level(skipped_heading_doc: Node) -> None:
    issues = HeadingLevel(skipped_heading_doc).scan().get_results()

    assert len(issues) == 1
    issue = issues[0]
    assert issue.message == "Heading level jumps from H1 to H3. Expected H2."
    assert (issue.from_, issue.to) == (14, 20)
    assert issue.fix == SetNodeAttributes(position=14, attrs={"level": 2})


@pytest.mark.parametrize("levels", [[1, 2, 3], [2, 1, 2], [3, 1]])
def test_heading_level_accepts_gradual_changes(levels: list[int]) -> None:
    root = doc(*(heading(level, f"H{level}") for level in levels))

    assert HeadingLevel(root).scan().get_results() == []


def test_builtin_registry_names() -> None:
    assert BUILTIN_SCANNERS == {"bad-words": BadWords, "punctuation": Punctuation, "heading-level": HeadingLevel}


def test_scanner_name_prefers_explicit_name() -> None:
    assert scanner_name(BadWords) == "bad-words"
    assert scanner_name(_Recorder) == "_Recorder"


def test_async_capability_detection() -> None:
    class _Async(AsyncScanner):
        async def scan(self) -> Self:
            return self

    assert is_async_scanner(_Async) is True
    assert is_async_scanner(BadWords) is False


@pytest.mark.parametrize("candidate", [None, "bad-words", BadWords(doc()), object, 42])
def test_validate_scanner_rejects_non_scanners(candidate: object) -> None:
    with pytest.raises(InvalidScannerError):
        validate_scanner(candidate)
    assert is_scanner_class(candidate) is False


def test_invalid_scanner_error_is_type_error() -> None:
    with pytest.raises(TypeError):
        validate_scanner("not a scanner")
