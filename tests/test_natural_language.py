# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for analysis-backed natural-language scanners."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

import pytest

from inklint.document import doc, paragraph
from inklint.fixes import ReplaceText
from inklint.scanners import LINT_TOOLS, AnalysisScanner, create_natural_language_rule, generate_system_prompt
from inklint.scanners.analysis import coerce_findings
from inklint.scanners.natural_language import REPORT_TOOL_NAME

DOG_DOC = doc(paragraph("Walk your dog. Feed your dog."))


class _Provider:
    """Provider double returning a canned response and recording calls."""

    def __init__(self, response: object) -> None:
        self.response = response
        self.calls: list[tuple[str, str, Sequence[Any]]] = []

    async def __call__(self, system_prompt: str, document_text: str, tools: Sequence[Any]) -> object:
        self.calls.append((system_prompt, document_text, tools))
        return self.response


@pytest.mark.asyncio
async def test_rule_maps_findings_to_document_positions() -> None:
    provider = _Provider(
        {
            "issues": [
                {"message": "No dogs", "textMatch": "your dog", "suggestion": "your cat"},
                {"message": "No dogs", "textMatch": "your dog", "occurrenceIndex": 1},
            ],
        },
    )
    rule = create_natural_language_rule("avoid mentioning dogs", provider, "error")

    issues = (await rule(DOG_DOC).scan()).get_results()

    assert [(issue.from_, issue.to) for issue in issues] == [(6, 14), (21, 29)]
    assert [issue.severity for issue in issues] == ["error", "error"]
    assert issues[0].fix == ReplaceText(text="your cat")
    assert issues[1].fix is None


@pytest.mark.asyncio
async def test_provider_receives_prompt_text_and_tools() -> None:
    provider = _Provider({"issues": []})
    rule = create_natural_language_rule("avoid mentioning dogs", provider)

    await rule(doc(paragraph("one"), paragraph("two"))).scan()

    system_prompt, document_text, tools = provider.calls[0]
    assert '"avoid mentioning dogs"' in system_prompt
    assert document_text == "one\ntwo"
    assert tools == LINT_TOOLS


@pytest.mark.asyncio
async def test_unindexed_findings_default_to_first_occurrence() -> None:
    provider = _Provider({"issues": [{"message": "a", "textMatch": "your dog"}, {"message": "b", "textMatch": "your dog"}]})
    rule = create_natural_language_rule("dogs", provider)

    issues = (await rule(DOG_DOC).scan()).get_results()

    assert [(issue.from_, issue.to) for issue in issues] == [(6, 14), (6, 14)]


@pytest.mark.asyncio
async def test_blank_document_skips_provider() -> None:
    provider = _Provider({"issues": [{"message": "x", "textMatch": "x"}]})
    rule = create_natural_language_rule("anything", provider)

    issues = (await rule(doc(paragraph(" "))).scan()).get_results()

    assert issues == []
    assert provider.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        None,
        "not json",
        ["issues"],
        {"issues": "nope"},
        {"issues": [{"message": "", "textMatch": "dog"}]},
        {"issues": [{"message": "m", "textMatch": "cat"}]},
        {"issues": [{"message": "m", "textMatch": "dog", "occurrenceIndex": -1}]},
        {"issues": [{"message": "m", "textMatch": "dog", "occurrenceIndex": 5}]},
        {"issues": [{"message": 3, "textMatch": "dog"}]},
    ],
)
async def test_malformed_responses_yield_no_issues(response: object) -> None:
    rule = create_natural_language_rule("dogs", _Provider(response))

    assert (await rule(DOG_DOC).scan()).get_results() == []


@pytest.mark.asyncio
async def test_valid_entries_survive_malformed_siblings() -> None:
    provider = _Provider({"issues": [{"message": "m"}, {"message": "ok", "textMatch": "Feed"}]})
    rule = create_natural_language_rule("dogs", provider)

    issues = (await rule(DOG_DOC).scan()).get_results()

    assert [issue.message for issue in issues] == ["ok"]


@pytest.mark.asyncio
async def test_json_string_response_is_parsed() -> None:
    provider = _Provider(json.dumps({"issues": [{"message": "m", "textMatch": "Walk"}]}))
    rule = create_natural_language_rule("dogs", provider)

    issues = (await rule(DOG_DOC).scan()).get_results()

    assert [(issue.from_, issue.to) for issue in issues] == [(1, 5)]


@pytest.mark.asyncio
async def test_provider_failure_resolves_to_zero_issues() -> None:
    async def failing(system_prompt: str, document_text: str, tools: Sequence[Any]) -> object:
        raise RuntimeError("service unavailable")

    rule = create_natural_language_rule("dogs", failing)

    assert (await rule(DOG_DOC).scan()).get_results() == []


@pytest.mark.asyncio
async def test_sync_provider_is_supported() -> None:
    def provider(system_prompt: str, document_text: str, tools: Sequence[Any]) -> object:
        return {"issues": [{"message": "m", "textMatch": "Feed"}]}

    rule = create_natural_language_rule("dogs", provider)

    issues = (await rule(DOG_DOC).scan()).get_results()

    assert [(issue.from_, issue.to) for issue in issues] == [(16, 20)]


def test_factory_returns_analysis_scanner_subclass() -> None:
    rule = create_natural_language_rule("  no dogs  ", _Provider({}), name="dogs")

    assert issubclass(rule, AnalysisScanner)
    assert rule.name == "dogs"
    assert rule.rule == "no dogs"


def test_factory_rejects_blank_rule_and_bad_provider() -> None:
    with pytest.raises(ValueError):
        create_natural_language_rule("   ", _Provider({}))
    with pytest.raises(TypeError):
        create_natural_language_rule("dogs", "not callable")  # type: ignore[arg-type]


def test_system_prompt_describes_output_contract() -> None:
    prompt = generate_system_prompt("be nice")

    assert '"be nice"' in prompt
    assert "occurrenceIndex" in prompt
    assert "EXACTLY" in prompt


def test_lint_tools_schema() -> None:
    function = LINT_TOOLS[0]["function"]

    assert function["name"] == REPORT_TOOL_NAME
    items = function["parameters"]["properties"]["issues"]["items"]
    assert items["required"] == ["message", "textMatch"]
    json.dumps(LINT_TOOLS)


def test_coerce_findings_reads_aliases() -> None:
    findings = coerce_findings({"issues": [{"message": "m", "textMatch": "t", "occurrenceIndex": None}]})

    assert findings[0].text_match == "t"
    assert findings[0].occurrence_index == 0
