# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Factory building analysis scanners from plain-language rules."""

from __future__ import annotations

from typing import Any, Final

from ..interfaces import AnalysisProvider, JSONMapping
from ..severity import DEFAULT_SEVERITY, Severity
from .analysis import AnalysisScanner, build_analysis_config

REPORT_TOOL_NAME: Final[str] = "report_lint_issues"

LINT_TOOLS: Final[tuple[JSONMapping, ...]] = (
    {
        "type": "function",
        "function": {
            "name": REPORT_TOOL_NAME,
            "description": "Report lint issues found in the text based on the rule provided",
            "parameters": {
                "type": "object",
                "properties": {
                    "issues": {
                        "type": "array",
                        "description": "Array of lint issues found in the text",
                        "items": {
                            "type": "object",
                            "properties": {
                                "message": {
                                    "type": "string",
                                    "description": "A clear explanation of what violates the rule",
                                },
                                "textMatch": {
                                    "type": "string",
                                    "description": (
                                        "The exact text that violates the rule (must match exactly as it appears)"
                                    ),
                                },
                                "suggestion": {
                                    "type": "string",
                                    "description": "Optional suggested replacement text to fix the violation",
                                },
                                "occurrenceIndex": {
                                    "type": "number",
                                    "description": (
                                        "Which occurrence of textMatch to highlight (0-indexed). Use when the "
                                        "same text appears multiple times. Default is 0 (first occurrence)."
                                    ),
                                },
                            },
                            "required": ["message", "textMatch"],
                        },
                    },
                },
                "required": ["issues"],
            },
        },
    },
)

_PROMPT_TEMPLATE: Final[str] = """You are a precise text linter. Check the text for violations of this rule:

"{rule}"

CRITICAL REQUIREMENTS:
1. Report EACH violation separately - do NOT combine multiple violations into one issue
2. textMatch MUST be copied EXACTLY from the input text (character-for-character, including punctuation and spacing)
3. textMatch should be the minimal text that violates the rule (e.g., just "your dog" not the whole sentence)
4. suggestion should be a direct replacement for textMatch only
5. If the same text appears multiple times, use occurrenceIndex (0-indexed) to specify which one

Example - if the rule is "avoid mentioning dogs" and text contains "Walk your dog. Feed your dog.":
- First occurrence: textMatch="your dog", occurrenceIndex=0, suggestion="your cat"
- Second occurrence: textMatch="your dog", occurrenceIndex=1, suggestion="your cat"

If no violations found, report empty issues array."""


def generate_system_prompt(rule: str) -> str:
    """Return the instruction prompt asking the provider to find violations of ``rule``."""

    return _PROMPT_TEMPLATE.format(rule=rule.strip())


def create_natural_language_rule(
    rule: str,
    provider: AnalysisProvider,
    severity: Severity | str = DEFAULT_SEVERITY,
    *,
    name: str | None = None,
) -> type[AnalysisScanner]:
    """Build an asynchronous scanner class enforcing ``rule``.

    Args:
        rule: Plain-language description of what to flag.
        provider: Analysis call receiving ``(system_prompt, text, tools)``.
        severity: Severity assigned to every reported issue.
        name: Optional display name for the generated scanner.

    Returns:
        type[AnalysisScanner]: Scanner class usable anywhere a scanner is accepted.

    Raises:
        ValueError: If ``rule`` is blank.
        TypeError: If ``provider`` is not callable.
    """

    if not rule or not rule.strip():
        raise ValueError("natural-language rules require a non-empty rule")
    config = build_analysis_config(
        provider,
        generate_system_prompt(rule),
        severity=severity,
        tools=LINT_TOOLS,
    )
    namespace: dict[str, Any] = {
        "__doc__": f"Analysis scanner enforcing: {rule.strip()}",
        "__module__": __name__,
        "config": config,
        "name": name or "natural-language-rule",
        "rule": rule.strip(),
    }
    return type("NaturalLanguageRule", (AnalysisScanner,), namespace)


__all__ = ["LINT_TOOLS", "REPORT_TOOL_NAME", "create_natural_language_rule", "generate_system_prompt"]
