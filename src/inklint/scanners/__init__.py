# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Scanner contract, built-in scanners and the natural-language rule factory."""

from __future__ import annotations

from .analysis import AnalysisConfig, AnalysisFinding, AnalysisScanner, coerce_findings
from .bad_words import BadWords
from .base import AsyncScanner, Scanner, is_async_scanner, is_scanner_class, scanner_name, validate_scanner
from .heading_level import HeadingLevel
from .natural_language import LINT_TOOLS, create_natural_language_rule, generate_system_prompt
from .punctuation import Punctuation

BUILTIN_SCANNERS: dict[str, type[Scanner]] = {
    scanner.name or scanner.__name__: scanner for scanner in (BadWords, Punctuation, HeadingLevel)
}

__all__ = [
    "AnalysisConfig",
    "AnalysisFinding",
    "AnalysisScanner",
    "AsyncScanner",
    "BUILTIN_SCANNERS",
    "BadWords",
    "HeadingLevel",
    "LINT_TOOLS",
    "Punctuation",
    "Scanner",
    "coerce_findings",
    "create_natural_language_rule",
    "generate_system_prompt",
    "is_async_scanner",
    "is_scanner_class",
    "scanner_name",
    "validate_scanner",
]
