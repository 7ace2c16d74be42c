# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Document annotation engine: scanners, position mapping and overlay state."""

from __future__ import annotations

from .annotations import AnnotationPhase, AnnotationState, EditMapping, EditStep, build_overlay
from .config import LinterConfig, RunMode, ScannerConfig, ScannerDescriptor, normalize_scanners
from .config_loader import load_config
from .errors import ConfigError, DocumentError, InklintError, InvalidScannerError, ScannerRunError
from .execution import Orchestrator, OrchestratorHooks, filter_valid_issues, run_rule
from .fixes import DeleteText, ReplaceText, SetNodeAttributes, apply_fix
from .linter import Linter
from .models import IgnoreEntry, Issue, Overlay, OverlayMarker, OverlayRange, TextRange
from .scanners import (
    AsyncScanner,
    BadWords,
    HeadingLevel,
    Punctuation,
    Scanner,
    create_natural_language_rule,
    generate_system_prompt,
)
from .severity import CustomSeverity, Severity, SeverityRegistry, generate_custom_severity_css
from .text import PositionMap, TextSegment, extract_text, find_text_position

__all__ = [
    "AnnotationPhase",
    "AnnotationState",
    "AsyncScanner",
    "BadWords",
    "ConfigError",
    "CustomSeverity",
    "DeleteText",
    "DocumentError",
    "EditMapping",
    "EditStep",
    "HeadingLevel",
    "IgnoreEntry",
    "InklintError",
    "InvalidScannerError",
    "Issue",
    "Linter",
    "LinterConfig",
    "Orchestrator",
    "OrchestratorHooks",
    "Overlay",
    "OverlayMarker",
    "OverlayRange",
    "PositionMap",
    "Punctuation",
    "ReplaceText",
    "RunMode",
    "Scanner",
    "ScannerConfig",
    "ScannerDescriptor",
    "ScannerRunError",
    "SetNodeAttributes",
    "Severity",
    "SeverityRegistry",
    "TextRange",
    "TextSegment",
    "apply_fix",
    "build_overlay",
    "create_natural_language_rule",
    "extract_text",
    "filter_valid_issues",
    "find_text_position",
    "generate_custom_severity_css",
    "generate_system_prompt",
    "load_config",
    "normalize_scanners",
    "run_rule",
]
