# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Scanner execution: automatic runs, on-demand runs and geometry checks."""

from __future__ import annotations

from .on_demand import run_rule
from .orchestrator import Orchestrator, OrchestratorHooks, RunReport, ScannerFailure, auto_descriptors
from .validation import filter_valid_issues, is_valid_issue

__all__ = [
    "Orchestrator",
    "OrchestratorHooks",
    "RunReport",
    "ScannerFailure",
    "auto_descriptors",
    "filter_valid_issues",
    "is_valid_issue",
    "run_rule",
]
