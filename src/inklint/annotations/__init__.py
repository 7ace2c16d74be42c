# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Annotation state and overlay construction."""

from __future__ import annotations

from .overlay import build_overlay, marker_class, range_class
from .remap import EditMapping, EditStep, remap_issues
from .state import AnnotationPhase, AnnotationState

__all__ = [
    "AnnotationPhase",
    "AnnotationState",
    "EditMapping",
    "EditStep",
    "build_overlay",
    "marker_class",
    "range_class",
    "remap_issues",
]
