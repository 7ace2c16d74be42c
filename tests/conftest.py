# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from inklint.document import Node, doc, heading, paragraph


@dataclass
class RecordingEditor:
    """Editor double capturing the edits dispatched by fixes."""

    replacements: list[tuple[int, int, str, bool]] = field(default_factory=list)
    attribute_updates: list[tuple[int, dict[str, Any], bool]] = field(default_factory=list)

    def replace_range(self, from_: int, to: int, text: str, *, linter_fix: bool) -> None:
        self.replacements.append((from_, to, text, linter_fix))

    def set_node_attributes(self, position: int, attrs: dict[str, Any], *, linter_fix: bool) -> None:
        self.attribute_updates.append((position, attrs, linter_fix))


@pytest.fixture
def editor() -> RecordingEditor:
    return RecordingEditor()


@pytest.fixture
def hedging_doc() -> Node:
    """Return a single paragraph containing two discouraged words."""
    return doc(paragraph("This is obviously wrong. Clearly so."))


@pytest.fixture
def skipped_heading_doc() -> Node:
    return doc(heading(1, "Title"), paragraph("Intro"), heading(3, "Deep"))
