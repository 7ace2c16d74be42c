# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Scanner flagging headings that skip levels."""

from __future__ import annotations

from typing import ClassVar, Final, Self

from ..fixes import SetNodeAttributes
from ..severity import Severity
from .base import Scanner

HEADING_TYPE: Final[str] = "heading"
LEVEL_ATTR: Final[str] = "level"


class HeadingLevel(Scanner):
    """Record headings whose level exceeds the previous heading level by more than one.

    The issue spans the whole heading node and carries a fix resetting the
    level to the previous level plus one.
    """

    name: ClassVar[str | None] = "heading-level"

    def scan(self) -> Self:
        previous: int | None = None
        for node, position in self.doc.descendants():
            if node.type_name != HEADING_TYPE:
                continue
            level = _heading_level(node.attrs.get(LEVEL_ATTR))
            if level is None:
                continue
            if previous is not None and level - previous > 1:
                expected = previous + 1
                self.record(
                    f"Heading level jumps from H{previous} to H{level}. Expected H{expected}.",
                    position,
                    position + node.node_size,
                    Severity.WARNING,
                    SetNodeAttributes(position=position, attrs={LEVEL_ATTR: expected}),
                )
            previous = level
        return self


def _heading_level(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


__all__ = ["HEADING_TYPE", "HeadingLevel"]
