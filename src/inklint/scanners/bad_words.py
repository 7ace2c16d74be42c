# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Scanner flagging discouraged filler words."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import ClassVar, Final, Self

from ..interfaces import DocumentNode
from ..severity import Severity
from .base import Scanner

DEFAULT_BAD_WORDS: Final[tuple[str, ...]] = ("obviously", "clearly", "evidently", "simply")


def compile_word_pattern(words: Iterable[str]) -> re.Pattern[str]:
    """Return a case-insensitive whole-word pattern matching any of ``words``."""

    alternatives = "|".join(re.escape(word) for word in words if word)
    if not alternatives:
        raise ValueError("at least one word is required")
    return re.compile(rf"\b({alternatives})\b", re.IGNORECASE)


class BadWords(Scanner):
    """Record every occurrence of a discouraged word in each text leaf."""

    name: ClassVar[str | None] = "bad-words"
    words: ClassVar[tuple[str, ...]] = DEFAULT_BAD_WORDS

    def __init__(self, doc: DocumentNode) -> None:
        super().__init__(doc)
        self._pattern = compile_word_pattern(self.words)

    def scan(self) -> Self:
        for node, position in self.doc.descendants():
            if node.is_text and node.text:
                self._scan_text(node.text, position)
        return self

    def _scan_text(self, value: str, base: int) -> None:
        for match in self._pattern.finditer(value):
            self.record(
                f'Avoid using "{match.group(1)}"',
                base + match.start(),
                base + match.end(),
                Severity.WARNING,
            )


__all__ = ["BadWords", "DEFAULT_BAD_WORDS", "compile_word_pattern"]
