# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Scanner flagging whitespace placed before punctuation marks."""

from __future__ import annotations

import re
from typing import ClassVar, Final, Self

from ..fixes import ReplaceText
from ..severity import Severity
from .base import Scanner

SPACE_BEFORE_PUNCTUATION: Final[re.Pattern[str]] = re.compile(r"(\s+)([,.!?:])")


class Punctuation(Scanner):
    """Record ``word ,`` style spacing and offer to drop the stray space."""

    name: ClassVar[str | None] = "punctuation"

    def scan(self) -> Self:
        for node, position in self.doc.descendants():
            if node.is_text and node.text:
                for match in SPACE_BEFORE_PUNCTUATION.finditer(node.text):
                    mark = match.group(2)
                    self.record(
                        f'Unexpected space before "{mark}"',
                        position + match.start(),
                        position + match.end(),
                        Severity.WARNING,
                        ReplaceText(text=mark),
                    )
        return self


__all__ = ["Punctuation", "SPACE_BEFORE_PUNCTUATION"]
