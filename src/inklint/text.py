# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Flatten documents into plain text and map text offsets back to positions.

The concatenated text contains every text leaf in document order with a single
line break inserted when a new block starts after some text was emitted. Each
text leaf becomes a :class:`TextSegment` remembering both its document range
and its offset inside the concatenated text, which is enough to translate any
substring back into document coordinates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .interfaces import DocumentNode
from .models import TextRange

BLOCK_SEPARATOR: Final[str] = "\n"


@dataclass(frozen=True, slots=True)
class TextSegment:
    """Contiguous text leaf with document and text coordinates."""

    text: str
    from_: int
    to: int
    text_offset: int

    @property
    def text_end(self) -> int:
        """Return the exclusive end offset inside the concatenated text."""
        return self.text_offset + len(self.text)


@dataclass(frozen=True, slots=True)
class PositionMap:
    """Concatenated document text plus the segments that produced it."""

    text: str
    segments: tuple[TextSegment, ...]

    def find_text_position(self, needle: str, occurrence_index: int = 0) -> TextRange | None:
        """Locate the ``occurrence_index``-th occurrence of ``needle``.

        Occurrences are counted without overlap, left to right.

        Args:
            needle: Exact text to look for.
            occurrence_index: Zero-based occurrence to resolve.

        Returns:
            TextRange | None: Document range of the occurrence, or ``None`` when
            the occurrence does not exist or cannot be mapped.
        """

        if not needle or not self.text or not self.segments or occurrence_index < 0:
            return None
        search_from = 0
        index = -1
        for _ in range(occurrence_index + 1):
            index = self.text.find(needle, search_from)
            if index == -1:
                return None
            search_from = index + len(needle)
        return self.map_offsets(index, index + len(needle))

    def map_offsets(self, start: int, end: int) -> TextRange | None:
        """Translate the text slice ``[start, end)`` into document positions.

        The start must fall inside a segment. The end is resolved against the
        segment containing it; when it falls on an inserted block separator it
        clamps to the end of the preceding segment.

        Args:
            start: Inclusive start offset into :attr:`text`.
            end: Exclusive end offset into :attr:`text`.

        Returns:
            TextRange | None: Mapped range, or ``None`` when unresolvable.
        """

        if start < 0 or end <= start:
            return None
        from_: int | None = None
        to: int | None = None
        for segment in self.segments:
            if from_ is None:
                if not segment.text_offset <= start < segment.text_end:
                    continue
                from_ = segment.from_ + (start - segment.text_offset)
            if segment.text_offset < end <= segment.text_end:
                to = segment.from_ + (end - segment.text_offset)
                break
            if end > segment.text_end:
                to = segment.to
            else:
                break
        if from_ is None or to is None:
            return None
        return TextRange(from_=from_, to=to)

    def segment_at(self, offset: int) -> TextSegment | None:
        """Return the segment containing text ``offset``, if any."""
        for segment in self.segments:
            if segment.text_offset <= offset < segment.text_end:
                return segment
        return None


def extract_text(doc: DocumentNode) -> PositionMap:
    """Build the :class:`PositionMap` of ``doc``.

    Args:
        doc: Root of the document snapshot.

    Returns:
        PositionMap: Concatenated text and its segments.
    """

    parts: list[str] = []
    segments: list[TextSegment] = []
    offset = 0
    separated = False
    for node, position in doc.descendants():
        value = node.text
        if node.is_text and value:
            segments.append(TextSegment(text=value, from_=position, to=position + len(value), text_offset=offset))
            parts.append(value)
            offset += len(value)
            separated = False
        elif node.is_block and segments and not separated:
            parts.append(BLOCK_SEPARATOR)
            offset += len(BLOCK_SEPARATOR)
            separated = True
    return PositionMap(text="".join(parts), segments=tuple(segments))


def find_text_position(
    position_map: PositionMap,
    needle: str,
    occurrence_index: int = 0,
) -> TextRange | None:
    """Functional alias of :meth:`PositionMap.find_text_position`."""

    return position_map.find_text_position(needle, occurrence_index)


__all__ = [
    "BLOCK_SEPARATOR",
    "PositionMap",
    "TextSegment",
    "extract_text",
    "find_text_position",
]
