# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Carry issues across an edit by mapping their positions to the new document."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ..models import Issue

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EditStep:
    """Replacement of ``[from_, to)`` with ``size`` positions of new content.

    Positions are expressed in the document as it was right before the step.
    """

    from_: int
    to: int
    size: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.from_ <= self.to or self.size < 0:
            raise ValueError(f"invalid edit step {self.from_}..{self.to} (+{self.size})")

    @property
    def delta(self) -> int:
        return self.size - (self.to - self.from_)

    def map(self, pos: int) -> int:
        """Map ``pos`` through the step, keeping positions at the start before it."""

        if pos < self.from_:
            return pos
        if pos > self.to:
            return pos + self.delta
        if self.from_ == self.to or pos == self.to:
            return self.from_ + self.size
        # positions at the start or inside a replaced range collapse to its start
        return self.from_

    def touches(self, from_: int, to: int) -> bool:
        """Return ``True`` when ``[from_, to)`` overlaps the replaced range."""

        return from_ < self.to and to > self.from_


@dataclass(frozen=True, slots=True)
class EditMapping:
    """Ordered edit steps of one mutation, each relative to the previous result."""

    steps: tuple[EditStep, ...] = ()

    @classmethod
    def of(cls, *steps: EditStep) -> EditMapping:
        return cls(steps=tuple(steps))

    def map(self, pos: int) -> int:
        for step in self.steps:
            pos = step.map(pos)
        return pos

    def map_range(self, from_: int, to: int) -> tuple[int, int] | None:
        """Map ``[from_, to)`` through every step.

        Returns:
            tuple[int, int] | None: The mapped range, or ``None`` when a step
            edits any part of it.
        """

        for step in self.steps:
            if step.touches(from_, to):
                return None
            from_, to = step.map(from_), step.map(to)
        return from_, to


def remap_issues(issues: Iterable[Issue], mapping: EditMapping, doc_size: int) -> list[Issue]:
    """Move ``issues`` through ``mapping``, dropping edited or invalid ones.

    Args:
        issues: Issues anchored in the document before the edit.
        mapping: Steps of the edit.
        doc_size: Content size of the document after the edit.

    Returns:
        list[Issue]: Surviving issues with their new positions, in input order.
    """

    kept: list[Issue] = []
    for issue in issues:
        mapped = mapping.map_range(issue.from_, issue.to)
        if mapped is None:
            LOGGER.debug("dropping issue %r touched by edit", issue.message)
            continue
        moved = issue.model_copy(update={"from_": mapped[0], "to": mapped[1]})
        if not moved.has_valid_range(doc_size):
            LOGGER.debug("dropping issue %r with invalid range after edit", issue.message)
            continue
        kept.append(moved)
    return kept


__all__ = ["EditMapping", "EditStep", "remap_issues"]
