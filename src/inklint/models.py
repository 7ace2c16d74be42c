# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the inklint package."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .fixes import FixOperation
from .severity import DEFAULT_SEVERITY, Severity, severity_value

IssueKey = tuple[int, int, str]


class TextRange(BaseModel):
    """Half-open ``[from, to)`` range in document positions."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: int = Field(alias="from")
    to: int


class Issue(BaseModel):
    """Problem detected by a scanner, anchored to a document range."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    message: str
    from_: int = Field(alias="from")
    to: int
    severity: str = DEFAULT_SEVERITY.value
    fix: FixOperation | None = None

    @field_validator("severity", mode="before")
    @classmethod
    def _coerce_severity(cls, value: object) -> object:
        if value is None:
            return DEFAULT_SEVERITY.value
        if isinstance(value, Severity):
            return severity_value(value)
        return value

    @property
    def key(self) -> IssueKey:
        """Return the ``(from, to, message)`` identity used by the ignore list."""
        return (self.from_, self.to, self.message)

    def has_valid_range(self, doc_size: int) -> bool:
        """Return ``True`` when the range is non-empty and inside ``[0, doc_size]``."""
        return 0 <= self.from_ < self.to <= doc_size

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping using the public ``from``/``to`` names."""
        return self.model_dump(mode="json", by_alias=True)


class IgnoreEntry(BaseModel):
    """Dismissed issue identified by its range and message."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: int = Field(alias="from")
    to: int
    message: str

    @classmethod
    def from_issue(cls, issue: Issue) -> IgnoreEntry:
        """Build the ignore entry matching ``issue``."""
        return cls(from_=issue.from_, to=issue.to, message=issue.message)

    @property
    def key(self) -> IssueKey:
        """Return the ``(from, to, message)`` identity of the entry."""
        return (self.from_, self.to, self.message)


class OverlayRange(BaseModel):
    """Inline highlight covering an issue range."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: int = Field(alias="from")
    to: int
    style_class: str


class OverlayMarker(BaseModel):
    """Point marker rendered at the start of an issue."""

    model_config = ConfigDict(frozen=True)

    position: int
    style_class: str
    issue: Issue


class Overlay(BaseModel):
    """Complete set of visual markers derived from the visible issues.

    ``version`` is the overlay token; it changes whenever the overlay is rebuilt
    and stays identical while the overlay is reused.
    """

    model_config = ConfigDict(frozen=True)

    version: int
    ranges: tuple[OverlayRange, ...] = ()
    markers: tuple[OverlayMarker, ...] = ()

    @property
    def issues(self) -> list[Issue]:
        """Return the issues rendered by this overlay in overlay order."""
        return [marker.issue for marker in self.markers]


__all__ = [
    "IgnoreEntry",
    "Issue",
    "IssueKey",
    "Overlay",
    "OverlayMarker",
    "OverlayRange",
    "TextRange",
]
