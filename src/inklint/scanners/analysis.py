# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Base class for scanners backed by an external analysis provider.

Provider output is untrusted: it may be malformed, reference text that does
not exist, or fail outright. Parsing therefore validates every entry on its
own and drops anything it cannot anchor to the document.
"""

from __future__ import annotations

import inspect
import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..fixes import ReplaceText
from ..interfaces import AnalysisProvider, AnalysisTools, DocumentNode
from ..severity import DEFAULT_SEVERITY, Severity, severity_value
from ..text import PositionMap, extract_text
from .base import AsyncScanner

LOGGER = logging.getLogger(__name__)


class AnalysisFinding(BaseModel):
    """One violation reported by the analysis provider."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    message: str
    text_match: str = Field(alias="textMatch")
    suggestion: str | None = None
    occurrence_index: int = Field(default=0, alias="occurrenceIndex", ge=0)

    @field_validator("message", "text_match")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value:
            raise ValueError("value must be a non-empty string")
        return value

    @field_validator("occurrence_index", mode="before")
    @classmethod
    def _default_occurrence(cls, value: object) -> object:
        if value is None:
            return 0
        if isinstance(value, bool):
            raise ValueError("occurrenceIndex must be a number")
        return value


@dataclass(frozen=True, slots=True)
class AnalysisConfig:
    """Settings shared by every instance of an analysis scanner class."""

    provider: AnalysisProvider
    system_prompt: str
    severity: str = DEFAULT_SEVERITY.value
    tools: AnalysisTools = ()


def coerce_findings(response: object) -> list[AnalysisFinding]:
    """Extract valid findings from a provider ``response``.

    Args:
        response: Provider output; a mapping with an ``issues`` list or a JSON
            string encoding one.

    Returns:
        list[AnalysisFinding]: Valid findings in reported order. Malformed
        top-level shapes yield an empty list; malformed entries are skipped.
    """

    if isinstance(response, (str, bytes)):
        try:
            response = json.loads(response)
        except ValueError:
            LOGGER.debug("analysis response is not valid JSON")
            return []
    if not isinstance(response, Mapping):
        LOGGER.debug("analysis response is not an object: %r", type(response).__name__)
        return []
    entries = response.get("issues")
    if not isinstance(entries, Sequence) or isinstance(entries, (str, bytes)):
        LOGGER.debug("analysis response has no issues array")
        return []
    findings: list[AnalysisFinding] = []
    for entry in entries:
        try:
            findings.append(AnalysisFinding.model_validate(entry))
        except ValidationError as exc:
            LOGGER.debug("skipping malformed analysis finding %r: %s", entry, exc.errors(include_url=False))
    return findings


class AnalysisScanner(AsyncScanner):
    """Asynchronous scanner that delegates detection to an analysis provider."""

    config: AnalysisConfig

    def __init__(self, doc: DocumentNode, config: AnalysisConfig | None = None) -> None:
        super().__init__(doc)
        if config is not None:
            self.config = config
        elif getattr(type(self), "config", None) is None:
            raise TypeError(f"{type(self).__qualname__} requires an AnalysisConfig")

    def extract_text_with_positions(self) -> PositionMap:
        return extract_text(self.doc)

    async def request_analysis(self, document_text: str) -> object:
        """Call the provider and await its answer when it returns an awaitable."""
        result = self.config.provider(self.config.system_prompt, document_text, self.config.tools)
        if inspect.isawaitable(result):
            result = await result
        return result

    def parse_response(self, response: object, position_map: PositionMap) -> int:
        """Record an issue for every finding that maps onto the document.

        Args:
            response: Raw provider response.
            position_map: Position map of the scanned text.

        Returns:
            int: Number of issues recorded.
        """

        recorded = 0
        for finding in coerce_findings(response):
            position = position_map.find_text_position(finding.text_match, finding.occurrence_index)
            if position is None:
                LOGGER.debug(
                    "could not find %r occurrence %d in document",
                    finding.text_match,
                    finding.occurrence_index,
                )
                continue
            fix = ReplaceText(text=finding.suggestion) if finding.suggestion else None
            self.record(finding.message, position.from_, position.to, self.config.severity, fix)
            recorded += 1
        return recorded

    async def scan(self) -> Self:
        position_map = self.extract_text_with_positions()
        if not position_map.text.strip():
            return self
        try:
            response = await self.request_analysis(position_map.text)
        except Exception as exc:  # noqa: BLE001 - provider faults resolve to zero issues
            LOGGER.debug("%s analysis failed: %s", type(self).__qualname__, exc, exc_info=True)
            return self
        self.parse_response(response, position_map)
        return self


def build_analysis_config(
    provider: AnalysisProvider,
    system_prompt: str,
    *,
    severity: Severity | str = DEFAULT_SEVERITY,
    tools: AnalysisTools = (),
) -> AnalysisConfig:
    """Return an :class:`AnalysisConfig` with a validated provider."""

    if not callable(provider):
        raise TypeError("analysis provider must be callable")
    return AnalysisConfig(provider=provider, system_prompt=system_prompt, severity=severity_value(severity), tools=tools)


__all__ = [
    "AnalysisConfig",
    "AnalysisFinding",
    "AnalysisScanner",
    "build_analysis_config",
    "coerce_findings",
]
