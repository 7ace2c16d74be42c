# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

import re
from collections.abc import Collection, Iterable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Final

from pydantic import BaseModel, ConfigDict, field_validator

from .errors import ConfigError


class Severity(str, Enum):
    """Built-in severity levels understood by every overlay renderer."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


DEFAULT_SEVERITY: Final[Severity] = Severity.WARNING
BUILTIN_SEVERITIES: Final[frozenset[str]] = frozenset(level.value for level in Severity)
_SEVERITY_NAME: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")


def severity_value(severity: Severity | str) -> str:
    """Return the plain string form of ``severity``.

    Args:
        severity: Enum member or free-form severity name.

    Returns:
        str: Severity name suitable for storage on an issue.
    """

    if isinstance(severity, Severity):
        return severity.value
    return str(severity)


class CustomSeverity(BaseModel):
    """User-registered severity rendered with a dedicated colour."""

    model_config = ConfigDict(frozen=True)

    name: str
    color: str

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        """Reject names that cannot be used as CSS class suffixes or shadow built-ins."""
        candidate = value.strip()
        if not _SEVERITY_NAME.match(candidate):
            raise ValueError(f"severity name '{value}' must match {_SEVERITY_NAME.pattern}")
        if candidate in BUILTIN_SEVERITIES:
            raise ValueError(f"severity name '{value}' shadows a built-in severity")
        return candidate

    @field_validator("color")
    @classmethod
    def _validate_color(cls, value: str) -> str:
        """Require a non-empty colour declaration without CSS block delimiters."""
        candidate = value.strip()
        if not candidate or any(char in candidate for char in "{};"):
            raise ValueError(f"invalid severity colour '{value}'")
        return candidate


def get_effective_severity(severity: Severity | str, registered: Collection[str]) -> str:
    """Return the severity used for styling an issue.

    Args:
        severity: Severity recorded on the issue.
        registered: Names of custom severities registered at configuration time.

    Returns:
        str: ``severity`` when it is built-in or registered, otherwise ``"warning"``.
    """

    value = severity_value(severity)
    if value in BUILTIN_SEVERITIES or value in registered:
        return value
    return DEFAULT_SEVERITY.value


def generate_custom_severity_css(custom: Iterable[CustomSeverity] | None) -> str:
    """Render CSS rules for the range and marker classes of each custom severity.

    Args:
        custom: Custom severities to render; ``None`` behaves like an empty list.

    Returns:
        str: Stylesheet text, empty when no custom severity is supplied.
    """

    if not custom:
        return ""
    rules: list[str] = []
    for severity in custom:
        rules.append(f".problem--{severity.name} {{ border-bottom: 2px solid {severity.color}; }}")
        rules.append(f".lint-icon--{severity.name} {{ background-color: {severity.color}; }}")
    return "\n".join(rules)


class SeverityRegistry:
    """Read-only mapping of custom severity names to colours."""

    def __init__(self, custom: Iterable[CustomSeverity] = ()) -> None:
        """Register ``custom`` severities once.

        Args:
            custom: Custom severities declared in the configuration.

        Raises:
            ConfigError: If two custom severities share a name.
        """

        ordered: dict[str, CustomSeverity] = {}
        for severity in custom:
            if severity.name in ordered:
                raise ConfigError(f"custom severity '{severity.name}' is declared more than once")
            ordered[severity.name] = severity
        self._custom: tuple[CustomSeverity, ...] = tuple(ordered.values())
        self._colors: Mapping[str, str] = MappingProxyType({item.name: item.color for item in self._custom})

    @property
    def colors(self) -> Mapping[str, str]:
        """Return the immutable ``name -> colour`` mapping."""
        return self._colors

    @property
    def custom(self) -> tuple[CustomSeverity, ...]:
        """Return registered custom severities in declaration order."""
        return self._custom

    def is_known(self, severity: Severity | str) -> bool:
        """Return ``True`` when ``severity`` is built-in or registered."""
        value = severity_value(severity)
        return value in BUILTIN_SEVERITIES or value in self._colors

    def resolve(self, severity: Severity | str) -> str:
        """Return the style severity for ``severity`` with ``warning`` fallback."""
        return get_effective_severity(severity, self._colors)

    def stylesheet(self) -> str:
        """Return CSS rules for every registered custom severity."""
        return generate_custom_severity_css(self._custom)

    def __contains__(self, severity: object) -> bool:
        return isinstance(severity, str) and self.is_known(severity)

    def __len__(self) -> int:
        return len(self._custom)


__all__ = [
    "BUILTIN_SEVERITIES",
    "CustomSeverity",
    "DEFAULT_SEVERITY",
    "Severity",
    "SeverityRegistry",
    "generate_custom_severity_css",
    "get_effective_severity",
    "severity_value",
]
