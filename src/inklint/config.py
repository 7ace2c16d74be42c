# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the annotation engine."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import ConfigError, InvalidScannerError
from .scanners.base import is_async_scanner, scanner_name, validate_scanner
from .severity import CustomSeverity, SeverityRegistry


class RunMode(str, Enum):
    """Enumerate when a configured scanner executes."""

    AUTO = "auto"
    ON_DEMAND = "onDemand"

    @classmethod
    def coerce(cls, raw: object) -> RunMode:
        """Return the run mode matching ``raw``; ``None`` means :attr:`AUTO`.

        Raises:
            ValueError: If ``raw`` does not name a run mode.
        """

        if raw is None:
            return cls.AUTO
        if isinstance(raw, cls):
            return raw
        token = str(raw).strip().replace("-", "").replace("_", "").lower()
        for member in cls:
            if member.value.lower() == token:
                return member
        raise ValueError(f"unknown run mode '{raw}'")


_RUN_MODE_KEYS: Final[tuple[str, ...]] = ("run_mode", "runMode", "mode")
_SCANNER_KEYS: Final[tuple[str, ...]] = ("scanner", "plugin")


class ScannerConfig(BaseModel):
    """Explicit scanner entry carrying a run mode."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    scanner: Any = Field(validation_alias=AliasChoices(*_SCANNER_KEYS))
    run_mode: RunMode = Field(default=RunMode.AUTO, validation_alias=AliasChoices(*_RUN_MODE_KEYS))

    @field_validator("scanner")
    @classmethod
    def _validate_scanner(cls, value: Any) -> Any:
        try:
            return validate_scanner(value)
        except InvalidScannerError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("run_mode", mode="before")
    @classmethod
    def _coerce_run_mode(cls, value: object) -> RunMode:
        return RunMode.coerce(value)


@dataclass(frozen=True, slots=True)
class ScannerDescriptor:
    """Normalised scanner entry owned by the orchestrator."""

    scanner: type
    run_mode: RunMode = RunMode.AUTO
    is_async: bool = False

    @property
    def name(self) -> str:
        return scanner_name(self.scanner)

    @property
    def is_auto(self) -> bool:
        return self.run_mode is RunMode.AUTO

    @classmethod
    def for_scanner(cls, scanner: object, run_mode: RunMode | str | None = None) -> ScannerDescriptor:
        """Validate ``scanner`` and inspect its capabilities once.

        Raises:
            ConfigError: If ``scanner`` violates the scanner contract or the run
                mode is unknown.
        """

        try:
            scanner_cls = validate_scanner(scanner)
            mode = RunMode.coerce(run_mode)
        except (InvalidScannerError, ValueError) as exc:
            raise ConfigError(str(exc)) from exc
        return cls(scanner=scanner_cls, run_mode=mode, is_async=is_async_scanner(scanner_cls))


def _normalize_entry(entry: object) -> ScannerDescriptor:
    if isinstance(entry, ScannerDescriptor):
        return entry
    if isinstance(entry, ScannerConfig):
        return ScannerDescriptor.for_scanner(entry.scanner, entry.run_mode)
    if isinstance(entry, Mapping):
        scanner = next((entry[key] for key in _SCANNER_KEYS if key in entry), None)
        if scanner is None:
            raise ConfigError(f"scanner entry {dict(entry)!r} is missing a 'scanner' key")
        run_mode = next((entry[key] for key in _RUN_MODE_KEYS if key in entry), None)
        return ScannerDescriptor.for_scanner(scanner, run_mode)
    return ScannerDescriptor.for_scanner(entry)


def normalize_scanners(entries: Iterable[object]) -> tuple[ScannerDescriptor, ...]:
    """Normalise bare scanner classes and explicit entries into descriptors.

    Args:
        entries: Scanner classes, :class:`ScannerConfig` instances, mappings with
            ``scanner``/``run_mode`` keys, or existing descriptors.

    Returns:
        tuple[ScannerDescriptor, ...]: Descriptors in configuration order.

    Raises:
        ConfigError: If any entry is invalid.
    """

    return tuple(_normalize_entry(entry) for entry in entries)


class LinterConfig(BaseModel):
    """Settings read once when the engine is created."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, populate_by_name=True)

    scanners: tuple[Any, ...] = ()
    auto_run: bool = Field(default=True, validation_alias=AliasChoices("auto_run", "autoRun", "autoLint"))
    custom_severities: tuple[CustomSeverity, ...] = Field(
        default=(),
        validation_alias=AliasChoices("custom_severities", "customSeverities"),
    )

    @model_validator(mode="after")
    def _unique_severity_names(self) -> LinterConfig:
        names = [severity.name for severity in self.custom_severities]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate custom severities: {', '.join(duplicates)}")
        return self

    def descriptors(self) -> tuple[ScannerDescriptor, ...]:
        """Return normalised scanner descriptors.

        Raises:
            ConfigError: If a configured scanner entry is invalid.
        """

        return normalize_scanners(self.scanners)

    def severity_registry(self) -> SeverityRegistry:
        return SeverityRegistry(self.custom_severities)


__all__ = [
    "LinterConfig",
    "RunMode",
    "ScannerConfig",
    "ScannerDescriptor",
    "normalize_scanners",
]
