# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared across the inklint package."""

from __future__ import annotations


class InklintError(Exception):
    """Base class for errors raised deliberately by inklint."""


class ConfigError(InklintError):
    """Raised when configuration input is invalid."""


class DocumentError(InklintError, ValueError):
    """Raised when a serialized document cannot be converted into a node tree."""


class InvalidScannerError(InklintError, TypeError):
    """Raised when a value does not satisfy the scanner contract."""


class ScannerRunError(InklintError):
    """Raised when a scanner run explicitly requested by the user fails."""

    def __init__(self, scanner: str, error: BaseException) -> None:
        super().__init__(f"scanner {scanner} failed: {error}")
        self.scanner = scanner
        self.error = error


__all__ = ["ConfigError", "DocumentError", "InklintError", "InvalidScannerError", "ScannerRunError"]
