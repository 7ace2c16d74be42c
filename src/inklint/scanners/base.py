# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Scanner contract shared by built-in and user supplied scanners.

A scanner is constructed with one document snapshot, scanned once and then
asked for its results. Synchronous scanners return ``self`` from
:meth:`Scanner.scan`; asynchronous scanners implement ``scan`` as a coroutine
resolving to ``self``. ``record`` is the only way a scanner produces issues.
"""

from __future__ import annotations

import inspect
from typing import ClassVar, Self

from ..errors import InvalidScannerError
from ..fixes import DeleteText, ReplaceText, SetNodeAttributes
from ..interfaces import DocumentNode
from ..models import Issue
from ..severity import DEFAULT_SEVERITY, Severity, severity_value

ScannerClass = type["Scanner"]


class Scanner:
    """Synchronous scanner bound to a single document snapshot."""

    name: ClassVar[str | None] = None

    def __init__(self, doc: DocumentNode) -> None:
        self.doc = doc
        self._results: list[Issue] = []

    def record(
        self,
        message: str,
        from_: int,
        to: int,
        severity: Severity | str = DEFAULT_SEVERITY,
        fix: ReplaceText | DeleteText | SetNodeAttributes | None = None,
    ) -> None:
        """Append an issue to the scanner results.

        Args:
            message: Human readable description of the problem.
            from_: Start position of the issue range.
            to: End position of the issue range.
            severity: Built-in or custom severity name, ``warning`` by default.
            fix: Optional fix operation the host may apply.
        """

        self._results.append(
            Issue(message=message, from_=from_, to=to, severity=severity_value(severity), fix=fix),
        )

    def scan(self) -> Self:
        """Inspect the document; subclasses override this."""
        return self

    def get_results(self) -> list[Issue]:
        """Return recorded issues in recording order."""
        return list(self._results)


class AsyncScanner(Scanner):
    """Scanner whose ``scan`` suspends, typically on an external call."""

    async def scan(self) -> Self:  # type: ignore[override]
        return self


def scanner_name(scanner: object) -> str:
    """Return a display name for a scanner class or instance."""

    target = scanner if isinstance(scanner, type) else type(scanner)
    explicit = getattr(target, "name", None)
    if isinstance(explicit, str) and explicit:
        return explicit
    return getattr(target, "__qualname__", None) or repr(scanner)


def is_async_scanner(scanner: type) -> bool:
    """Return ``True`` when ``scanner.scan`` is a coroutine function."""

    return inspect.iscoroutinefunction(getattr(scanner, "scan", None))


def validate_scanner(candidate: object) -> type:
    """Ensure ``candidate`` satisfies the scanner contract.

    Args:
        candidate: Value supplied where a scanner class is expected.

    Returns:
        type: ``candidate`` itself when it is a valid scanner class.

    Raises:
        InvalidScannerError: If ``candidate`` is not a class or lacks callable
            ``scan``/``get_results`` members.
    """

    if not inspect.isclass(candidate):
        raise InvalidScannerError(
            f"scanner must be a class constructed from a document, got {type(candidate).__name__} {candidate!r}",
        )
    missing = [member for member in ("scan", "get_results") if not callable(getattr(candidate, member, None))]
    if missing:
        raise InvalidScannerError(
            f"scanner {candidate.__qualname__} does not implement {', '.join(missing)}",
        )
    return candidate


def is_scanner_class(candidate: object) -> bool:
    """Return ``True`` when ``candidate`` satisfies the scanner contract."""

    try:
        validate_scanner(candidate)
    except InvalidScannerError:
        return False
    return True


__all__ = [
    "AsyncScanner",
    "Scanner",
    "ScannerClass",
    "is_async_scanner",
    "is_scanner_class",
    "scanner_name",
    "validate_scanner",
]
