# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Protocols describing the host collaborators consumed by the engine."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Awaitable, Iterator, Mapping, Sequence
from typing import Any, Protocol, TypeAlias, runtime_checkable

JSONMapping: TypeAlias = Mapping[str, Any]
AnalysisTools: TypeAlias = Sequence[JSONMapping]


@runtime_checkable
class DocumentNode(Protocol):
    """Read-only view of a node in the host document tree."""

    @property
    @abstractmethod
    def type_name(self) -> str:
        """Return the node type name such as ``paragraph`` or ``text``."""
        raise NotImplementedError

    @property
    @abstractmethod
    def text(self) -> str | None:
        """Return the text of a text leaf, ``None`` for other nodes."""
        raise NotImplementedError

    @property
    @abstractmethod
    def attrs(self) -> Mapping[str, Any]:
        """Return node attributes."""
        raise NotImplementedError

    @property
    @abstractmethod
    def is_text(self) -> bool:
        """Return ``True`` for text leaves."""
        raise NotImplementedError

    @property
    @abstractmethod
    def is_block(self) -> bool:
        """Return ``True`` for block-level nodes."""
        raise NotImplementedError

    @property
    @abstractmethod
    def node_size(self) -> int:
        """Return the number of positions the node occupies in its parent."""
        raise NotImplementedError

    @property
    @abstractmethod
    def content_size(self) -> int:
        """Return the number of positions occupied by the node's children."""
        raise NotImplementedError

    @abstractmethod
    def descendants(self) -> Iterator[tuple[DocumentNode, int]]:
        """Yield ``(node, position)`` pairs depth-first in document order."""
        raise NotImplementedError


@runtime_checkable
class SupportsEditing(Protocol):
    """Host editor able to apply position based edits produced by fixes."""

    @abstractmethod
    def replace_range(self, from_: int, to: int, text: str, *, linter_fix: bool) -> None:
        """Replace ``[from_, to)`` with ``text``."""
        raise NotImplementedError

    @abstractmethod
    def set_node_attributes(self, position: int, attrs: Mapping[str, Any], *, linter_fix: bool) -> None:
        """Update attributes of the node starting at ``position``."""
        raise NotImplementedError


class AnalysisProvider(Protocol):
    """External analysis call used by natural-language scanners.

    Implementations may be coroutine functions or plain callables; the
    returned value should resemble ``{"issues": [...]}`` but any other shape is
    tolerated and yields no issues.
    """

    def __call__(self, system_prompt: str, document_text: str, tools: AnalysisTools) -> Awaitable[object] | object:
        """Analyse ``document_text`` under ``system_prompt``."""
        ...


__all__ = ["AnalysisProvider", "AnalysisTools", "DocumentNode", "JSONMapping", "SupportsEditing"]
