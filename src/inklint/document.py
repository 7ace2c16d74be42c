# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reference implementation of the host document tree.

Positions follow the ProseMirror convention: a text leaf occupies one
position per character, an atomic leaf (hard break, image, ...) occupies a
single position, and every other node occupies its content plus an opening
and a closing token. Children of the root start at position ``0``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Final

from .errors import DocumentError

INLINE_TYPES: Final[frozenset[str]] = frozenset(
    {"text", "hard_break", "hardBreak", "image", "mention", "emoji"},
)
LEAF_TYPES: Final[frozenset[str]] = frozenset(
    {"hard_break", "hardBreak", "image", "mention", "emoji", "horizontal_rule", "horizontalRule"},
)
TEXT_TYPE: Final[str] = "text"
_EMPTY_ATTRS: Final[Mapping[str, Any]] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Node:
    """Immutable document node."""

    type_name: str
    content: tuple[Node, ...] = ()
    text: str | None = None
    attrs: Mapping[str, Any] = field(default_factory=lambda: _EMPTY_ATTRS)
    marks: tuple[str, ...] = ()

    @property
    def is_text(self) -> bool:
        return self.type_name == TEXT_TYPE

    @property
    def is_inline(self) -> bool:
        return self.type_name in INLINE_TYPES

    @property
    def is_block(self) -> bool:
        return not self.is_inline

    @property
    def is_leaf(self) -> bool:
        return self.is_text or self.type_name in LEAF_TYPES

    @property
    def content_size(self) -> int:
        return sum(child.node_size for child in self.content)

    @property
    def node_size(self) -> int:
        if self.is_text:
            return len(self.text or "")
        if self.is_leaf:
            return 1
        return self.content_size + 2

    @property
    def text_content(self) -> str:
        """Return the concatenated text of every text leaf below this node."""
        if self.is_text:
            return self.text or ""
        return "".join(child.text_content for child in self.content)

    def descendants(self) -> Iterator[tuple[Node, int]]:
        """Yield every descendant with its absolute position, parents first."""
        yield from _walk(self.content, 0)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> Node:
        """Build a node tree from ProseMirror-style JSON.

        Args:
            data: Mapping with ``type`` and optional ``content``, ``text``,
                ``attrs`` and ``marks`` keys.

        Returns:
            Node: Root of the converted tree.

        Raises:
            DocumentError: If the payload does not describe a valid node.
        """

        if not isinstance(data, Mapping):
            raise DocumentError(f"node must be a mapping, got {type(data).__name__}")
        type_name = data.get("type")
        if not isinstance(type_name, str) or not type_name:
            raise DocumentError("node is missing a 'type' string")
        raw_attrs = data.get("attrs") or {}
        if not isinstance(raw_attrs, Mapping):
            raise DocumentError(f"'{type_name}' attrs must be a mapping")
        marks = tuple(_mark_name(mark) for mark in data.get("marks") or ())
        if type_name == TEXT_TYPE:
            value = data.get("text")
            if not isinstance(value, str) or not value:
                raise DocumentError("text nodes require a non-empty 'text' string")
            return cls(TEXT_TYPE, text=value, attrs=MappingProxyType(dict(raw_attrs)), marks=marks)
        raw_content = data.get("content") or ()
        if not isinstance(raw_content, (list, tuple)):
            raise DocumentError(f"'{type_name}' content must be a list")
        return cls(
            type_name,
            content=tuple(cls.from_json(child) for child in raw_content),
            attrs=MappingProxyType(dict(raw_attrs)),
            marks=marks,
        )


def _walk(children: Iterable[Node], start: int) -> Iterator[tuple[Node, int]]:
    position = start
    for child in children:
        yield child, position
        if child.content:
            yield from _walk(child.content, position + 1)
        position += child.node_size


def _mark_name(mark: object) -> str:
    if isinstance(mark, str):
        return mark
    if isinstance(mark, Mapping) and isinstance(mark.get("type"), str):
        return str(mark["type"])
    raise DocumentError(f"invalid mark {mark!r}")


def _inline(parts: Iterable[Node | str]) -> tuple[Node, ...]:
    return tuple(text(part) if isinstance(part, str) else part for part in parts if part != "")


def text(value: str, *marks: str) -> Node:
    """Return a text leaf."""
    if not value:
        raise DocumentError("text nodes require a non-empty string")
    return Node(TEXT_TYPE, text=value, marks=marks)


def node(type_name: str, *children: Node | str, **attrs: Any) -> Node:
    """Return a node of ``type_name``; string children become text leaves."""
    return Node(type_name, content=_inline(children), attrs=MappingProxyType(attrs) if attrs else _EMPTY_ATTRS)


def paragraph(*children: Node | str) -> Node:
    return node("paragraph", *children)


def heading(level: int, *children: Node | str) -> Node:
    return node("heading", *children, level=level)


def hard_break() -> Node:
    return Node("hard_break")


def doc(*children: Node) -> Node:
    return Node("doc", content=tuple(children))


__all__ = [
    "INLINE_TYPES",
    "LEAF_TYPES",
    "Node",
    "doc",
    "hard_break",
    "heading",
    "node",
    "paragraph",
    "text",
]
