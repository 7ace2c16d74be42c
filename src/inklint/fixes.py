# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Fix operations attached to issues and the helpers that apply them.

A fix is plain data: it describes an edit in document coordinates and leaves
the actual mutation to the host editor, which receives it through the
:class:`~inklint.interfaces.SupportsEditing` protocol. Every edit issued from
here is flagged as a linter fix so hosts can tell it apart from user typing.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Annotated, Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from .interfaces import SupportsEditing
    from .models import Issue


class ReplaceText(BaseModel):
    """Replace the issue range with ``text``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["replace-text"] = "replace-text"
    text: str

    def apply(self, editor: SupportsEditing, issue: Issue) -> None:
        editor.replace_range(issue.from_, issue.to, self.text, linter_fix=True)


class DeleteText(BaseModel):
    """Remove the text covered by the issue range."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["delete-text"] = "delete-text"

    def apply(self, editor: SupportsEditing, issue: Issue) -> None:
        editor.replace_range(issue.from_, issue.to, "", linter_fix=True)


class SetNodeAttributes(BaseModel):
    """Update attributes of the node starting at ``position``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["set-node-attributes"] = "set-node-attributes"
    position: int = Field(ge=0)
    attrs: dict[str, Any] = Field(default_factory=dict)

    def apply(self, editor: SupportsEditing, issue: Issue) -> None:
        del issue
        editor.set_node_attributes(self.position, dict(self.attrs), linter_fix=True)


FixOperation: TypeAlias = Annotated[ReplaceText | DeleteText | SetNodeAttributes, Field(discriminator="kind")]


def apply_fix(editor: SupportsEditing, issue: Issue) -> bool:
    """Apply the fix carried by ``issue`` through ``editor``.

    Args:
        editor: Host editor receiving the edit.
        issue: Issue whose fix should be applied.

    Returns:
        bool: ``True`` when a fix was dispatched, ``False`` when the issue has none.
    """

    if issue.fix is None:
        return False
    issue.fix.apply(editor, issue)
    return True


def delete_issue_text(editor: SupportsEditing, issue: Issue) -> None:
    """Delete the text covered by ``issue`` regardless of its fix."""

    DeleteText().apply(editor, issue)


def replace_issue_text(editor: SupportsEditing, issue: Issue, text: str) -> None:
    """Replace the text covered by ``issue`` with caller supplied ``text``."""

    ReplaceText(text=text).apply(editor, issue)


def describe_fix(fix: ReplaceText | DeleteText | SetNodeAttributes | None) -> str | None:
    """Return a short human readable label for ``fix`` used by reporters."""

    if fix is None:
        return None
    if isinstance(fix, ReplaceText):
        return f"replace with {fix.text!r}"
    if isinstance(fix, DeleteText):
        return "delete text"
    attrs: Mapping[str, Any] = fix.attrs
    rendered = ", ".join(f"{key}={value!r}" for key, value in sorted(attrs.items()))
    return f"set {rendered}" if rendered else "reset node attributes"


__all__ = [
    "DeleteText",
    "FixOperation",
    "ReplaceText",
    "SetNodeAttributes",
    "apply_fix",
    "delete_issue_text",
    "describe_fix",
    "replace_issue_text",
]
