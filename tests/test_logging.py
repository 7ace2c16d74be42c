# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the console helpers."""

from __future__ import annotations

import logging

import pytest
from rich.logging import RichHandler

from inklint.logging import configure_logging, emoji, fail, info, ok, section, warn


def test_message_helpers_print_plain_text(capsys: pytest.CaptureFixture[str]) -> None:
    info("scanning", use_emoji=False, use_color=False)
    ok("done", use_emoji=False, use_color=False)
    warn("careful", use_emoji=False, use_color=False)
    fail("broken", use_emoji=False, use_color=False)
    section("Summary", use_color=False)

    out = capsys.readouterr().out
    for fragment in ("scanning", "done", "careful", "broken", "--- Summary ---"):
        assert fragment in out


def test_emoji_toggle() -> None:
    assert emoji("✅ ", True) == "✅ "
    assert emoji("✅ ", False) == ""


def test_configure_logging_installs_single_handler() -> None:
    logger = logging.getLogger("inklint")

    configure_logging(logging.INFO)
    configure_logging(logging.DEBUG)

    assert sum(isinstance(handler, RichHandler) for handler in logger.handlers) == 1
    assert logger.level == logging.DEBUG
    configure_logging(logging.WARNING)
