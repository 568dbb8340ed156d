"""Unit tests for eqcontract.entrypoints.cli.helpers.messages.

Glyphs follow the encoding of Click's stderr stream, which is looked up on
every call; status lines are bold and colored and go to stderr only.
"""

import io
import sys

import click
import pytest

from eqcontract.entrypoints.cli.helpers.messages import (
    CAUTION,
    ERROR,
    SUCCESS,
    _supports_character,
    error,
    glyph,
    success,
    warn,
)

SET_YELLOW = "\x1b[33m"
SET_GREEN = "\x1b[32m"
SET_RED = "\x1b[31m"
SET_BOLD = "\x1b[1m"
RESET = "\x1b[0m"


class FakeTTY(io.StringIO):
    """A TTY-like text stream with a chosen encoding."""

    def __init__(self, encoding: str):
        super().__init__()
        self._encoding = encoding

    @property
    def encoding(self) -> str:
        return self._encoding

    def isatty(self) -> bool:
        return True


@pytest.fixture
def stderr(monkeypatch):
    """Route Click's stderr probe and sys.stderr to one fake TTY."""

    def install(encoding: str) -> FakeTTY:
        stream = FakeTTY(encoding)
        monkeypatch.setattr(click, "get_text_stream", lambda name: stream)
        monkeypatch.setattr(sys, "stderr", stream, raising=False)
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("CLICOLOR", "1")
        return stream

    return install


@pytest.mark.parametrize(
    ("encoding", "expected"),
    [
        ("ascii", ["[!]", "[OK]", "[X]"]),
        ("utf-8", ["⚠️", "✅", "❌"]),
    ],
)
def test_glyph_follows_stream_encoding(stderr, encoding, expected):
    stderr(encoding)
    assert [glyph(CAUTION), glyph(SUCCESS), glyph(ERROR)] == expected


def test_encoding_is_probed_on_every_call(monkeypatch):
    encodings = iter(["ascii", "utf-8"])
    monkeypatch.setattr(click, "get_text_stream", lambda name: FakeTTY(next(encodings)))

    assert _supports_character("✅") is False
    assert _supports_character("✅") is True


@pytest.mark.parametrize(
    ("func", "marker", "color"),
    [
        (warn, CAUTION, SET_YELLOW),
        (success, SUCCESS, SET_GREEN),
        (error, ERROR, SET_RED),
    ],
)
def test_status_line_is_styled(stderr, func, marker, color):
    stream = stderr("utf-8")
    func("Point: all equality contract checks passed.")
    out = stream.getvalue()
    assert out.startswith(SET_BOLD) or out.startswith(color)
    assert f"{marker[0]}  Point: all equality" in out
    assert color in out
    assert RESET in out


def test_continuation_lines_are_plain(stderr):
    stream = stderr("ascii")
    error("Point: Reflexivity: broken\n  hint: define __eq__")
    first, second = stream.getvalue().splitlines()
    assert "[X]  Point: Reflexivity: broken" in first
    assert SET_RED in first
    assert second == "  hint: define __eq__"


def test_messages_leave_stdout_alone(monkeypatch, capsys):
    monkeypatch.setattr(click, "get_text_stream", lambda name: FakeTTY("utf-8"))
    warn("Point: skipped Subclass: Point is final")
    captured = capsys.readouterr()
    assert "Point is final" in captured.err
    assert captured.out == ""
