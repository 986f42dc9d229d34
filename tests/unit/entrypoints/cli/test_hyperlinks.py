"""Unit tests for the OSC-8 hyperlink helpers."""

import io
import sys

import pytest

from twotrack.entrypoints.cli.helpers import hyperlinks

URL = "https://www.rfc-editor.org/rfc/rfc7807"


class FakeTTY(io.StringIO):
    """A StringIO that reports itself as a terminal."""

    def isatty(self) -> bool:
        return True


@pytest.fixture(autouse=True)
def _clean_terminal_env(monkeypatch):
    """Start each test with no terminal-identifying variables set."""
    for name in ("TERM_PROGRAM", "WT_SESSION", "VTE_VERSION", "TERM"):
        monkeypatch.delenv(name, raising=False)


def test_non_tty_never_supports_osc8(monkeypatch):
    monkeypatch.setenv("TERM_PROGRAM", "vscode")
    assert hyperlinks.supports_osc8(io.StringIO()) is False


@pytest.mark.parametrize(
    ("name", "value", "expected"),
    [
        ("TERM_PROGRAM", "iTerm.app", True),
        ("TERM_PROGRAM", "unknown", False),
        ("WT_SESSION", "1", True),
        ("VTE_VERSION", "6003", True),
        ("TERM", "xterm-kitty", True),
        ("TERM", "xterm-256color", False),
    ],
)
def test_terminal_detection(monkeypatch, name, value, expected):
    monkeypatch.setenv(name, value)
    assert hyperlinks.supports_osc8(FakeTTY()) is expected


def test_plain_text_fallback(monkeypatch):
    monkeypatch.setattr(sys, "stdout", io.StringIO())
    assert hyperlinks.hyperlink(URL) == URL
    assert hyperlinks.hyperlink(URL, "RFC 7807") == f"RFC 7807 ({URL})"


def test_osc8_sequence(monkeypatch):
    monkeypatch.setattr(sys, "stdout", FakeTTY())
    monkeypatch.setenv("TERM_PROGRAM", "WezTerm")
    assert hyperlinks.hyperlink(URL, "RFC") == f"\x1b]8;;{URL}\x07RFC\x1b]8;;\x07"
