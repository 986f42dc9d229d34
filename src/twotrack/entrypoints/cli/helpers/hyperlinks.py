"""OSC-8 hyperlink utilities for the twotrack CLI.

Renders URLs as clickable terminal links where the terminal is known to
support them, and as plain text everywhere else.
"""

import os
import sys
from typing import TextIO

_OSC8_PROGRAMS = frozenset({"apple_terminal", "vscode", "iterm.app", "wezterm", "kitty"})
_OSC8_TERM_PREFIXES = ("alacritty", "konsole", "xterm-kitty")


def supports_osc8(stream: TextIO | None = None) -> bool:
    """Best-effort guess at whether `stream` renders OSC-8 hyperlinks.

    Args:
        stream: Text stream to probe; defaults to ``sys.stdout``.

    Returns:
        bool: ``False`` for anything that is not a TTY, otherwise whether the
        terminal identifies itself as one known to support OSC-8.
    """
    stream = stream or sys.stdout
    isatty = getattr(stream, "isatty", None)
    if isatty is None or not isatty():
        return False
    if (os.getenv("TERM_PROGRAM") or "").lower() in _OSC8_PROGRAMS:
        return True
    if os.getenv("WT_SESSION") or os.getenv("VTE_VERSION"):
        return True
    return os.getenv("TERM", "").startswith(_OSC8_TERM_PREFIXES)


def hyperlink(url: str, label: str | None = None) -> str:
    """Return `label` (default: the URL) linked to `url` when supported.

    Uses BEL (``\\x07``) as the OSC-8 terminator for broad terminal support.
    """
    text = label or url
    if not supports_osc8():
        return text if label is None else f"{label} ({url})"
    return f"\x1b]8;;{url}\x07{text}\x1b]8;;\x07"
