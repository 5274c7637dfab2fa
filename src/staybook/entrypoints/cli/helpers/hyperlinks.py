"""OSC-8 hyperlink utilities for the STAYBOOK CLI."""

import os
import sys
from typing import TextIO

OSC8_TERMINALS = {"apple_terminal", "vscode", "iterm.app", "wezterm", "kitty"}


def supports_osc8(stream: TextIO | None = None) -> bool:
    """Heuristically detect whether the target stream supports OSC-8 hyperlinks.

    Returns ``False`` when the stream is not a TTY; otherwise checks a small
    allowlist of terminal identifiers.
    """
    stream = stream or sys.stdout
    if not getattr(stream, "isatty", lambda: False)():
        return False
    terminal_program = (os.getenv("TERM_PROGRAM") or "").lower()
    return bool(
        terminal_program in OSC8_TERMINALS
        or os.getenv("WT_SESSION")  # Windows Terminal
        or os.getenv("VTE_VERSION")  # GNOME Terminal, Tilix, etc.
        or os.getenv("TERM", "").startswith(("alacritty", "konsole"))
    )


def hyperlink(url: str, text: str | None = None) -> str:
    """Return ``text`` (default: the URL) as a clickable link when supported."""
    label = text or url
    if not supports_osc8():
        return label if text is None else f"{text} ({url})"
    return f"\x1b]8;;{url}\x07{label}\x1b]8;;\x07"  # OSC 8 ; ; URL BEL
