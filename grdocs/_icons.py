"""
Console-safe icon map
=====================
Legacy consoles (cp1252) cannot render emoji or box glyphs.
The validator and CLI pick their markers from here so output
degrades to ASCII when stdout is not UTF-capable.
"""

from __future__ import annotations

import os
import sys


def _can_render_emoji() -> bool:
    """Return True if stdout can handle emoji characters."""
    if os.environ.get("PYTHONIOENCODING", "").lower().startswith("utf"):
        return True
    encoding = getattr(sys.stdout, "encoding", None) or ""
    return encoding.lower().replace("-", "") in ("utf8", "utf16", "utf32")


_EMOJI = _can_render_emoji()

ICON_OK     = "✅" if _EMOJI else "[OK]"
ICON_WARN   = "⚠️" if _EMOJI else "[!]"
ICON_BLOCK  = "\U0001f6ab" if _EMOJI else "[X]"
ICON_INFO   = "ℹ️" if _EMOJI else "[ii]"
ICON_CHECK  = "✓" if _EMOJI else "[v]"
ICON_CROSS  = "✗" if _EMOJI else "[x]"
ICON_SLIDE  = "\U0001f5bc️" if _EMOJI else "[S]"
ICON_DOC    = "\U0001f4c4" if _EMOJI else "[D]"

SEVERITY_ICONS: dict[str, str] = {
    "ERROR": ICON_BLOCK,
    "WARNING": ICON_WARN,
    "INFO": ICON_INFO,
}
