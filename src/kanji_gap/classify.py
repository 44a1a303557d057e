"""Script classification for kanji candidates.

Only the CJK Unified Ideographs block (U+4E00..U+9FFF) counts. Extension
blocks and compatibility ideographs are deliberately left out, and no
Unicode normalization is applied.
"""

from __future__ import annotations

CJK_UNIFIED_START = 0x4E00
CJK_UNIFIED_END = 0x9FFF


def is_target_script(ch: object) -> bool:
    """Return True if ``ch`` is a single code point in the CJK Unified Ideographs block."""
    if not isinstance(ch, str) or len(ch) != 1:
        return False
    return CJK_UNIFIED_START <= ord(ch) <= CJK_UNIFIED_END
