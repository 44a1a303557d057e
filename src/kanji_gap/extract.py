"""Pull classified characters out of card fields and reference markup."""

from __future__ import annotations

from typing import Iterable, List, Optional, Set

from .classify import is_target_script


def extract_known(raw_fields: Iterable[Optional[str]]) -> Set[str]:
    """Collect the distinct kanji appearing anywhere in ``raw_fields``.

    Frequency is discarded; the store only records presence.
    """
    found: Set[str] = set()
    for text in raw_fields:
        if not text:
            continue
        found.update(ch for ch in str(text) if is_target_script(ch))
    return found


def extract_from_markup(raw_markup: Iterable[Optional[str]]) -> List[str]:
    """Return kanji from markup fragments in the order they appear.

    Duplicates are kept here; they collapse when the characters are stored.
    """
    chars: List[str] = []
    for fragment in raw_markup:
        if not fragment:
            continue
        chars.extend(ch for ch in str(fragment) if is_target_script(ch))
    return chars
