"""Reference kanji groups (jouyou, jinmeiyou) and how they reach the store.

Group names are a closed set; adding a group means adding a page source for
it, not passing a new string around.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Protocol, Sequence

from .errors import SourceUnavailable
from .extract import extract_from_markup

if TYPE_CHECKING:
    from .store import KnowledgeStore

logger = logging.getLogger(__name__)

JOUYOU = "jouyou"
JINMEIYOU = "jinmeiyou"

# Report order
GROUPS = (JOUYOU, JINMEIYOU)


class PageSource(Protocol):
    def fetch_markup(self, identifier: str) -> Sequence[str]:
        ...


def check_group(group: str) -> str:
    """Return ``group`` unchanged if it is a known reference group, else raise ValueError."""
    if group not in GROUPS:
        raise ValueError(f"Unknown kanji group: {group!r} (expected one of {', '.join(GROUPS)})")
    return group


def load_group(source: PageSource, group: str) -> List[str]:
    """Fetch a reference group and return its distinct kanji in page order.

    Raises:
        SourceUnavailable: If the fetch fails or yields no kanji at all. An
            empty group is never seeded, since every character in it would
            then look unknown for good.
    """
    check_group(group)
    markup = source.fetch_markup(group)
    chars = list(dict.fromkeys(extract_from_markup(markup)))
    if not chars:
        raise SourceUnavailable(f"No kanji found for group {group}")
    logger.info("Loaded %d kanji for group %s", len(chars), group)
    return chars


def seed_if_absent(store: "KnowledgeStore", group: str, characters: Sequence[str]) -> int:
    """Seed ``group`` into ``store``. Only called when the store was new (or on explicit reseed)."""
    return store.seed_group(characters, group)
