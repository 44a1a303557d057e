"""SQLite-backed record of every kanji seen so far.

One row per character in table ``kanji``:

    id INTEGER PRIMARY KEY, character TEXT NOT NULL UNIQUE,
    grp TEXT (reference group or NULL), known INTEGER NOT NULL DEFAULT 0

Rows are created either by reference seeding (group set, known=0) or by an
archive sync (group NULL, known=1); whichever comes second merges into the
existing row. Rows are never deleted.
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from .catalog import check_group
from .classify import is_target_script
from .errors import SeedBatchFailure, StoreUnavailable

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_PATH = "kanjidatabase"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kanji (
    id INTEGER PRIMARY KEY,
    character TEXT NOT NULL UNIQUE,
    grp TEXT,
    known INTEGER NOT NULL DEFAULT 0
)
"""

# Keep an existing group; fill it only when the row has none.
_SEED_SQL = """
INSERT INTO kanji (character, grp, known) VALUES (?, ?, 0)
ON CONFLICT(character) DO UPDATE SET grp = COALESCE(kanji.grp, excluded.grp)
"""

_MARK_KNOWN_SQL = """
INSERT INTO kanji (character, grp, known) VALUES (?, NULL, 1)
ON CONFLICT(character) DO UPDATE SET known = 1
"""


@dataclass
class KanjiRecord:
    character: str
    group: Optional[str]
    known: bool


def _check_character(ch: object) -> str:
    if not is_target_script(ch):
        raise ValueError(f"Not a CJK unified ideograph: {ch!r}")
    return ch  # type: ignore[return-value]


def _distinct(characters: Iterable[str]) -> List[str]:
    # Order-preserving dedup so ids follow first appearance.
    return list(dict.fromkeys(characters))


class KnowledgeStore:
    """Persistent, deduplicated kanji knowledge table.

    Args:
        path: SQLite database file. ``":memory:"`` gives a throwaway store.
        create: Create the database and kanji table when missing. With False,
            the store must already exist and StoreUnavailable is raised if not.
    """

    def __init__(self, path: str | Path = DEFAULT_DATABASE_PATH, create: bool = True) -> None:
        self.path = str(path)
        if not create:
            self._conn = self._open_existing()
            return
        try:
            if self.path != ":memory:":
                Path(self.path).parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self.path)
        except (OSError, sqlite3.Error) as e:
            raise StoreUnavailable(f"Cannot open knowledge store {self.path}: {e}") from e
        try:
            self.ensure_schema()
        except StoreUnavailable:
            self._conn.close()
            raise

    def _open_existing(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(Path(self.path).resolve().as_uri() + "?mode=ro", uri=True)
        except sqlite3.Error as e:
            raise StoreUnavailable(f"Cannot open knowledge store {self.path}: {e}") from e
        try:
            row = conn.execute(
                "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'kanji'"
            ).fetchone()
        except sqlite3.Error as e:
            conn.close()
            raise StoreUnavailable(f"Not a knowledge store: {self.path}: {e}") from e
        if row is None:
            conn.close()
            raise StoreUnavailable(f"No kanji table in {self.path}; run 'sync' first")
        return conn

    def __enter__(self) -> "KnowledgeStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._conn.close()

    def ensure_schema(self) -> None:
        """Create the kanji table if it does not exist yet. Safe to call repeatedly."""
        try:
            with self._conn:
                self._conn.execute(_SCHEMA)
        except sqlite3.Error as e:
            raise StoreUnavailable(f"Cannot initialize knowledge store {self.path}: {e}") from e

    def seed_group(self, characters: Iterable[str], group: str) -> int:
        """Add reference group membership for ``characters`` in one transaction.

        New characters are inserted with ``known`` unset. A character that
        already has a group keeps it (first list wins); one recorded without
        a group by an archive sync gets ``group``. ``known`` is never changed.

        Any failure rolls back the whole batch and is raised as
        SeedBatchFailure.

        Returns:
            Number of distinct characters processed
        """
        check_group(group)
        batch = _distinct(characters)
        try:
            with self._conn:
                for ch in batch:
                    self._conn.execute(_SEED_SQL, (_check_character(ch), group))
        except Exception as e:
            raise SeedBatchFailure(f"Seeding {group} failed, batch rolled back: {e}") from e
        logger.info("Seeded %d characters into group %s", len(batch), group)
        return len(batch)

    def mark_known_from_archive(self, characters: Iterable[str]) -> bool:
        """Record ``characters`` as known, creating ungrouped rows where needed.

        Known status is cumulative: nothing in this module ever resets it.

        Returns:
            True if the store already held records before this call
        """
        batch = _distinct(characters)
        with self._conn:
            existed = bool(
                self._conn.execute("SELECT EXISTS (SELECT 1 FROM kanji)").fetchone()[0]
            )
            for ch in batch:
                self._conn.execute(_MARK_KNOWN_SQL, (_check_character(ch),))
        logger.info(
            "Marked %d characters known (store %s)",
            len(batch),
            "existed" if existed else "was new",
        )
        return existed

    def unknown_in_group(self, group: str) -> List[str]:
        """Characters in ``group`` not yet seen in the archive, in insertion order."""
        check_group(group)
        rows = self._conn.execute(
            "SELECT character FROM kanji WHERE grp = ? AND known = 0 ORDER BY id",
            (group,),
        )
        return [row[0] for row in rows]

    def get(self, character: str) -> Optional[KanjiRecord]:
        row = self._conn.execute(
            "SELECT character, grp, known FROM kanji WHERE character = ?",
            (character,),
        ).fetchone()
        if row is None:
            return None
        return KanjiRecord(character=row[0], group=row[1], known=bool(row[2]))

    def count(self) -> int:
        return self._conn.execute("SELECT COUNT(*) FROM kanji").fetchone()[0]
