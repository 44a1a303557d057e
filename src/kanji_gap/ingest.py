"""Anki collection ingest and CSV writing.

The archive can be a ``.colpkg``/``.apkg`` export (a zip holding the
collection database) or the collection database file itself. Only the
sort field (``sfld``) of each note is read, which for typical Japanese decks
is the card front.
"""

from __future__ import annotations

import csv
import logging
import sqlite3
import tempfile
import zipfile
from contextlib import closing
from pathlib import Path
from typing import Iterable, List

from .errors import ArchiveCorrupt, ArchiveNotFound

logger = logging.getLogger(__name__)

# Legacy-format collection members, newest first.
COLLECTION_MEMBERS = ("collection.anki21", "collection.anki2")
# zstd-compressed, not handled. Exports carrying it also ship a placeholder
# collection.anki2 holding a single "please update" note.
MODERN_COLLECTION_MEMBER = "collection.anki21b"


class AnkiArchive:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def read_card_fronts(self) -> List[str]:
        """Return the sort field of every note in the collection.

        Raises:
            ArchiveNotFound: If the path does not exist
            ArchiveCorrupt: If the file is not a readable Anki collection
        """
        if not self.path.exists():
            raise ArchiveNotFound(f"Anki archive not found: {self.path}")
        if zipfile.is_zipfile(self.path):
            return self._read_package()
        return _read_notes(self.path)

    def _read_package(self) -> List[str]:
        try:
            with zipfile.ZipFile(self.path) as zf:
                names = set(zf.namelist())
                if MODERN_COLLECTION_MEMBER in names and COLLECTION_MEMBERS[0] not in names:
                    raise ArchiveCorrupt(
                        f"{self.path} only holds a {MODERN_COLLECTION_MEMBER} collection "
                        "(re-export with 'Support older Anki versions' enabled)"
                    )
                member = next((m for m in COLLECTION_MEMBERS if m in names), None)
                if member is None:
                    raise ArchiveCorrupt(
                        f"No legacy collection database in {self.path} "
                        "(re-export with 'Support older Anki versions' enabled)"
                    )
                with tempfile.TemporaryDirectory() as tmpdir:
                    extracted = zf.extract(member, tmpdir)
                    return _read_notes(Path(extracted))
        except zipfile.BadZipFile as e:
            raise ArchiveCorrupt(f"Unreadable Anki package {self.path}: {e}") from e


def _read_notes(db_path: Path) -> List[str]:
    try:
        with closing(sqlite3.connect(db_path)) as conn:
            rows = conn.execute("SELECT sfld FROM notes").fetchall()
    except sqlite3.DatabaseError as e:
        raise ArchiveCorrupt(f"Not an Anki collection: {db_path}: {e}") from e
    fronts = [str(r[0]) for r in rows if r[0] is not None]
    logger.info("Read %d card fronts from %s", len(fronts), db_path)
    return fronts


def write_csv(path: str | Path, rows: Iterable[dict]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = list(rows)
    if not rows:
        # Write empty file with no rows
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write("")
        return
    fieldnames = list(rows[0].keys())
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for r in rows:
            writer.writerow(r)
