"""kanji-gap: which jouyou and jinmeiyou kanji are missing from an Anki deck.

Card fronts are scanned for CJK ideographs, recorded as known in a local
SQLite store, and compared against reference lists fetched once from
Wikipedia.
"""

__all__ = [
    "classify",
    "extract",
    "store",
    "catalog",
    "ingest",
    "webpage",
    "pipeline",
    "report",
]
