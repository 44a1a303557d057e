"""Exception types raised by kanji-gap.

Everything derives from KanjiGapError so the CLI can report any failure
with a single except clause.
"""

from __future__ import annotations


class KanjiGapError(Exception):
    """Base class for all kanji-gap errors."""


class StoreUnavailable(KanjiGapError):
    """The knowledge database could not be opened or initialized."""


class SeedBatchFailure(KanjiGapError):
    """A reference group batch failed and was rolled back."""


class SourceUnavailable(KanjiGapError):
    """An external source (archive or reference page) produced no usable data."""


class ArchiveNotFound(SourceUnavailable):
    pass


class ArchiveCorrupt(SourceUnavailable):
    pass
