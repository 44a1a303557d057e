"""Top-level sync run: archive -> store -> reference groups -> report."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Protocol, Sequence

from .catalog import GROUPS, PageSource, load_group, seed_if_absent
from .extract import extract_known
from .report import ReconciliationResult, compute

if TYPE_CHECKING:
    from .store import KnowledgeStore

logger = logging.getLogger(__name__)


class ArchiveSource(Protocol):
    def read_card_fronts(self) -> Sequence[str]:
        ...


@dataclass
class SyncOutcome:
    known_count: int
    store_existed: bool = False
    seeded_groups: List[str] = field(default_factory=list)
    results: List[ReconciliationResult] = field(default_factory=list)

    @property
    def stopped_early(self) -> bool:
        return self.known_count == 0


def run_sync(
    archive: ArchiveSource,
    store: "KnowledgeStore",
    page_source: Optional[PageSource],
    groups: Sequence[str] = GROUPS,
    reseed: bool = False,
) -> SyncOutcome:
    """Sync known kanji from ``archive`` and reconcile against reference groups.

    Reference groups are only fetched and seeded when the store had no
    records before this sync, or when ``reseed`` is set. Every group is
    loaded before any is seeded, so a failed fetch writes no reference data.
    An archive without any kanji stops the run before the store is touched.

    Errors from the archive, the page source and the store propagate.
    """
    known = extract_known(archive.read_card_fronts())
    if not known:
        logger.info("No kanji in archive, nothing to do")
        return SyncOutcome(known_count=0)

    existed = store.mark_known_from_archive(known)
    outcome = SyncOutcome(known_count=len(known), store_existed=existed)

    if not existed or reseed:
        if page_source is None:
            raise ValueError("A page source is required to seed reference groups")
        loaded = [(g, load_group(page_source, g)) for g in groups]
        for group, chars in loaded:
            seed_if_absent(store, group, chars)
            outcome.seeded_groups.append(group)
    else:
        logger.info("Store already existed, skipping reference seeding")

    outcome.results = compute(store, groups)
    return outcome
