"""Reconciliation of reference groups against known kanji, plus output helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, List, Sequence

from .ingest import write_csv

if TYPE_CHECKING:
    from .store import KnowledgeStore


@dataclass
class ReconciliationResult:
    group: str
    unknown_characters: List[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.unknown_characters)


def compute(store: "KnowledgeStore", groups: Sequence[str]) -> List[ReconciliationResult]:
    """Build one result per group, in the order given. Read-only."""
    return [ReconciliationResult(group=g, unknown_characters=store.unknown_in_group(g)) for g in groups]


def results_to_rows(results: Iterable[ReconciliationResult]) -> List[dict]:
    return [
        {"group": r.group, "character": ch}
        for r in results
        for ch in r.unknown_characters
    ]


def write_results_csv(path: str, results: Iterable[ReconciliationResult]) -> None:
    """Write one ``group,character`` row per unknown kanji."""
    write_csv(path, results_to_rows(list(results)))


def print_summary(
    results: Iterable[ReconciliationResult],
    show_characters: bool = False,
    sort_characters: bool = False,
) -> None:
    """Print unknown counts per group.

    Args:
        results: Reconciliation results to summarize
        show_characters: Also print each group's unknown kanji, space-separated
        sort_characters: Print kanji in code point order instead of store order
    """
    for r in results:
        print(f"{r.count} unknown kanji in {r.group} group")
        if show_characters and r.count > 0:
            chars = sorted(r.unknown_characters) if sort_characters else r.unknown_characters
            print(" ".join(chars))
