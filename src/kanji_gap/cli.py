"""CLI entrypoint for kanji-gap.

Usage:
  python -m kanji_gap.cli sync --archive collection.colpkg --show
  python -m kanji_gap.cli report --out out/unknown_kanji.csv
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List

from .catalog import GROUPS, check_group
from .errors import KanjiGapError
from .ingest import AnkiArchive
from .pipeline import run_sync
from .report import compute, print_summary, write_results_csv
from .store import DEFAULT_DATABASE_PATH, KnowledgeStore
from .webpage import DEFAULT_PAGES, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, WikipediaPageSource


def load_config(path: str | Path) -> dict:
    path = Path(path)
    if not path.exists():
        # Default config
        return {
            "database_path": DEFAULT_DATABASE_PATH,
            "user_agent": DEFAULT_USER_AGENT,
            "request_timeout": DEFAULT_TIMEOUT,
            "groups": list(GROUPS),
            "pages": DEFAULT_PAGES,
        }
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {path}: {e}")


def _groups(cfg: dict) -> List[str]:
    return [check_group(g) for g in cfg.get("groups", GROUPS)]


def _report(results, args: argparse.Namespace) -> None:
    print_summary(results, show_characters=args.show, sort_characters=args.sort)
    if args.out:
        write_results_csv(args.out, results)
        print(f"Wrote report: {args.out}")


def cmd_sync(args: argparse.Namespace) -> int:
    try:
        cfg = load_config(args.config)
        db_path = args.db or cfg.get("database_path", DEFAULT_DATABASE_PATH)
        page_source = WikipediaPageSource(
            pages=cfg.get("pages", DEFAULT_PAGES),
            user_agent=cfg.get("user_agent", DEFAULT_USER_AGENT),
            timeout=cfg.get("request_timeout", DEFAULT_TIMEOUT),
        )
        groups = _groups(cfg)
        print(f"Reading Anki archive: {args.archive}")
        with KnowledgeStore(db_path) as store:
            outcome = run_sync(
                AnkiArchive(args.archive), store, page_source, groups=groups, reseed=args.reseed
            )
    except (KanjiGapError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    if outcome.stopped_early:
        print("No kanji found in the archive, nothing to do")
        return 0
    print(f"Found {outcome.known_count} distinct kanji in the archive")
    if outcome.seeded_groups:
        print(f"Seeded reference groups: {', '.join(outcome.seeded_groups)}")
    _report(outcome.results, args)
    return 0


def cmd_report(args: argparse.Namespace) -> int:
    try:
        cfg = load_config(args.config)
        db_path = Path(args.db or cfg.get("database_path", DEFAULT_DATABASE_PATH))
        if not db_path.exists():
            print(f"Error: No knowledge store at {db_path}; run 'sync' first")
            return 1
        groups = _groups(cfg)
        with KnowledgeStore(db_path, create=False) as store:
            results = compute(store, groups)
    except (KanjiGapError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    _report(results, args)
    return 0


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--config",
        default="resources/config.json",
        help="Path to config.json (optional; defaults will be used if missing)",
    )
    p.add_argument("--db", help="Path to the knowledge store (overrides config database_path)")
    p.add_argument("--show", action="store_true", help="Print the unknown kanji of each group")
    p.add_argument(
        "--sort",
        action="store_true",
        help="Print unknown kanji in code point order instead of store order",
    )
    p.add_argument("--out", help="Optional path to a CSV report of unknown kanji")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="kanjigap", description="Find jouyou/jinmeiyou kanji missing from an Anki deck")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sync = sub.add_parser("sync", help="Read an Anki archive, update known kanji and report unknown ones")
    sync.add_argument("--archive", required=True, help="Path to .colpkg/.apkg export or collection.anki21")
    sync.add_argument(
        "--reseed",
        action="store_true",
        help="Fetch and seed reference groups even if the store already exists",
    )
    _add_common(sync)
    sync.set_defaults(func=cmd_sync)

    report = sub.add_parser("report", help="Report unknown kanji from an existing store")
    _add_common(report)
    report.set_defaults(func=cmd_report)

    return p


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
