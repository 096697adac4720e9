"""Repair one-sided user/post references in the configured database."""
from __future__ import annotations

import argparse
import sys

from plaza.core.logging import configure_logging
from plaza.core.settings import settings
from plaza.db.session import SessionLocal
from plaza.services.consistency import ConsistencyService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Reconcile mirrored follow, like and author references."
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report inconsistencies without writing any repair.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print every individual repair.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings.log_level, settings.log_json)

    db = SessionLocal()
    try:
        report = ConsistencyService(db).reconcile(dry_run=args.dry_run)
    finally:
        db.close()

    verb = "would repair" if args.dry_run else "repaired"
    print(f"[plaza-reconcile] {verb} {report.total} reference(s)")
    print(f"  author links added:   {report.author_links_added}")
    print(f"  author links removed: {report.author_links_removed}")
    print(f"  follow edges:         {report.follow_edges_repaired}")
    print(f"  user likes added:     {report.user_likes_added}")
    print(f"  user likes removed:   {report.user_likes_removed}")
    print(f"  post likes added:     {report.post_likes_added}")
    if args.verbose:
        for line in report.details:
            print(f"  - {line}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
