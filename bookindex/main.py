import argparse
import sys
from typing import List, Optional

from bookindex import config
from bookindex.builder import build_index
from bookindex.models import BuildOptions, CategoryMode, SortPolicy


def build_argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build the consolidated books index")
    parser.add_argument(
        "--books-dir",
        default=config.BOOKS_DIR,
        help=f"Directory holding one sub-directory per book (default: {config.BOOKS_DIR})",
    )
    parser.add_argument(
        "--output",
        default=config.INDEX_FILE,
        help=f"Index file to write (default: {config.INDEX_FILE})",
    )
    parser.add_argument(
        "--sort",
        choices=[policy.value for policy in SortPolicy],
        default=None,
        help="Sort policy: newest first, or by title (default: from SORT_POLICY, else recency)",
    )
    parser.add_argument(
        "--category-mode",
        choices=[mode.value for mode in CategoryMode],
        default=None,
        help="Resolve categories against the fixed table or pass them through",
    )
    parser.add_argument(
        "--no-legacy-fields",
        dest="legacy_fields",
        action="store_false",
        default=None,
        help="Omit rating, status and added_at from the output",
    )
    parser.add_argument(
        "--no-backfill-added-at",
        dest="backfill_added_at",
        action="store_false",
        default=None,
        help="Do not fill a missing added_at from the meta.json modification time",
    )
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_argparser().parse_args(argv)
    try:
        options = BuildOptions.from_config(
            sort_policy=SortPolicy(args.sort) if args.sort else None,
            category_mode=CategoryMode(args.category_mode) if args.category_mode else None,
            legacy_fields=args.legacy_fields,
            backfill_added_at=args.backfill_added_at,
            progress=args.progress,
        )
        build_index(args.books_dir, args.output, options)
    except Exception as exc:  # noqa: BLE001
        print(f"[ERROR] {type(exc).__name__}: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
