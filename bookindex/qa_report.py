"""Read-only report over the books tree: what would be dropped from the index, and why."""
import os
import sys
from collections import Counter, defaultdict
from typing import Dict, List

from bookindex import config
from bookindex.categories import LABEL_BY_SLUG, SLUG_BY_LABEL
from bookindex.utils import loads_json, norm_string


def soft_checks(record: Dict) -> List[str]:
    issues = []
    slug = norm_string(record.get("category_slug"))
    label = norm_string(record.get("category"))
    if slug not in LABEL_BY_SLUG and label not in SLUG_BY_LABEL:
        issues.append(f"unresolved category (category_slug={slug!r}, category={label!r})")
    elif slug and label and slug in LABEL_BY_SLUG and LABEL_BY_SLUG[slug] != label:
        issues.append(f"category {label!r} disagrees with category_slug {slug!r}")
    if not norm_string(record.get("title")):
        issues.append("missing title")
    if "tags" in record and not isinstance(record["tags"], list):
        issues.append("tags is not a list")
    year = record.get("year")
    if year is not None and (isinstance(year, bool) or not isinstance(year, (int, float))):
        issues.append(f"year is not a number: {year!r}")
    return issues


def scan(books_dir: str) -> Dict:
    per_file: Dict[str, List[str]] = defaultdict(list)
    sources_by_id: Dict[str, List[str]] = defaultdict(list)
    title_counter: Counter = Counter()
    missing_meta: List[str] = []
    hard_errs = 0

    names = sorted(os.listdir(books_dir)) if os.path.isdir(books_dir) else []
    for name in names:
        book_dir = os.path.join(books_dir, name)
        if not os.path.isdir(book_dir):
            continue
        meta_path = os.path.join(book_dir, config.META_FILENAME)
        if not os.path.isfile(meta_path):
            missing_meta.append(book_dir)
            continue
        try:
            with open(meta_path, "rb") as handle:
                record = loads_json(handle.read())
        except (OSError, ValueError) as exc:
            per_file[meta_path].append(f"PARSE: {exc}")
            hard_errs += 1
            continue
        if not isinstance(record, dict):
            per_file[meta_path].append("PARSE: top level is not an object")
            hard_errs += 1
            continue
        sources_by_id[norm_string(record.get("id")) or name].append(meta_path)
        title = norm_string(record.get("title"))
        if title:
            title_counter[title] += 1
        issues = soft_checks(record)
        if issues:
            hard_errs += 1
            for message in issues:
                per_file[meta_path].append(f"CHECK: {message}")

    duplicate_ids = {item_id: paths for item_id, paths in sources_by_id.items() if len(paths) > 1}
    hard_errs += len(duplicate_ids)
    duplicate_titles = [title for title, count in title_counter.items() if count > 1]
    return {
        "per_file": dict(per_file),
        "duplicate_ids": duplicate_ids,
        "duplicate_titles": duplicate_titles,
        "missing_meta": missing_meta,
        "hard_errors": hard_errs,
    }


def main(books_dir: str = config.BOOKS_DIR) -> int:
    if not os.path.isdir(books_dir):
        print(f"INFO books directory not found: {books_dir}")
    report = scan(books_dir)
    for item_id, paths in report["duplicate_ids"].items():
        print(f"ERROR duplicate id {item_id!r}:")
        for path in paths:
            print("  -", path)
    titles = report["duplicate_titles"]
    if titles:
        print("WARN duplicate titles:", titles[:10], "(+ more)" if len(titles) > 10 else "")
    for path in report["missing_meta"]:
        print(f"INFO no {config.META_FILENAME}: {path}")
    for path, messages in report["per_file"].items():
        print(f"\n{path}")
        for message in messages:
            print("  -", message)
    print(
        f"\nfiles-with-issues: {len(report['per_file'])} | "
        f"duplicate-ids: {len(report['duplicate_ids'])} | hard-errors: {report['hard_errors']}"
    )
    return 1 if report["hard_errors"] else 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1] if len(sys.argv) > 1 else config.BOOKS_DIR))
