import os
import sys
from typing import Any, Dict, Iterator, List, Optional, Tuple

import orjson
from tqdm import tqdm

from bookindex import config
from bookindex.models import BuildOptions, IndexEntry, SortPolicy
from bookindex.normalize import to_index_entry
from bookindex.utils import iso_from_mtime, loads_json, parse_timestamp, title_sort_key


def iter_candidates(books_dir: str) -> Iterator[Tuple[str, str]]:
    """Yield ``(directory name, meta.json path)`` for each book directory.

    Plain files and directories without a meta.json are skipped silently.
    """
    with os.scandir(books_dir) as it:
        dirs = sorted(entry.name for entry in it if entry.is_dir())
    for name in dirs:
        meta_path = os.path.join(books_dir, name, config.META_FILENAME)
        if os.path.isfile(meta_path):
            yield name, meta_path


def load_record(meta_path: str) -> Optional[Dict[str, Any]]:
    try:
        with open(meta_path, "rb") as handle:
            record = loads_json(handle.read())
    except (OSError, ValueError) as exc:
        print(f"[ERROR] JSON parse failed: {meta_path}\n  {exc}", file=sys.stderr)
        return None
    if not isinstance(record, dict):
        print(f"[ERROR] Expected a JSON object: {meta_path}", file=sys.stderr)
        return None
    return record


def backfill(record: Dict[str, Any], name: str, meta_path: str, options: BuildOptions) -> None:
    if not record.get("id"):
        record["id"] = name
    if options.backfill_added_at and not record.get("added_at"):
        record["added_at"] = iso_from_mtime(meta_path)


def collect_entries(books_dir: str, options: BuildOptions) -> List[IndexEntry]:
    entries: List[IndexEntry] = []
    seen_ids: set[str] = set()
    candidates = iter_candidates(books_dir)
    for name, meta_path in tqdm(candidates, desc="Indexing", disable=not options.progress):
        record = load_record(meta_path)
        if record is None:
            continue
        backfill(record, name, meta_path, options)
        entry = to_index_entry(record, meta_path, options)
        if entry is None:
            continue
        if entry.id in seen_ids:
            print(
                f"[WARN] Duplicate id, keeping the first: {entry.id} (source: {meta_path})",
                file=sys.stderr,
            )
            continue
        seen_ids.add(entry.id)
        entries.append(entry)
    return entries


def sort_entries(entries: List[IndexEntry], policy: SortPolicy) -> List[IndexEntry]:
    if policy is SortPolicy.TITLE:
        return sorted(
            entries,
            key=lambda entry: (
                title_sort_key(entry.title),
                (0, -entry.year) if entry.year is not None else (1, 0),
            ),
        )
    return sorted(
        entries,
        key=lambda entry: (-parse_timestamp(entry.added_at), title_sort_key(entry.title)),
    )


def write_index(entries: List[IndexEntry], index_file: str, include_legacy: bool = True) -> None:
    parent = os.path.dirname(index_file)
    if parent:
        os.makedirs(parent, exist_ok=True)
    payload = [entry.to_dict(include_legacy) for entry in entries]
    # Serialize before opening so a failure leaves the previous index intact.
    data = orjson.dumps(payload, option=orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE)
    with open(index_file, "wb") as handle:
        handle.write(data)


def build_index(
    books_dir: str = config.BOOKS_DIR,
    index_file: str = config.INDEX_FILE,
    options: Optional[BuildOptions] = None,
) -> List[IndexEntry]:
    options = options or BuildOptions()
    os.makedirs(books_dir, exist_ok=True)
    entries = sort_entries(collect_entries(books_dir, options), options.sort_policy)
    write_index(entries, index_file, include_legacy=options.legacy_fields)
    print(f"[OK] Wrote {index_file} ({len(entries)} entries)")
    return entries
