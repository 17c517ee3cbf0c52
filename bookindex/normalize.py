import sys
from typing import Any, Dict, List, Optional

from bookindex.categories import resolve_category
from bookindex.models import BuildOptions, CategoryMode, IndexEntry
from bookindex.utils import finite_number, norm_string


def norm_tags(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    tags: List[str] = []
    for item in value:
        if not item or not isinstance(item, str):
            continue
        tag = norm_string(item)
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def norm_rating(value: Any) -> int | float:
    number = finite_number(value)
    return 0 if number is None else number


def to_index_entry(
    record: Dict[str, Any], hint: str, options: Optional[BuildOptions] = None
) -> Optional[IndexEntry]:
    """Convert a raw meta.json mapping into an IndexEntry.

    Returns None when the record cannot be indexed; a diagnostic naming
    ``hint`` has already been printed in that case.
    """
    options = options or BuildOptions()
    if options.category_mode is CategoryMode.TABLE:
        category = resolve_category(record, hint)
        if category is None:
            return None
        category_slug, category_label = category.slug, category.label
    else:
        category_slug = norm_string(record.get("category_slug"))
        category_label = norm_string(record.get("category"))

    entry = IndexEntry(
        id=norm_string(record.get("id")),
        title=norm_string(record.get("title")),
        author=norm_string(record.get("author")),
        year=finite_number(record.get("year")),
        category_slug=category_slug,
        category=category_label,
        tags=tuple(norm_tags(record.get("tags"))),
        summary=norm_string(record.get("summary")),
        rating=norm_rating(record.get("rating")),
        status=norm_string(record.get("status")),
        added_at=norm_string(record.get("added_at")),
    )
    if not entry.id:
        print(f"[WARN] Skipped (missing id): {hint}", file=sys.stderr)
        return None
    if not entry.title:
        print(f"[WARN] Skipped (missing title): {hint}", file=sys.stderr)
        return None
    return entry
