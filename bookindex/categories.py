"""Fixed category vocabulary: display label <-> slug."""
import sys
from types import MappingProxyType
from typing import Any, Dict, NamedTuple, Optional

from bookindex.utils import norm_string


class Category(NamedTuple):
    slug: str
    label: str


_CATEGORIES = (
    ("🎨 藝術與設計", "art-design"),
    ("🔊 聲音與音樂", "sound-music"),
    ("🧠 心智與心理學", "mind-psych"),
    ("🌌 哲學與科普", "philosophy-science"),
    ("📈 經濟與社會觀察", "economy-society"),
    ("✍️ 語言與表達", "language-expression"),
    ("🧭 自我成長與人生設計", "self-growth-design"),
    ("👁️‍🗨️ 感官與風格", "senses-style"),
    ("📚 知識與文明史", "knowledge-civilization"),
    ("🧰 創新與問題解決", "innovation-problem"),
)

LABEL_BY_SLUG = MappingProxyType({slug: label for label, slug in _CATEGORIES})
SLUG_BY_LABEL = MappingProxyType({label: slug for label, slug in _CATEGORIES})


def label_for_slug(slug: str) -> Optional[str]:
    return LABEL_BY_SLUG.get(slug)


def slug_for_label(label: str) -> Optional[str]:
    return SLUG_BY_LABEL.get(label)


def resolve_category(record: Dict[str, Any], hint: str) -> Optional[Category]:
    """Resolve a record's category, preferring ``category_slug`` over ``category``.

    Returns None (after printing a warning naming ``hint``) when neither
    field matches the table.
    """
    slug = norm_string(record.get("category_slug"))
    if slug and slug in LABEL_BY_SLUG:
        return Category(slug, LABEL_BY_SLUG[slug])
    label = norm_string(record.get("category"))
    if label and label in SLUG_BY_LABEL:
        return Category(SLUG_BY_LABEL[label], label)
    print(
        f"[WARN] Unresolved category: {hint} "
        f"(category_slug={_raw(record.get('category_slug'))!r}, category={_raw(record.get('category'))!r})",
        file=sys.stderr,
    )
    return None


def _raw(value: Any) -> str:
    if value is None or value is False:
        return ""
    return str(value)
