from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from bookindex import config


class SortPolicy(str, Enum):
    RECENCY = "recency"
    TITLE = "title"


class CategoryMode(str, Enum):
    TABLE = "table"
    PASSTHROUGH = "passthrough"


@dataclass(frozen=True)
class BuildOptions:
    sort_policy: SortPolicy = SortPolicy.RECENCY
    category_mode: CategoryMode = CategoryMode.TABLE
    legacy_fields: bool = True
    backfill_added_at: bool = True
    progress: bool = False

    @classmethod
    def from_config(cls, **overrides: Any) -> "BuildOptions":
        values = {
            "sort_policy": SortPolicy(config.SORT_POLICY),
            "category_mode": CategoryMode(config.CATEGORY_MODE),
            "legacy_fields": config.LEGACY_FIELDS,
            "backfill_added_at": config.BACKFILL_ADDED_AT,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)


@dataclass(frozen=True)
class IndexEntry:
    id: str
    title: str
    author: str = ""
    year: Optional[int | float] = None
    category_slug: str = ""
    category: str = ""
    tags: Tuple[str, ...] = field(default_factory=tuple)
    summary: str = ""
    rating: int | float = 0
    status: str = ""
    added_at: str = ""

    def to_dict(self, include_legacy: bool = True) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "year": self.year,
            "category_slug": self.category_slug,
            "category": self.category,
            "tags": list(self.tags),
        }
        if include_legacy:
            data["rating"] = self.rating
            data["status"] = self.status
            data["added_at"] = self.added_at
        data["summary"] = self.summary
        return data
