import datetime
import json
import math
import os
import re
from functools import lru_cache
from typing import Any, Tuple

import orjson
from pyuca import Collator

EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
MAX_SAFE_INTEGER = 2**53
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def _reject_constant(name: str) -> None:
    raise ValueError(f"invalid JSON constant {name}")


def loads_json(raw: bytes) -> Any:
    """Parse a JSON document.

    orjson refuses numbers outside double range (``1e400``) and lone
    surrogate escapes, both of which are valid JSON; those documents are
    re-read with the json module, keeping NaN/Infinity literals rejected.
    """
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError:
        return json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)


def norm_string(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    # UTF-8 output cannot carry lone surrogates.
    return _LONE_SURROGATE.sub("\ufffd", value).strip()


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def finite_number(value: Any) -> int | float | None:
    """Finite JSON-safe number, or None.

    Integers beyond the double-precision safe range become floats, and
    only floats inside that range are narrowed back to int, so the result
    always fits orjson's 64-bit integer limit.
    """
    if not is_number(value):
        return None
    if isinstance(value, int) and abs(value) > MAX_SAFE_INTEGER:
        try:
            value = float(value)
        except OverflowError:
            return None
    if not math.isfinite(value):
        return None
    if isinstance(value, float) and value.is_integer() and abs(value) <= MAX_SAFE_INTEGER:
        return int(value)
    return value


@lru_cache(maxsize=1)
def _collator() -> Collator:
    return Collator()


def title_sort_key(title: str) -> Tuple[int, ...]:
    """Unicode Collation Algorithm key for ``title`` (DUCET, root locale)."""
    return _collator().sort_key(title or "")


def iso_from_mtime(path: str) -> str:
    """Modification time of ``path`` as ``YYYY-MM-DDTHH:MM:SS.mmmZ``; "" if it cannot be read."""
    try:
        mtime = os.stat(path).st_mtime
    except OSError:
        return ""
    stamp = datetime.datetime.fromtimestamp(mtime, tz=datetime.timezone.utc)
    return stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> float:
    """Seconds since the epoch for an ISO-8601 string; 0.0 when unparsable.

    Values without an offset are taken as UTC.
    """
    if not value:
        return 0.0
    try:
        parsed = datetime.datetime.fromisoformat(value.strip())
    except ValueError:
        return 0.0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return (parsed - EPOCH).total_seconds()
