import sys
from collections import Counter

import orjson
from jsonschema import Draft202012Validator

from bookindex.config import INDEX_FILE, SCHEMA_PATH

with open(SCHEMA_PATH, "rb") as schema_file:
    SCHEMA = orjson.loads(schema_file.read())
validator = Draft202012Validator(SCHEMA)


def validate_index(path: str) -> int:
    """Print schema problems and duplicate ids found in ``path``; return their count."""
    with open(path, "rb") as handle:
        data = orjson.loads(handle.read())
    errors = 0
    for err in sorted(validator.iter_errors(data), key=lambda err: list(err.path)):
        location = " -> ".join([str(part) for part in err.path]) or "(root)"
        print(f"[FAIL] {path}: {location}: {err.message}")
        errors += 1
    if isinstance(data, list):
        ids = Counter(item.get("id") for item in data if isinstance(item, dict))
        for item_id, count in sorted(ids.items(), key=lambda kv: str(kv[0])):
            if count > 1:
                print(f"[FAIL] {path}: duplicate id {item_id!r} ({count} entries)")
                errors += 1
    if not errors:
        print(f"[OK] {path}")
    return errors


if __name__ == "__main__":
    target = sys.argv[1] if len(sys.argv) > 1 else INDEX_FILE
    if validate_index(target):
        raise SystemExit(1)
