import os

from dotenv import load_dotenv

load_dotenv()

BOOKS_DIR = os.getenv("BOOKS_DIR", os.path.join("data", "books"))
INDEX_FILE = os.getenv("INDEX_FILE", os.path.join("data", "books_index.json"))
META_FILENAME = "meta.json"

# recency | title
SORT_POLICY = os.getenv("SORT_POLICY", "recency").strip().lower()
# table | passthrough
CATEGORY_MODE = os.getenv("CATEGORY_MODE", "table").strip().lower()
LEGACY_FIELDS = os.getenv("LEGACY_FIELDS", "1").strip().lower() not in ("0", "false", "no", "")
BACKFILL_ADDED_AT = os.getenv("BACKFILL_ADDED_AT", "1").strip().lower() not in ("0", "false", "no", "")

SCHEMA_PATH = os.path.join(os.path.dirname(__file__), "schemas", "books-index.schema.json")
