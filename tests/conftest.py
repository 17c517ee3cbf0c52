import json
from pathlib import Path

import pytest


@pytest.fixture
def books_dir(tmp_path: Path) -> Path:
    path = tmp_path / "data" / "books"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def write_meta(books_dir: Path):
    def _write(name: str, meta, raw: str | None = None) -> Path:
        book_dir = books_dir / name
        book_dir.mkdir(parents=True, exist_ok=True)
        meta_path = book_dir / "meta.json"
        text = raw if raw is not None else json.dumps(meta, ensure_ascii=False)
        meta_path.write_text(text, encoding="utf-8")
        return meta_path

    return _write


def read_index(path: Path) -> list:
    return json.loads(path.read_text(encoding="utf-8"))
