import json

from bookindex.builder import build_index
from bookindex.validate import validate_index


def test_built_index_validates(books_dir, write_meta, tmp_path, capsys):
    write_meta("a", {"title": "A", "category_slug": "art-design", "tags": ["x", ""], "year": 1999})
    write_meta("b", {"id": "b", "title": "B", "category": "🔊 聲音與音樂"})
    out = tmp_path / "index.json"
    build_index(str(books_dir), str(out))
    assert validate_index(str(out)) == 0
    assert f"[OK] {out}" in capsys.readouterr().out


def test_schema_and_duplicate_failures(tmp_path, capsys):
    out = tmp_path / "index.json"
    entry = {
        "id": "a",
        "title": "",
        "author": "",
        "year": None,
        "category_slug": "",
        "category": "",
        "tags": [],
        "summary": "",
    }
    out.write_text(json.dumps([entry, dict(entry, title="ok")]), encoding="utf-8")
    assert validate_index(str(out)) == 2
    stdout = capsys.readouterr().out
    assert "0 -> title" in stdout
    assert "duplicate id 'a'" in stdout
