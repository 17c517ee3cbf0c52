from bookindex import qa_report
from bookindex.qa_report import main, scan, soft_checks


def test_soft_checks():
    assert soft_checks({"title": "T", "category_slug": "art-design"}) == []
    issues = soft_checks({"category_slug": "nope", "tags": "a", "year": "1999"})
    assert any("unresolved category" in issue for issue in issues)
    assert "missing title" in issues
    assert "tags is not a list" in issues
    assert any("year is not a number" in issue for issue in issues)


def test_mismatched_label_and_slug():
    issues = soft_checks({"title": "T", "category_slug": "art-design", "category": "🔊 聲音與音樂"})
    assert len(issues) == 1 and "disagrees" in issues[0]


def test_scan_reports_problems(books_dir, write_meta, capsys):
    write_meta("a", {"id": "same", "title": "T", "category_slug": "art-design"})
    write_meta("b", {"id": "same", "title": "T", "category_slug": "art-design"})
    write_meta("c", None, raw="{")
    (books_dir / "d").mkdir()
    report = scan(str(books_dir))
    assert list(report["duplicate_ids"]) == ["same"]
    assert report["duplicate_titles"] == ["T"]
    assert report["missing_meta"] == [str(books_dir / "d")]
    assert report["hard_errors"] == 2
    assert main(str(books_dir)) == 1
    assert "duplicate id 'same'" in capsys.readouterr().out


def test_clean_tree(books_dir, write_meta):
    write_meta("a", {"title": "T", "category_slug": "art-design"})
    assert main(str(books_dir)) == 0


def test_missing_books_dir(tmp_path, capsys):
    missing = tmp_path / "nowhere"
    report = scan(str(missing))
    assert report["hard_errors"] == 0 and report["per_file"] == {}
    assert main(str(missing)) == 0
    assert "books directory not found" in capsys.readouterr().out


def test_unreadable_meta_is_reported(books_dir, write_meta, monkeypatch):
    path = write_meta("a", {"title": "T", "category_slug": "art-design"})

    def deny(*args, **kwargs):
        raise PermissionError("denied")

    monkeypatch.setattr(qa_report, "open", deny, raising=False)
    report = scan(str(books_dir))
    assert report["hard_errors"] == 1
    assert report["per_file"][str(path)] == ["PARSE: denied"]
