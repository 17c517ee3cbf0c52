import pytest

from bookindex import categories
from bookindex.categories import Category, label_for_slug, resolve_category, slug_for_label


def test_table_is_bijective():
    assert len(categories.LABEL_BY_SLUG) == 10
    assert len(categories.SLUG_BY_LABEL) == 10
    for slug, label in categories.LABEL_BY_SLUG.items():
        assert slug_for_label(label) == slug
        assert label_for_slug(slug) == label


def test_table_is_read_only():
    with pytest.raises(TypeError):
        categories.LABEL_BY_SLUG["new-slug"] = "New"


def test_slug_takes_precedence_over_label():
    record = {"category_slug": " sound-music ", "category": "🎨 藝術與設計"}
    assert resolve_category(record, "x") == Category("sound-music", "🔊 聲音與音樂")


def test_falls_back_to_label():
    record = {"category_slug": "not-a-real-slug", "category": "📚 知識與文明史"}
    assert resolve_category(record, "x") == Category("knowledge-civilization", "📚 知識與文明史")


def test_unresolved_category_warns_with_raw_fields(capsys):
    record = {"category_slug": "not-a-real-slug", "category": 7}
    assert resolve_category(record, "books/a/meta.json") is None
    err = capsys.readouterr().err
    assert "books/a/meta.json" in err
    assert "not-a-real-slug" in err
    assert "'7'" in err
