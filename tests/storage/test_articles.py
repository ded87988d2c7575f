"""Tests for article create/list/filter/update/delete."""

import json
from unittest.mock import patch

from komnottra import storage


# ── Create ───────────────────────────────────────────────


def test_create_article():
    article = storage.create_article({"title": "Angkor at Dawn", "content": "<p>Hi</p>"})
    assert article["slug"] == "angkor-at-dawn"
    assert isinstance(article["id"], int)
    assert article["categories"] == []
    assert article["content"] == "<p>Hi</p>"
    assert "createdAt" in article


def test_create_keeps_extra_fields():
    article = storage.create_article({"title": "A", "author": "Dara", "views": 3})
    assert article["author"] == "Dara"
    assert article["views"] == 3


def test_create_inserts_newest_first():
    storage.create_article({"title": "First"})
    storage.create_article({"title": "Second"})
    stored = json.loads(storage.articles_path().read_text())
    assert [a["title"] for a in stored] == ["Second", "First"]


def test_create_slug_collision():
    storage.create_article({"title": "Run"})
    second = storage.create_article({"title": "Run"})
    third = storage.create_article({"title": "Run"})
    assert second["slug"] == "run-2"
    assert third["slug"] == "run-3"


def test_create_explicit_slug():
    article = storage.create_article({"title": "Angkor", "slug": "My Custom Slug"})
    assert article["slug"] == "my-custom-slug"


def test_create_folds_single_category():
    article = storage.create_article({"title": "A", "category": "News", "categories": ["Travel", ""]})
    assert article["categories"] == ["Travel", "News"]
    assert "category" not in article


def test_create_ids_unique_within_same_millisecond():
    with patch("komnottra.storage.articles.time.time", return_value=1700000000.0):
        first = storage.create_article({"title": "A"})
        second = storage.create_article({"title": "B"})
    assert first["id"] == 1700000000000
    assert second["id"] == 1700000000001


# ── List / filter ────────────────────────────────────────


def test_list_articles_empty():
    assert storage.list_articles() == []


def test_list_filter_by_category_case_insensitive():
    storage.create_article({"title": "A", "categories": ["News"]})
    storage.create_article({"title": "B", "categories": ["Travel"]})
    result = storage.list_articles(category="news")
    assert [a["title"] for a in result] == ["A"]


def test_list_search():
    storage.create_article({"title": "Angkor", "content": "temples"})
    storage.create_article({"title": "Market", "excerpt": "Night stalls by the river"})
    assert [a["title"] for a in storage.list_articles(search="RIVER")] == ["Market"]
    assert [a["title"] for a in storage.list_articles(search="temple")] == ["Angkor"]


def test_list_limit():
    for title in ("A", "B", "C"):
        storage.create_article({"title": title})
    assert [a["title"] for a in storage.list_articles(limit=2)] == ["C", "B"]


def test_list_limit_zero_ignored():
    storage.create_article({"title": "A"})
    assert len(storage.list_articles(limit=0)) == 1


# ── Get ──────────────────────────────────────────────────


def test_get_article_by_slug_and_id():
    article = storage.create_article({"title": "Angkor"})
    assert storage.get_article("angkor")["id"] == article["id"]
    assert storage.get_article(str(article["id"]))["slug"] == "angkor"


def test_get_article_digit_slug_wins():
    article = storage.create_article({"title": "2024"})
    assert article["slug"] == "2024"
    assert storage.get_article("2024")["id"] == article["id"]


def test_get_article_missing():
    assert storage.get_article("nope") is None
    assert storage.get_article("123") is None


# ── Update ───────────────────────────────────────────────


def test_update_article():
    article = storage.create_article({"title": "Angkor", "content": "old"})
    updated = storage.update_article("angkor", {"content": "new", "id": 1, "createdAt": "x"})
    assert updated["content"] == "new"
    assert updated["id"] == article["id"]
    assert updated["createdAt"] == article["createdAt"]
    assert "updatedAt" in updated
    assert storage.get_article("angkor")["content"] == "new"


def test_update_title_keeps_slug():
    storage.create_article({"title": "Angkor"})
    updated = storage.update_article("angkor", {"title": "Angkor Wat"})
    assert updated["slug"] == "angkor"


def test_update_explicit_slug_stays_unique():
    storage.create_article({"title": "Angkor"})
    storage.create_article({"title": "Market"})
    updated = storage.update_article("market", {"slug": "angkor"})
    assert updated["slug"] == "angkor-2"


def test_update_categories_normalized():
    storage.create_article({"title": "A", "categories": ["News"]})
    updated = storage.update_article("a", {"category": "Travel"})
    assert updated["categories"] == ["Travel"]
    assert "category" not in updated


def test_update_missing():
    assert storage.update_article("nope", {"title": "X"}) is None


# ── Delete ───────────────────────────────────────────────


def test_delete_article_by_id():
    article = storage.create_article({"title": "A"})
    storage.create_article({"title": "B"})
    removed = storage.delete_article(str(article["id"]))
    assert removed["slug"] == "a"
    assert [a["title"] for a in storage.list_articles()] == ["B"]


def test_delete_article_missing():
    storage.create_article({"title": "A"})
    assert storage.delete_article("999") is None
    assert len(storage.list_articles()) == 1


# ── Articles stored without slugs (id + single category) ──


LEGACY_ID = 1700000000000


def _seed_legacy(*extra):
    legacy = {"id": LEGACY_ID, "title": "Old", "content": "<p>Before slugs</p>", "category": "News"}
    storage.write_json(storage.articles_path(), [*extra, legacy])


def test_legacy_get_by_id():
    _seed_legacy()
    assert storage.get_article(str(LEGACY_ID))["title"] == "Old"


def test_legacy_filter_by_single_category():
    _seed_legacy()
    assert [a["id"] for a in storage.list_articles(category="news")] == [LEGACY_ID]


def test_legacy_update_assigns_slug_and_folds_category():
    _seed_legacy()
    updated = storage.update_article(str(LEGACY_ID), {"content": "x"})
    assert updated["slug"] == "old"
    assert updated["categories"] == ["News"]
    assert "category" not in updated
    stored = json.loads(storage.articles_path().read_text())[0]
    assert stored["slug"] == "old"
    assert stored["content"] == "x"


def test_legacy_update_slug_avoids_collision():
    _seed_legacy({"id": 1, "slug": "old", "title": "Old"})
    updated = storage.update_article(str(LEGACY_ID), {"content": "x"})
    assert updated["slug"] == "old-2"


def test_legacy_update_replaces_category():
    _seed_legacy()
    updated = storage.update_article(str(LEGACY_ID), {"category": "Travel"})
    assert updated["categories"] == ["Travel"]


def test_legacy_update_uses_new_title_for_slug():
    _seed_legacy()
    updated = storage.update_article(str(LEGACY_ID), {"title": "Renamed"})
    assert updated["slug"] == "renamed"


def test_legacy_delete_by_id():
    _seed_legacy()
    assert storage.delete_article(str(LEGACY_ID))["title"] == "Old"
    assert storage.list_articles() == []
