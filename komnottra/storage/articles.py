"""Article CRUD over data/articles.json (newest first)."""

import logging
import time
from datetime import datetime, timezone
from typing import Any

from .core import (
    article_categories,
    articles_path,
    read_json,
    slugify,
    unique_slug,
    write_json,
)

logger = logging.getLogger(__name__)

_SEARCH_FIELDS = ("title", "excerpt", "content")


def _load() -> list[dict[str, Any]]:
    return read_json(articles_path())


def _save(articles: list[dict[str, Any]]) -> None:
    write_json(articles_path(), articles)


def _find_index(articles: list[dict[str, Any]], key: str) -> int | None:
    # Slugs take precedence over ids so an all-digit slug stays reachable
    for i, article in enumerate(articles):
        if article.get("slug") == key:
            return i
    if key.isdigit():
        for i, article in enumerate(articles):
            if article.get("id") == int(key):
                return i
    return None


def _merge_categories(fields: dict[str, Any]) -> list[str]:
    """Fold the legacy single `category` field into `categories`."""
    merged = article_categories(fields)
    fields.pop("category", None)
    return merged


def _new_id(articles: list[dict[str, Any]]) -> int:
    new_id = int(time.time() * 1000)
    ids = {a.get("id") for a in articles}
    if new_id in ids:
        new_id = max(i for i in ids if isinstance(i, int)) + 1
    return new_id


def list_articles(
    category: str | None = None,
    search: str | None = None,
    limit: int | None = None,
) -> list[dict[str, Any]]:
    """Return stored articles, newest first, optionally filtered."""
    articles = _load()
    if category:
        wanted = category.strip().lower()
        articles = [
            a for a in articles
            if wanted in (c.lower() for c in article_categories(a))
        ]
    if search:
        needle = search.strip().lower()
        articles = [
            a for a in articles
            if any(needle in str(a.get(f) or "").lower() for f in _SEARCH_FIELDS)
        ]
    if limit is not None and limit > 0:
        articles = articles[:limit]
    return articles


def get_article(key: str) -> dict[str, Any] | None:
    """Find an article by slug or numeric id."""
    articles = _load()
    index = _find_index(articles, key)
    if index is None:
        return None
    return articles[index]


def create_article(fields: dict[str, Any]) -> dict[str, Any]:
    """Store a new article at the front of the list and return it."""
    articles = _load()
    article = dict(fields)
    article["categories"] = _merge_categories(article)
    base = slugify(str(article.get("slug") or article.get("title") or ""))
    article["slug"] = unique_slug(base, {a.get("slug") for a in articles})
    article["id"] = _new_id(articles)
    article["createdAt"] = datetime.now(timezone.utc).isoformat()
    articles.insert(0, article)
    _save(articles)
    logger.info(f"Article added: {article['slug']} ({article['id']})")
    return article


def update_article(key: str, fields: dict[str, Any]) -> dict[str, Any] | None:
    """Merge fields into an existing article. Returns the updated article."""
    articles = _load()
    index = _find_index(articles, key)
    if index is None:
        return None
    article = articles[index]
    changes = dict(fields)
    for immutable in ("id", "createdAt", "updatedAt"):
        changes.pop(immutable, None)
    # Articles stored without a slug or with a single `category` get migrated
    if "category" in article:
        article["categories"] = _merge_categories(article)
    if "categories" in changes or "category" in changes:
        changes["categories"] = _merge_categories(changes)
    taken = {a.get("slug") for a in articles if a is not article}
    new_slug = changes.pop("slug", None)
    if new_slug:
        article["slug"] = unique_slug(slugify(str(new_slug)), taken)
    elif not article.get("slug"):
        title = changes.get("title") or article.get("title") or ""
        article["slug"] = unique_slug(slugify(str(title)), taken)
    article.update(changes)
    article["updatedAt"] = datetime.now(timezone.utc).isoformat()
    _save(articles)
    logger.info(f"Article updated: {article['slug']} ({article.get('id')})")
    return article


def delete_article(key: str) -> dict[str, Any] | None:
    """Remove an article by id or slug. Returns the removed article."""
    articles = _load()
    index = _find_index(articles, key)
    if index is None:
        return None
    removed = articles.pop(index)
    _save(articles)
    logger.info(f"Article deleted: {removed.get('slug')} ({removed.get('id')})")
    return removed
