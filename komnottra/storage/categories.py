"""Category list storage (data/categories.json)."""

import logging

from .core import article_categories, articles_path, categories_path, read_json, write_json

logger = logging.getLogger(__name__)


def list_categories() -> list[str]:
    return read_json(categories_path())


def add_category(name: str) -> str:
    """Append a category. Raises ValueError if blank, KeyError if it exists."""
    name = (name or "").strip()
    if not name:
        raise ValueError("Category is required")
    categories = list_categories()
    if name in categories:
        raise KeyError(name)
    categories.append(name)
    write_json(categories_path(), categories)
    logger.info(f"Category added: {name}")
    return name


def delete_category(name: str) -> bool:
    categories = list_categories()
    remaining = [c for c in categories if c != name]
    if len(remaining) == len(categories):
        return False
    write_json(categories_path(), remaining)
    logger.info(f"Category deleted: {name}")
    return True


def category_counts() -> dict[str, int]:
    """Number of articles tagged with each stored category."""
    counts = {name: 0 for name in list_categories()}
    for article in read_json(articles_path()):
        for name in article_categories(article):
            if name in counts:
                counts[name] += 1
    return counts
