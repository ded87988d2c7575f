"""Storage initialization, path helpers, JSON I/O, and slug utilities."""

import json
import re
import unicodedata
from pathlib import Path
from typing import Any

_data_dir: Path | None = None


class StorageError(Exception):
    """Raised when a data file cannot be read or written."""


def slugify(text: str) -> str:
    """Convert a title to a URL-safe slug.

    "Café Culture in Phnom Penh" → "cafe-culture-in-phnom-penh"
    """
    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")
    text = text.lower()
    text = re.sub(r"['\"]", "", text)
    text = re.sub(r"[^a-z0-9]+", "-", text)
    text = text.strip("-")
    return text or "article"


def unique_slug(base: str, taken: set[str]) -> str:
    """Return base, or base-2, base-3, ... whichever is not in taken."""
    candidate = base
    counter = 2
    while candidate in taken:
        candidate = f"{base}-{counter}"
        counter += 1
    return candidate


def normalize_categories(value: Any) -> list[str]:
    """Coerce a string / list / None into a clean list of category names.

    Falsy entries are stripped, names are trimmed, duplicates dropped
    (first occurrence wins).
    """
    if not value:
        return []
    if isinstance(value, str):
        value = [value]
    elif not isinstance(value, (list, tuple)):
        value = [value]
    result: list[str] = []
    for item in value:
        if not item:
            continue
        name = str(item).strip()
        if name and name not in result:
            result.append(name)
    return result


def article_categories(article: dict[str, Any]) -> list[str]:
    """Normalized categories of an article, including a legacy `category` field."""
    merged = normalize_categories(article.get("categories"))
    merged.extend(normalize_categories(article.get("category")))
    return normalize_categories(merged)


def init_storage(data_dir: Path) -> None:
    global _data_dir

    _data_dir = data_dir
    _data_dir.mkdir(parents=True, exist_ok=True)
    uploads_dir().mkdir(exist_ok=True)
    for path in (articles_path(), categories_path()):
        if not path.exists():
            write_json(path, [])


def data_dir() -> Path:
    assert _data_dir is not None, "Call init_storage() before using storage"
    return _data_dir


def uploads_dir() -> Path:
    return data_dir() / "uploads"


def articles_path() -> Path:
    return data_dir() / "articles.json"


def categories_path() -> Path:
    return data_dir() / "categories.json"


def read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise StorageError(f"Cannot read {path.name}: {e}") from e


def write_json(path: Path, data: Any) -> None:
    try:
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Cannot write {path.name}: {e}") from e
