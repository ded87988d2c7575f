"""File-based JSON storage for articles and categories.

Data layout:
  data/
    articles.json     Article list, newest first
    categories.json   Category names (strings)
    uploads/          Compressed images referenced as /uploads/<name>

Every write is a plain read-modify-write of the whole array. Files are
created as [] by init_storage() when missing.

Slug rules: title → Unicode normalize → strip non-ASCII → lowercase →
replace non-alnum runs with hyphen → strip leading/trailing hyphens.
Collisions get -2, -3, ... appended.

Categories on articles are normalized on every write: a single `category`
string is folded into the `categories` list, blanks are stripped and
duplicates dropped.
"""

# Re-export all public symbols so `from komnottra import storage` keeps working.

from .core import (  # noqa: F401
    StorageError,
    article_categories,
    articles_path,
    categories_path,
    data_dir,
    init_storage,
    normalize_categories,
    read_json,
    slugify,
    unique_slug,
    uploads_dir,
    write_json,
)

from .articles import (  # noqa: F401
    create_article,
    delete_article,
    get_article,
    list_articles,
    update_article,
)

from .categories import (  # noqa: F401
    add_category,
    category_counts,
    delete_category,
    list_categories,
)
