"""Article CRUD endpoints."""

from fastapi import APIRouter, HTTPException

from komnottra import images, storage

from .models import ArticleBody

router = APIRouter()


def _fields(body: ArticleBody) -> dict:
    fields = body.model_dump(exclude_unset=True)
    try:
        images.store_embedded_image(fields)
    except images.ImageError as e:
        raise HTTPException(400, str(e))
    return fields


@router.get("/articles")
async def list_articles(category: str | None = None, search: str | None = None, limit: int | None = None):
    """List articles, newest first, optionally filtered by category or text."""
    return storage.list_articles(category=category, search=search, limit=limit)


@router.get("/articles/{key}")
async def get_article(key: str):
    """Get a single article by slug or id."""
    article = storage.get_article(key)
    if not article:
        raise HTTPException(404, "Article not found")
    return article


@router.post("/articles", status_code=201)
async def create_article(body: ArticleBody):
    """Create an article. A data-URL image is compressed and stored."""
    if not (body.title or "").strip():
        raise HTTPException(400, "Title is required")
    article = storage.create_article(_fields(body))
    return {"message": "Article added", "article": article}


@router.put("/articles/{key}")
async def update_article(key: str, body: ArticleBody):
    """Update an article's fields (partial merge)."""
    existing = storage.get_article(key)
    if not existing:
        raise HTTPException(404, "Article not found")
    if body.title is not None and not body.title.strip():
        raise HTTPException(400, "Title is required")
    fields = _fields(body)
    article = storage.update_article(key, fields)
    if "image" in fields and fields["image"] != existing.get("image"):
        images.delete_image(existing.get("image"))
    return {"message": "Article updated", "article": article}


@router.delete("/articles/{key}")
async def delete_article(key: str):
    """Delete an article and its stored image."""
    removed = storage.delete_article(key)
    if not removed:
        raise HTTPException(404, "Article not found")
    images.delete_image(removed.get("image"))
    return {"message": "Article deleted"}
