"""Category endpoints."""

from fastapi import APIRouter, HTTPException

from komnottra import storage

from .models import CategoryBody

router = APIRouter()


@router.get("/categories")
async def list_categories():
    """List all category names."""
    return storage.list_categories()


@router.get("/categories/stats")
async def category_stats():
    """Number of articles per category."""
    return storage.category_counts()


@router.post("/categories", status_code=201)
async def add_category(body: CategoryBody):
    """Add a category name."""
    try:
        name = storage.add_category(body.category or "")
    except ValueError as e:
        raise HTTPException(400, str(e))
    except KeyError:
        raise HTTPException(409, "Category already exists")
    return {"message": "Category added", "category": name}


@router.delete("/categories/{category:path}")
async def delete_category(category: str):
    """Delete a category name."""
    if not storage.delete_category(category):
        raise HTTPException(404, "Category not found")
    return {"message": "Category deleted"}
