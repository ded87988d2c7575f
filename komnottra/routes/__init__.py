"""FastAPI endpoints, mounted at the root (no prefix).

Endpoint groups: health, articles, categories, media (image upload,
backup/restore), share (OG redirect pages). Stored images are served
from /uploads by a StaticFiles mount in app.py.
"""

from fastapi import APIRouter

from .articles import router as articles_router
from .categories import router as categories_router
from .health import router as health_router
from .media import router as media_router
from .share import router as share_router

router = APIRouter()
router.include_router(health_router)
router.include_router(articles_router)
router.include_router(categories_router)
router.include_router(media_router)
router.include_router(share_router)
