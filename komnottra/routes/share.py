"""Social-sharing redirect pages with Open Graph tags."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from komnottra import config, storage
from komnottra.share import render_not_found_page, render_share_page

router = APIRouter()


@router.get("/share/{slug}", response_class=HTMLResponse)
async def share_article(slug: str, request: Request):
    """OG-tagged HTML page that redirects browsers to the article."""
    article = storage.get_article(slug)
    if not article:
        return HTMLResponse(render_not_found_page(config.SITE_URL), status_code=404)
    public_url = config.PUBLIC_URL or str(request.base_url)
    return HTMLResponse(render_share_page(article, config.SITE_URL, public_url))
