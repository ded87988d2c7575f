"""Social-sharing redirect pages.

Crawlers (Facebook, Telegram, X, ...) don't run the front-end's JavaScript,
so /share/<slug> serves a tiny HTML page carrying Open Graph tags for the
article and immediately redirects real browsers to the front-end route.
"""

import html
import json
import re
from collections.abc import Callable
from typing import Any

import pybars

DESCRIPTION_LENGTH = 200

_compiler = pybars.Compiler()
_cache: dict[str, Callable] = {}

_TAG_RE = re.compile(r"<[^>]+>")
_SPACE_RE = re.compile(r"\s+")

SHARE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{title}}</title>
  <meta name="description" content="{{description}}">
  <meta property="og:type" content="article">
  <meta property="og:site_name" content="{{site_name}}">
  <meta property="og:title" content="{{title}}">
  <meta property="og:description" content="{{description}}">
  <meta property="og:url" content="{{url}}">
  {{#if image}}
  <meta property="og:image" content="{{image}}">
  <meta name="twitter:image" content="{{image}}">
  {{/if}}
  <meta name="twitter:card" content="summary_large_image">
  <meta name="twitter:title" content="{{title}}">
  <meta name="twitter:description" content="{{description}}">
  <link rel="canonical" href="{{url}}">
  <meta http-equiv="refresh" content="0; url={{url}}">
</head>
<body>
  <p>Redirecting to <a href="{{url}}">{{title}}</a>…</p>
  <script>window.location.replace({{{url_json}}});</script>
</body>
</html>
"""

NOT_FOUND_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Article not found</title>
  <meta http-equiv="refresh" content="3; url={{site_url}}">
</head>
<body>
  <p>Article not found. Go to <a href="{{site_url}}">{{site_name}}</a>.</p>
</body>
</html>
"""


def _render(template_str: str, context: dict[str, Any]) -> str:
    compiled = _cache.get(template_str)
    if compiled is None:
        compiled = _compiler.compile(template_str)
        _cache[template_str] = compiled
    return str(compiled(context))


def _site_name(site_url: str) -> str:
    return re.sub(r"^https?://(www\.)?", "", site_url).split("/", 1)[0]


def describe(article: dict[str, Any]) -> str:
    """Excerpt if present, else the start of the content as plain text."""
    text = article.get("excerpt") or article.get("description") or article.get("content") or ""
    text = html.unescape(_TAG_RE.sub(" ", str(text)))
    text = _SPACE_RE.sub(" ", text).strip()
    if len(text) > DESCRIPTION_LENGTH:
        text = text[:DESCRIPTION_LENGTH].rstrip() + "…"
    return text


def absolute_url(url: str, base_url: str) -> str:
    if not url or url.startswith(("http://", "https://")):
        return url
    if url.startswith("//"):
        return f"https:{url}"
    return f"{base_url.rstrip('/')}/{url.lstrip('/')}"


def article_url(site_url: str, slug: str) -> str:
    return f"{site_url.rstrip('/')}/article/{slug}"


def render_share_page(article: dict[str, Any], site_url: str, public_url: str) -> str:
    """Render the OG redirect page for an article."""
    # Articles stored before slugs existed are only reachable by id
    url = article_url(site_url, article.get("slug") or str(article.get("id", "")))
    image = article.get("image")
    # Embedded data URLs are useless to crawlers
    if not isinstance(image, str) or image.startswith("data:"):
        image = ""
    context = {
        "title": article.get("title") or _site_name(site_url),
        "description": describe(article),
        "url": url,
        "url_json": json.dumps(url).replace("<", "\\u003c"),
        "image": absolute_url(image, public_url),
        "site_name": _site_name(site_url),
    }
    return _render(SHARE_TEMPLATE, context)


def render_not_found_page(site_url: str) -> str:
    return _render(NOT_FOUND_TEMPLATE, {"site_url": site_url, "site_name": _site_name(site_url)})
