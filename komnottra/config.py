"""Environment-driven settings. Values are read once, after loading .env."""

import os
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent.parent
load_dotenv(ROOT / ".env")

DEFAULT_DATA_DIR = ROOT / "data"

_DEFAULT_ORIGINS = "https://www.komnottra.com,https://komnottra.com"
ALLOWED_ORIGINS = [
    o.strip() for o in os.getenv("ALLOWED_ORIGINS", _DEFAULT_ORIGINS).split(",") if o.strip()
]

# Front-end base that share pages redirect to (…/article/<slug>)
SITE_URL = os.getenv("SITE_URL", "https://www.komnottra.com").rstrip("/")
# Public base of this API; empty means "use the request's base URL"
PUBLIC_URL = os.getenv("PUBLIC_URL", "").rstrip("/")

MAX_BODY_BYTES = int(os.getenv("MAX_BODY_BYTES", str(5 * 1024 * 1024)))  # 5MB
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))  # 10MB

IMAGE_MAX_WIDTH = int(os.getenv("IMAGE_MAX_WIDTH", "1200"))
IMAGE_QUALITY = int(os.getenv("IMAGE_QUALITY", "80"))

ALLOWED_IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".gif", ".webp"}
UPLOADS_URL_PREFIX = "/uploads/"


def resolve_data_dir() -> Path:
    return Path(os.getenv("DATA_DIR", str(DEFAULT_DATA_DIR)))
