"""Image compression and storage under data/uploads/.

Uploaded (or data-URL embedded) images are decoded with Pillow, rotated per
EXIF orientation, downscaled to IMAGE_MAX_WIDTH and re-encoded:
  - images with transparency → optimized PNG
  - everything else          → progressive JPEG at IMAGE_QUALITY

Stored files get a random hex name; articles reference them as
/uploads/<name>.
"""

import base64
import binascii
import io
import logging
import re
import uuid
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from komnottra import config, storage

logger = logging.getLogger(__name__)

_DATA_URL_RE = re.compile(r"^data:image/[\w.+-]+;base64,(?P<payload>.+)$", re.DOTALL)


class ImageError(Exception):
    """Raised when image data cannot be decoded or stored."""


def _has_alpha(img: Image.Image) -> bool:
    if img.mode in ("RGBA", "LA"):
        return True
    return img.mode == "P" and "transparency" in img.info


def compress_image(
    data: bytes,
    max_width: int | None = None,
    quality: int | None = None,
) -> tuple[bytes, str]:
    """Return (encoded bytes, extension) for a compressed copy of data."""
    max_width = max_width or config.IMAGE_MAX_WIDTH
    quality = quality or config.IMAGE_QUALITY
    try:
        with Image.open(io.BytesIO(data)) as src:
            src.load()
            img = ImageOps.exif_transpose(src)
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
        raise ImageError(f"Unsupported or corrupt image: {e}") from e

    if img.width > max_width:
        height = max(1, round(img.height * max_width / img.width))
        img = img.resize((max_width, height), Image.Resampling.LANCZOS)

    buf = io.BytesIO()
    if _has_alpha(img):
        img.convert("RGBA").save(buf, "PNG", optimize=True)
        return buf.getvalue(), ".png"
    img.convert("RGB").save(buf, "JPEG", quality=quality, optimize=True, progressive=True)
    return buf.getvalue(), ".jpg"


def save_image(data: bytes) -> str:
    """Compress and store an image. Returns the stored filename."""
    encoded, ext = compress_image(data)
    filename = f"{uuid.uuid4().hex}{ext}"
    (storage.uploads_dir() / filename).write_bytes(encoded)
    logger.info(f"Image stored: {filename} ({len(data)} → {len(encoded)} bytes)")
    return filename


def image_url(filename: str) -> str:
    return f"{config.UPLOADS_URL_PREFIX}{filename}"


def decode_data_url(value: object) -> bytes | None:
    """Decode a base64 image data URL. Returns None if value is not one."""
    if not isinstance(value, str):
        return None
    m = _DATA_URL_RE.match(value.strip())
    if not m:
        return None
    try:
        return base64.b64decode(m.group("payload"), validate=False)
    except (binascii.Error, ValueError) as e:
        raise ImageError(f"Invalid base64 image data: {e}") from e


def store_embedded_image(fields: dict) -> None:
    """Replace a data-URL `image` field with the URL of a stored copy."""
    data = decode_data_url(fields.get("image"))
    if data is None:
        return
    fields["image"] = image_url(save_image(data))


def local_image_path(url: object) -> Path | None:
    """Map an /uploads/<name> URL (relative or absolute) to its file path."""
    if not isinstance(url, str) or config.UPLOADS_URL_PREFIX not in url:
        return None
    name = url.rsplit(config.UPLOADS_URL_PREFIX, 1)[1].split("?", 1)[0]
    if not name or name != Path(name).name:
        return None
    return storage.uploads_dir() / name


def delete_image(url: object) -> bool:
    """Remove a stored image referenced by url. Returns True if a file was removed."""
    path = local_image_path(url)
    if path is None or not path.is_file():
        return False
    try:
        path.unlink()
    except OSError as e:
        logger.warning(f"Could not delete image {path.name}: {e}")
        return False
    logger.info(f"Image deleted: {path.name}")
    return True
