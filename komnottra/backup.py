"""ZIP backup and restore of the data directory.

Archive layout:
  articles.json
  categories.json
  uploads/<image files>

Restore looks the two JSON files up by basename, so archives that wrap
everything in a top-level folder (as desktop zip tools do) still work.
"""

import io
import json
import logging
import zipfile
from pathlib import Path, PurePosixPath

from komnottra import config, storage

logger = logging.getLogger(__name__)

ARTICLES_ENTRY = "articles.json"
CATEGORIES_ENTRY = "categories.json"
UPLOADS_ENTRY = "uploads"


class BackupError(Exception):
    """Raised when an uploaded archive is not a usable backup."""


def _is_bad_member(name: str) -> bool:
    if not name or not name.strip():
        return True
    if name.startswith(("/", "\\")) or ":" in name:
        return True
    return ".." in PurePosixPath(name.replace("\\", "/")).parts


def build_backup() -> bytes:
    """Build a ZIP with both data files and every stored image."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, mode="w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.write(storage.articles_path(), ARTICLES_ENTRY)
        zf.write(storage.categories_path(), CATEGORIES_ENTRY)
        for path in sorted(storage.uploads_dir().iterdir()):
            if path.is_file() and path.suffix.lower() in config.ALLOWED_IMAGE_EXTS:
                zf.write(path, f"{UPLOADS_ENTRY}/{path.name}")
    return buf.getvalue()


def _load_array(zf: zipfile.ZipFile, member: zipfile.ZipInfo, item_type: type) -> list:
    name = Path(member.filename).name
    try:
        data = json.loads(zf.read(member).decode("utf-8-sig"))
    except (zipfile.BadZipFile, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise BackupError(f"{name} is not valid JSON") from e
    if not isinstance(data, list):
        raise BackupError(f"{name} must contain a JSON array")
    if not all(isinstance(item, item_type) for item in data):
        kind = "objects" if item_type is dict else "strings"
        raise BackupError(f"{name} must contain only {kind}")
    return data


def restore_backup(zip_bytes: bytes) -> dict[str, int]:
    """Overwrite data files (and add images) from a backup archive.

    Returns counts of restored articles, categories and images.
    """
    if not zipfile.is_zipfile(io.BytesIO(zip_bytes)):
        raise BackupError("Invalid ZIP archive")

    found: dict[str, zipfile.ZipInfo] = {}
    image_members: list[zipfile.ZipInfo] = []
    with zipfile.ZipFile(io.BytesIO(zip_bytes)) as zf:
        for info in zf.infolist():
            if info.is_dir():
                continue
            if _is_bad_member(info.filename):
                raise BackupError("Unsafe path in ZIP")
            path = PurePosixPath(info.filename.replace("\\", "/"))
            if path.name in (ARTICLES_ENTRY, CATEGORIES_ENTRY):
                found.setdefault(path.name, info)
            elif (
                len(path.parts) >= 2
                and path.parts[-2] == UPLOADS_ENTRY
                and path.suffix.lower() in config.ALLOWED_IMAGE_EXTS
            ):
                image_members.append(info)

        missing = [n for n in (ARTICLES_ENTRY, CATEGORIES_ENTRY) if n not in found]
        if missing:
            raise BackupError(f"Backup is missing {', '.join(missing)}")

        articles = _load_array(zf, found[ARTICLES_ENTRY], dict)
        categories = _load_array(zf, found[CATEGORIES_ENTRY], str)

        storage.write_json(storage.articles_path(), articles)
        storage.write_json(storage.categories_path(), categories)
        for info in image_members:
            name = PurePosixPath(info.filename.replace("\\", "/")).name
            (storage.uploads_dir() / name).write_bytes(zf.read(info))

    counts = {
        "articles": len(articles),
        "categories": len(categories),
        "images": len(image_members),
    }
    logger.info(
        f"Backup restored: {counts['articles']} articles, "
        f"{counts['categories']} categories, {counts['images']} images"
    )
    return counts
