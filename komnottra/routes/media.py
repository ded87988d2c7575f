"""Image upload and backup/restore endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import Response

from komnottra import backup, config, images

router = APIRouter()


async def _read_limited(file: UploadFile, what: str) -> bytes:
    # Read one byte past the limit to detect oversize uploads
    data = await file.read(config.MAX_UPLOAD_BYTES + 1)
    if len(data) > config.MAX_UPLOAD_BYTES:
        raise HTTPException(413, f"{what} too large")
    if not data:
        raise HTTPException(400, f"{what} is empty")
    return data


@router.post("/upload", status_code=201)
async def upload_image(image: UploadFile = File(...)):
    """Compress and store an uploaded image. Returns its public URL."""
    data = await _read_limited(image, "Image")
    try:
        filename = images.save_image(data)
    except images.ImageError as e:
        raise HTTPException(400, str(e))
    return {"url": images.image_url(filename), "filename": filename}


@router.get("/backup")
async def download_backup():
    """Download a ZIP of all articles, categories and images."""
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    headers = {
        "Content-Disposition": f'attachment; filename="backup-{stamp}.zip"',
        "Cache-Control": "no-store",
    }
    return Response(content=backup.build_backup(), media_type="application/zip", headers=headers)


@router.post("/restore")
async def restore_backup(file: UploadFile = File(..., alias="backup")):
    """Replace articles and categories from an uploaded backup ZIP."""
    data = await _read_limited(file, "Backup")
    try:
        counts = backup.restore_backup(data)
    except backup.BackupError as e:
        raise HTTPException(400, str(e))
    return {"message": "Backup restored", "restored": counts}
