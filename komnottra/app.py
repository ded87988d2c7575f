import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from komnottra import config, storage
from komnottra.routes import router

logger = logging.getLogger(__name__)


def create_app(data_dir: Path | None = None) -> FastAPI:
    resolved = data_dir or config.resolve_data_dir()
    storage.init_storage(resolved)

    app = FastAPI(title="Komnottra Backend")

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        length = request.headers.get("content-length")
        if length and length.isdigit():
            limit = config.MAX_BODY_BYTES
            if request.url.path in ("/upload", "/restore"):
                limit = config.MAX_UPLOAD_BYTES + 64 * 1024  # multipart overhead
            if int(length) > limit:
                return JSONResponse({"detail": "Request body too large"}, status_code=413)
        return await call_next(request)

    # Outermost, so 413s from the body limit carry CORS headers too
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(storage.StorageError)
    async def storage_error_handler(request: Request, exc: storage.StorageError):
        logger.error(f"Storage failure on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(
            {"detail": "Failed to access stored data", "error": str(exc)},
            status_code=500,
        )

    app.include_router(router)
    app.mount("/uploads", StaticFiles(directory=storage.uploads_dir()), name="uploads")

    return app


# Default app instance for uvicorn (uses DATA_DIR env var or default)
app = create_app()
