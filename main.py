"""Komnottra backend — launcher. Runs the API under uvicorn."""

import argparse
import logging
import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = os.getenv("PORT", "5000")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def main():
    parser = argparse.ArgumentParser(description="Komnottra backend launcher")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Data storage directory (default: ./data)")
    parser.add_argument("--host", default=HOST, help=f"Bind address (default: {HOST})")
    parser.add_argument("--port", type=int, default=int(PORT), help=f"Port (default: {PORT})")
    parser.add_argument("--reload", action="store_true",
                        help="Restart on code changes")
    parser.add_argument("--demo", action="store_true",
                        help="Clean and create demo articles and categories")
    args = parser.parse_args()

    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Export so the app (and reloader workers) pick up the same data dir
    if args.data_dir:
        os.environ["DATA_DIR"] = str(args.data_dir.resolve())

    if args.demo:
        from komnottra import config, storage
        from komnottra.demo import create_demo_data
        storage.init_storage(config.resolve_data_dir())
        create_demo_data()

    print(f"Server running on http://localhost:{args.port} ...")
    uvicorn.run(
        "komnottra.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
