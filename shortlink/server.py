"""Command that serves the link shortener over HTTP."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading

from flask import Flask
from werkzeug.serving import make_server

from shortlink.handlers import create_app
from shortlink.repository import SQLiteRepository
from shortlink.service import URLService
from shortlink.storage import DEFAULT_PATH, Storage, StorageError

SHORT_ID_LENGTH = 6
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
SHUTDOWN_TIMEOUT = 30.0
STORAGE_EXTENSION = "shortlink_storage"

log = logging.getLogger("shortlink.server")


def build_app(db_path: str = DEFAULT_PATH) -> Flask:
    """Open the database at ``db_path`` and build the application on it."""
    storage = Storage(db_path)
    service = URLService(SQLiteRepository(storage), SHORT_ID_LENGTH)
    app = create_app(service)
    app.extensions[STORAGE_EXTENSION] = storage
    return app


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="shortlink", description="Serve the URL shortener.")
    parser.add_argument("--db", default=DEFAULT_PATH, help="SQLite database file")
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the server until SIGINT or SIGTERM; return the exit status."""
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    try:
        app = build_app(args.db)
    except StorageError as exc:
        log.error("Failed to initialize database: %s", exc)
        return 1
    storage: Storage = app.extensions[STORAGE_EXTENSION]

    try:
        server = make_server(args.host, args.port, app, threaded=True)
    except OSError as exc:
        log.error("Failed to start server: %s", exc)
        storage.close()
        return 1

    stop = threading.Event()

    def _request_stop(signum, frame) -> None:
        stop.set()

    previous = {sig: signal.signal(sig, _request_stop) for sig in (signal.SIGINT, signal.SIGTERM)}
    worker = threading.Thread(target=server.serve_forever, daemon=True)
    log.info("Starting server on %s:%d", args.host, args.port)
    worker.start()
    try:
        while not stop.wait(0.5):
            pass
        log.info("Shutting down server...")
        server.shutdown()
        worker.join(SHUTDOWN_TIMEOUT)
        server.server_close()
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
        try:
            storage.close()
        except StorageError as exc:
            log.error("Error closing database: %s", exc)
    if worker.is_alive():
        log.error("Server forced to shutdown")
        return 1
    log.info("Server exiting")
    return 0


if __name__ == "__main__":
    sys.exit(main())