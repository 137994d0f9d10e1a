import argparse
import logging
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from .app import create_app
from .config import load_settings
from .db import Storage
from .logging_setup import configure_logging

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="pflow-store", description="Content-addressed pflow model server")
    sub = p.add_subparsers(dest="cmd", required=True)
    serve = sub.add_parser("serve", help="Serve stored models over HTTP")
    serve.add_argument("--host", help="Bind address (PFLOW_HOST)")
    serve.add_argument("--port", type=int, help="Bind port (PFLOW_PORT)")
    serve.add_argument("--db-path", type=Path, help="SQLite database file (PFLOW_DB_PATH)")
    serve.add_argument("--collection", help="Collection holding models (PFLOW_COLLECTION)")
    serve.add_argument("--log-level", help="Logging level (PFLOW_LOG_LEVEL)")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    load_dotenv()
    settings = load_settings()

    host = args.host or settings.host
    port = args.port if args.port is not None else settings.port
    db_path = args.db_path or settings.db_path
    collection = args.collection or settings.collection
    log_level = args.log_level or settings.log_level

    configure_logging(log_level)

    storage = Storage(db_path, lock_timeout=settings.lock_timeout)
    storage.create_tables(collection)
    logger.info("Serving %s from %s on %s:%s", collection, db_path, host, port)

    app = create_app(storage, collection)
    try:
        uvicorn.run(app, host=host, port=port, log_config=None)
    finally:
        storage.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
