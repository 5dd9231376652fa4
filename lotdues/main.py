"""Main application entry point."""

import logging

import uvicorn

from lotdues.api.server import app
from lotdues.services import init_db, init_engines
from lotdues.services.config import load_config
from lotdues.services.logging import setup_server_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """Load configuration, set up logging and serve the report API."""
    import argparse

    parser = argparse.ArgumentParser(description="Lot dues report server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    args = parser.parse_args()

    config = load_config()
    setup_server_logging(config.log_file, config.log_level)
    init_engines(config.database_url)
    init_db()

    logger.info(f"Starting report server on {args.host}:{args.port} (database: {config.database_url})")
    uvicorn.run(app, host=args.host, port=args.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
