"""Command line entry point: open the pool, verify it, serve."""

import argparse
import logging
import sys

import uvicorn

from ._app import create_app
from ._config import Settings
from ._connections import ConnectionManager
from ._errors import ConfigurationError, ConnectivityError

logger = logging.getLogger("sqlgate")


def build_parser(defaults: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlgate",
        description="Serve an HTTP endpoint that executes SQL statements.",
    )
    parser.add_argument("--host", default=defaults.host)
    parser.add_argument("--port", type=int, default=defaults.port)
    parser.add_argument("--database-url", default=defaults.database_url)
    parser.add_argument("--max-open", type=int, default=defaults.max_open_connections)
    parser.add_argument("--max-idle", type=int, default=defaults.max_idle_connections)
    parser.add_argument("--log-level", default=defaults.log_level)
    parser.add_argument(
        "--cors-origin",
        dest="cors_origins",
        action="append",
        help="Allowed CORS origin, may be repeated. Replaces SQLGATE_CORS_ORIGINS.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    try:
        defaults = Settings.from_env()
    except ConfigurationError as e:
        logging.basicConfig(level=logging.INFO)
        logger.critical("%s", e)
        sys.exit(1)

    args = build_parser(defaults).parse_args(argv)
    log_level = args.log_level.upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        connections = ConnectionManager.initialize(
            args.database_url, max_open=args.max_open, max_idle=args.max_idle
        )
        connections.verify_reachable()
    except (ConfigurationError, ConnectivityError) as e:
        logger.critical("%s", e)
        sys.exit(1)

    cors_origins = args.cors_origins
    if cors_origins is None:
        cors_origins = list(defaults.cors_origins)
    app = create_app(connections, cors_origins=cors_origins or None)
    logger.info("Server running on %s:%d", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port, log_level=log_level.lower())
