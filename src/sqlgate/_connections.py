"""Pooled database connection owned by the gateway process."""

import logging
from typing import Any

from pymysql.constants import CLIENT
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.pool import NullPool, QueuePool

from ._errors import ConfigurationError, ConnectivityError, driver_message

logger = logging.getLogger(__name__)


def pool_options(max_open: int, max_idle: int) -> dict[str, Any]:
    """Translate open/idle connection limits into ``create_engine`` pool arguments.

    ``max_open <= 0`` lifts the limit on open connections, ``max_idle <= 0``
    disables pooling of idle connections. An idle limit above the open limit
    is lowered to the open limit. Checkout waits for a free connection
    without a time limit.
    """
    if max_open > 0 and max_idle > max_open:
        max_idle = max_open
    if max_idle <= 0:
        return {"poolclass": NullPool}
    max_overflow = max_open - max_idle if max_open > 0 else -1
    return {
        "poolclass": QueuePool,
        "pool_size": max_idle,
        "max_overflow": max_overflow,
        "pool_timeout": None,
    }


def report_changed_rows(dialect, conn_rec, cargs, cparams) -> None:
    """Make MySQL count changed rows, not matched rows, as affected rows.

    SQLAlchemy always asks MySQL drivers for FOUND_ROWS. Without it the
    server reports rows actually changed, as a plain driver connection does.
    """
    if "client_flag" in cparams:
        cparams["client_flag"] &= ~CLIENT.FOUND_ROWS


class ConnectionManager:
    """Owns the engine that every request borrows connections from."""

    def __init__(self, engine: Engine):
        self._engine = engine

    @classmethod
    def initialize(
        cls, url: str, max_open: int = 10, max_idle: int = 5
    ) -> "ConnectionManager":
        """Open a connection pool for ``url`` with the given limits."""
        try:
            engine = create_engine(
                url, pool_pre_ping=True, **pool_options(max_open, max_idle)
            )
        except (ArgumentError, ImportError, ValueError) as e:
            raise ConfigurationError(f"Cannot use database URL: {e}") from e

        if engine.dialect.name in ("mysql", "mariadb"):
            event.listen(engine, "do_connect", report_changed_rows)

        logger.info(
            "Opened connection pool for %s (max_open=%d, max_idle=%d)",
            make_url(url).render_as_string(hide_password=True),
            max_open,
            max_idle,
        )
        return cls(engine)

    @property
    def engine(self) -> Engine:
        return self._engine

    def verify_reachable(self) -> None:
        """Check out one connection to prove the database answers."""
        try:
            with self._engine.connect():
                pass
        except SQLAlchemyError as e:
            raise ConnectivityError(
                f"Database connection failed: {driver_message(e)}"
            ) from e
        logger.info("Database is reachable")

    def dispose(self) -> None:
        """Close pooled connections."""
        self._engine.dispose()
