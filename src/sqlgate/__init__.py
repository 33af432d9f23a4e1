"""HTTP gateway that executes raw SQL statements and returns JSON."""

from ._app import create_app
from ._config import Settings
from ._connections import ConnectionManager
from ._errors import (
    BadRequestError,
    ConfigurationError,
    ConnectivityError,
    ExecutionError,
    SqlgateError,
)
from ._gateway import QueryGateway, classify

__version__ = "0.1.0"
__all__ = [
    "create_app",
    "classify",
    "ConnectionManager",
    "QueryGateway",
    "Settings",
    "SqlgateError",
    "BadRequestError",
    "ConfigurationError",
    "ConnectivityError",
    "ExecutionError",
]
