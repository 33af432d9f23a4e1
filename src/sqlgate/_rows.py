"""Conversion of driver row values to JSON values."""

import datetime
import math
from decimal import Decimal
from typing import Any, Iterable, Sequence

from ._models import JsonValue


def to_json_value(value: Any) -> JsonValue:
    """Map a value reported by the driver onto null, boolean, integer, float or text."""
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    return str(value)


def rows_to_dicts(
    columns: Sequence[str], rows: Iterable[Sequence[Any]]
) -> list[dict[str, JsonValue]]:
    """Build one column-name mapping per row, preserving row order."""
    return [
        {column: to_json_value(value) for column, value in zip(columns, row)}
        for row in rows
    ]
