"""Statement classification and execution."""

from sqlalchemy import Engine
from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import SQLAlchemyError

from ._errors import ExecutionError, driver_message
from ._models import ExecutedResult, MutationResult, QueryResult, SelectResult
from ._rows import rows_to_dicts

MUTATIONS = frozenset({"INSERT", "UPDATE", "DELETE"})

# Hand the statement to the DBAPI cursor untouched: no bind parameter
# parsing, no paramstyle interpolation of "%".
_RAW = {"no_parameters": True, "preserve_rowcount": True}


def classify(sql: str) -> str:
    """Return the statement's first whitespace-delimited token, upper-cased."""
    return sql.split(maxsplit=1)[0].upper()


class QueryGateway:
    """Runs one SQL statement per call against a pooled engine."""

    def __init__(self, engine: Engine):
        self._engine = engine

    def execute(self, sql: str) -> QueryResult:
        """Execute ``sql`` and describe the outcome by statement kind.

        ``sql`` must already be stripped and non-empty. Each call runs in its
        own transaction, committed on success. Database failures raise
        ExecutionError carrying the driver's message.
        """
        kind = classify(sql)
        try:
            with self._engine.begin() as conn:
                result = conn.execution_options(**_RAW).exec_driver_sql(sql)
                if kind == "SELECT":
                    return self._select(result)
                if kind in MUTATIONS:
                    return self._mutation(kind, result)
                return ExecutedResult(type=kind)
        except SQLAlchemyError as e:
            raise ExecutionError(driver_message(e)) from e

    def _select(self, result: CursorResult) -> SelectResult:
        if not result.returns_rows:
            return SelectResult(rows=[], count=0)
        rows = rows_to_dicts(list(result.keys()), result)
        return SelectResult(rows=rows, count=len(rows))

    def _mutation(self, kind: str, result: CursorResult) -> MutationResult:
        affected = _best_effort(lambda: result.rowcount)
        if kind != "INSERT":
            return MutationResult(type=kind, affected_rows=affected)
        insert_id = _best_effort(lambda: result.lastrowid)
        return MutationResult(type=kind, affected_rows=affected, insert_id=insert_id)


def _best_effort(read) -> int:
    # Drivers that cannot report a count or id get 0 instead of a failure.
    try:
        value = read()
    except (SQLAlchemyError, AttributeError, NotImplementedError):
        return 0
    if not isinstance(value, int) or value < 0:
        return 0
    return value
