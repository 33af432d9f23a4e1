"""Pydantic request/response models."""

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# A single column value after conversion from the driver's native type.
JsonValue = Union[None, bool, int, float, str]


# === Requests ===


class QueryRequest(BaseModel):
    """Request body for SQL execution."""

    model_config = ConfigDict(strict=True)

    sql: str = ""

    # JSON null leaves sql empty.
    @field_validator("sql", mode="before")
    @classmethod
    def _null_is_empty(cls, value):
        return "" if value is None else value


# === Responses ===


class SelectResult(BaseModel):
    """Rows returned by a SELECT statement."""

    type: Literal["SELECT"] = "SELECT"
    rows: list[dict[str, JsonValue]]
    count: int


class MutationResult(BaseModel):
    """Outcome of an INSERT, UPDATE or DELETE statement."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["INSERT", "UPDATE", "DELETE"]
    affected_rows: int = Field(alias="affectedRows")
    insert_id: int | None = Field(default=None, alias="insertId")


class ExecutedResult(BaseModel):
    """Acknowledgment for statements whose result is not inspected."""

    type: str
    status: Literal["executed"] = "executed"


QueryResult = Union[SelectResult, MutationResult, ExecutedResult]


def dump_result(result: QueryResult) -> dict:
    """Serialize a result variant to its documented JSON shape."""
    if isinstance(result, SelectResult):
        return result.model_dump()
    return result.model_dump(by_alias=True, exclude_none=True)


# === Errors ===


class ErrorResponse(BaseModel):
    """Error response."""

    error: str
    message: str | None = None
