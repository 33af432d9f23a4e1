"""SQL execution route."""

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from .._errors import BadRequestError
from .._gateway import QueryGateway
from .._models import QueryRequest, dump_result

router = APIRouter(tags=["query"])


def get_gateway() -> QueryGateway:
    """Get the query gateway instance."""
    raise RuntimeError("QueryGateway not initialized")


async def read_query_request(request: Request) -> QueryRequest:
    """Decode the JSON body into a QueryRequest or fail with 400."""
    body = await request.body()
    try:
        return QueryRequest.model_validate_json(body)
    except ValidationError:
        raise BadRequestError("Invalid JSON body") from None


@router.post("/query")
def run_query(
    query: QueryRequest = Depends(read_query_request),
    gateway: QueryGateway = Depends(get_gateway),
) -> dict:
    """Execute one SQL statement and report rows, affected rows or acknowledgment."""
    sql = query.sql.strip()
    if not sql:
        raise BadRequestError("SQL query is required")
    return dump_result(gateway.execute(sql))
