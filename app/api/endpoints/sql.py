import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.core import schemas
from app.core.database import DataAccess, get_data_access
from app.core.errors import RejectedQuery
from app.core.guard import is_read_only

router = APIRouter(prefix="/api/v1/sql", tags=["Query"])

data_dep = Annotated[DataAccess, Depends(get_data_access)]


@router.get(
    "/{tail:path}",
    response_model=schemas.QueryResponse,
    status_code=status.HTTP_200_OK,
)
async def run_sql(tail: str, data_access: data_dep):
    """
    Run a client supplied SELECT on the read-only connection.
    The ASGI server percent-decodes the path once, so `tail` is the raw SQL.
    """
    query = schemas.QueryRequest(raw_text=tail)

    if not is_read_only(query.raw_text):
        logging.warning(f"Rejected query: {query.raw_text[:200]!r}")
        raise RejectedQuery()

    rows = await data_access.run_query(query.raw_text)
    return schemas.QueryResponse(rows=rows)
