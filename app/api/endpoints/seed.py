from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.core import schemas
from app.core.database import DataAccess, get_data_access

router = APIRouter(tags=["Seed"])

data_dep = Annotated[DataAccess, Depends(get_data_access)]


@router.post(
    "/insert",
    response_model=schemas.SeedResponse,
    status_code=status.HTTP_200_OK,
)
async def insert_seed_rows(data_access: data_dep):
    """
    Create the patient table if it does not exist and append the four seed rows.
    Calling it twice leaves eight rows, nothing is upserted.
    """
    affected = await data_access.seed_fixed_rows()
    return schemas.SeedResponse(affected_count=affected)
