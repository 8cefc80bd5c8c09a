from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


# =========================
# QUERY
# =========================
class QueryRequest(BaseModel):
    raw_text: str


class QueryResponse(BaseModel):
    ok: bool = True
    rows: List[Dict[str, Any]]


# =========================
# SEED
# =========================
class SeedResponse(BaseModel):
    ok: bool = True
    affected_count: int = Field(alias="affectedCount")

    model_config = ConfigDict(populate_by_name=True)


# =========================
# ERRORS
# =========================
class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
