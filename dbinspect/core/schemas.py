from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


# =========================
# INTROSPECTION
# =========================
class ColumnDescriptor(BaseModel):
    """One row of information_schema.columns, keys kept as the view names them."""

    column_name: str
    data_type: str
    # "YES" / "NO", exactly as the metadata view reports it
    is_nullable: str
    column_default: Optional[str] = None
    character_maximum_length: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


# =========================
# QUERY
# =========================
class QueryRequest(BaseModel):
    # Optional so that a missing key is reported by the route as a 400
    sql: Optional[str] = None


# =========================
# ANALYSIS PROMPTS
# =========================
class PromptTemplate(BaseModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    query: str = Field(min_length=1)

    model_config = ConfigDict(frozen=True)


class PromptCatalog(BaseModel):
    basic: Tuple[PromptTemplate, ...]
    intermediate: Tuple[PromptTemplate, ...]
    advanced: Tuple[PromptTemplate, ...]

    model_config = ConfigDict(frozen=True)


class ErrorResponse(BaseModel):
    error: str
