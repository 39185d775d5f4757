from typing import Annotated

from fastapi import APIRouter, Depends

from dbinspect.core import schemas
from dbinspect.core.prompts import get_prompts

router = APIRouter(prefix="/api", tags=["Analysis Prompts"])

catalog_dep = Annotated[schemas.PromptCatalog, Depends(get_prompts)]


@router.get("/analysis-prompts", response_model=schemas.PromptCatalog)
async def analysis_prompts(prompt_catalog: catalog_dep):
    """Return the canned analytical query templates, grouped by tier."""
    return prompt_catalog
