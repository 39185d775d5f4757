import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from dbinspect.core import schemas
from dbinspect.core.database import get_db
from dbinspect.core.errors import QueryExecutionError, QueryGuardRejection, driver_message
from dbinspect.core.executor import run_read_only_query

router = APIRouter(
    prefix="/api",
    tags=["Query"],
    responses={
        400: {"model": schemas.ErrorResponse},
        500: {"model": schemas.ErrorResponse},
    },
)

db_dep = Annotated[AsyncSession, Depends(get_db)]


# Execute a read-only query
@router.post("/query")
async def execute_query(payload: schemas.QueryRequest, db: db_dep):
    if not payload.sql:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="SQL query is required"
        )

    try:
        return await run_read_only_query(db, payload.sql)
    except (QueryGuardRejection, QueryExecutionError) as error:
        logging.error(f"Error executing query: {error.message}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)
    except Exception as error:
        # Unreachable database or driver fault, not the caller's SQL
        logging.error(f"Error executing query: {error}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=driver_message(error),
        )
