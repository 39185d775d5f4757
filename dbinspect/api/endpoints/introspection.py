import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from dbinspect.core import catalog, schemas
from dbinspect.core.database import get_db
from dbinspect.core.errors import driver_message

router = APIRouter(
    prefix="/api/schemas",
    tags=["Schemas"],
    responses={500: {"model": schemas.ErrorResponse}},
)

db_dep = Annotated[AsyncSession, Depends(get_db)]


# List schemas
@router.get("", response_model=List[str])
async def get_schemas(db: db_dep):
    try:
        return await catalog.list_schemas(db)
    except Exception as error:
        logging.error(f"Error fetching schemas: {error}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=driver_message(error),
        )


# List base tables of a schema
@router.get("/{schema}/tables", response_model=List[str])
async def get_tables(schema: str, db: db_dep):
    try:
        return await catalog.list_tables(db, schema)
    except Exception as error:
        logging.error(f"Error fetching tables of {schema}: {error}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=driver_message(error),
        )


# Describe the columns of a table
@router.get(
    "/{schema}/tables/{table}", response_model=List[schemas.ColumnDescriptor]
)
async def get_table_columns(schema: str, table: str, db: db_dep):
    try:
        return await catalog.describe_table(db, schema, table)
    except Exception as error:
        logging.error(f"Error fetching table schema {schema}.{table}: {error}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=driver_message(error),
        )
