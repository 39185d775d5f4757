from typing import List

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from dbinspect.core.schemas import ColumnDescriptor


# -----------------------------------------------------------------------------
# CATALOG MODULE - Schema introspection
# Purpose: read schemas, tables and columns from information_schema
# Why: fixed metadata queries with bound parameters, re-run on every call (no cache)
# -----------------------------------------------------------------------------

# 'pg_%' is a LIKE pattern: the underscore matches any single character
SCHEMAS_QUERY = text(
    """
    SELECT schema_name
    FROM information_schema.schemata
    WHERE schema_name NOT LIKE 'pg_%' AND schema_name != 'information_schema'
    """
)

TABLES_QUERY = text(
    """
    SELECT table_name
    FROM information_schema.tables
    WHERE table_schema = :schema AND table_type = 'BASE TABLE'
    """
)

COLUMNS_QUERY = text(
    """
    SELECT
      column_name,
      data_type,
      is_nullable,
      column_default,
      character_maximum_length
    FROM information_schema.columns
    WHERE table_schema = :schema AND table_name = :table
    ORDER BY ordinal_position
    """
)


async def list_schemas(db: AsyncSession) -> List[str]:
    """
    List every user schema, skipping pg_* namespaces and information_schema.

    Args:
        db: Async database session.

    Returns:
        Schema names in the order the database returns them.

    Example:
        schemas = await list_schemas(db)
    """
    result = await db.execute(SCHEMAS_QUERY)
    return list(result.scalars().all())


async def list_tables(db: AsyncSession, schema: str) -> List[str]:
    """
    List the base tables of a schema (views are excluded).
    An unknown schema simply yields an empty list.

    Args:
        db: Async database session.
        schema: Schema to look into.

    Returns:
        Table names, no ordering guarantee.
    """
    result = await db.execute(TABLES_QUERY, {"schema": schema})
    return list(result.scalars().all())


async def describe_table(
    db: AsyncSession, schema: str, table: str
) -> List[ColumnDescriptor]:
    """
    Describe the columns of a table in physical (ordinal) order.
    An unknown table yields an empty list.

    Args:
        db: Async database session.
        schema: Schema the table lives in.
        table: Table name.

    Returns:
        One ColumnDescriptor per column.
    """
    result = await db.execute(COLUMNS_QUERY, {"schema": schema, "table": table})
    return [ColumnDescriptor.model_validate(dict(row)) for row in result.mappings().all()]
