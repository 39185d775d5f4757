import logging
from typing import Any, Dict, List

from asyncpg import BitString, Range
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from dbinspect.core.errors import QueryExecutionError, driver_message
from dbinspect.core.guard import ensure_read_only


# -----------------------------------------------------------------------------
# EXECUTOR MODULE - Ad-hoc query execution
# Purpose: run caller SQL verbatim and hand back the rows
# Why: only reached after the guard approved the text
# -----------------------------------------------------------------------------

logger = logging.getLogger(__name__)


def _jsonable(value: Any) -> Any:
    """
    Turn driver values FastAPI's encoder cannot handle into JSON-safe ones.
    Everything else (Decimal, datetime, UUID, ...) is left to the encoder.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        # bytea in Postgres' hex output format
        return "\\x" + bytes(value).hex()
    if isinstance(value, Range):
        return {
            "lower": _jsonable(value.lower),
            "upper": _jsonable(value.upper),
            "lower_inc": value.lower_inc,
            "upper_inc": value.upper_inc,
            "isempty": value.isempty,
        }
    if isinstance(value, BitString):
        # as_string() groups bits by four
        return value.as_string().replace(" ", "")
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


async def execute(db: AsyncSession, sql: str) -> List[Dict[str, Any]]:
    """
    Execute SQL text exactly as given and return its rows.

    The text goes straight to the driver: no bind parameter parsing and no
    escaping, so ':name' or '%' inside the query are passed through as is.
    asyncpg prepares every statement, so a multi-statement text is refused
    by the database and surfaces as a QueryExecutionError.

    Args:
        db: Async database session.
        sql: Statement approved by the guard.

    Returns:
        Rows as dicts in driver column order. bytea, range and bit values are
        converted to JSON-safe forms; other values are kept as the driver
        produced them. Statements without a result set return an empty list.

    Raises:
        QueryExecutionError: the database rejected or failed the statement.
    """
    conn = await db.connection()
    try:
        result = await conn.exec_driver_sql(sql)
    except DBAPIError as error:
        message = driver_message(error)
        logger.debug(f"Query failed: {message}")
        raise QueryExecutionError(message) from error

    if not result.returns_rows:
        return []

    return [
        {key: _jsonable(value) for key, value in row.items()}
        for row in result.mappings().all()
    ]


async def run_read_only_query(db: AsyncSession, sql: str) -> List[Dict[str, Any]]:
    """
    Guard then execute. A rejected text never reaches the database.

    Raises:
        QueryGuardRejection: the text contains a forbidden keyword.
        QueryExecutionError: the database failed the statement.
    """
    ensure_read_only(sql)
    return await execute(db, sql)
