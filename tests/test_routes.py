import asyncpg
import pytest
from httpx import AsyncClient


# =========================
# INTROSPECTION
# =========================
@pytest.mark.asyncio
async def test_get_schemas(client: AsyncClient, fake_db):
    fake_db.respond("schemata", rows=[{"schema_name": "public"}])

    response = await client.get("/api/schemas")

    assert response.status_code == 200
    assert response.json() == ["public"]


@pytest.mark.asyncio
async def test_get_schemas_failure_is_500(client: AsyncClient, fake_db):
    fake_db.respond("schemata", error=ConnectionRefusedError("connection refused"))

    response = await client.get("/api/schemas")

    assert response.status_code == 500
    assert response.json() == {"error": "connection refused"}


@pytest.mark.asyncio
async def test_get_tables(client: AsyncClient, fake_db):
    fake_db.respond("information_schema.tables", rows=[{"table_name": "orders"}])

    response = await client.get("/api/schemas/sales/tables")

    assert response.status_code == 200
    assert response.json() == ["orders"]
    assert fake_db.statements[0][1] == {"schema": "sales"}


@pytest.mark.asyncio
async def test_get_tables_unknown_schema(client: AsyncClient):
    response = await client.get("/api/schemas/missing/tables")

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_get_table_columns(client: AsyncClient, fake_db):
    fake_db.respond("information_schema.columns", rows=[
        {
            "column_name": "id",
            "data_type": "integer",
            "is_nullable": "NO",
            "column_default": None,
            "character_maximum_length": None,
        }
    ])

    response = await client.get("/api/schemas/sales/tables/orders")

    assert response.status_code == 200
    assert response.json() == [
        {
            "column_name": "id",
            "data_type": "integer",
            "is_nullable": "NO",
            "column_default": None,
            "character_maximum_length": None,
        }
    ]


@pytest.mark.asyncio
async def test_get_table_columns_failure_is_500(client: AsyncClient, fake_db, db_error):
    fake_db.respond("columns", error=db_error("permission denied for schema sales"))

    response = await client.get("/api/schemas/sales/tables/orders")

    assert response.status_code == 500
    assert response.json() == {"error": "permission denied for schema sales"}


@pytest.mark.asyncio
async def test_get_tables_failure_returns_driver_message(
    client: AsyncClient, fake_db, db_error
):
    """No SQLAlchemy wrapper text or catalog SQL in the body"""
    fake_db.respond("information_schema.tables", error=db_error("permission denied"))

    response = await client.get("/api/schemas/sales/tables")

    assert response.status_code == 500
    assert response.json() == {"error": "permission denied"}


# =========================
# QUERY
# =========================
@pytest.mark.asyncio
async def test_query_returns_rows(client: AsyncClient, fake_db):
    rows = [{"id": 1, "total": 9.5}, {"id": 2, "total": 3.0}]
    fake_db.respond("FROM orders", rows=rows)
    sql = "SELECT id, total FROM orders ORDER BY id"

    response = await client.post("/api/query", json={"sql": sql})

    assert response.status_code == 200
    assert response.json() == rows
    assert fake_db.statements == [(sql, None)]


@pytest.mark.asyncio
async def test_query_without_sql_is_400(client: AsyncClient, fake_db):
    response = await client.post("/api/query", json={})

    assert response.status_code == 400
    assert response.json() == {"error": "SQL query is required"}
    assert fake_db.statements == []


@pytest.mark.asyncio
async def test_query_with_empty_sql_is_400(client: AsyncClient, fake_db):
    response = await client.post("/api/query", json={"sql": ""})

    assert response.status_code == 400
    assert fake_db.statements == []


@pytest.mark.asyncio
async def test_query_delete_is_rejected(client: AsyncClient, fake_db):
    response = await client.post("/api/query", json={"sql": "DELETE FROM users"})

    assert response.status_code == 400
    assert response.json() == {"error": "Only read-only operations are allowed"}
    assert fake_db.statements == []


@pytest.mark.asyncio
async def test_query_execution_error_is_400(client: AsyncClient, fake_db, db_error):
    fake_db.respond("nope", error=db_error('relation "nope" does not exist'))

    response = await client.post("/api/query", json={"sql": "SELECT * FROM nope"})

    assert response.status_code == 400
    assert response.json() == {"error": 'relation "nope" does not exist'}


@pytest.mark.asyncio
async def test_query_bytea_is_hex_text(client: AsyncClient, fake_db):
    fake_db.respond("payload", rows=[{"payload": b"\xff"}, {"payload": b"\xde\xad"}])

    response = await client.post("/api/query", json={"sql": "SELECT payload FROM blobs"})

    assert response.status_code == 200
    assert response.json() == [{"payload": "\\xff"}, {"payload": "\\xdead"}]


@pytest.mark.asyncio
async def test_query_range_is_object(client: AsyncClient, fake_db):
    fake_db.respond("span", rows=[{"span": asyncpg.Range(1, 5)}])

    response = await client.post("/api/query", json={"sql": "SELECT int4range(1, 5) AS span"})

    assert response.status_code == 200
    assert response.json() == [
        {
            "span": {
                "lower": 1,
                "upper": 5,
                "lower_inc": True,
                "upper_inc": False,
                "isempty": False,
            }
        }
    ]


@pytest.mark.asyncio
async def test_query_bit_string_is_text(client: AsyncClient, fake_db):
    fake_db.respond("flags", rows=[{"flags": asyncpg.BitString("101")}])

    response = await client.post("/api/query", json={"sql": "SELECT B'101' AS flags"})

    assert response.status_code == 200
    assert response.json() == [{"flags": "101"}]


@pytest.mark.asyncio
async def test_query_array_of_bytea(client: AsyncClient, fake_db):
    fake_db.respond("chunks", rows=[{"chunks": [b"\x00\x01", None]}])

    response = await client.post("/api/query", json={"sql": "SELECT chunks FROM blobs"})

    assert response.status_code == 200
    assert response.json() == [{"chunks": ["\\x0001", None]}]


@pytest.mark.asyncio
async def test_query_multiple_statements_refused_by_driver(
    client: AsyncClient, fake_db, db_error
):
    """The driver prepares each statement, so a batch comes back as a 400"""
    message = "cannot insert multiple commands into a prepared statement"
    fake_db.respond("SELECT 1; SELECT 2", error=db_error(message))

    response = await client.post("/api/query", json={"sql": "SELECT 1; SELECT 2"})

    assert response.status_code == 400
    assert response.json() == {"error": message}


@pytest.mark.asyncio
async def test_query_connection_failure_is_500(client: AsyncClient, fake_db):
    fake_db.respond("SELECT", error=ConnectionRefusedError("connection refused"))

    response = await client.post("/api/query", json={"sql": "SELECT 1"})

    assert response.status_code == 500
    assert response.json() == {"error": "connection refused"}


@pytest.mark.asyncio
async def test_query_malformed_body_is_400(client: AsyncClient, fake_db):
    response = await client.post(
        "/api/query",
        content="not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert "error" in response.json()
    assert fake_db.statements == []


# =========================
# PROMPTS AND PAGES
# =========================
@pytest.mark.asyncio
async def test_analysis_prompts(client: AsyncClient):
    first = await client.get("/api/analysis-prompts")
    second = await client.get("/api/analysis-prompts")

    assert first.status_code == 200
    data = first.json()
    assert set(data) == {"basic", "intermediate", "advanced"}
    for tier in data.values():
        assert len(tier) >= 1
        for entry in tier:
            assert entry["name"] and entry["description"] and entry["query"]
    assert second.json() == data


@pytest.mark.asyncio
async def test_landing_page(client: AsyncClient):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Database Introspection API" in response.text


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_unknown_route_uses_error_body(client: AsyncClient):
    response = await client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
