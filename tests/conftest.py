import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.exc import ProgrammingError

from dbinspect.main import app
from dbinspect.core.database import get_db


class FakeRows:
    def __init__(self, items):
        self.items = list(items)

    def all(self):
        return list(self.items)


class FakeResult:
    """Just enough of a SQLAlchemy Result for the catalog and the executor."""

    def __init__(self, rows):
        self.returns_rows = rows is not None
        self.rows = [dict(row) for row in rows or []]

    def scalars(self):
        return FakeRows(next(iter(row.values())) for row in self.rows)

    def mappings(self):
        return FakeRows(self.rows)


class FakeConnection:
    def __init__(self, session):
        self.session = session

    async def exec_driver_sql(self, sql):
        return self.session.dispatch(sql, None)


class FakeSession:
    """
    Stand-in for AsyncSession. Records every statement and answers with the
    rows (or error) registered for the first matching SQL fragment.
    """

    def __init__(self):
        self.statements = []
        self.responses = []

    def respond(self, fragment, rows=None, error=None):
        self.responses.append((fragment, rows, error))

    def dispatch(self, sql, params):
        self.statements.append((sql, params))
        for fragment, rows, error in self.responses:
            if fragment in sql:
                if error is not None:
                    raise error
                return FakeResult(rows)
        return FakeResult([])

    async def execute(self, statement, params=None):
        return self.dispatch(str(statement), params)

    async def connection(self):
        return FakeConnection(self)


@pytest.fixture
def db_error():
    """Factory for a driver error as SQLAlchemy wraps it."""

    def make(message):
        return ProgrammingError("SELECT ...", None, Exception(message))

    return make


@pytest.fixture
def fake_db():
    return FakeSession()


# Client
@pytest_asyncio.fixture(scope="function")
async def client(fake_db):
    async def override_get_db():
        yield fake_db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
