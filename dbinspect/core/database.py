import ssl
from typing import Any, Dict

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from dbinspect.core.config import Settings, settings


def build_connect_args(config: Settings) -> Dict[str, Any]:
    """asyncpg connect() kwargs derived from the settings."""
    if not config.DB_SSL:
        return {}

    # TLS is required, but the server certificate is not validated
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return {"ssl": context}


engine = create_async_engine(
    settings.database_url,
    echo=settings.DB_ECHO,
    connect_args=build_connect_args(settings),
)

# One session per request; nothing is ever committed, the session rolls back on close
AsyncSessionLocal = async_sessionmaker(
    bind=engine, class_=AsyncSession, expire_on_commit=False
)


# This is the "Bridge" that gives the routes access to postgres
async def get_db():
    async with AsyncSessionLocal() as session:
        yield session
