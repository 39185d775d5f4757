import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from dbinspect.api.middleware import AccessLogMiddleware
from dbinspect.api.router import api_router
from dbinspect.core.config import settings
from dbinspect.core.database import engine

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

HOME_PAGE = Path(__file__).resolve().parent / "static" / "home.html"


async def check_connection():
    """Log whether the database answers; startup goes on either way."""
    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT NOW()"))
            logger.info(f"Connected to PostgreSQL database at: {result.scalar()}")
    except Exception as e:
        logger.error(f"Database connection error: {e}")


def log_loop_exception(loop, context):
    # Faults in background tasks are logged, the server keeps running
    logger.error(
        f"Uncaught exception: {context.get('message')}",
        exc_info=context.get("exception"),
    )


# Close the engine once everything is done and close all the sessions
@asynccontextmanager
async def lifespan(app: FastAPI):
    asyncio.get_running_loop().set_exception_handler(log_loop_exception)
    await check_connection()
    logger.info(f"Server running on port {settings.PORT}")

    yield
    await engine.dispose()


app = FastAPI(title="Database Introspection API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(AccessLogMiddleware)

# Include the master router containing all our endpoints
app.include_router(api_router)


# Every error leaves the API as {"error": message}
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": f"Invalid request body: {message}"},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        f"Uncaught exception on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error"},
    )


@app.get("/", include_in_schema=False)
async def home():
    if not HOME_PAGE.is_file():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Landing page not found"
        )
    return FileResponse(HOME_PAGE, media_type="text/html")


@app.get("/health")
async def health():
    return {"status": "healthy"}


def run():
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
