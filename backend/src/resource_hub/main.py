from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from resource_hub.db.session import shutdown
from resource_hub.dependencies import DB
from resource_hub.exceptions import DomainError, NotFoundError, QueryFailedError
from resource_hub.logging import get_logger
from resource_hub.middleware import RequestIDMiddleware
from resource_hub.routers import listing, search
from resource_hub.schemas.error import ErrorDetail, ErrorResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close pooled database connections on shutdown."""
    yield
    await shutdown()


app = FastAPI(title="Tribal Resource Hub", lifespan=lifespan)
app.add_middleware(RequestIDMiddleware)
app.include_router(listing.router, tags=["listings"])
app.include_router(search.router, tags=["search"])


def _error_json(code: str, message: str) -> dict[str, object]:
    """Build the standard error envelope as a dict for JSONResponse."""
    return ErrorResponse(error=ErrorDetail(code=code, message=message)).model_dump()


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Return 404 with the entity details."""
    return JSONResponse(status_code=404, content=_error_json("not_found", exc.message))


@app.exception_handler(QueryFailedError)
async def query_failed_handler(request: Request, exc: QueryFailedError) -> JSONResponse:
    """Return 503 so clients show a retry-capable "unable to load" state."""
    logger.error(
        "query_failed",
        operation=exc.operation,
        kind=str(exc.kind),
        cause=repr(exc.__cause__),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=503,
        content=_error_json("query_failed", exc.message),
        headers={"Retry-After": "1"},
    )


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Return 400 for generic domain-level violations."""
    logger.warning("domain_error", error=exc.message, path=request.url.path)
    return JSONResponse(status_code=400, content=_error_json("domain_error", exc.message))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unhandled exceptions and return a safe error response (no stack traces leaked)."""
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=500,
        content=_error_json("internal_error", "Internal server error"),
    )


@app.get("/health")
async def health(db: DB) -> dict[str, str]:
    """Health check endpoint: verifies database connectivity."""
    await db.execute(text("SELECT 1"))
    return {"status": "ok"}
