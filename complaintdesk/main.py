"""FastAPI application entrypoint. No business logic; only wiring, middleware and error mapping."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from complaintdesk.api import router as api_router
from complaintdesk.core.config import APP_VERSION, settings
from complaintdesk.core.database import dispose_engine
from complaintdesk.core.errors import (
    ComplaintDeskError,
    ComplaintValidationError,
    UnauthenticatedError,
)
from complaintdesk.core.logging import configure_logging

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """One engine for the process lifetime; pooled connections are released on shutdown."""
    logger.info("ComplaintDesk API starting", extra={"environment": settings.APP_ENV})
    yield
    dispose_engine()
    logger.info("ComplaintDesk API stopped")


app = FastAPI(
    title="ComplaintDesk API",
    version=APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ComplaintDeskError)
async def domain_error_handler(request: Request, exc: ComplaintDeskError) -> JSONResponse:
    """Map domain errors to their status code with a client-safe message."""
    content: dict[str, object] = {"detail": exc.message}
    headers = None
    if isinstance(exc, ComplaintValidationError):
        content["errors"] = [{"field": e.field, "message": e.message} for e in exc.errors]
    if isinstance(exc, UnauthenticatedError):
        headers = {"WWW-Authenticate": "Cookie"}
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as 400 with every offending field."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"] if loc not in ("body", "path", "query"))
        errors.append({"field": field, "message": error["msg"]})
    fields = ", ".join(e["field"] for e in errors)
    return JSONResponse(
        status_code=400,
        content={"detail": f"Validation failed for: {fields}", "errors": errors},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures; the client only gets a generic message."""
    logger.exception(
        "Unhandled error", extra={"path": request.url.path, "method": request.method}
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "ComplaintDesk API"}
