"""
Community Report System - Main FastAPI Application
"""
import logging
import os
from contextlib import asynccontextmanager
from http import HTTPStatus

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from community_reports.config import get_settings
from community_reports.reports import schemas
from community_reports.reports.router import router as reports_router
from community_reports.reports.storage import get_store

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

# Absent or empty fields
MISSING_ERROR_TYPES = {"missing", "string_too_short"}

ENDPOINTS = [
    ("GET", "/api/reports"),
    ("GET", "/api/reports/filter?category=Infrastructure&status=Pending"),
    ("GET", "/api/reports/:id"),
    ("POST", "/api/reports"),
    ("PUT", "/api/reports/:id/status"),
    ("DELETE", "/api/reports/:id"),
    ("POST", "/api/reports/:id/comments"),
    ("GET", "/api/stats"),
]


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=schemas.ErrorResponse(message=message).model_dump(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    store = get_store()
    store.initialize()
    logger.info("%s is running on http://%s:%s", settings.app_name, settings.host, settings.port)
    logger.info("Database: %s", os.path.abspath(store.path))
    for method, path in ENDPOINTS:
        logger.info("  %-6s %s", method, path)
    yield
    logger.info("Shutting down %s", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    description="Backend for tracking community-submitted issue reports",
    version="1.0.0",
    lifespan=lifespan,
)


# --- CORS + ERROR BOUNDARY ---
@app.middleware("http")
async def cors_and_error_boundary(request: Request, call_next):
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Server error on %s %s", request.method, request.url.path)
        response = error_response(500, "Server error")
    response.headers.update(CORS_HEADERS)
    return response


# --- EXCEPTION HANDLERS ---
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies become 400s with a short message."""
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        message = "Invalid JSON"
    elif request.url.path.endswith("/status"):
        message = "Invalid status"
    elif any(tuple(error.get("loc", ())) == ("body",) and error.get("type") != "missing" for error in errors):
        # Body decoded to something other than a JSON object, or was not sent as JSON
        message = "Request body must be a JSON object"
    elif all(error.get("type") in MISSING_ERROR_TYPES for error in errors):
        message = "Missing required fields"
    else:
        message = "Required fields must be strings"
    return error_response(400, message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Unmatched paths and methods carry the stock reason phrase as detail
    if exc.status_code in (404, 405) and exc.detail == HTTPStatus(exc.status_code).phrase:
        return error_response(404, "Endpoint not found")
    return error_response(exc.status_code, str(exc.detail))


app.include_router(reports_router)


def run():
    uvicorn.run(
        "community_reports.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
