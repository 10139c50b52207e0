"""Main FastAPI application module.

This module initializes the FastAPI application, maps service errors to
``{"message": ...}`` responses and registers all route handlers.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from classroom_api import __version__
from classroom_api.config import API_HOST, API_PORT, CORS_ALLOWED_ORIGINS, validate_config
from classroom_api.core.database import init_db
from classroom_api.core.exceptions import ClassroomAPIError
from classroom_api.core.logging_config import setup_logging
from classroom_api.api.routes import (
    auth,
    classroom,
    games,
    grades,
    leaderboard,
    lessons,
    parent,
    tags,
    teacher_info,
    users,
)

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Initialize FastAPI application
app = FastAPI(
    title="Classroom API",
    description="Backend API for classrooms, lessons, grades and game leaderboards.",
    version=__version__,
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ClassroomAPIError)
async def classroom_api_error_handler(request: Request, exc: ClassroomAPIError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid {field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"message": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# Register route handlers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(classroom.router)
app.include_router(lessons.router)
app.include_router(grades.router)
app.include_router(games.router)
app.include_router(tags.router)
app.include_router(leaderboard.router)
app.include_router(teacher_info.router)
app.include_router(parent.router)


@app.on_event("startup")
def startup_tasks() -> None:
    """Check settings and create missing tables."""
    validate_config()
    init_db()
    logger.info("Classroom API %s started", __version__)


@app.get("/", summary="API root", tags=["Info"])
def root() -> dict:
    """API root, returns API information and documentation links.

    Returns:
        Dictionary with API information and documentation links.
    """
    return {
        "name": "Classroom API",
        "version": __version__,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc",
        },
        "health": "/health",
    }


@app.get("/health", summary="Health check", tags=["Health"])
def health() -> dict:
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    logger.info("Serving on http://%s:%s (docs at /docs)", API_HOST, API_PORT)
    uvicorn.run("classroom_api.app:app", host=API_HOST, port=API_PORT)
