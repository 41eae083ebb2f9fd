"""
FastAPI application entry point for the Movie Catalog API.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from movie_catalog.api.config import (
    VERSION, get_api_host, get_api_port, get_database_path, get_environment, get_log_level,
)
from movie_catalog.api.routers import movies, system
from movie_catalog.database.init_db import init_database
from movie_catalog.exceptions import FailedValidationError
from movie_catalog.utils.logging_config import configure_api_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and make sure the schema exists."""
    configure_api_logging(debug=get_log_level() == "DEBUG")
    db_manager = init_database(db_path=get_database_path())
    logger.info("Movie Catalog API %s starting (%s)", VERSION, get_environment())
    yield
    db_manager.close()


app = FastAPI(
    title="Movie Catalog API",
    description="REST API for creating, reading, updating, deleting and listing movies",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(movies.router)
app.include_router(system.router)


@app.exception_handler(FailedValidationError)
async def failed_validation_handler(request: Request, exc: FailedValidationError):
    """Return field-level validation errors as 422."""
    return JSONResponse(status_code=422, content={"detail": exc.errors})


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": "Movie Catalog API",
        "docs": "/docs",
        "health": "/v1/healthcheck",
    }


def run():
    """Serve the API with uvicorn."""
    uvicorn.run(app, host=get_api_host(), port=get_api_port())


if __name__ == "__main__":
    run()
