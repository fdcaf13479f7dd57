"""
FastAPI application entry point for the Movie Reviews API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from movie_reviews import __version__
from movie_reviews.api.config import (
    get_api_host,
    get_api_port,
    get_database_url,
    get_log_file,
    get_log_level,
    get_sql_echo,
)
from movie_reviews.api.middleware import RequestTrackingMiddleware
from movie_reviews.api.routers import movies, reviews, system
from movie_reviews.database.connection import close_db_manager, get_db_manager
from movie_reviews.exceptions import register_exception_handlers
from movie_reviews.utils.logging_config import configure_api_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_api_logging(level=get_log_level(), log_file=get_log_file(), sql_echo=get_sql_echo())
    db_manager = get_db_manager(database_url=get_database_url(), echo=get_sql_echo())
    await db_manager.create_tables()
    logger.info("Movie Reviews API %s started", __version__)
    yield
    await close_db_manager()
    logger.info("Movie Reviews API stopped")


app = FastAPI(
    title="Movie Reviews API",
    description="REST API for managing movies and their reviews",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestTrackingMiddleware)

register_exception_handlers(app)

app.include_router(movies.router)
app.include_router(reviews.router)
app.include_router(system.router)


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": "Movie Reviews API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=get_api_host(), port=get_api_port())
