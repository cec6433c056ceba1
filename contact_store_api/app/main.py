"""
Main entrypoint for the Contact Store API.

This module assembles the FastAPI application: logging, CORS, error
handlers, the ``/api`` router and the database handle.  ``create_app``
builds a fresh application for the given settings (tests pass their
own ``Settings`` pointing at a temporary database); ``app`` is the
instance configured from the environment, e.g.::

    uvicorn contact_store_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import Database
from .core.errors import setup_error_handling
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    The ``contacts`` table is created on startup if it is missing, so a
    new database file is usable immediately.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use; defaults to the ones read from the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file)

    db = Database(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        db.init_schema()
        logger.info("Connected to SQLite database %s", db.path)
        yield

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        lifespan=lifespan,
    )
    app.state.db = db
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_error_handling(app)
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
