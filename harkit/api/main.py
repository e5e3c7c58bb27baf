"""
FastAPI application entry point for the harkit API.

Exposes code generation, response extraction, header filter settings and
the screen map over HTTP.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from harkit import __version__
from harkit.api.routes import generate, headers, health, pages
from harkit.core.config import get_cors_origins, is_ephemeral
from harkit.core.store import open_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Open the shared store on startup and close it on shutdown.

    A store already attached to ``app.state`` (tests) is left alone.
    """
    owns_store = getattr(app.state, "store", None) is None
    if owns_store:
        app.state.store = open_store(ephemeral=is_ephemeral())
        logger.info("API store opened")

    yield

    if owns_store:
        store = app.state.store
        if hasattr(store, "close"):
            store.close()
        app.state.store = None


app = FastAPI(title="harkit API", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(generate.router, prefix="/api", tags=["generate"])
app.include_router(headers.router, prefix="/api", tags=["headers"])
app.include_router(pages.router, prefix="/api", tags=["pages"])
app.include_router(health.router, prefix="/api", tags=["health"])
