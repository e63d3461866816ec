"""
Blog Posts API Server
Core functionality: list, fetch, create, update and delete blog posts
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blog_api.config.settings import ALLOWED_ORIGINS, get_database_url
from blog_api.database.post_store import PostStore, PostgresPostStore
from blog_api.api.routes import health, posts
from blog_api.utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)


def create_app(database_url: Optional[str] = None, store: Optional[PostStore] = None) -> FastAPI:
    """
    Build the FastAPI application.

    With an explicit store the app uses it as-is and leaves closing it to the
    caller. Otherwise the lifespan opens a PostgreSQL store against
    database_url (or the configured one) and closes it on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        owned_store = None
        if getattr(app.state, "store", None) is None:
            owned_store = await PostgresPostStore.connect(database_url or get_database_url())
            app.state.store = owned_store
        try:
            yield
        finally:
            if owned_store is not None:
                await owned_store.close()
                app.state.store = None

    app = FastAPI(
        title="Blog Posts API",
        description="CRUD API for blog posts",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.store = store

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials="*" not in ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    setup_error_handling(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(posts.router, prefix="/posts", tags=["Posts"])

    return app
