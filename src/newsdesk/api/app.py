"""FastAPI application setup."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from newsdesk.api.errors import handle_newsdesk_error
from newsdesk.api.registry import DiscussionRegistry
from newsdesk.api.routes import discussions, library, news, study
from newsdesk.config import Services
from newsdesk.errors import NewsdeskError

logger = logging.getLogger(__name__)


def create_app(services: Services) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        services: Components built from config. The app opens the store on
            startup and closes it on shutdown.
    """
    registry = DiscussionRegistry()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await services.store.init()
        logger.info("newsdesk API started")
        yield
        await registry.close_all()
        await services.store.close()

    app = FastAPI(
        title="newsdesk API",
        description="News reading companion: headlines, spoken discussions and study tools",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.services = services
    app.state.discussions = registry

    app.add_middleware(
        CORSMiddleware,
        allow_origins=services.config.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(NewsdeskError, handle_newsdesk_error)

    app.include_router(news.create_news_router(services))
    app.include_router(discussions.create_discussions_router(services, registry))
    app.include_router(study.create_study_router(services))
    app.include_router(library.create_library_router(services))

    return app
