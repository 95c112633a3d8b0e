from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from rating_notifications.config import get_settings
from rating_notifications.infrastructure.database import engine, initialize_database
from rating_notifications.interfaces.api.errors import register_exception_handlers
from rating_notifications.interfaces.api.routes import register_routes
from rating_notifications.utils import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema on startup and release pooled connections on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Rating notifications", lifespan=lifespan)

    # Browser clients subscribe from the web front-end origins.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    register_routes(app)
    return app


app = create_app()
