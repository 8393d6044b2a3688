import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from galatide.config import Settings, settings as default_settings
from galatide.database import Store
from galatide.exception_handlers import register_exception_handlers
from galatide.middleware.language import LanguageMiddleware
from galatide.middleware.logging import StructuredLoggingMiddleware, setup_structured_logging
from galatide.routes import articles, health, languages, seo, tags, translations

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store: Store = app.state.store
    logger.info("Starting up the application...")
    if await store.connect():
        if app.state.settings.debug:
            await store.create_all()
            logger.info("Database tables created (if not existing).")
    else:
        logger.warning("Starting without a database; public pages will degrade")
    yield
    logger.info("Shutting down the application...")
    await store.disconnect()


def create_app(settings: Settings | None = None, store: Store | None = None) -> FastAPI:
    """Create the FastAPI application."""
    settings = settings or default_settings
    setup_structured_logging(settings.log_level, json_format=settings.log_json)

    app = FastAPI(
        title=settings.app_name,
        description="Multilingual article publishing backend",
        debug=settings.debug,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store or Store.from_settings(settings)

    app.add_middleware(LanguageMiddleware)
    app.add_middleware(StructuredLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(articles.public_router)
    app.include_router(articles.admin_router)
    app.include_router(translations.router)
    app.include_router(languages.public_router)
    app.include_router(languages.admin_router)
    app.include_router(tags.public_router)
    app.include_router(tags.admin_router)
    app.include_router(seo.router)

    if settings.debug:
        logger.info(f"Running in {settings.environment} mode")
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=default_settings.debug)
