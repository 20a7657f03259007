import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI

from app.api.deps import get_store
from app.api.router import api_router
from app.core.config import Settings, settings as default_settings
from app.core.database import create_db_engine
from app.core.handlers import register_exception_handlers
from app.core.middleware import CORSHeadersMiddleware
from app.services.student.student import StudentStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Start-or-die: the server only starts serving once the store answers
    and the students table exists.
    """
    owns_store = app.state.store is None
    if owns_store:
        app.state.store = StudentStore(create_db_engine(app.state.settings))

    try:
        app.state.store.init_schema()
    except Exception as e:
        logger.critical(f"Database initialization failed: {e}")
        raise

    yield

    if owns_store:
        app.state.store.engine.dispose()
        logger.info("Database connections closed")


def create_app(store: Optional[StudentStore] = None, settings: Settings = default_settings) -> FastAPI:
    """
    Build the application around `store`. When no store is given one is
    created from settings at startup.
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSHeadersMiddleware,
        resource_prefix=f"{settings.API_PREFIX}/students",
        allow_origin=settings.CORS_ALLOW_ORIGIN,
    )
    register_exception_handlers(app)

    # Include API router
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root(store: StudentStore = Depends(get_store)):
        """
        Health check endpoint
        """
        return {
            "message": f"Welcome to {settings.PROJECT_NAME}",
            "docs": "/docs",
            "version": settings.APP_VERSION,
            "database": "connected" if store.is_alive() else "unavailable",
        }

    return app


app = create_app()


def run():
    """Console entry point: serve `app` with uvicorn on HOST:PORT."""
    import uvicorn

    logger.info(f"Server listening on port {default_settings.PORT}...")
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)


if __name__ == "__main__":
    run()
