"""Main FastAPI application for the Todo API."""
from datetime import datetime, timezone
from typing import Optional
import logging

from fastapi import FastAPI, Request
from sqlalchemy.engine import Engine

from todo_api import __version__
from todo_api.core.config import Settings
from todo_api.core.logging import configure_logging
from todo_api.db.config import create_db_engine
from todo_api.db.init import init_db
from todo_api.middleware.cors import add_cors_middleware
from todo_api.middleware.errors import register_exception_handlers
from todo_api.routers import auth_router, tasks_router, users_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    """
    Build the application around an explicitly supplied storage handle.

    Args:
        settings: Runtime settings, read from the environment when omitted
        engine: Database engine, created from settings.database_url when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)
    if engine is None:
        engine = create_db_engine(settings.database_url, echo=settings.sql_echo)

    app = FastAPI(
        title="Todo API",
        description="REST API for personal task management with JWT authentication",
        version=__version__,
    )
    app.state.settings = settings
    app.state.engine = engine

    # Error handling sits inside CORS so failures still carry CORS headers
    register_exception_handlers(app)
    add_cors_middleware(app, settings)

    @app.on_event("startup")
    async def startup_event():
        """Create tables on startup."""
        logger.info(
            "Starting Todo API (environment=%s, database=%s)",
            settings.environment,
            engine.url.get_backend_name(),
        )
        init_db(engine)

    @app.on_event("shutdown")
    async def shutdown_event():
        engine.dispose()

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint."""
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "environment": request.app.state.settings.environment,
        }

    app.include_router(auth_router, prefix="/api/auth")  # /api/auth/signup, /api/auth/login
    app.include_router(users_router, prefix="/api/users")  # /api/users/me
    app.include_router(tasks_router, prefix="/api/tasks")  # /api/tasks, /api/tasks/{id}

    return app


def run():
    """Console entry point: serve the app with uvicorn."""
    import os
    import uvicorn

    uvicorn.run(
        "todo_api.main:create_app",
        factory=True,
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "3000")),
    )


if __name__ == "__main__":
    run()
