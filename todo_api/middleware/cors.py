"""CORS configuration for the browser front end."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todo_api.core.config import Settings

logger = logging.getLogger(__name__)

# Vite dev server
DEV_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


def allowed_origins(settings: Settings) -> list:
    """Production only trusts FRONTEND_URL; development also allows the local dev server."""
    if settings.is_production:
        return [settings.frontend_url]

    origins = list(DEV_ORIGINS)
    if settings.frontend_url and settings.frontend_url not in origins:
        origins.append(settings.frontend_url)
    return origins


def add_cors_middleware(app: FastAPI, settings: Settings) -> None:
    """Add CORS middleware to the FastAPI application."""
    origins = allowed_origins(settings)
    logger.info("CORS allowed origins: %s", origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
