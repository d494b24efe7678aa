"""
FastAPI application for Orderly Bot.

Run with:
    uvicorn orderly_bot.main:app --reload
"""

import logging

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ORIGINS
from .logging_config import setup_logging
from .middleware import RequestIDMiddleware
from .routes import chat_router

# Configure logging at module load time
setup_logging()

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Create the FastAPI application.

    Chat routes are mounted both under /api/v1 and at the root.
    """
    app = FastAPI(
        title="Orderly Bot API",
        description="Conversational order assistant",
        version="1.0.0",
        openapi_tags=[
            {"name": "Health", "description": "Health check endpoints"},
            {"name": "Chat", "description": "Chat endpoints for customer ordering"},
        ],
    )

    app.add_middleware(RequestIDMiddleware)

    # In production, set CORS_ORIGINS to restrict allowed origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_v1 = APIRouter(prefix="/api/v1")
    api_v1.include_router(chat_router)
    app.include_router(api_v1)

    app.include_router(chat_router)

    @app.get("/health", tags=["Health"])
    def health_check():
        return {"status": "ok"}

    logger.info("Application created (CORS origins: %s)", ", ".join(CORS_ORIGINS))
    return app


app = create_app()
