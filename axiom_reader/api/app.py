"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from axiom_reader import __version__
from axiom_reader.agent.config import get_session_config
from axiom_reader.api.chat import router as chat_router
from axiom_reader.api.documents import get_document_registry
from axiom_reader.api.documents import router as documents_router
from axiom_reader.api.registry import get_session_registry
from axiom_reader.api.routes import router as sessions_router

logger = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Report configuration on startup; drop every session on shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    config = get_session_config()
    logger.info(f"Starting Axiom Reader API (model: {config.model_name})...")
    if not config.has_api_key:
        logger.warning("No Gemini API key configured; uploads will ask for one")

    yield

    sessions = get_session_registry()
    documents = get_document_registry()
    logger.info(f"Shutting down Axiom Reader API ({len(sessions)} open sessions)...")
    sessions.clear()
    documents.clear()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Axiom Reader API",
        description=(
            "Document analysis API. Upload a PDF to extract its six foundational "
            "axioms, then ask questions answered strictly from the document. "
            "Supports streaming responses and session reset."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(sessions_router)
    application.include_router(chat_router)
    application.include_router(documents_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "axiom-reader"}

    return application


app = create_app()
