"""
IncidentDesk - Main Application
===============================

Incident triage assistance API.

Modules:
- Knowledge Base: Suggest KB articles and route tickets to a team
- Similarity: Detect duplicates and cluster related tickets
- Analysis: Classify sentiment, priority and urgency

Clean Architecture Layers:
- Interfaces: FastAPI controllers
- Application: Services and DTOs
- Domain: Entities and scoring rules
- Infrastructure: Fixture corpus, LLM client
"""

import random
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

# Configuration and Core
from incidentdesk.config import Settings, settings as default_settings
from incidentdesk.core import ValidationException

# Infrastructure
from incidentdesk.infrastructure.fixtures import FixtureCorpus, FixtureLoader
from incidentdesk.infrastructure.llm import ILLMClient, create_llm_client

# Module services
from incidentdesk.knowledge.application import KBSuggestionService
from incidentdesk.similarity.application import SimilarityService
from incidentdesk.analysis.application import (
    TicketAnalysisService, HeuristicTicketClassifier, LLMTicketClassifier
)
from incidentdesk.analysis.infrastructure import LLMClientAdapter

# Module Routers
from incidentdesk.knowledge.interfaces import kb_router
from incidentdesk.similarity.interfaces import similarity_router
from incidentdesk.analysis.interfaces import analysis_router

# Middleware and Logging
from incidentdesk.shared.api.middleware import (
    CorrelationIDMiddleware,
    TimingMiddleware,
    AccessLogMiddleware,
    global_exception_handler,
    validation_exception_handler,
    request_validation_handler,
)
from incidentdesk.shared.infrastructure.logging import setup_logging, get_logger

logger = get_logger(__name__)


def build_services(
    app: FastAPI,
    config: Settings,
    corpus: FixtureCorpus,
    llm_client: Optional[ILLMClient],
    rng: random.Random
) -> None:
    """Create the module services and store them in app state."""
    app.state.settings = config
    app.state.corpus = corpus
    app.state.llm_client = llm_client

    app.state.kb_suggestion_service = KBSuggestionService(
        corpus.kb_documents,
        max_suggestions=config.kb_max_suggestions
    )
    app.state.similarity_service = SimilarityService(
        corpus.historical_tickets,
        similar_tickets_limit=config.similar_tickets_limit
    )

    remote = None
    if llm_client is not None:
        remote = LLMTicketClassifier(
            LLMClientAdapter(llm_client),
            rng=rng,
            temperature=config.llm_temperature,
            max_tokens=config.llm_max_tokens,
            timeout_seconds=config.llm_timeout_seconds
        )
    app.state.analysis_service = TicketAnalysisService(
        heuristic=HeuristicTicketClassifier(rng=rng),
        remote=remote
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Setup structured logging

    SHUTDOWN:
    1. Close the LLM client
    """
    config: Settings = app.state.settings

    # === STARTUP ===
    setup_logging(level=config.log_level, environment=config.environment)
    logger.info("Starting IncidentDesk", extra={
        "version": config.app_version,
        "environment": config.environment,
        "ai_enabled": app.state.analysis_service.ai_enabled
    })

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("Shutting down IncidentDesk")
    if app.state.llm_client is not None:
        await app.state.llm_client.close()
    logger.info("IncidentDesk shutdown complete")


def create_app(
    config: Optional[Settings] = None,
    corpus: Optional[FixtureCorpus] = None,
    llm_client: Optional[ILLMClient] = None,
    rng: Optional[random.Random] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Settings, defaults to the environment-loaded settings
        corpus: Fixture corpus, defaults to ``config.fixtures_path`` or the built-in one
        llm_client: LLM client, defaults to the one ``config`` describes
        rng: Randomness source for simulated fields
    """
    config = config or default_settings

    app = FastAPI(
        title="IncidentDesk API",
        description="""
    ## Incident Triage Assistance

    Keyword scoring services that help an incident desk triage tickets.

    ---

    ### 📚 Knowledge Base

    - `POST /api/kb-suggestions` - Suggest KB articles and a team for a ticket

    ### 🔁 Similarity

    - `POST /api/similarity-check` - Detect duplicates and related ticket clusters

    ### 🧭 Analysis

    - `POST /api/analyze-ticket` - Sentiment, priority, urgency and team
      (OpenAI when configured, keyword rules otherwise)

    Every `GET` on the same paths describes the endpoint.
    """,
        version=config.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    if corpus is None:
        corpus = FixtureLoader.load(config.fixtures_path)
    if llm_client is None:
        llm_client = create_llm_client(config)

    build_services(app, config, corpus, llm_client, rng or random.Random())

    # === CORS Middleware ===
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # === Custom Middleware (from shared) ===
    # Last added runs first: the correlation id is set before access logging
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(CorrelationIDMiddleware)

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationException, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # === Include Module Routers ===
    app.include_router(kb_router)
    app.include_router(similarity_router)
    app.include_router(analysis_router)

    @app.get("/health", tags=["Health"])
    async def health_check(request: Request):
        """Health check with corpus sizes and LLM availability."""
        state = request.app.state
        return {
            "status": "healthy",
            "version": config.app_version,
            "environment": config.environment,
            "checks": {
                "kb_documents": state.kb_suggestion_service.document_count,
                "historical_tickets": state.similarity_service.ticket_count,
                "llm_client": "available" if state.analysis_service.ai_enabled else "not_configured"
            }
        }

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "service": "IncidentDesk",
            "version": config.app_version,
            "architecture": "Clean Architecture / Modular Monolith",
            "docs": "/docs",
            "health": "/health",
            "modules": {
                "knowledge": {
                    "prefix": "/api/kb-suggestions",
                    "endpoints": [
                        "POST /api/kb-suggestions - Suggest KB articles",
                        "GET /api/kb-suggestions - Describe endpoint"
                    ]
                },
                "similarity": {
                    "prefix": "/api/similarity-check",
                    "endpoints": [
                        "POST /api/similarity-check - Detect duplicates and clusters",
                        "GET /api/similarity-check - Describe endpoint"
                    ]
                },
                "analysis": {
                    "prefix": "/api/analyze-ticket",
                    "endpoints": [
                        "POST /api/analyze-ticket - Analyse a ticket",
                        "GET /api/analyze-ticket - Describe endpoint"
                    ]
                }
            }
        }

    return app


app = create_app()


# === Development Entry Point ===

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "incidentdesk.main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.environment == "development",
        log_level="info"
    )
