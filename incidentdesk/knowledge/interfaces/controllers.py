"""
Knowledge Base Controllers (API Routes)
=======================================

FastAPI routes for KB article suggestions.

Controllers delegate to application services.
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from incidentdesk.knowledge.application import (
    KBSuggestionService,
    KBSuggestionRequest,
    KBSuggestionResponse,
)
from incidentdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/api/kb-suggestions", tags=["Knowledge Base"])


# ========== Example payloads for Swagger ==========

KB_SUGGESTION_REQUEST_EXAMPLE = {
    "ticketTitle": "Email server not responding",
    "ticketDescription": "Users unable to access email. Server appears to be down.",
    "category": "Email"
}

KB_SUGGESTION_RESPONSE_EXAMPLE = {
    "success": True,
    "suggestions": [
        {
            "id": "KB-001",
            "title": "Email Server Troubleshooting Guide",
            "content": "Complete guide for diagnosing and resolving email server issues: ...",
            "category": "Email",
            "tags": ["email", "server", "troubleshooting"],
            "lastUpdated": "2025-01-20T00:00:00Z",
            "relevanceScore": 0.62
        }
    ],
    "recommendedTeam": "Infrastructure",
    "confidence": 0.62
}


# ========== Dependencies ==========

def get_kb_suggestion_service(request: Request) -> KBSuggestionService:
    """Get the KB suggestion service from app state."""
    service = getattr(request.app.state, "kb_suggestion_service", None)
    if service is None:
        raise HTTPException(
            status_code=503,
            detail="KB suggestion service not initialized"
        )
    return service


# ========== Route Handlers ==========

@router.post(
    "",
    response_model=KBSuggestionResponse,
    summary="Suggest KB articles for a ticket",
    description="""
    Score every knowledge base article against the ticket text and return
    the most relevant ones.

    - Title words weigh most, then tag words, then body words
    - Articles scoring 0.1 or less are dropped; at most 5 are returned
    - The top article's category decides the recommended team
    """,
    responses={
        200: {
            "description": "Suggestions computed",
            "content": {
                "application/json": {
                    "example": KB_SUGGESTION_RESPONSE_EXAMPLE
                }
            }
        },
        400: {
            "description": "Missing required fields"
        }
    }
)
async def suggest_articles(
    request: Request,
    payload: KBSuggestionRequest,
    service: KBSuggestionService = Depends(get_kb_suggestion_service)
):
    correlation_id = getattr(request.state, "correlation_id", "unknown")

    logger.info(
        "Suggesting KB articles",
        extra={
            "correlation_id": correlation_id,
            "has_category": payload.category is not None
        }
    )

    result = service.suggest(
        title=payload.ticket_title,
        description=payload.ticket_description,
        category=payload.category
    )
    return KBSuggestionResponse.from_domain(result)


@router.get("", summary="Describe the KB suggestion API")
async def describe_kb_suggestions():
    """Capability discovery for the KB suggestion endpoint."""
    return {
        "message": "KB Suggestion API",
        "endpoints": {
            "POST": "Submit ticket data to get KB suggestions",
        },
        "samplePayload": KB_SUGGESTION_REQUEST_EXAMPLE
    }


# Export router for inclusion in main app
kb_router = router
