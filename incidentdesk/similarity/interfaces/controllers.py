"""
Similarity Controllers (API Routes)
===================================

FastAPI routes for duplicate detection and ticket clustering.
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from incidentdesk.similarity.application import (
    SimilarityService,
    SimilarityCheckRequest,
    SimilarityCheckResponse,
)
from incidentdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/api/similarity-check", tags=["Similarity"])


SIMILARITY_RESPONSE_EXAMPLE = {
    "success": True,
    "duplicateProbability": 0.55,
    "similarTickets": [
        {
            "ticket": {
                "ticketId": "INC-001",
                "title": "Email server not responding",
                "description": "Users unable to access email. Server appears to be down.",
                "category": "Email",
                "createdAt": "2025-01-31T09:00:00Z"
            },
            "similarity": 0.55
        }
    ],
    "clusters": [
        {
            "clusterId": "CLUSTER-1",
            "tickets": ["NEW", "INC-001"],
            "commonKeywords": ["email", "server"],
            "suggestedAction": "monitor",
            "confidence": 0.55
        }
    ],
    "insights": ["📊 Found 1 related ticket cluster(s)"],
    "recommendations": [],
    "timestamp": "2025-01-31T10:00:00Z"
}


def get_similarity_service(request: Request) -> SimilarityService:
    """Get the similarity service from app state."""
    service = getattr(request.app.state, "similarity_service", None)
    if service is None:
        raise HTTPException(
            status_code=503,
            detail="Similarity service not initialized"
        )
    return service


@router.post(
    "",
    response_model=SimilarityCheckResponse,
    summary="Detect duplicates and related ticket clusters",
    description="""
    Compare a new ticket with the historical sample using the Jaccard index
    over word sets.

    - Tickets above 0.3 similarity are reported (top 5)
    - Tickets at 0.5 or above form a cluster with the new ticket
    - Clusters above 0.8 suggest **merge**, above 0.7 **escalate**,
      otherwise **monitor**
    """,
    responses={
        200: {
            "description": "Similarity analysis",
            "content": {
                "application/json": {
                    "example": SIMILARITY_RESPONSE_EXAMPLE
                }
            }
        },
        400: {
            "description": "Missing required fields"
        }
    }
)
async def check_similarity(
    request: Request,
    payload: SimilarityCheckRequest,
    service: SimilarityService = Depends(get_similarity_service)
):
    correlation_id = getattr(request.state, "correlation_id", "unknown")

    logger.info(
        "Checking ticket similarity",
        extra={
            "correlation_id": correlation_id,
            "category": payload.category
        }
    )

    report = service.check(
        title=payload.title,
        description=payload.description,
        category=payload.category
    )
    return SimilarityCheckResponse.from_report(report)


@router.get("", summary="Describe the similarity API")
async def describe_similarity():
    """Capability discovery for the similarity endpoint."""
    return {
        "message": "Smart Ticket Clustering API",
        "features": [
            "Duplicate Detection",
            "Similarity Analysis",
            "Ticket Clustering",
            "Pattern Recognition",
            "Automated Recommendations"
        ],
        "algorithms": ["Jaccard Similarity", "Keyword Extraction", "Clustering Analysis"]
    }


# Export router for inclusion in main app
similarity_router = router
