"""
Analysis Controllers (API Routes)
=================================

FastAPI routes for ticket analysis.
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from incidentdesk.analysis.application import (
    TicketAnalysisService,
    TicketAnalysisRequest,
    TicketAnalysisResponse,
    AnalysisInfo,
)
from incidentdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/api/analyze-ticket", tags=["Ticket Analysis"])


ANALYSIS_RESPONSE_EXAMPLE = {
    "success": True,
    "analysis": {
        "sentiment": "urgent",
        "suggestedPriority": "critical",
        "urgencyScore": 0.9,
        "suggestedTeam": "Infrastructure",
        "keyInsights": [
            "Category: Email suggests Infrastructure team involvement",
            "Urgency level: 90% based on content analysis",
            "Contains urgent keywords - immediate attention needed"
        ],
        "estimatedResolutionTime": "2-4 hours",
        "similarIncidents": 7
    },
    "aiPowered": False,
    "timestamp": "2025-01-31T10:00:00Z"
}


def get_analysis_service(request: Request) -> TicketAnalysisService:
    """Get the analysis service from app state."""
    service = getattr(request.app.state, "analysis_service", None)
    if service is None:
        raise HTTPException(
            status_code=503,
            detail="Analysis service not initialized"
        )
    return service


@router.post(
    "",
    response_model=TicketAnalysisResponse,
    summary="Analyse ticket sentiment, priority and routing",
    description="""
    Classify a ticket's sentiment, priority, urgency, team and expected
    resolution time.

    When an OpenAI key is configured the ticket is analysed by the model;
    otherwise, or when the model call fails, keyword rules are used.

    **Note**: `similarIncidents` is a simulated value.
    """,
    responses={
        200: {
            "description": "Ticket analysed",
            "content": {
                "application/json": {
                    "example": ANALYSIS_RESPONSE_EXAMPLE
                }
            }
        },
        400: {
            "description": "Missing required fields"
        }
    }
)
async def analyze_ticket(
    request: Request,
    payload: TicketAnalysisRequest,
    service: TicketAnalysisService = Depends(get_analysis_service)
):
    correlation_id = getattr(request.state, "correlation_id", "unknown")

    logger.info(
        "Analysing ticket",
        extra={
            "correlation_id": correlation_id,
            "category": payload.category,
            "ai_enabled": service.ai_enabled
        }
    )

    result, ai_powered = await service.analyze(payload.to_domain())

    logger.info(
        "Ticket analysed",
        extra={
            "correlation_id": correlation_id,
            "sentiment": result.sentiment,
            "priority": result.suggested_priority,
            "team": result.suggested_team
        }
    )

    return TicketAnalysisResponse(
        analysis=AnalysisInfo.from_domain(result),
        ai_powered=ai_powered
    )


@router.get("", summary="Describe the ticket analysis API")
async def describe_analysis(
    service: TicketAnalysisService = Depends(get_analysis_service)
):
    """Capability discovery for the analysis endpoint."""
    return {
        "message": "Advanced Ticket Analysis API",
        "features": [
            "Sentiment Analysis",
            "Priority Suggestion",
            "Team Routing",
            "Resolution Time Estimation",
            "Key Insights Extraction"
        ],
        "aiEnabled": service.ai_enabled
    }


# Export router for inclusion in main app
analysis_router = router
