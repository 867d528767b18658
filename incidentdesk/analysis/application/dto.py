"""
Analysis Application DTOs
=========================

Pydantic models for request/response validation.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional, Literal
from datetime import datetime, timezone

from incidentdesk.analysis.domain import AnalysisRequest, AnalysisResult


# ========== Type Aliases for Literals ==========
SentimentStr = Literal["positive", "neutral", "negative", "urgent"]
PriorityStr = Literal["low", "medium", "high", "critical"]


# ========== Request DTOs ==========

class TicketAnalysisRequest(BaseModel):
    """Request model for ticket analysis."""
    model_config = ConfigDict(populate_by_name=True)

    ticket_title: str = Field(..., alias="ticketTitle", description="Ticket title")
    ticket_description: str = Field(..., alias="ticketDescription", description="Ticket description")
    category: str = Field(..., description="Ticket category")
    reported_by: Optional[str] = Field(None, alias="reportedBy", description="Reporter")

    @field_validator("ticket_title", "ticket_description")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v

    def to_domain(self) -> AnalysisRequest:
        """Convert to domain entity."""
        return AnalysisRequest(
            ticket_title=self.ticket_title,
            ticket_description=self.ticket_description,
            category=self.category,
            reported_by=self.reported_by
        )


# ========== Response DTOs ==========

class AnalysisInfo(BaseModel):
    """Analysis result information."""
    model_config = ConfigDict(populate_by_name=True)

    sentiment: SentimentStr
    suggested_priority: PriorityStr = Field(..., alias="suggestedPriority")
    urgency_score: float = Field(..., alias="urgencyScore", ge=0.0, le=1.0)
    suggested_team: str = Field(..., alias="suggestedTeam")
    key_insights: List[str] = Field(..., alias="keyInsights")
    estimated_resolution_time: str = Field(..., alias="estimatedResolutionTime")
    similar_incidents: int = Field(..., alias="similarIncidents", ge=1, le=15)

    @classmethod
    def from_domain(cls, result: AnalysisResult) -> "AnalysisInfo":
        return cls(
            sentiment=result.sentiment,
            suggested_priority=result.suggested_priority,
            urgency_score=result.urgency_score,
            suggested_team=result.suggested_team,
            key_insights=list(result.key_insights),
            estimated_resolution_time=result.estimated_resolution_time,
            similar_incidents=result.similar_incidents
        )


class TicketAnalysisResponse(BaseModel):
    """Response model for ticket analysis."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    analysis: AnalysisInfo
    ai_powered: bool = Field(..., alias="aiPowered")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
