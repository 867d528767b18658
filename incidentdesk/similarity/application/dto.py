"""
Similarity Application DTOs
===========================

Pydantic models for request/response validation.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional, Literal
from datetime import datetime, timezone

from incidentdesk.similarity.domain import TicketSummary, SimilarityPair, Cluster


# ========== Type Aliases for Literals ==========
ClusterActionStr = Literal["merge", "escalate", "create_kb", "monitor"]


# ========== Request DTOs ==========

class SimilarityCheckRequest(BaseModel):
    """Request model for duplicate detection."""
    title: str = Field(..., description="Ticket title")
    description: str = Field(..., description="Ticket description")
    category: Optional[str] = Field(None, description="Ticket category")

    @field_validator("title", "description")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v


# ========== Response DTOs ==========

class TicketInfo(BaseModel):
    """Historical ticket summary."""
    model_config = ConfigDict(populate_by_name=True)

    ticket_id: str = Field(..., alias="ticketId")
    title: str
    description: str
    category: str
    created_at: datetime = Field(..., alias="createdAt")

    @classmethod
    def from_domain(cls, ticket: TicketSummary) -> "TicketInfo":
        return cls(
            ticket_id=ticket.ticket_id,
            title=ticket.title,
            description=ticket.description,
            category=ticket.category,
            created_at=ticket.created_at
        )


class SimilarTicketInfo(BaseModel):
    """A historical ticket with its similarity score."""
    ticket: TicketInfo
    similarity: float = Field(..., ge=0.0, le=1.0)

    @classmethod
    def from_domain(cls, pair: SimilarityPair) -> "SimilarTicketInfo":
        return cls(ticket=TicketInfo.from_domain(pair.ticket), similarity=pair.similarity)


class ClusterInfo(BaseModel):
    """Cluster of related tickets."""
    model_config = ConfigDict(populate_by_name=True)

    cluster_id: str = Field(..., alias="clusterId")
    tickets: List[str]
    common_keywords: List[str] = Field(..., alias="commonKeywords")
    suggested_action: ClusterActionStr = Field(..., alias="suggestedAction")
    confidence: float = Field(..., ge=0.0, le=1.0)

    @classmethod
    def from_domain(cls, cluster: Cluster) -> "ClusterInfo":
        return cls(
            cluster_id=cluster.cluster_id,
            tickets=list(cluster.tickets),
            common_keywords=list(cluster.common_keywords),
            suggested_action=cluster.suggested_action,
            confidence=cluster.confidence
        )


class SimilarityCheckResponse(BaseModel):
    """Response model for duplicate detection."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    duplicate_probability: float = Field(..., alias="duplicateProbability", ge=0.0, le=1.0)
    similar_tickets: List[SimilarTicketInfo] = Field(..., alias="similarTickets")
    clusters: List[ClusterInfo]
    insights: List[str]
    recommendations: List[str]
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_report(cls, report) -> "SimilarityCheckResponse":
        """Create from a SimilarityReport."""
        analysis = report.analysis
        return cls(
            duplicate_probability=analysis.duplicate_probability,
            similar_tickets=[SimilarTicketInfo.from_domain(p) for p in report.top_similar_tickets],
            clusters=[ClusterInfo.from_domain(c) for c in analysis.clusters],
            insights=report.insights,
            recommendations=report.recommendations
        )
