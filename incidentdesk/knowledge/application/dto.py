"""
Knowledge Base Application DTOs
===============================

Pydantic models for request/response validation.

Wire names are camelCase; Python attributes are snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime

from incidentdesk.knowledge.domain import KBSuggestion, RelevanceResult


# ========== Request DTOs ==========

class KBSuggestionRequest(BaseModel):
    """Request model for KB article suggestions."""
    model_config = ConfigDict(populate_by_name=True)

    ticket_title: str = Field(..., alias="ticketTitle", description="Ticket title")
    ticket_description: str = Field(..., alias="ticketDescription", description="Ticket description")
    category: Optional[str] = Field(None, description="Ticket category")

    @field_validator("ticket_title", "ticket_description")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v


# ========== Response DTOs ==========

class RelevanceResultInfo(BaseModel):
    """A KB document with its relevance score."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    content: str
    category: str
    tags: List[str]
    last_updated: datetime = Field(..., alias="lastUpdated")
    relevance_score: float = Field(..., alias="relevanceScore", ge=0.0, le=1.0)

    @classmethod
    def from_domain(cls, result: RelevanceResult) -> "RelevanceResultInfo":
        doc = result.document
        return cls(
            id=doc.id,
            title=doc.title,
            content=doc.content,
            category=doc.category,
            tags=list(doc.tags),
            last_updated=doc.last_updated,
            relevance_score=result.relevance_score
        )


class KBSuggestionResponse(BaseModel):
    """Response model for KB article suggestions."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    suggestions: List[RelevanceResultInfo]
    recommended_team: str = Field(..., alias="recommendedTeam")
    confidence: float = Field(..., ge=0.0, le=1.0)

    @classmethod
    def from_domain(cls, suggestion: KBSuggestion) -> "KBSuggestionResponse":
        return cls(
            suggestions=[RelevanceResultInfo.from_domain(r) for r in suggestion.suggestions],
            recommended_team=suggestion.recommended_team,
            confidence=suggestion.confidence
        )
