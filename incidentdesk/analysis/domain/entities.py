"""
Analysis Domain Entities
========================

Domain entities for the ticket analysis module.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from incidentdesk.config import KBCategory, VALID_SENTIMENTS, VALID_PRIORITIES


@dataclass(frozen=True)
class AnalysisRequest:
    """Ticket content submitted for analysis."""
    ticket_title: str
    ticket_description: str
    category: str = KBCategory.GENERAL
    reported_by: Optional[str] = None

    @property
    def full_text(self) -> str:
        """Title and description joined by a space."""
        return f"{self.ticket_title} {self.ticket_description}"


@dataclass
class AnalysisResult:
    """
    Sentiment, priority and routing assessment of a ticket.

    ``similar_incidents`` is a simulated placeholder, not a real count;
    ``simulated_fields`` names every such field.
    """
    sentiment: str
    suggested_priority: str
    urgency_score: float
    suggested_team: str
    key_insights: List[str]
    estimated_resolution_time: str
    similar_incidents: int
    simulated_fields: List[str] = field(default_factory=lambda: ["similarIncidents"])

    def __post_init__(self):
        """Validate analysis result."""
        if self.sentiment not in VALID_SENTIMENTS:
            raise ValueError(f"sentiment must be one of {VALID_SENTIMENTS}")
        if self.suggested_priority not in VALID_PRIORITIES:
            raise ValueError(f"suggested_priority must be one of {VALID_PRIORITIES}")
        if not 0.0 <= self.urgency_score <= 1.0:
            raise ValueError("Urgency score must be between 0 and 1")
