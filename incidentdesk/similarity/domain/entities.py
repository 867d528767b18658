"""
Similarity Domain Entities
==========================

Pure Python business objects for duplicate detection and ticket
clustering.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List

from incidentdesk.config import KBCategory, VALID_CLUSTER_ACTIONS


@dataclass(frozen=True)
class TicketSummary:
    """
    The parts of a ticket that similarity is computed over.

    Used for both the historical sample and the incoming ticket.
    """
    ticket_id: str
    title: str
    description: str
    category: str = KBCategory.GENERAL
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def text(self) -> str:
        """Title and description joined by a space."""
        return f"{self.title} {self.description}"


@dataclass(frozen=True)
class SimilarityPair:
    """A historical ticket and its Jaccard similarity to the new ticket."""
    ticket: TicketSummary
    similarity: float

    def __post_init__(self):
        if not 0.0 <= self.similarity <= 1.0:
            raise ValueError("Similarity must be between 0 and 1")


@dataclass
class Cluster:
    """
    A group of tickets similar enough to warrant a combined action.

    The new ticket is always the first member.
    """
    cluster_id: str
    tickets: List[str]
    common_keywords: List[str]
    suggested_action: str
    confidence: float

    def __post_init__(self):
        """Validate cluster."""
        if self.suggested_action not in VALID_CLUSTER_ACTIONS:
            raise ValueError(f"suggested_action must be one of {VALID_CLUSTER_ACTIONS}")
        if len(set(self.tickets)) != len(self.tickets):
            raise ValueError("Cluster members must be unique")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError("Confidence must be between 0 and 1")


@dataclass
class SimilarityAnalysis:
    """Outcome of comparing one ticket with the historical sample."""
    similar_tickets: List[SimilarityPair]
    clusters: List[Cluster]
    duplicate_probability: float

    @property
    def has_similar_tickets(self) -> bool:
        return len(self.similar_tickets) > 0

    def has_action(self, action: str) -> bool:
        """Check whether any cluster suggests the given action."""
        return any(c.suggested_action == action for c in self.clusters)
