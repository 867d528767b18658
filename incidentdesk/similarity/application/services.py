"""
Similarity Application Services
===============================

Runs duplicate detection for an incoming ticket against the injected
historical sample and turns the outcome into insights and
recommendations.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from incidentdesk.config import ClusterAction, KBCategory
from incidentdesk.core import ValidationException
from incidentdesk.similarity.domain import (
    TicketSummary, SimilarityAnalysis, TicketClusterer
)
from incidentdesk.shared.infrastructure.logging import get_logger, log_latency

logger = get_logger(__name__)

NEW_TICKET_ID = "NEW"


@dataclass
class SimilarityReport:
    """Analysis plus the presentation-facing insights and recommendations."""
    analysis: SimilarityAnalysis
    insights: List[str]
    recommendations: List[str]
    similar_tickets_limit: int

    @property
    def top_similar_tickets(self):
        return self.analysis.similar_tickets[:self.similar_tickets_limit]


class InsightGenerator:
    """Derives insight and recommendation lines from a similarity analysis."""

    DUPLICATE_THRESHOLD = 0.8
    SIMILAR_THRESHOLD = 0.6
    HISTORICAL_PATTERN_MIN_TICKETS = 2

    @classmethod
    def insights(cls, analysis: SimilarityAnalysis) -> List[str]:
        insights = []
        if analysis.duplicate_probability > cls.DUPLICATE_THRESHOLD:
            insights.append("⚠️ High probability of duplicate ticket detected")
        elif analysis.duplicate_probability > cls.SIMILAR_THRESHOLD:
            insights.append("🔍 Similar tickets found - consider merging or escalating")

        if analysis.clusters:
            insights.append(f"📊 Found {len(analysis.clusters)} related ticket cluster(s)")

        if not analysis.has_similar_tickets:
            insights.append("✨ New unique issue - consider creating KB article after resolution")

        return insights

    @classmethod
    def recommendations(cls, analysis: SimilarityAnalysis) -> List[str]:
        recommendations = []
        if analysis.duplicate_probability > cls.DUPLICATE_THRESHOLD:
            recommendations.append("Consider closing as duplicate and linking to existing ticket")

        if analysis.has_action(ClusterAction.ESCALATE):
            recommendations.append("Escalate to senior team - pattern indicates systemic issue")

        if analysis.has_action(ClusterAction.CREATE_KB):
            recommendations.append("Create knowledge base article - recurring issue detected")

        # Counted over every candidate, not just the returned top N
        if len(analysis.similar_tickets) > cls.HISTORICAL_PATTERN_MIN_TICKETS:
            recommendations.append("Review historical resolution patterns for faster resolution")

        return recommendations


class SimilarityService:
    """
    Compares new tickets with the historical sample.

    The sample is supplied by the caller and only read.
    """

    def __init__(
        self,
        historical_tickets: Sequence[TicketSummary],
        similar_tickets_limit: int = 5
    ):
        self._historical = tuple(historical_tickets)
        self._limit = similar_tickets_limit

    @property
    def ticket_count(self) -> int:
        return len(self._historical)

    def check(
        self,
        title: str,
        description: str,
        category: Optional[str] = None
    ) -> SimilarityReport:
        """
        Check a new ticket for duplicates and related clusters.

        Args:
            title: Ticket title
            description: Ticket description
            category: Optional category, defaults to General

        Returns:
            SimilarityReport

        Raises:
            ValidationException: If title or description is blank
        """
        missing = [
            name for name, value in (("title", title), ("description", description))
            if not value or not value.strip()
        ]
        if missing:
            raise ValidationException(fields=missing)

        new_ticket = TicketSummary(
            ticket_id=NEW_TICKET_ID,
            title=title,
            description=description,
            category=category or KBCategory.GENERAL,
            created_at=datetime.now(timezone.utc)
        )

        with log_latency(logger, "similarity_check", historical=len(self._historical)):
            analysis = TicketClusterer.analyze(new_ticket, self._historical)

        logger.info(
            "Similarity check computed",
            extra={
                "similar_tickets": len(analysis.similar_tickets),
                "clusters": len(analysis.clusters),
                "duplicate_probability": round(analysis.duplicate_probability, 4)
            }
        )

        return SimilarityReport(
            analysis=analysis,
            insights=InsightGenerator.insights(analysis),
            recommendations=InsightGenerator.recommendations(analysis),
            similar_tickets_limit=self._limit
        )
