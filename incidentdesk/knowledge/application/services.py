"""
Knowledge Base Application Services
===================================

Orchestrates relevance scoring over the injected KB corpus.
"""

from typing import Optional, Sequence

from incidentdesk.core import ValidationException
from incidentdesk.knowledge.domain import (
    KBDocument, KBSuggestion, RelevanceScorer, TeamRouter
)
from incidentdesk.shared.infrastructure.logging import get_logger, log_latency

logger = get_logger(__name__)


class KBSuggestionService:
    """
    Suggests KB articles for a ticket and the team to route it to.

    The corpus is supplied by the caller and only read.
    """

    def __init__(
        self,
        documents: Sequence[KBDocument],
        max_suggestions: int = RelevanceScorer.DEFAULT_LIMIT
    ):
        self._documents = tuple(documents)
        self._max_suggestions = max_suggestions

    @property
    def document_count(self) -> int:
        return len(self._documents)

    def suggest(
        self,
        title: str,
        description: str,
        category: Optional[str] = None
    ) -> KBSuggestion:
        """
        Rank KB documents for a ticket.

        Args:
            title: Ticket title
            description: Ticket description
            category: Optional ticket category, appended to the text

        Returns:
            KBSuggestion with at most ``max_suggestions`` results

        Raises:
            ValidationException: If title or description is blank
        """
        missing = [
            name for name, value in (("ticketTitle", title), ("ticketDescription", description))
            if not value or not value.strip()
        ]
        if missing:
            raise ValidationException(fields=missing)

        ticket_text = f"{title} {description} {category or ''}"

        with log_latency(logger, "kb_suggestion", documents=len(self._documents)):
            results = RelevanceScorer.rank(
                ticket_text, self._documents, limit=self._max_suggestions
            )

        team = TeamRouter.team_for_results(results)
        confidence = results[0].relevance_score if results else 0.0

        logger.info(
            "KB suggestions computed",
            extra={
                "suggestions": len(results),
                "top_document": results[0].document.id if results else None,
                "recommended_team": team,
                "confidence": round(confidence, 4)
            }
        )

        return KBSuggestion(
            suggestions=tuple(results),
            recommended_team=team,
            confidence=confidence
        )
