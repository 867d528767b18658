"""
Knowledge Base Relevance Scoring
================================

Keyword-overlap scoring of ticket text against KB documents, and the
routing table from a document category to a support team.

Stateless utility classes - all scoring constants in one place.
"""

from typing import Iterable, List

from incidentdesk.config import KBCategory, Team
from incidentdesk.shared.domain import tokenize
from incidentdesk.shared.domain.text import MIN_WORD_LENGTH
from incidentdesk.knowledge.domain.entities import KBDocument, RelevanceResult


class RelevanceScorer:
    """
    Scores ticket text against KB documents.

    A ticket word counts as a match when it occurs anywhere in the
    document's searchable text (substring containment). Each match adds a
    weight depending on where it occurs, and the total is blended with the
    share of ticket words that matched.
    """

    TITLE_WEIGHT = 0.3
    TAG_WEIGHT = 0.2
    CONTENT_WEIGHT = 0.1
    MATCH_RATIO_WEIGHT = 0.5

    # Documents must score strictly above this to be suggested
    RELEVANCE_THRESHOLD = 0.1
    DEFAULT_LIMIT = 5

    @classmethod
    def score(cls, ticket_text: str, document: KBDocument) -> float:
        """
        Relevance of a document to the ticket text, in [0, 1].

        Args:
            ticket_text: Title, description and category of the ticket
            document: KB document to score

        Returns:
            The relevance score
        """
        ticket_words = tokenize(ticket_text)
        doc_text = document.searchable_text
        title = document.title.lower()
        tags = [tag.lower() for tag in document.tags]

        score = 0.0
        matches = 0

        for word in ticket_words:
            if len(word) <= MIN_WORD_LENGTH or word not in doc_text:
                continue
            matches += 1
            if word in title:
                score += cls.TITLE_WEIGHT
            elif any(word in tag for tag in tags):
                score += cls.TAG_WEIGHT
            else:
                score += cls.CONTENT_WEIGHT

        # Short words count towards the ratio denominator
        match_ratio = matches / max(len(ticket_words), 1)
        score = (score + match_ratio * cls.MATCH_RATIO_WEIGHT) / 2

        return min(score, 1.0)

    @classmethod
    def rank(
        cls,
        ticket_text: str,
        documents: Iterable[KBDocument],
        limit: int = DEFAULT_LIMIT
    ) -> List[RelevanceResult]:
        """
        Score every document and keep the best ones.

        Documents at or below the threshold are dropped; the rest are
        sorted by descending score (ties keep corpus order) and capped
        at ``limit``.
        """
        scored = [
            RelevanceResult(document=doc, relevance_score=cls.score(ticket_text, doc))
            for doc in documents
        ]
        relevant = [r for r in scored if r.relevance_score > cls.RELEVANCE_THRESHOLD]
        relevant.sort(key=lambda r: r.relevance_score, reverse=True)
        return relevant[:limit]


class TeamRouter:
    """Routes a KB category to the team that owns it."""

    CATEGORY_TEAMS = {
        KBCategory.EMAIL: Team.INFRASTRUCTURE,
        KBCategory.NETWORK: Team.NETWORK,
        KBCategory.APPLICATION: Team.APPLICATION_SUPPORT,
    }
    DEFAULT_TEAM = Team.GENERAL_SUPPORT

    @classmethod
    def team_for_category(cls, category: str) -> str:
        return cls.CATEGORY_TEAMS.get(category, cls.DEFAULT_TEAM)

    @classmethod
    def team_for_results(cls, results: List[RelevanceResult]) -> str:
        """Team for the top-ranked result, or the default when empty."""
        if not results:
            return cls.DEFAULT_TEAM
        return cls.team_for_category(results[0].document.category)
