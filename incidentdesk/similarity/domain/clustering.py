"""
Similarity and Clustering
=========================

Jaccard similarity between tickets, common keyword extraction and the
greedy single-pass clustering policy.
"""

from typing import Iterable, List

from incidentdesk.config import ClusterAction
from incidentdesk.shared.domain import significant_words, word_set
from incidentdesk.similarity.domain.entities import (
    TicketSummary, SimilarityPair, Cluster, SimilarityAnalysis
)


class JaccardCalculator:
    """Jaccard index over the significant word sets of two texts."""

    @staticmethod
    def similarity(text1: str, text2: str) -> float:
        """
        |A ∩ B| / |A ∪ B| of the two word sets.

        Returns 0.0 when both texts have no significant words.
        """
        words1 = word_set(text1)
        words2 = word_set(text2)

        union = words1 | words2
        if not union:
            return 0.0
        return len(words1 & words2) / len(union)


class KeywordExtractor:
    """Finds the words two tickets have in common."""

    KEYWORD_MIN_LENGTH = 3
    MAX_KEYWORDS = 5

    @classmethod
    def common_keywords(
        cls,
        historical: TicketSummary,
        new_ticket: TicketSummary,
        limit: int = MAX_KEYWORDS
    ) -> List[str]:
        """
        Words longer than three characters found in both tickets.

        Ordered by first occurrence in the historical ticket, deduplicated,
        at most ``limit`` of them.
        """
        new_words = set(significant_words(new_ticket.text, cls.KEYWORD_MIN_LENGTH))

        keywords: List[str] = []
        for word in significant_words(historical.text, cls.KEYWORD_MIN_LENGTH):
            if word in new_words and word not in keywords:
                keywords.append(word)
                if len(keywords) == limit:
                    break
        return keywords


class TicketClusterer:
    """
    Detects near-duplicates of a new ticket and groups them into clusters.

    Pairs above CANDIDATE_THRESHOLD are reported as similar; only pairs
    at or above CLUSTER_THRESHOLD form clusters. Every cluster holds the
    new ticket and exactly one historical ticket.
    """

    CANDIDATE_THRESHOLD = 0.3
    CLUSTER_THRESHOLD = 0.5
    MERGE_THRESHOLD = 0.8
    ESCALATE_THRESHOLD = 0.7
    CREATE_KB_MIN_MEMBERS = 3

    @classmethod
    def suggest_action(cls, similarity: float, member_count: int) -> str:
        """
        Action for a cluster formed at the given similarity.

        Two-member clusters never reach the create_kb branch.
        """
        if similarity > cls.MERGE_THRESHOLD:
            return ClusterAction.MERGE
        if similarity > cls.ESCALATE_THRESHOLD:
            return ClusterAction.ESCALATE
        if member_count > cls.CREATE_KB_MIN_MEMBERS:
            return ClusterAction.CREATE_KB
        return ClusterAction.MONITOR

    @classmethod
    def find_similar(
        cls,
        new_ticket: TicketSummary,
        historical: Iterable[TicketSummary]
    ) -> List[SimilarityPair]:
        """Historical tickets above the candidate threshold, most similar first."""
        pairs = [
            SimilarityPair(
                ticket=ticket,
                similarity=JaccardCalculator.similarity(new_ticket.text, ticket.text)
            )
            for ticket in historical
        ]
        similar = [p for p in pairs if p.similarity > cls.CANDIDATE_THRESHOLD]
        similar.sort(key=lambda p: p.similarity, reverse=True)
        return similar

    @classmethod
    def build_clusters(
        cls,
        new_ticket: TicketSummary,
        similar_tickets: List[SimilarityPair]
    ) -> List[Cluster]:
        """
        Greedy single pass over the sorted similar tickets.

        A historical ticket joins at most one cluster.
        """
        clusters: List[Cluster] = []
        processed = set()

        for pair in similar_tickets:
            ticket_id = pair.ticket.ticket_id
            if ticket_id in processed or pair.similarity < cls.CLUSTER_THRESHOLD:
                continue

            members = [new_ticket.ticket_id]
            if ticket_id not in members:
                members.append(ticket_id)

            clusters.append(Cluster(
                cluster_id=f"CLUSTER-{len(clusters) + 1}",
                tickets=members,
                common_keywords=KeywordExtractor.common_keywords(pair.ticket, new_ticket),
                suggested_action=cls.suggest_action(pair.similarity, len(members)),
                confidence=pair.similarity
            ))
            processed.add(ticket_id)

        return clusters

    @classmethod
    def analyze(
        cls,
        new_ticket: TicketSummary,
        historical: Iterable[TicketSummary]
    ) -> SimilarityAnalysis:
        """Similar tickets, clusters and duplicate probability for a ticket."""
        similar = cls.find_similar(new_ticket, historical)
        clusters = cls.build_clusters(new_ticket, similar)
        duplicate_probability = max((p.similarity for p in similar), default=0.0)

        return SimilarityAnalysis(
            similar_tickets=similar,
            clusters=clusters,
            duplicate_probability=duplicate_probability
        )
