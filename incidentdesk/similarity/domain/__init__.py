"""
Similarity Domain Layer
=======================

Contains:
- Entities: TicketSummary, SimilarityPair, Cluster, SimilarityAnalysis
- Clustering: JaccardCalculator, KeywordExtractor, TicketClusterer

This layer is framework-agnostic and contains pure business logic.
"""

from incidentdesk.similarity.domain.entities import (
    TicketSummary,
    SimilarityPair,
    Cluster,
    SimilarityAnalysis,
)
from incidentdesk.similarity.domain.clustering import (
    JaccardCalculator,
    KeywordExtractor,
    TicketClusterer,
)

__all__ = [
    "TicketSummary",
    "SimilarityPair",
    "Cluster",
    "SimilarityAnalysis",
    "JaccardCalculator",
    "KeywordExtractor",
    "TicketClusterer",
]
