"""
Knowledge Base Domain Layer
===========================

Contains:
- Entities: KBDocument, RelevanceResult, KBSuggestion
- Scoring: RelevanceScorer, TeamRouter

This layer is framework-agnostic and contains pure business logic.
"""

from incidentdesk.knowledge.domain.entities import (
    KBDocument,
    RelevanceResult,
    KBSuggestion,
)
from incidentdesk.knowledge.domain.scoring import RelevanceScorer, TeamRouter

__all__ = [
    "KBDocument",
    "RelevanceResult",
    "KBSuggestion",
    "RelevanceScorer",
    "TeamRouter",
]
