"""
Knowledge Base Domain Entities
==============================

Pure Python business objects for KB article suggestion.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Tuple

from incidentdesk.config import KB_CATEGORIES


@dataclass(frozen=True)
class KBDocument:
    """
    A canned troubleshooting article.

    Documents belong to the fixed corpus loaded at startup and are
    never mutated.
    """
    id: str
    title: str
    content: str
    category: str
    tags: Tuple[str, ...] = field(default_factory=tuple)
    last_updated: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        """Validate document."""
        if self.category not in KB_CATEGORIES:
            raise ValueError(
                f"category must be one of {KB_CATEGORIES}, got '{self.category}'"
            )
        # Accept any iterable of tags but store an immutable tuple
        object.__setattr__(self, "tags", tuple(self.tags))

    @property
    def searchable_text(self) -> str:
        """Title, body and tags as one lowercase string."""
        return f"{self.title} {self.content} {' '.join(self.tags)}".lower()


@dataclass(frozen=True)
class RelevanceResult:
    """A KB document together with its relevance to a ticket."""
    document: KBDocument
    relevance_score: float

    def __post_init__(self):
        if not 0.0 <= self.relevance_score <= 1.0:
            raise ValueError("Relevance score must be between 0 and 1")


@dataclass(frozen=True)
class KBSuggestion:
    """Ranked suggestions plus the team the top match routes to."""
    suggestions: Tuple[RelevanceResult, ...]
    recommended_team: str
    confidence: float
