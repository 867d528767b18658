"""
Heuristic Analysis Rules
========================

Keyword rules that classify a ticket without any external service.

Stateless utility class - all thresholds and keyword lists in one place.
"""

from typing import List, Tuple

from incidentdesk.config import Sentiment, Priority, Team


class HeuristicRules:
    """Pure functions mapping ticket text to sentiment, priority and team."""

    URGENT_KEYWORDS = ("critical", "urgent", "down", "failed", "error", "broken", "emergency")
    NEGATIVE_KEYWORDS = ("problem", "issue", "cannot", "unable", "not working", "crash")

    URGENT_SCORE = 0.9
    NEGATIVE_SCORE = 0.6
    NEUTRAL_SCORE = 0.3

    CATEGORY_TEAMS = {
        "email": Team.INFRASTRUCTURE,
        "network": Team.NETWORK,
        "application": Team.APPLICATION_SUPPORT,
        "security": Team.SECURITY,
        "hardware": Team.HARDWARE_SUPPORT,
    }

    @classmethod
    def classify_sentiment(cls, text: str) -> Tuple[str, float]:
        """
        Sentiment and urgency score from keyword presence.

        Matching is case-insensitive substring containment, so "down"
        also matches "download".
        """
        lowered = text.lower()
        if any(keyword in lowered for keyword in cls.URGENT_KEYWORDS):
            return Sentiment.URGENT, cls.URGENT_SCORE
        if any(keyword in lowered for keyword in cls.NEGATIVE_KEYWORDS):
            return Sentiment.NEGATIVE, cls.NEGATIVE_SCORE
        return Sentiment.NEUTRAL, cls.NEUTRAL_SCORE

    @staticmethod
    def priority_for(urgency_score: float) -> str:
        if urgency_score > 0.8:
            return Priority.CRITICAL
        if urgency_score > 0.6:
            return Priority.HIGH
        if urgency_score < 0.4:
            return Priority.LOW
        return Priority.MEDIUM

    @classmethod
    def team_for_category(cls, category: str) -> str:
        return cls.CATEGORY_TEAMS.get((category or "").lower(), Team.GENERAL_SUPPORT)

    @staticmethod
    def resolution_time_for(urgency_score: float) -> str:
        if urgency_score > 0.8:
            return "2-4 hours"
        if urgency_score > 0.6:
            return "4-8 hours"
        if urgency_score > 0.4:
            return "1-2 days"
        return "2-5 days"

    @staticmethod
    def insights_for(category: str, team: str, urgency_score: float, sentiment: str) -> List[str]:
        """The three fixed insight lines."""
        return [
            f"Category: {category} suggests {team} team involvement",
            f"Urgency level: {round(urgency_score * 100)}% based on content analysis",
            "Contains urgent keywords - immediate attention needed"
            if sentiment == Sentiment.URGENT
            else "Standard resolution process applicable",
        ]
