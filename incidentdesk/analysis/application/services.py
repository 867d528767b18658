"""
Analysis Application Services
=============================

Ticket classification strategies and the service that picks between
them.

The keyword heuristic is always available. A remote LLM strategy can be
configured in front of it; any failure of the remote path falls back to
the heuristic and is never surfaced to the caller.
"""

import asyncio
import json
import random
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple

from incidentdesk.analysis.domain import (
    AnalysisRequest, AnalysisResult, HeuristicRules, AnalysisPromptBuilder
)
from incidentdesk.config import (
    Sentiment, Priority, Team, VALID_SENTIMENTS, VALID_PRIORITIES, VALID_TEAMS
)
from incidentdesk.core import LLMException, ValidationException
from incidentdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

SIMILAR_INCIDENTS_RANGE = (1, 15)


# ========== Interfaces ==========

class ILLMClient(ABC):
    """Interface for LLM operations."""

    @abstractmethod
    async def chat_completion(
        self,
        messages: List[dict],
        temperature: float,
        max_tokens: int,
        operation: str = "chat_completion"
    ) -> Any:
        """Generate chat completion."""


class ITicketClassifier(ABC):
    """Strategy that turns a ticket into an AnalysisResult."""

    @abstractmethod
    async def classify(self, request: AnalysisRequest) -> AnalysisResult:
        """Classify a ticket."""


def _simulated_similar_incidents(rng: random.Random) -> int:
    # Placeholder value; no incident history backs it
    low, high = SIMILAR_INCIDENTS_RANGE
    return rng.randint(low, high)


# ========== Strategies ==========

class HeuristicTicketClassifier(ITicketClassifier):
    """
    Keyword rule classifier.

    Every field except ``similar_incidents`` is deterministic.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def classify_sync(self, request: AnalysisRequest) -> AnalysisResult:
        sentiment, urgency = HeuristicRules.classify_sentiment(request.full_text)
        team = HeuristicRules.team_for_category(request.category)

        return AnalysisResult(
            sentiment=sentiment,
            suggested_priority=HeuristicRules.priority_for(urgency),
            urgency_score=urgency,
            suggested_team=team,
            key_insights=HeuristicRules.insights_for(request.category, team, urgency, sentiment),
            estimated_resolution_time=HeuristicRules.resolution_time_for(urgency),
            similar_incidents=_simulated_similar_incidents(self._rng)
        )

    async def classify(self, request: AnalysisRequest) -> AnalysisResult:
        return self.classify_sync(request)


class LLMTicketClassifier(ITicketClassifier):
    """
    Remote classifier backed by a chat completion model.

    Raises LLMException for any failure: timeout, transport error,
    unparseable or out-of-vocabulary reply.
    """

    def __init__(
        self,
        llm_client: ILLMClient,
        rng: Optional[random.Random] = None,
        temperature: float = 0.3,
        max_tokens: int = 1000,
        timeout_seconds: float = 10.0
    ):
        self._llm = llm_client
        self._rng = rng or random.Random()
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout = timeout_seconds

    async def classify(self, request: AnalysisRequest) -> AnalysisResult:
        messages = [
            {"role": "system", "content": AnalysisPromptBuilder.get_system_prompt()},
            {"role": "user", "content": AnalysisPromptBuilder.build_prompt(request)}
        ]

        try:
            response = await asyncio.wait_for(
                self._llm.chat_completion(
                    messages=messages,
                    temperature=self._temperature,
                    max_tokens=self._max_tokens,
                    operation="ticket_analysis"
                ),
                timeout=self._timeout
            )
        except asyncio.TimeoutError:
            raise LLMException(f"Analysis timed out after {self._timeout}s")

        return self._parse(response.content)

    def _parse(self, content_text: Optional[str]) -> AnalysisResult:
        if not content_text:
            raise LLMException("No response from LLM")

        # Extract JSON from a fenced block if present
        if "```json" in content_text:
            content_text = content_text.split("```json")[1].split("```")[0].strip()
        elif "```" in content_text:
            content_text = content_text.split("```")[1].split("```")[0].strip()

        try:
            data = json.loads(content_text)
        except json.JSONDecodeError as e:
            raise LLMException(f"Failed to parse analysis response: {e}")

        if not isinstance(data, dict):
            raise LLMException("Analysis response is not a JSON object")

        sentiment = data.get("sentiment") or Sentiment.NEUTRAL
        priority = data.get("suggestedPriority") or Priority.MEDIUM
        team = data.get("suggestedTeam") or Team.GENERAL_SUPPORT
        insights = data.get("keyInsights") or ["Analysis completed"]
        resolution_time = data.get("estimatedResolutionTime") or "1-2 days"

        try:
            urgency = float(data.get("urgencyScore") or 0.5)
        except (TypeError, ValueError):
            raise LLMException("urgencyScore is not a number")

        if sentiment not in VALID_SENTIMENTS:
            raise LLMException(f"Unknown sentiment '{sentiment}'")
        if priority not in VALID_PRIORITIES:
            raise LLMException(f"Unknown priority '{priority}'")
        if team not in VALID_TEAMS:
            raise LLMException(f"Unknown team '{team}'")
        if not 0.0 <= urgency <= 1.0:
            raise LLMException(f"urgencyScore {urgency} out of range")
        if not isinstance(insights, list):
            raise LLMException("keyInsights is not a list")

        return AnalysisResult(
            sentiment=sentiment,
            suggested_priority=priority,
            urgency_score=urgency,
            suggested_team=team,
            key_insights=[str(i) for i in insights],
            estimated_resolution_time=str(resolution_time),
            similar_incidents=_simulated_similar_incidents(self._rng)
        )


# ========== Application Services ==========

class TicketAnalysisService:
    """
    Analyses tickets with the configured strategy.

    Uses the remote classifier when one is configured and falls back to
    the heuristic on any failure.
    """

    def __init__(
        self,
        heuristic: HeuristicTicketClassifier,
        remote: Optional[ITicketClassifier] = None
    ):
        self._heuristic = heuristic
        self._remote = remote

    @property
    def ai_enabled(self) -> bool:
        return self._remote is not None

    async def analyze(self, request: AnalysisRequest) -> Tuple[AnalysisResult, bool]:
        """
        Analyse a ticket.

        Args:
            request: Ticket content

        Returns:
            Tuple of (result, ai_powered). ``ai_powered`` reports whether a
            remote classifier is configured, even when it fell back.

        Raises:
            ValidationException: If title or description is blank
        """
        missing = [
            name for name, value in (
                ("ticketTitle", request.ticket_title),
                ("ticketDescription", request.ticket_description)
            )
            if not value or not value.strip()
        ]
        if missing:
            raise ValidationException(fields=missing)

        if self._remote is None:
            return await self._heuristic.classify(request), False

        try:
            result = await self._remote.classify(request)
        except Exception as e:
            logger.warning(
                "Remote analysis failed, falling back to heuristic analysis",
                extra={"error_type": type(e).__name__, "error": str(e)}
            )
            result = await self._heuristic.classify(request)

        return result, True
