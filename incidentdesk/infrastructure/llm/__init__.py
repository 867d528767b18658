"""
LLM Client Infrastructure
=========================

Chat completion clients for remote ticket analysis.

The analysis module only sees ``ILLMClient``; ``create_llm_client`` picks
the OpenAI client, the mock, or nothing at all from settings.
"""

import json
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

import httpx
from openai import AsyncOpenAI

from incidentdesk.config import Settings, settings as default_settings
from incidentdesk.core import LLMException, ConfigurationException
from incidentdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChatCompletionResult:
    """Text of one completion plus usage accounting."""
    content: str
    model: str
    prompt_tokens: int = 0
    completion_tokens: int = 0
    latency_ms: int = 0

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens


class ILLMClient(ABC):
    """A chat model that can be asked one question at a time."""

    model: str = "unknown"

    @abstractmethod
    async def chat_completion(
        self,
        messages: List[dict],
        temperature: float = 0.3,
        max_tokens: int = 1000,
        operation: str = "chat_completion"
    ) -> ChatCompletionResult:
        """Send ``messages`` and return the first choice."""

    async def close(self) -> None:
        """Release network resources."""


class OpenAILLMClient(ILLMClient):
    """
    OpenAI (or compatible) chat completions.

    Each request is bounded by ``llm_timeout_seconds`` and is never retried;
    a failed call is the caller's cue to fall back.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        config: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        config = config or default_settings
        api_key = api_key or config.openai_api_key
        if not api_key:
            raise ConfigurationException("OpenAI API key not configured")

        self.model = config.llm_model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=config.openai_base_url,
            timeout=httpx.Timeout(config.llm_timeout_seconds),
            max_retries=0,
            http_client=http_client
        )

    async def chat_completion(
        self,
        messages: List[dict],
        temperature: float = 0.3,
        max_tokens: int = 1000,
        operation: str = "chat_completion"
    ) -> ChatCompletionResult:
        """
        Ask the configured model.

        Args:
            messages: Chat messages (``role`` / ``content``)
            temperature: Sampling temperature
            max_tokens: Completion length cap
            operation: Label for the log line, e.g. ``ticket_analysis``

        Raises:
            LLMException: Transport error, API error or empty reply
        """
        started = time.perf_counter()
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens
            )
        except Exception as e:
            raise LLMException(f"{operation} request failed: {e}")
        latency_ms = int((time.perf_counter() - started) * 1000)

        choice = response.choices[0] if response.choices else None
        if choice is None or not choice.message.content:
            raise LLMException(f"{operation} returned no content")

        usage = response.usage
        result = ChatCompletionResult(
            content=choice.message.content,
            model=self.model,
            prompt_tokens=usage.prompt_tokens if usage else 0,
            completion_tokens=usage.completion_tokens if usage else 0,
            latency_ms=latency_ms
        )
        logger.info("LLM call completed", extra={
            "operation": operation,
            "model": self.model,
            "latency_ms": latency_ms,
            "tokens_used": result.total_tokens
        })
        return result

    async def close(self) -> None:
        await self._client.close()


# Reply used by MockLLMClient when no content is given
MOCK_ANALYSIS = {
    "sentiment": "negative",
    "suggestedPriority": "high",
    "urgencyScore": 0.7,
    "suggestedTeam": "Infrastructure",
    "keyInsights": [
        "Mock: service degradation reported by multiple users",
        "Mock: infrastructure team should verify server health"
    ],
    "estimatedResolutionTime": "4-8 hours"
}


class MockLLMClient(ILLMClient):
    """
    Offline stand-in for the OpenAI client.

    Answers every request with ``content`` (or a fenced ``MOCK_ANALYSIS``)
    and records the messages it was sent in ``calls``.
    """

    model = "mock-model"

    def __init__(self, content: Optional[str] = None):
        if content is None:
            content = f"```json\n{json.dumps(MOCK_ANALYSIS, indent=2)}\n```"
        self._content = content
        self.calls: List[List[dict]] = []

    async def chat_completion(
        self,
        messages: List[dict],
        temperature: float = 0.3,
        max_tokens: int = 1000,
        operation: str = "chat_completion"
    ) -> ChatCompletionResult:
        self.calls.append(messages)
        return ChatCompletionResult(
            content=self._content,
            model=self.model,
            completion_tokens=len(self._content.split())
        )


def create_llm_client(config: Optional[Settings] = None) -> Optional[ILLMClient]:
    """
    Client for remote analysis, or None when analysis is heuristic-only.

    ``mock_llm`` wins over an API key.
    """
    config = config or default_settings
    if config.mock_llm:
        return MockLLMClient()
    if config.openai_api_key:
        return OpenAILLMClient(config=config)
    return None


__all__ = [
    "ChatCompletionResult",
    "ILLMClient",
    "OpenAILLMClient",
    "MockLLMClient",
    "MOCK_ANALYSIS",
    "create_llm_client",
]
