"""
Analysis External Service Adapters
==================================

Binds the analysis module's ``ILLMClient`` port to the shared OpenAI /
mock clients in ``incidentdesk.infrastructure.llm``.
"""

from typing import List

from incidentdesk.analysis.application import ILLMClient
from incidentdesk.infrastructure.llm import (
    ChatCompletionResult,
    ILLMClient as InfrastructureLLMClient,
)


class LLMClientAdapter(ILLMClient):
    """Forwards chat completions to an infrastructure client."""

    def __init__(self, client: InfrastructureLLMClient):
        self._client = client

    async def chat_completion(
        self,
        messages: List[dict],
        temperature: float = 0.3,
        max_tokens: int = 1000,
        operation: str = "chat_completion"
    ) -> ChatCompletionResult:
        return await self._client.chat_completion(
            messages, temperature=temperature, max_tokens=max_tokens, operation=operation
        )
