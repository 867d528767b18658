# tests/conftest.py  ──  shared fixtures
# The remote LLM is never called: apps are built without an API key or
# with an in-process stub client.

import asyncio
import random

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from incidentdesk.config import Settings
from incidentdesk.core import LLMException
from incidentdesk.infrastructure.fixtures import FixtureLoader
from incidentdesk.infrastructure.llm import ILLMClient, MockLLMClient
from incidentdesk.main import create_app


class FixedRandom(random.Random):
    """Random source whose randint always returns the same value."""

    def __init__(self, value: int = 7):
        super().__init__(0)
        self.value = value

    def randint(self, a, b):
        return self.value


class FailingLLMClient(ILLMClient):
    """LLM client whose every call fails."""

    model = "failing"

    async def chat_completion(self, messages, temperature=0.3, max_tokens=1000, operation="chat_completion"):
        raise LLMException("connection refused")


class SlowLLMClient(MockLLMClient):
    """Mock client that answers after a second."""

    async def chat_completion(self, messages, temperature=0.3, max_tokens=1000, operation="chat_completion"):
        await asyncio.sleep(1)
        return await super().chat_completion(messages, temperature, max_tokens, operation)


@pytest.fixture
def corpus():
    return FixtureLoader.load()


@pytest.fixture
def test_settings():
    return Settings(_env_file=None, openai_api_key=None, mock_llm=False, environment="development")


@pytest.fixture
def app(test_settings, corpus):
    return create_app(config=test_settings, corpus=corpus, rng=FixedRandom())


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
