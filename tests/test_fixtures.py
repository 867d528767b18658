# tests/test_fixtures.py  ──  corpus loading, settings and log formatting
# Run: pytest tests/test_fixtures.py -v

import json
import logging
from datetime import timezone

import pytest
from httpx import AsyncClient, ASGITransport

from incidentdesk.config import Settings
from incidentdesk.core import FixtureException
from incidentdesk.infrastructure.fixtures import FixtureLoader
from incidentdesk.infrastructure.llm import MockLLMClient, create_llm_client
from incidentdesk.main import create_app
from incidentdesk.shared.infrastructure.logging import CustomJsonFormatter


CUSTOM_CORPUS = """
kb_documents:
  - id: KB-900
    title: Printer Jam
    category: Hardware
    tags: [printer, paper]
    last_updated: 2025-02-01
    content: Clear the paper tray and restart.

historical_tickets:
  - ticket_id: INC-900
    title: Printer jammed again
    description: Paper stuck in tray two.
    created_at: "2025-02-01T08:00:00"
"""


# ─────────────────────────────────────────────────────────────────────────────
# FixtureLoader
# ─────────────────────────────────────────────────────────────────────────────

def test_default_corpus(corpus):
    assert [d.id for d in corpus.kb_documents] == ["KB-001", "KB-002", "KB-003", "KB-004", "KB-005"]
    assert [t.ticket_id for t in corpus.historical_tickets] == ["INC-001", "INC-003", "INC-004", "INC-005"]

    first = corpus.kb_documents[0]
    assert first.category == "Email"
    assert "smtp" in first.tags
    assert first.last_updated.tzinfo is not None


def test_custom_corpus(tmp_path):
    path = tmp_path / "corpus.yaml"
    path.write_text(CUSTOM_CORPUS, encoding="utf-8")

    corpus = FixtureLoader.load(path)

    doc = corpus.kb_documents[0]
    assert doc.id == "KB-900"
    assert doc.tags == ("printer", "paper")
    assert doc.last_updated.year == 2025
    assert doc.last_updated.tzinfo == timezone.utc

    ticket = corpus.historical_tickets[0]
    assert ticket.category == "General"
    assert ticket.created_at.tzinfo == timezone.utc


def test_missing_file_falls_back_to_builtin(tmp_path):
    corpus = FixtureLoader.load(tmp_path / "nope.yaml")
    assert len(corpus.kb_documents) == 5


@pytest.mark.parametrize("content", [
    "kb_documents: [unclosed",
    "- just\n- a\n- list\n",
    "kb_documents:\n  - id: KB-1\n    title: t\n    category: Plumbing\n",
    "historical_tickets:\n  - title: no id\n    description: d\n",
])
def test_invalid_corpus_raises(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(FixtureException) as exc_info:
        FixtureLoader.load(path)
    assert exc_info.value.path == str(path)


async def test_app_uses_configured_corpus(tmp_path):
    path = tmp_path / "corpus.yaml"
    path.write_text(CUSTOM_CORPUS, encoding="utf-8")
    config = Settings(_env_file=None, fixtures_path=path, openai_api_key=None, mock_llm=False)

    app = create_app(config=config)
    # Loaded by the factory, before the lifespan or any request runs
    assert [d.id for d in app.state.corpus.kb_documents] == ["KB-900"]
    assert app.state.similarity_service.ticket_count == 1

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        r = await ac.post("/api/kb-suggestions", json={
            "ticketTitle": "Printer jam",
            "ticketDescription": "paper everywhere",
        })

    body = r.json()
    assert [s["id"] for s in body["suggestions"]] == ["KB-900"]
    # Hardware has no dedicated team in the KB routing table
    assert body["recommendedTeam"] == "General Support"


# ─────────────────────────────────────────────────────────────────────────────
# Settings / LLM client factory
# ─────────────────────────────────────────────────────────────────────────────

def test_settings_defaults():
    config = Settings(_env_file=None, openai_api_key=None, mock_llm=False)
    assert config.llm_timeout_seconds == 10.0
    assert config.kb_max_suggestions == 5
    assert config.llm_configured is False
    assert create_llm_client(config) is None


def test_settings_rejects_unknown_environment():
    with pytest.raises(ValueError):
        Settings(_env_file=None, environment="qa")


def test_settings_normalises_log_level():
    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"


def test_mock_llm_setting_builds_mock_client():
    config = Settings(_env_file=None, mock_llm=True)
    assert config.llm_configured is True
    assert isinstance(create_llm_client(config), MockLLMClient)


# ─────────────────────────────────────────────────────────────────────────────
# Logging
# ─────────────────────────────────────────────────────────────────────────────

def test_json_formatter_adds_context_and_redacts_secrets():
    formatter = CustomJsonFormatter("%(name)s %(levelname)s %(message)s", environment="staging")
    record = logging.LogRecord("incidentdesk", logging.INFO, __file__, 1, "LLM call completed", None, None)
    record.correlation_id = "req-1"
    record.api_key = "sk-secret"
    record.tokens_used = "120"

    payload = json.loads(formatter.format(record))

    assert payload["message"] == "LLM call completed"
    assert payload["correlation_id"] == "req-1"
    assert payload["environment"] == "staging"
    assert payload["api_key"] == "***REDACTED***"
    assert payload["tokens_used"] == "120"
    assert "timestamp" in payload
