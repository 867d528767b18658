"""
Fixture Corpus
==============

Loads the fixed KB documents and historical tickets from YAML.

The corpus is read once at startup and handed to the scoring services;
it is never written back.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Optional, Tuple

import yaml

from incidentdesk.core import FixtureException
from incidentdesk.knowledge.domain import KBDocument
from incidentdesk.similarity.domain import TicketSummary
from incidentdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CORPUS_PATH = Path(__file__).parent / "default_corpus.yaml"


@dataclass(frozen=True)
class FixtureCorpus:
    """Read-only KB documents and historical tickets."""
    kb_documents: Tuple[KBDocument, ...]
    historical_tickets: Tuple[TicketSummary, ...]


class FixtureLoader:
    """Parses a corpus file into domain entities."""

    @classmethod
    def load(cls, path: Optional[Path] = None) -> FixtureCorpus:
        """
        Load the corpus from ``path``, or the built-in one.

        A configured path that does not exist falls back to the built-in
        corpus with a warning.

        Raises:
            FixtureException: If the file cannot be parsed
        """
        if path is not None and not Path(path).exists():
            logger.warning(f"Fixture file not found: {path}, using built-in corpus")
            path = None

        path = Path(path) if path is not None else DEFAULT_CORPUS_PATH

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise FixtureException(str(path), f"YAML error: {e}")

        if not isinstance(data, dict):
            raise FixtureException(str(path), "top level must be a mapping")

        corpus = FixtureCorpus(
            kb_documents=tuple(
                cls._parse_document(path, entry) for entry in data.get("kb_documents") or []
            ),
            historical_tickets=tuple(
                cls._parse_ticket(path, entry) for entry in data.get("historical_tickets") or []
            )
        )

        logger.info(
            "Fixture corpus loaded",
            extra={
                "path": str(path),
                "kb_documents": len(corpus.kb_documents),
                "historical_tickets": len(corpus.historical_tickets)
            }
        )
        return corpus

    @classmethod
    def _parse_document(cls, path: Path, entry: Any) -> KBDocument:
        try:
            return KBDocument(
                id=str(entry["id"]),
                title=str(entry["title"]),
                content=str(entry.get("content", "")),
                category=str(entry["category"]),
                tags=tuple(str(tag) for tag in entry.get("tags") or []),
                last_updated=cls._parse_timestamp(entry.get("last_updated"))
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise FixtureException(str(path), f"invalid KB document {entry!r}: {e}")

    @classmethod
    def _parse_ticket(cls, path: Path, entry: Any) -> TicketSummary:
        try:
            return TicketSummary(
                ticket_id=str(entry["ticket_id"]),
                title=str(entry["title"]),
                description=str(entry["description"]),
                category=str(entry.get("category", "General")),
                created_at=cls._parse_timestamp(entry.get("created_at"))
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise FixtureException(str(path), f"invalid historical ticket {entry!r}: {e}")

    @staticmethod
    def _parse_timestamp(value: Any) -> datetime:
        """Accept ISO strings, dates and datetimes; naive values are UTC."""
        if value is None:
            return datetime.now(timezone.utc)
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime(value.year, value.month, value.day)
        else:
            parsed = datetime.fromisoformat(str(value))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed


__all__ = ["FixtureCorpus", "FixtureLoader", "DEFAULT_CORPUS_PATH"]
