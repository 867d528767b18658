"""
Configuration Module
====================

Environment-driven settings plus the fixed vocabularies (categories,
teams, priorities, sentiments, cluster actions) shared by all modules.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from functools import lru_cache
from pathlib import Path
from typing import List, Optional


ENVIRONMENTS = ("development", "staging", "production")


class Settings(BaseSettings):
    """
    Settings read from the environment and an optional `.env` file.

    Every field can be overridden by its upper-case environment variable,
    e.g. `OPENAI_API_KEY`, `FIXTURES_PATH`, `LLM_TIMEOUT_SECONDS`.
    """

    # ========== Application ==========
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Verbose error output")
    log_level: str = Field(default="INFO", description="Root log level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Bind address for uvicorn")
    port: int = Field(default=8000, description="Bind port for uvicorn", ge=1, le=65535)

    # ========== Fixture Corpus ==========
    fixtures_path: Optional[Path] = Field(
        default=None,
        description="Optional YAML file replacing the built-in KB documents and historical tickets"
    )

    # ========== OpenAI (remote ticket analysis) ==========
    openai_api_key: Optional[str] = Field(
        default=None,
        description="OpenAI API key; enables remote ticket analysis when set"
    )
    openai_base_url: Optional[str] = Field(
        default=None,
        description="Base URL of an OpenAI-compatible endpoint"
    )
    mock_llm: bool = Field(
        default=False,
        description="Answer remote analysis with canned replies instead of calling OpenAI"
    )

    # ========== Remote Analysis ==========
    llm_model: str = Field(
        default="gpt-3.5-turbo",
        description="Chat model used for ticket analysis"
    )
    llm_temperature: float = Field(
        default=0.3,
        description="Sampling temperature for ticket analysis",
        ge=0.0,
        le=1.0
    )
    llm_max_tokens: int = Field(
        default=1000,
        description="Completion length cap for ticket analysis",
        ge=1,
        le=8000
    )
    llm_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for a single LLM request",
        gt=0,
        le=120
    )

    # ========== Result Limits ==========
    kb_max_suggestions: int = Field(
        default=5,
        description="Maximum number of KB suggestions returned",
        ge=1,
        le=50
    )
    similar_tickets_limit: int = Field(
        default=5,
        description="Maximum number of similar tickets returned",
        ge=1,
        le=50
    )

    # ========== CORS ==========
    cors_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Origins allowed to call the API from a browser"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if v not in ENVIRONMENTS:
            raise ValueError(f"environment must be one of {ENVIRONMENTS}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is a standard logging level name."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()

    @property
    def llm_configured(self) -> bool:
        """True when a remote (or mock) LLM can be used for analysis."""
        return self.mock_llm or bool(self.openai_api_key)


@lru_cache()
def get_settings() -> Settings:
    """Settings built once per process."""
    return Settings()


# Module-level instance for code without an app at hand
settings = get_settings()


# ========== Constants ==========

class KBCategory(str):
    """Knowledge base document categories."""
    EMAIL = "Email"
    NETWORK = "Network"
    APPLICATION = "Application"
    HARDWARE = "Hardware"
    SECURITY = "Security"
    GENERAL = "General"


class Sentiment(str):
    """Ticket sentiment buckets."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    URGENT = "urgent"


class Priority(str):
    """Suggested ticket priority."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ClusterAction(str):
    """Actions suggested for a cluster of similar tickets."""
    MERGE = "merge"
    ESCALATE = "escalate"
    CREATE_KB = "create_kb"
    MONITOR = "monitor"


class Team(str):
    """Support teams tickets can be routed to."""
    INFRASTRUCTURE = "Infrastructure"
    NETWORK = "Network"
    APPLICATION_SUPPORT = "Application Support"
    SECURITY = "Security"
    HARDWARE_SUPPORT = "Hardware Support"
    GENERAL_SUPPORT = "General Support"


# ========== Lists for validation ==========

KB_CATEGORIES = [
    KBCategory.EMAIL, KBCategory.NETWORK, KBCategory.APPLICATION,
    KBCategory.HARDWARE, KBCategory.SECURITY, KBCategory.GENERAL
]
VALID_SENTIMENTS = [
    Sentiment.POSITIVE, Sentiment.NEUTRAL,
    Sentiment.NEGATIVE, Sentiment.URGENT
]
VALID_PRIORITIES = [
    Priority.CRITICAL, Priority.HIGH,
    Priority.MEDIUM, Priority.LOW
]
VALID_CLUSTER_ACTIONS = [
    ClusterAction.MERGE, ClusterAction.ESCALATE,
    ClusterAction.CREATE_KB, ClusterAction.MONITOR
]
VALID_TEAMS = [
    Team.INFRASTRUCTURE, Team.NETWORK, Team.APPLICATION_SUPPORT,
    Team.SECURITY, Team.HARDWARE_SUPPORT, Team.GENERAL_SUPPORT
]
