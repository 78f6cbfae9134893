# src/castgraph/config/config.py
"""Configuration system for CastGraph."""

from __future__ import annotations

import os
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    """Database configuration settings."""

    postgres_user: str = Field(default="castgraph")
    postgres_password: str = Field(default="castgraph_password")
    postgres_db: str = Field(default="castgraph")
    postgres_host: str = Field(default="localhost")
    postgres_port: str = Field(default="5432")
    # Full SQLAlchemy URL; overrides the postgres_* fields when set.
    database_url: str = Field(default="")
    echo: bool = Field(default=False)

    @property
    def postgres_url(self) -> str:
        """Generate PostgreSQL connection URL with psycopg driver."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg://{self.postgres_user}:{self.postgres_password}@"
            f"{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    api_base: str = Field(default="http://localhost:8080/v1")
    api_key: str = Field(default="sk-1234")
    # Default sampling temperature for text generation. If not set, falls back to 0.7.
    temperature: float | None = Field(default=None)


class AgentModelConfig(BaseModel):
    """Agent model configuration."""

    relationship_analyst: str = Field(default="openai/qwen3-a3b")


class RetryConfig(BaseModel):
    """Retry configuration settings."""

    retry_attempts: int = Field(default=3)
    retry_backoff: float = Field(default=0.5)
    structured_retries: int = Field(default=2)


class SystemConfig(BaseModel):
    """System configuration settings."""

    log_level: str = Field(default="INFO")
    log_format: str = Field(default="")
    log_include_trace: bool = Field(default=False)
    port: int = Field(default=8000)
    auto_migrate: bool = Field(default=True)


# Environment variable -> (section, field)
_ENV_MAP: dict[str, tuple[str, str]] = {
    "POSTGRES_USER": ("database", "postgres_user"),
    "POSTGRES_PASSWORD": ("database", "postgres_password"),
    "POSTGRES_DB": ("database", "postgres_db"),
    "POSTGRES_HOST": ("database", "postgres_host"),
    "POSTGRES_PORT": ("database", "postgres_port"),
    "DATABASE_URL": ("database", "database_url"),
    "DATABASE_ECHO": ("database", "echo"),
    "OPENAI_API_BASE": ("llm", "api_base"),
    "OPENAI_API_KEY": ("llm", "api_key"),
    "TEMPERATURE": ("llm", "temperature"),
    "RELATIONSHIP_ANALYST_MODEL": ("agents", "relationship_analyst"),
    "RETRY_ATTEMPTS": ("retry", "retry_attempts"),
    "RETRY_BACKOFF": ("retry", "retry_backoff"),
    "STRUCTURED_RETRIES": ("retry", "structured_retries"),
    "CASTGRAPH_LOG_LEVEL": ("system", "log_level"),
    "CASTGRAPH_LOG_FORMAT": ("system", "log_format"),
    "CASTGRAPH_LOG_INCLUDE_TRACE": ("system", "log_include_trace"),
    "PORT": ("system", "port"),
    "CASTGRAPH_AUTO_MIGRATE": ("system", "auto_migrate"),
}


class CastGraphConfig(BaseModel):
    """Main configuration class."""

    database: DatabaseConfig = DatabaseConfig()
    llm: LLMConfig = LLMConfig()
    agents: AgentModelConfig = AgentModelConfig()
    retry: RetryConfig = RetryConfig()
    system: SystemConfig = SystemConfig()

    @classmethod
    def load(cls, environ: dict[str, str] | None = None) -> CastGraphConfig:
        """Load configuration from environment variables."""
        env = os.environ if environ is None else environ
        sections: dict[str, dict[str, Any]] = {}
        for key, (section, field_name) in _ENV_MAP.items():
            value = env.get(key)
            if value is None or value == "":
                continue
            sections.setdefault(section, {})[field_name] = value
        return cls.model_validate(sections)


# Global configuration instance; a local .env fills in unset variables.
load_dotenv()
config = CastGraphConfig.load()
