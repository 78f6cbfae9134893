# src/castgraph/config/__init__.py
"""Configuration package for CastGraph."""

from .config import (
    AgentModelConfig,
    CastGraphConfig,
    DatabaseConfig,
    LLMConfig,
    RetryConfig,
    SystemConfig,
    config,
)

__all__ = [
    "CastGraphConfig",
    "DatabaseConfig",
    "LLMConfig",
    "AgentModelConfig",
    "RetryConfig",
    "SystemConfig",
    "config",
]
