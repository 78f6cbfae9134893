# src/castgraph/agents/__init__.py
"""Agent implementations and utilities."""

from importlib import import_module
from typing import Any

_EXPORTS = {
    "Agent": "castgraph.agents.base.Agent",
    "RelationshipAnalyst": "castgraph.agents.relationship_analyst.RelationshipAnalyst",
}

__all__ = list(_EXPORTS.keys())


def __getattr__(name: str) -> Any:
    """Load attributes lazily to avoid circular imports."""

    target = _EXPORTS.get(name)
    if target is None:
        raise AttributeError(name)
    module_name, attr = target.rsplit(".", 1)
    module = import_module(module_name)
    value = getattr(module, attr)
    globals()[name] = value
    return value
