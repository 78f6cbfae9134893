# src/castgraph/core/llm.py
"""Lightweight wrapper around LiteLLM for async LLM calls with structured output support."""

from __future__ import annotations

import json
import re
import time
from typing import Any, TypeVar

import dirtyjson
from pydantic import BaseModel, ValidationError

from castgraph.config import config
from castgraph.core.errors import LLMConfigurationError
from castgraph.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*\n?")
_FENCE_CLOSE = re.compile(r"\n?```\s*$")


def _strip_fences(content: str) -> str:
    """Remove Markdown code fences around a JSON payload."""
    content = content.strip()
    if content.startswith("```"):
        content = _FENCE_OPEN.sub("", content)
        content = _FENCE_CLOSE.sub("", content).strip()
    return content


def _parse_json(content: str) -> Any:
    """Parse ``content`` as JSON, salvaging the first object/array if needed."""
    content = _strip_fences(content)
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        match = re.search(r"(\[.*\]|{.*})", content, re.DOTALL)
        if not match:
            raise
        return dirtyjson.loads(match.group(1))


def _normalize_relationship_suggestions(json_data: Any) -> Any:
    """
    Normalize common variants of RelationshipSuggestionList LLM output into the expected schema:
    - Accept lists wrapped under a single key such as ``{"relationships": [...]}``.
    - Accept objects using alias keys like source/from/a -> character1,
      target/to/b -> character2, relationship/relation -> type.
    - Drop items that are not objects or lack either name.
    """
    if json_data is None:
        return json_data

    # Unwrap {"relationships":[...]} or similar single-key wrappers
    if isinstance(json_data, dict):
        # If dict is actually an error container, leave it to upstream handling
        if any(k in json_data for k in ("error", "errors", "detail")):
            return json_data
        lists = [v for v in json_data.values() if isinstance(v, list)]
        if len(lists) == 1:
            json_data = lists[0]
        else:
            # Sometimes models return a dict representing a single relationship
            json_data = [json_data]

    if not isinstance(json_data, list):
        return json_data

    normalized: list[dict[str, Any]] = []
    for item in json_data:
        if not isinstance(item, dict):
            continue

        # Lowercase keys for easier alias mapping (preserve original values)
        keys_lower = {str(k).lower(): k for k in item.keys()}

        def pick(keys: list[str]) -> Any:
            for k in keys:
                if k in keys_lower:
                    return item[keys_lower[k]]
            return None

        first = pick(["character1", "character_1", "source", "from", "subject", "a"])
        second = pick(["character2", "character_2", "target", "to", "object", "b"])
        if first is None or second is None:
            names = pick(["characters", "pair"])
            if isinstance(names, list) and len(names) == 2:
                first, second = names
        first = str(first or "").strip()
        second = str(second or "").strip()
        if not first or not second:
            continue

        normalized.append(
            {
                "character1": first,
                "character2": second,
                "strength": pick(["strength", "weight", "score", "intensity"]),
                "type": pick(["type", "relationship", "relationship_type", "relation"]),
                "description": pick(["description", "reason", "summary", "notes"]),
            }
        )
        # Let model defaults apply for missing values.
        normalized[-1] = {k: v for k, v in normalized[-1].items() if v is not None}

    return normalized


def _maybe_normalize_for_model(response_model: type[BaseModel], json_data: Any) -> Any:
    """Dispatch normalization based on target response_model name to increase robustness."""
    model_name = getattr(response_model, "__name__", "")
    if model_name == "RelationshipSuggestionList":
        return _normalize_relationship_suggestions(json_data)
    return json_data


def _get_global_temperature() -> float:
    """Return the configured temperature clamped to [0, 2], default 0.7."""
    t = config.llm.temperature
    if t is None:
        t = 0.7
    return min(max(float(t), 0.0), 2.0)


def _require_credentials() -> tuple[str, str]:
    api_base = config.llm.api_base
    api_key = config.llm.api_key
    if not api_base or not api_key:
        raise LLMConfigurationError("OPENAI_API_BASE and OPENAI_API_KEY must be set")
    return api_base, api_key


async def call_llm_structured(
    model: str,
    prompt: str,
    response_model: type[T],
    max_retries: int = 2,
    temperature: float | None = None,
) -> T:
    """Call the LLM with structured output validation and retry logic.

    Uses the Pydantic model's JSON schema to constrain the output format and
    retries on parse/validation failures with the error fed back to the model.

    Parameters
    ----------
    model:
        Name of the model to query.
    prompt:
        User prompt passed to the model.
    response_model:
        Pydantic model class that defines the expected output structure.
    max_retries:
        Maximum number of retry attempts on validation failures.
    temperature:
        Sampling temperature; structured calls are capped at 0.2.

    Raises
    ------
    LLMConfigurationError
        If required environment variables are missing.
    ValidationError, ValueError
        If the response cannot be parsed or validated after all retries.
    """
    import litellm

    api_base, api_key = _require_credentials()
    model_name = getattr(response_model, "__name__", str(response_model))
    schema = response_model.model_json_schema()

    effective_temperature = (
        _get_global_temperature() if temperature is None else temperature
    )
    # Force low temperature for structured tasks
    effective_temperature = min(effective_temperature, 0.2)

    system_instr = "Return ONLY valid JSON. No markdown, code fences, or prose."
    structured_prompt = f"{system_instr}\n{prompt}"
    last_error: Exception | None = None

    for attempt in range(max_retries + 1):
        attempt_start = time.time()
        logger.debug(
            "Structured LLM attempt %d/%d for %s via %s",
            attempt + 1,
            max_retries + 1,
            model_name,
            model,
        )
        response: Any = await litellm.acompletion(
            model=model,
            messages=[{"role": "user", "content": structured_prompt}],
            api_base=api_base,
            api_key=api_key,
            temperature=effective_temperature,
            response_format={"type": "json_schema", "schema": schema},
        )
        content = (response["choices"][0]["message"]["content"] or "").strip()

        try:
            json_data = _parse_json(content)
            json_data = _maybe_normalize_for_model(response_model, json_data)
            result = response_model.model_validate(json_data)
        except (ValidationError, ValueError) as e:
            # json.JSONDecodeError is a ValueError subclass.
            last_error = e
            logger.warning(
                "Structured response for %s failed validation on attempt %d: %s",
                model_name,
                attempt + 1,
                e,
            )
            if attempt < max_retries:
                structured_prompt = (
                    f"{system_instr}\n{prompt}\n"
                    f"Previous attempt failed with error: {e}"
                )
                continue
            raise

        logger.debug(
            "Structured LLM call for %s succeeded in %.2fs",
            model_name,
            time.time() - attempt_start,
        )
        return result

    # Only reachable with a negative max_retries.
    raise RuntimeError(f"Structured LLM call for {model_name} made no attempts") from last_error


__all__ = ["call_llm_structured"]
