# src/castgraph/agents/base.py
"""Base class for CastGraph agents."""

from __future__ import annotations

import os
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar, cast

from pydantic import BaseModel
from tenacity import (
    AsyncRetrying,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from castgraph.config import config
from castgraph.core.errors import LLMConfigurationError
from castgraph.core.llm import call_llm_structured
from castgraph.core.logging import get_logger, log_calls

T = TypeVar("T", bound=BaseModel)


class Agent:
    """Base class for all CastGraph agents, providing common LLM utilities."""

    # Errors that no amount of retrying will fix.
    non_retryable: tuple[type[BaseException], ...] = (LLMConfigurationError,)

    def __init__(
        self,
        *,
        model: str | None = None,
        default_model_env: str,
        default_model: str | None = None,
    ) -> None:
        """Initialize the agent with a model.

        The model can be passed directly or configured via an environment
        variable specified by `default_model_env`, falling back to
        `default_model`.

        Raises
        ------
        ValueError
            If no model is provided and neither fallback is set.
        """
        self.model: str = cast(
            str, model or os.environ.get(default_model_env) or default_model or ""
        )
        if not self.model:
            raise ValueError(f"Model not provided and {default_model_env} not set.")
        self.logger = get_logger(f"castgraph.agents.{self.__class__.__name__}")

    @log_calls
    async def call_llm_structured(
        self,
        prompt: str,
        response_model: type[T],
        *,
        temperature: float | None = None,
        max_retries: int | None = None,
    ) -> T:
        """Call the LLM with structured output validation and error logging.

        Parameters
        ----------
        prompt:
            Prompt text to send to the LLM.
        response_model:
            Pydantic model describing expected structured output.
        temperature:
            Optional sampling temperature override. If None, global/default is used.
        max_retries:
            Maximum number of validation retry attempts; defaults to config.
        """
        retries = config.retry.structured_retries if max_retries is None else max_retries
        try:
            return await call_llm_structured(
                self.model,
                prompt,
                response_model,
                max_retries=retries,
                temperature=temperature,
            )
        except Exception as exc:
            self.logger.warning("LLM error: %s", exc)
            raise

    @log_calls
    async def with_retries(
        self,
        func: Callable[..., Awaitable[Any]],
        *args: Any,
        retries: int | None = None,
        wait_seconds: float | None = None,
        **kwargs: Any,
    ) -> Any:
        """Execute ``func`` with retry logic."""

        attempts = config.retry.retry_attempts if retries is None else retries
        backoff = config.retry.retry_backoff if wait_seconds is None else wait_seconds
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(max(attempts, 1)),
            wait=wait_exponential(multiplier=backoff, max=10 * max(backoff, 0.1)),
            retry=retry_if_not_exception_type(self.non_retryable),
            reraise=True,
        ):
            with attempt:
                return await func(*args, **kwargs)

        raise RuntimeError("Unreachable")  # pragma: no cover - safety


__all__ = ["Agent"]
