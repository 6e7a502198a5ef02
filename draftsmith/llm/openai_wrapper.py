"""
openai-python ≥1.0 backend + retry/usage metering wrapper
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Dict, List, Protocol

import dotenv
import openai
from openai import OpenAI

from draftsmith.errors import GenerationBackendError
from draftsmith.models import Completion, Usage

dotenv.load_dotenv()

logger = logging.getLogger(__name__)

Message = Dict[str, str]

# ─── token price table (USD / 1K tokens) ──────────────────────────────────
_COST = {
    "gpt-3.5-turbo": 0.0015,
    "gpt-4o-mini": 0.0005,
    "gpt-4o": 0.005,
    "gpt-4-turbo": 0.003,
}
COST_LOG = Path.home() / ".draftsmith_costs.csv"


class GenerationBackend(Protocol):
    def complete(self, model: str, messages: List[Message]) -> Completion:
        ...


def log_usage(usage: Usage | None) -> None:
    if usage is not None:
        logger.info(
            "%d tokens (%d prompt, %d completion)",
            usage.total_tokens, usage.prompt_tokens, usage.completion_tokens,
        )


def _log_cost(model: str, p: int, c: int, ledger: Path | None = None) -> None:
    ledger = ledger or COST_LOG
    cost = (p + c) / 1000 * _COST.get(model, 0.0)
    try:
        if not ledger.exists():
            ledger.write_text("ts,model,prompt_tokens,completion_tokens,cost\n", encoding="utf-8")
        with ledger.open("a", encoding="utf-8") as f:
            f.write(f"{int(time.time())},{model},{p},{c},{cost:.6f}\n")
    except OSError as e:
        logger.warning("cost ledger %s not writable: %s", ledger, e)
    logger.debug("[LLM] %s  p=%d  c=%d  →  $%.4f", model, p, c, cost)


class OpenAIBackend:
    """Chat-completions backend; the client reads OPENAI_API_KEY from the env."""

    def __init__(self, client: OpenAI | None = None, temperature: float | None = None,
                 max_tokens: int | None = None):
        self._client = client
        self.temperature = temperature
        self.max_tokens = max_tokens

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI()
        return self._client

    def complete(self, model: str, messages: List[Message]) -> Completion:
        kwargs = {}
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature
        if self.max_tokens is not None:
            kwargs["max_tokens"] = self.max_tokens
        try:
            response = self.client.chat.completions.create(
                model=model, messages=messages, **kwargs
            )
        except openai.OpenAIError as e:
            raise GenerationBackendError(f"{model}: {e}") from e

        text = response.choices[0].message.content if response.choices else None
        if not text:
            raise GenerationBackendError(f"{model} returned no text")

        usage = None
        if response.usage is not None:
            usage = Usage(
                prompt_tokens=response.usage.prompt_tokens,
                completion_tokens=response.usage.completion_tokens,
                total_tokens=response.usage.total_tokens,
            )
            _log_cost(model, usage.prompt_tokens, usage.completion_tokens)
        return Completion(text=text, usage=usage)


class MeteredBackend:
    """
    Wraps any backend with bounded retries on GenerationBackendError
    and keeps a running usage total for the run statistics.
    """

    def __init__(self, inner: GenerationBackend, max_attempts: int = 1):
        self.inner = inner
        self.max_attempts = max(1, max_attempts)
        self.usage = Usage()
        self.calls = 0

    def complete(self, model: str, messages: List[Message]) -> Completion:
        attempt = 1
        while True:
            try:
                completion = self.inner.complete(model, messages)
                break
            except GenerationBackendError as e:
                if attempt >= self.max_attempts:
                    raise
                logger.warning("generation attempt %d/%d failed: %s",
                               attempt, self.max_attempts, e)
                attempt += 1

        self.calls += 1
        if completion.usage is not None:
            self.usage = self.usage + completion.usage
        return completion
