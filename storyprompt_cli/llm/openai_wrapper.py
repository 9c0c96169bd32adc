"""
openai-python ≥1.0 compatible wrapper
"""

from __future__ import annotations

import logging
import time
from functools import lru_cache
from typing import Any, Dict, List

from openai import OpenAI
from rich import print

from storyprompt_cli import config
from storyprompt_cli.generators.prompt_builders import build_extraction_messages

logger = logging.getLogger(__name__)

# ─── token price table (USD / 1K tokens) ──────────────────────────────────
_COST = {
    "gpt-4o-mini": 0.0005,
    "gpt-4o": 0.005,
    "gpt-4-turbo": 0.003,
    "gpt-4.5-preview": 0.01,
}


@lru_cache(maxsize=1)
def _client() -> OpenAI:
    # reads OPENAI_API_KEY env var
    return OpenAI()


def _log_cost(model: str, p: int, c: int) -> None:
    cost = (p + c) / 1000 * _COST.get(model, 0.0)
    log_file = config.COST_LOG
    if not log_file.exists():
        log_file.write_text("ts,model,prompt_tokens,completion_tokens,cost\n", encoding="utf-8")
    with log_file.open("a", encoding="utf-8") as f:
        f.write(f"{int(time.time())},{model},{p},{c},{cost:.6f}\n")
    print(f"[grey50][LLM] {model}  p={p}  c={c}  →  ${cost:.4f}[/]")


def call_llm(
    *,
    model: str,
    messages: List[Dict[str, Any]],
    temperature: float = 0.7,
    max_tokens: int | None = None,
    dry_run: bool = False,
) -> str:
    """
    Execute a chat completion and return the assistant's message text.

    `dry_run=True` prints a size estimate and returns "" without calling the API.
    """

    if dry_run:
        char_len = sum(len(m["content"]) for m in messages)
        print(f"[yellow][dry-run] Would call {model} with ~{char_len} characters[/]")
        return ""

    response = _client().chat.completions.create(
        model=model,
        messages=messages,
        temperature=temperature,
        max_tokens=max_tokens,
        response_format={"type": "json_object"},
    )

    usage = response.usage  # prompt_tokens, completion_tokens
    if usage is not None:
        _log_cost(model, usage.prompt_tokens, usage.completion_tokens)

    return response.choices[0].message.content or ""


def generate_structure(
    user_input: str,
    *,
    model: str | None = None,
    temperature: float = 0.3,
    max_tokens: int = 1000,
    dry_run: bool = False,
) -> str:
    """Ask the model to turn *user_input* into the intermediate JSON shape."""
    model = model or config.MODEL_DEFAULT
    logger.info("Extracting structure with %s (%d chars input)", model, len(user_input))
    return call_llm(
        model=model,
        messages=build_extraction_messages(user_input),
        temperature=temperature,
        max_tokens=max_tokens,
        dry_run=dry_run,
    )
