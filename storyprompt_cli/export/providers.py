"""
Provider-specific exports: request payload, cURL and a Python SDK snippet
for OpenAI chat completions and Anthropic messages.
"""

from __future__ import annotations

import json
from textwrap import dedent
from typing import Any, Dict, List, Tuple

from storyprompt_cli.export.serialize import as_plain, pretty_json

OPENAI_MODEL = "gpt-4-turbo-preview"
CLAUDE_MODEL = "claude-3-5-sonnet-20241022"
ANTHROPIC_VERSION = "2023-06-01"
TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2000
CLAUDE_TOKEN_CAP = 4096
FALLBACK_USER_PROMPT = "Generate content based on the system instructions."


def _bullets(items: List[str]) -> str:
    return "\n".join(f"- {i}" for i in items)


def build_system_prompt(prompt_json: Any) -> str:
    """Render the prompt as labelled plain-text sections; empty values are skipped."""
    data = as_plain(prompt_json)
    parts: List[str] = []

    if data.get("task"):
        parts.append(f"Task: {data['task']}")

    rules = data.get("rules")
    if isinstance(rules, list) and rules:
        parts.append(f"\nRules:\n{_bullets(rules)}")

    cfg = data.get("storyConfig")
    if cfg:
        parts.append("\nStory Configuration:")
        if cfg.get("genre"):
            parts.append(f"Genre: {cfg['genre']}")
        if cfg.get("plot"):
            parts.append(f"Plot: {cfg['plot']}")
        specifics = cfg.get("specifics")
        if isinstance(specifics, list) and specifics:
            parts.append(f"Specifics:\n{_bullets(specifics)}")

    mod = data.get("moderation")
    if mod:
        parts.append("\nModeration:")
        parts.append(f"Allow Vulgar Content: {'Yes' if mod.get('allowVulgar') else 'No'}")
        parts.append(f"Allow Cussing: {'Yes' if mod.get('allowCussing') else 'No'}")

    lim = data.get("limits")
    if lim:
        parts.append("\nLimits:")
        if lim.get("minWords"):
            parts.append(f"Minimum Words: {lim['minWords']}")
        if lim.get("maxWords"):
            parts.append(f"Maximum Words: {lim['maxWords']}")
        if lim.get("maxChapters"):
            parts.append(f"Maximum Chapters: {lim['maxChapters']}")
        if lim.get("uniqueness"):
            parts.append(f"Uniqueness: {lim['uniqueness']}%")

    return "\n".join(parts)


def build_user_prompt(prompt_json: Any) -> str:
    return as_plain(prompt_json).get("task") or FALLBACK_USER_PROMPT


def _max_words(data: Dict[str, Any]) -> int | None:
    lim = data.get("limits") or {}
    mw = lim.get("maxWords")
    return mw if isinstance(mw, (int, float)) and not isinstance(mw, bool) else None


def get_max_tokens(prompt_json: Any, provider: str = "openai") -> int:
    """~2 tokens per requested word; Anthropic is capped at 4 096."""
    mw = _max_words(as_plain(prompt_json))
    if not mw:
        return DEFAULT_MAX_TOKENS
    tokens = int(mw * 2)
    return min(tokens, CLAUDE_TOKEN_CAP) if provider == "anthropic" else tokens


def _curl(url: str, headers: List[str], payload: Dict[str, Any]) -> str:
    head = "".join(f'  -H "{h}" \\\n' for h in headers)
    body = pretty_json(payload)
    return f"curl {url} \\\n{head}  -d '{body}'"


# ─── OpenAI ──────────────────────────────────────────────────────────────
def generate_openai_payload(prompt_json: Any) -> Tuple[Dict[str, Any], str]:
    payload = {
        "model": OPENAI_MODEL,
        "messages": [
            {"role": "system", "content": build_system_prompt(prompt_json)},
            {"role": "user", "content": build_user_prompt(prompt_json)},
        ],
        "temperature": TEMPERATURE,
        "max_tokens": get_max_tokens(prompt_json, "openai"),
    }
    curl = _curl(
        "https://api.openai.com/v1/chat/completions",
        ["Content-Type: application/json", "Authorization: Bearer $OPENAI_API_KEY"],
        payload,
    )
    return payload, curl


def generate_openai_code(prompt_json: Any) -> str:
    system = build_system_prompt(prompt_json)
    return dedent(
        f"""
        import os
        from openai import OpenAI

        client = OpenAI(api_key=os.environ["OPENAI_API_KEY"])

        completion = client.chat.completions.create(
            model={OPENAI_MODEL!r},
            messages=[
                {{"role": "system", "content": {json.dumps(system, ensure_ascii=False)}}},
                {{"role": "user", "content": "Your input here"}},
            ],
            temperature={TEMPERATURE},
            max_tokens={get_max_tokens(prompt_json, "openai")},
        )
        print(completion.choices[0].message.content)
        """
    ).strip()


# ─── Anthropic ───────────────────────────────────────────────────────────
def generate_claude_payload(prompt_json: Any) -> Tuple[Dict[str, Any], str]:
    payload = {
        "model": CLAUDE_MODEL,
        "max_tokens": get_max_tokens(prompt_json, "anthropic"),
        "messages": [{"role": "user", "content": build_user_prompt(prompt_json)}],
        "system": build_system_prompt(prompt_json),
        "temperature": TEMPERATURE,
    }
    curl = _curl(
        "https://api.anthropic.com/v1/messages",
        [
            "Content-Type: application/json",
            "x-api-key: $ANTHROPIC_API_KEY",
            f"anthropic-version: {ANTHROPIC_VERSION}",
        ],
        payload,
    )
    return payload, curl


def generate_claude_code(prompt_json: Any) -> str:
    system = build_system_prompt(prompt_json)
    user = build_user_prompt(prompt_json)
    return dedent(
        f"""
        import os
        import anthropic

        client = anthropic.Anthropic(api_key=os.environ["ANTHROPIC_API_KEY"])

        message = client.messages.create(
            model={CLAUDE_MODEL!r},
            max_tokens={get_max_tokens(prompt_json, "anthropic")},
            system={json.dumps(system, ensure_ascii=False)},
            messages=[{{"role": "user", "content": {json.dumps(user, ensure_ascii=False)}}}],
            temperature={TEMPERATURE},
        )
        print(message.content[0].text)
        """
    ).strip()
