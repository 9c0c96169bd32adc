"""
Prompt builders for the structure-extraction call.
• Deterministic JSON-only system prompt.
• Worked example pinned in the prompt so key names never drift.
"""

from __future__ import annotations
import json
from textwrap import dedent
from typing import Any, Dict, List

from storyprompt_cli import config

_EXAMPLE_INPUT = "Create a sci-fi story about a robot discovering emotions, 100-150 words, no cussing"

_EXAMPLE_OUTPUT = {
    "main_task": "Create a sci-fi story about a robot discovering emotions",
    "rules": ["no cussing"],
    "genre": "sci-fi",
    "plot": "A robot discovers emotions",
    "specifics": ["robot protagonist", "emotional discovery"],
    "moderation": {"allow_vulgar": False, "allow_cussing": False},
    "limits": {"min_words": 100, "max_words": 150, "max_chapters": 1, "uniqueness": 100},
}

EXTRACTION_SYSTEM_PROMPT = dedent(
    f"""
    You are a prompt structure analyzer. Convert the user's natural language
    description into a structured JSON object.

    Extract:
    1. main_task: the primary objective (string)
    2. rules: specific rules or constraints mentioned (string[])
    3. genre: fantasy, sci-fi, romance, mystery, horror, adventure, thriller, drama, comedy, or other
    4. plot: brief plot description if provided (string)
    5. specifics: specific details or requirements (string[])
    6. moderation.allow_vulgar: boolean, default false
    7. moderation.allow_cussing: boolean, default false
    8. limits.min_words: number, default {config.DEFAULT_MIN_WORDS}
    9. limits.max_words: number, default {config.DEFAULT_MAX_WORDS}
    10. limits.max_chapters: number, default {config.DEFAULT_CHAPTERS}
    11. limits.uniqueness: creativity level 0-100, default {config.DEFAULT_UNIQUENESS}

    * Output ONLY valid JSON (no markdown, no explanations).
    * Infer missing values from context, otherwise use the defaults.
    * Read numeric limits from phrases like "100-150 words" or "short story".
    * Read moderation flags from phrases like "no cussing", "family-friendly", "mature content".
    * Map genre synonyms ("space opera" → "sci-fi", "detective" → "mystery").
    """
).strip()


def build_extraction_messages(user_input: str) -> List[Dict[str, Any]]:
    example = (
        "Example input:\n"
        + _EXAMPLE_INPUT
        + "\n\nExample output:\n"
        + json.dumps(_EXAMPLE_OUTPUT, indent=2, ensure_ascii=False)
    )
    return [
        {"role": "system", "content": EXTRACTION_SYSTEM_PROMPT + "\n\n" + example},
        {"role": "user", "content": user_input},
    ]
