"""
Intermediate (LLM) format → JSON output, plus small rule heuristics.
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, List

from storyprompt_cli import config
from storyprompt_cli.models import (
    IntermediateFormat,
    JSONOutput,
    OutputLimits,
    OutputModeration,
    StoryConfig,
)

GENRE_MAP: Dict[str, str] = {
    # sci-fi
    "science fiction": "sci-fi",
    "scifi": "sci-fi",
    "sf": "sci-fi",
    "space opera": "sci-fi",
    "cyberpunk": "sci-fi",
    "steampunk": "sci-fi",
    # fantasy
    "high fantasy": "fantasy",
    "urban fantasy": "fantasy",
    "dark fantasy": "fantasy",
    # mystery
    "detective": "mystery",
    "crime": "mystery",
    "noir": "mystery",
    "whodunit": "mystery",
    # romance
    "romantic": "romance",
    "love story": "romance",
    # horror
    "scary": "horror",
    "terror": "horror",
    "supernatural": "horror",
    # thriller
    "suspense": "thriller",
    "action": "thriller",
    # adventure
    "quest": "adventure",
    "exploration": "adventure",
    # comedy
    "humor": "comedy",
    "funny": "comedy",
    "comic": "comedy",
    # drama
    "dramatic": "drama",
}

_MODERATION_KW = ["cussing", "profanity", "vulgar", "violence", "gore", "mature", "family-friendly"]
_STYLE_KW = ["formal", "casual", "detailed", "concise", "creative", "tone"]
_CONTENT_KW = ["plot", "character", "setting", "theme", "genre"]


def normalize_genre(genre: str) -> str:
    key = genre.lower().strip()
    return GENRE_MAP.get(key, key)


def ensure_valid_number(value: Any, lo: float, hi: float, default: float):
    """Clamp *value* into [lo, hi]; non-numbers and NaN give *default*."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
        return default
    return max(lo, min(hi, value))


def normalize_to_output(intermediate: IntermediateFormat) -> JSONOutput:
    lim = intermediate.limits
    return JSONOutput(
        task=intermediate.main_task,
        rules=tuple(intermediate.rules),
        story_config=StoryConfig(
            genre=normalize_genre(intermediate.genre),
            plot=intermediate.plot,
            specifics=tuple(intermediate.specifics),
        ),
        moderation=OutputModeration(
            allow_vulgar=intermediate.moderation.allow_vulgar,
            allow_cussing=intermediate.moderation.allow_cussing,
        ),
        limits=OutputLimits(
            min_words=int(ensure_valid_number(lim.min_words, 1, 10000, config.DEFAULT_MIN_WORDS)),
            max_words=int(ensure_valid_number(lim.max_words, 1, 10000, config.DEFAULT_MAX_WORDS)),
            max_chapters=int(ensure_valid_number(lim.max_chapters, 1, 100, config.DEFAULT_CHAPTERS)),
            uniqueness=ensure_valid_number(lim.uniqueness, 0, 100, config.DEFAULT_UNIQUENESS),
        ),
    )


def categorize_rules(rules: List[str]) -> Dict[str, List[str]]:
    """Bucket rules by first matching keyword group (moderation > style > content)."""
    out: Dict[str, List[str]] = {"moderation": [], "style": [], "content": [], "other": []}
    for rule in rules:
        low = rule.lower()
        if any(kw in low for kw in _MODERATION_KW):
            out["moderation"].append(rule)
        elif any(kw in low for kw in _STYLE_KW):
            out["style"].append(rule)
        elif any(kw in low for kw in _CONTENT_KW):
            out["content"].append(rule)
        else:
            out["other"].append(rule)
    return out


def infer_moderation_from_rules(rules: List[str]) -> Dict[str, bool]:
    text = " ".join(r.lower() for r in rules)
    no_cussing = re.search(r"no (cuss|profanity|swearing)", text) is not None
    family = re.search(r"family[- ]friendly", text) is not None
    no_vulgar = "no vulgar" in text
    return {
        "allowVulgar": not no_vulgar and not family,
        "allowCussing": not no_cussing and not family,
    }


def merge_intermediate(base: IntermediateFormat, override: Dict[str, Any]) -> IntermediateFormat:
    """
    Overlay the non-None keys of *override* on *base*; nested
    ``moderation`` / ``limits`` blocks merge key by key.
    """
    merged = base.model_dump()
    for key, value in override.items():
        if value is None:
            continue
        if key in ("moderation", "limits") and isinstance(value, dict):
            merged[key].update({k: v for k, v in value.items() if v is not None})
        else:
            merged[key] = value
    return IntermediateFormat.model_validate(merged)
