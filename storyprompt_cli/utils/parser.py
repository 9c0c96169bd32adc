"""
Turn raw extraction-LLM output into an ``IntermediateFormat``.

Never raises: schema failures fall back to per-field defaults, unparsable
text falls back to the default structure.  Also hosts the regex
heuristics used to pre-fill rules / limits / genre from free text.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List

from jsonschema import ValidationError

from storyprompt_cli import config
from storyprompt_cli.models import IntermediateFormat
from storyprompt_cli.utils.validate import validate_intermediate

logger = logging.getLogger(__name__)

FENCE_RE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.S)

_RULE_PATTERNS = [
    (re.compile(r"no cuss(ing)?", re.I), "NO_CUSSING"),
    (re.compile(r"no (profanity|swearing)", re.I), "NO_CUSSING"),
    (re.compile(r"family[- ]friendly", re.I), "FAMILY_FRIENDLY"),
    (re.compile(r"no (violence|gore)", re.I), "NO_VIOLENCE"),
    (re.compile(r"high detail", re.I), "HIGH_DETAIL"),
    (re.compile(r"detailed", re.I), "HIGH_DETAIL"),
    (re.compile(r"creative", re.I), "HIGH_CREATIVITY"),
    (re.compile(r"unique", re.I), "HIGH_UNIQUENESS"),
    (re.compile(r"formal", re.I), "FORMAL_TONE"),
    (re.compile(r"casual", re.I), "CASUAL_TONE"),
]

GENRE_KEYWORDS: Dict[str, List[str]] = {
    "sci-fi": ["sci-fi", "science fiction", "space", "robot", "alien", "futuristic", "cyberpunk"],
    "fantasy": ["fantasy", "magic", "wizard", "dragon", "elf", "dwarf", "medieval"],
    "mystery": ["mystery", "detective", "crime", "investigation", "clue", "whodunit"],
    "romance": ["romance", "love", "relationship", "dating", "romantic"],
    "horror": ["horror", "scary", "terror", "ghost", "monster", "haunted"],
    "thriller": ["thriller", "suspense", "action", "chase", "espionage"],
    "adventure": ["adventure", "quest", "journey", "exploration", "treasure"],
    "comedy": ["comedy", "funny", "humor", "hilarious", "comic"],
    "drama": ["drama", "dramatic", "emotional", "serious"],
}


# ─── response parsing ────────────────────────────────────────────────────
def _sanitise(raw: str) -> str:
    raw = raw.strip()
    if raw.startswith("```"):
        raw = re.sub(r"^```[a-zA-Z]*\s*|\s*```$", "", raw, flags=re.S).strip()
    return raw


def _from_text(text: str) -> IntermediateFormat:
    """json.loads + schema check; raises json.JSONDecodeError only."""
    try:
        data = validate_intermediate(text)
    except ValidationError as e:
        logger.warning("Extraction output failed schema (%s); applying defaults", e.message)
        return apply_defaults(json.loads(text))
    return IntermediateFormat.model_validate(data)


def parse_llm_response(response: str) -> IntermediateFormat:
    try:
        return _from_text(_sanitise(response))
    except json.JSONDecodeError as e:
        logger.error("JSON parse error: %s", e)

    m = FENCE_RE.search(response)
    if m:
        try:
            return _from_text(m.group(1))
        except json.JSONDecodeError as e:
            logger.error("Fenced JSON parse error: %s", e)

    logger.warning("No usable JSON in extraction output; using default structure")
    return IntermediateFormat()


def _num(value: Any, default: float):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return value


def apply_defaults(data: Any) -> IntermediateFormat:
    """Keep every well-typed field of *data*, default the rest."""
    if not isinstance(data, dict):
        return IntermediateFormat()
    mod = data.get("moderation") if isinstance(data.get("moderation"), dict) else {}
    lim = data.get("limits") if isinstance(data.get("limits"), dict) else {}

    def _text(key: str, default: str) -> str:
        v = data.get(key)
        return v if isinstance(v, str) and v else default

    def _strings(key: str) -> List[str]:
        v = data.get(key)
        return [s for s in v if isinstance(s, str)] if isinstance(v, list) else []

    def _flag(key: str) -> bool:
        v = mod.get(key)
        return v if isinstance(v, bool) else False

    return IntermediateFormat(
        main_task=_text("main_task", ""),
        rules=_strings("rules"),
        genre=_text("genre", config.DEFAULT_GENRE),
        plot=_text("plot", ""),
        specifics=_strings("specifics"),
        moderation={"allow_vulgar": _flag("allow_vulgar"), "allow_cussing": _flag("allow_cussing")},
        limits={
            "min_words": _num(lim.get("min_words"), config.DEFAULT_MIN_WORDS),
            "max_words": _num(lim.get("max_words"), config.DEFAULT_MAX_WORDS),
            "max_chapters": _num(lim.get("max_chapters"), config.DEFAULT_CHAPTERS),
            "uniqueness": _num(lim.get("uniqueness"), config.DEFAULT_UNIQUENESS),
        },
    )


# ─── free-text heuristics ────────────────────────────────────────────────
def extract_rules(text: str) -> List[str]:
    rules: List[str] = []
    for pattern, tag in _RULE_PATTERNS:
        if pattern.search(text) and tag not in rules:
            rules.append(tag)
    return rules


def extract_limits(text: str) -> Dict[str, int]:
    """
    Pull word / chapter limits out of phrases like "100-150 words",
    "about 200 words" (±10 %), "3 chapters", "short story".
    """
    limits: Dict[str, int] = {}

    rng = re.search(r"(\d+)\s*(?:-|–|to)\s*(\d+)\s*words?", text, re.I)
    if rng:
        limits["min_words"] = int(rng.group(1))
        limits["max_words"] = int(rng.group(2))
    else:
        single = re.search(r"(\d+)\s*words?", text, re.I)
        if single:
            words = int(single.group(1))
            limits["min_words"] = words * 9 // 10
            limits["max_words"] = -(-words * 11 // 10)

    ch = re.search(r"(\d+)\s*chapters?", text, re.I)
    if ch:
        limits["max_chapters"] = int(ch.group(1))

    if re.search(r"\b(short|brief|concise)\b", text, re.I):
        limits.setdefault("min_words", 50)
        limits.setdefault("max_words", 100)
    elif re.search(r"\b(long|lengthy|extended)\b", text, re.I):
        limits.setdefault("min_words", 200)
        limits.setdefault("max_words", 500)
    elif re.search(r"\b(medium|moderate)\b", text, re.I):
        limits.setdefault("min_words", 100)
        limits.setdefault("max_words", 200)

    return limits


def detect_genre(text: str) -> str:
    low = text.lower()
    for genre, keywords in GENRE_KEYWORDS.items():
        if any(kw in low for kw in keywords):
            return genre
    return config.DEFAULT_GENRE
