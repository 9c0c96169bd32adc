"""
TOON: a compact, human-editable ``STORY { ... }`` rendering of a prompt.

    STORY {
      GENRE: SCI_FI
      TASK: "Write a story"
      LENGTH: 100-150
      STRICTNESS: HIGH
      RULES:
        - NO_VIOLENCE
        - "third person"
      MODERATION:
        - NO_CUSSING
    }

``parse_toon`` reads the same text back into wire-named JSON; uniqueness
only survives as its strictness bucket.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List

from storyprompt_cli import config
from storyprompt_cli.export.serialize import as_plain

_CONSTANT_RE = re.compile(r"^[A-Z_]+$")

# (lower bound, level); first match wins
STRICTNESS_LEVELS = [(90, "HIGH"), (70, "MEDIUM"), (50, "LOW")]
STRICTNESS_UNIQUENESS = {"HIGH": 100, "MEDIUM": 75, "LOW": 50, "MINIMAL": 25}

_ESCAPES = [("\\", "\\\\"), ('"', '\\"'), ("\n", "\\n"), ("\r", "\\r"), ("\t", "\\t")]


def escape_string(text: str) -> str:
    for raw, esc in _ESCAPES:
        text = text.replace(raw, esc)
    return text


def unescape_string(text: str) -> str:
    return re.sub(
        r'\\([nrt"\\])',
        lambda m: {"n": "\n", "r": "\r", "t": "\t"}.get(m.group(1), m.group(1)),
        text,
    )


def format_rule(rule: str) -> str:
    """UPPER_SNAKE constants stay bare, anything else is quoted."""
    return rule if _CONSTANT_RE.match(rule) else f'"{escape_string(rule)}"'


def strictness_level(uniqueness: float) -> str:
    for bound, level in STRICTNESS_LEVELS:
        if uniqueness >= bound:
            return level
    return "MINIMAL"


def moderation_flags(allow_vulgar: bool, allow_cussing: bool) -> List[str]:
    flags = []
    if not allow_cussing:
        flags.append("NO_CUSSING")
    if not allow_vulgar:
        flags.append("NO_VULGAR")
    if not allow_cussing and not allow_vulgar:
        flags.append("FAMILY_FRIENDLY")
    return flags


def generate_toon(prompt_json: Any) -> str:
    data = as_plain(prompt_json)
    cfg, lim, mod = data["storyConfig"], data["limits"], data["moderation"]
    lines = ["STORY {"]

    if cfg["genre"]:
        lines.append(f"  GENRE: {re.sub(r'[- ]', '_', cfg['genre'].upper())}")
    if data["task"]:
        lines.append(f'  TASK: "{escape_string(data["task"])}"')
    if cfg["plot"]:
        lines.append(f'  PLOT: "{escape_string(cfg["plot"])}"')
    lines.append(f"  LENGTH: {lim['minWords']}-{lim['maxWords']}")
    if lim["maxChapters"] > 1:
        lines.append(f"  CHAPTERS: {lim['maxChapters']}")
    lines.append(f"  STRICTNESS: {strictness_level(lim['uniqueness'])}")

    if data["rules"]:
        lines.append("  RULES:")
        lines.extend(f"    - {format_rule(r)}" for r in data["rules"])
    if cfg["specifics"]:
        lines.append("  SPECIFICS:")
        lines.extend(f"    - {escape_string(s)}" for s in cfg["specifics"])

    flags = moderation_flags(mod["allowVulgar"], mod["allowCussing"])
    if flags:
        lines.append("  MODERATION:")
        lines.extend(f"    - {f}" for f in flags)

    lines.append("}")
    return "\n".join(lines)


# ─── reading TOON back ───────────────────────────────────────────────────
def _section(toon: str, name: str) -> List[str]:
    m = re.search(rf"{name}:\s*((?:\s*-\s*[^\n]+\n?)+)", toon)
    if not m:
        return []
    return [ln.strip()[1:].strip() for ln in m.group(1).splitlines() if ln.strip().startswith("-")]


def _unquote(item: str) -> str:
    if len(item) >= 2 and item.startswith('"') and item.endswith('"'):
        item = item[1:-1]
    return unescape_string(item)


def parse_toon(toon: str) -> Dict[str, Any]:
    """
    Best-effort inverse of ``generate_toon``. Missing keys keep the session
    defaults; a missing MODERATION block means everything is allowed.
    """
    out: Dict[str, Any] = {
        "task": "",
        "rules": [],
        "storyConfig": {"genre": "", "plot": "", "specifics": []},
        "moderation": {"allowVulgar": True, "allowCussing": True},
        "limits": {
            "minWords": config.DEFAULT_MIN_WORDS,
            "maxWords": config.DEFAULT_MAX_WORDS,
            "maxChapters": config.DEFAULT_CHAPTERS,
            "uniqueness": config.DEFAULT_UNIQUENESS,
        },
    }
    cfg, lim = out["storyConfig"], out["limits"]

    def find(pattern: str):
        return re.search(pattern, toon)

    m = find(r"GENRE:\s*([A-Z_]+)")
    if m:
        cfg["genre"] = m.group(1).lower().replace("_", "-")
    m = find(r'TASK:\s*"((?:[^"\\]|\\.)*)"')
    if m:
        out["task"] = unescape_string(m.group(1))
    m = find(r'PLOT:\s*"((?:[^"\\]|\\.)*)"')
    if m:
        cfg["plot"] = unescape_string(m.group(1))
    m = find(r"LENGTH:\s*(\d+)-(\d+)")
    if m:
        lim["minWords"], lim["maxWords"] = int(m.group(1)), int(m.group(2))
    m = find(r"CHAPTERS:\s*(\d+)")
    if m:
        lim["maxChapters"] = int(m.group(1))
    m = find(r"STRICTNESS:\s*([A-Z]+)")
    if m:
        lim["uniqueness"] = STRICTNESS_UNIQUENESS.get(m.group(1), config.DEFAULT_UNIQUENESS)

    out["rules"] = [_unquote(r) for r in _section(toon, "RULES") if r]
    cfg["specifics"] = [unescape_string(s) for s in _section(toon, "SPECIFICS") if s]

    flags = _section(toon, "MODERATION")
    if flags:
        out["moderation"] = {
            "allowVulgar": "NO_VULGAR" not in flags,
            "allowCussing": "NO_CUSSING" not in flags,
        }
    return out


def validate_toon(toon: str) -> List[str]:
    """Structural problems with *toon*; an empty list means it looks fine."""
    text = toon.strip()
    errors = []
    if not text.startswith("STORY {"):
        errors.append('TOON must start with "STORY {"')
    if not text.endswith("}"):
        errors.append('TOON must end with "}"')
    for key in ("GENRE", "LENGTH"):
        if f"{key}:" not in text:
            errors.append(f"Missing required field: {key}")
    return errors
