"""
Schema-validation helpers + limit sanity checks.

Usage (inside other modules):
    from storyprompt_cli.utils.validate import validate_output, check_limits
    validate_output(json_text)      # raises jsonschema.ValidationError on failure
    check_limits(output.limits)     # -> list of warning strings
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

import jsonschema
from importlib import resources as pkg

from storyprompt_cli.export.serialize import as_plain


# ─── internal helper ─────────────────────────────────────────────────────
def _maybe_unwrap(obj: Dict[str, Any]) -> Dict[str, Any]:
    """
    Exports and LLMs sometimes wrap the real payload:

        {"prompt": { ... }}

    Accept that pattern and unwrap it.  Otherwise return the object as-is.
    """
    if (
        isinstance(obj, dict)
        and len(obj) == 1
        and next(iter(obj)) in {"prompt", "json_output", "jsonOutput", "output"}
    ):
        return next(iter(obj.values()))
    return obj


def _load_schema(name: str) -> Dict[str, Any]:
    text = pkg.files("storyprompt_cli").joinpath("schemas").joinpath(name).read_text(encoding="utf-8")
    return json.loads(text)


# ─── public API ──────────────────────────────────────────────────────────
OUTPUT_SCHEMA = _load_schema("json_output.schema.json")
INTERMEDIATE_SCHEMA = _load_schema("intermediate.schema.json")


def validate_output(json_text: str) -> Dict[str, Any]:
    data = _maybe_unwrap(json.loads(json_text))
    jsonschema.validate(data, OUTPUT_SCHEMA)
    return data


def validate_intermediate(json_text: str) -> Dict[str, Any]:
    data = _maybe_unwrap(json.loads(json_text))
    jsonschema.validate(data, INTERMEDIATE_SCHEMA)
    return data


def check_limits(limits: Any) -> List[str]:
    """
    Consistency warnings for a limits block (editing-state or wire names).
    Never raises; an empty list means nothing looks off.
    """
    lim = as_plain(limits)
    if not isinstance(lim, dict):
        lim = {}
    lo = lim.get("minWords", lim.get("min_words"))
    hi = lim.get("maxWords", lim.get("max_words"))
    chapters = lim.get("maxChapters", lim.get("chapters", lim.get("max_chapters")))
    uniq = lim.get("uniqueness")

    warnings: List[str] = []
    if isinstance(lo, (int, float)) and isinstance(hi, (int, float)) and lo > hi:
        warnings.append(f"min words ({lo}) is greater than max words ({hi})")
    if chapters == 0:
        warnings.append("chapter count is 0")
    if isinstance(uniq, (int, float)) and not 0 <= uniq <= 100:
        warnings.append(f"uniqueness {uniq} is outside 0-100")
    return warnings
