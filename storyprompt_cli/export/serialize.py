"""
Shared JSON text rendering for every exporter.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel


def as_plain(obj: Any) -> Any:
    """Pydantic models become wire-named dicts; anything else passes through."""
    if isinstance(obj, BaseModel):
        return obj.model_dump(by_alias=True, mode="json")
    return obj


def pretty_json(obj: Any) -> str:
    return json.dumps(as_plain(obj), indent=2, ensure_ascii=False)
