"""
cURL template for a generic JSON-over-HTTP generation endpoint.
"""

from __future__ import annotations

from typing import Any

from storyprompt_cli.export.serialize import pretty_json

DEFAULT_ENDPOINT = "https://api.example.com/generate"


def generate_curl(prompt_json: Any, endpoint: str | None = None) -> str:
    """
    Return a copy-pasteable POST command whose body is *prompt_json*
    indented by two spaces. The API key stays a placeholder.
    """
    endpoint = endpoint or DEFAULT_ENDPOINT
    return (
        f"curl {endpoint} \\\n"
        '  -H "Content-Type: application/json" \\\n'
        '  -H "Authorization: Bearer YOUR_API_KEY" \\\n'
        f"  -d '{pretty_json(prompt_json)}'"
    )
