"""
Save the prompt JSON as a named file through a pluggable ``FileSaver``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol

from storyprompt_cli.export.serialize import pretty_json

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "prompt.json"


class FileSaver(Protocol):
    def save(self, data: bytes, filename: str) -> bool: ...


class LocalFileSaver:
    """Writes into *directory*, creating it on first use."""

    def __init__(self, directory: Path | str = "."):
        self.directory = Path(directory)

    def save(self, data: bytes, filename: str) -> bool:
        path = self.directory / filename
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except (OSError, ValueError) as e:
            logger.error("Could not save %s: %s", path, e)
            return False
        logger.info("%s saved (%d bytes)", path, len(data))
        return True


def download_json(
    prompt_json: Any,
    filename: str = DEFAULT_FILENAME,
    saver: FileSaver | None = None,
) -> bool:
    """
    Encode *prompt_json* as indented UTF-8 JSON and hand it to *saver*.
    Returns False instead of raising when the save fails.
    """
    saver = saver or LocalFileSaver()
    data = pretty_json(prompt_json).encode("utf-8")
    try:
        ok = saver.save(data, filename)
    except Exception as e:  # noqa: BLE001
        logger.error("Failed to save %s: %s", filename, e)
        return False
    return bool(ok)
