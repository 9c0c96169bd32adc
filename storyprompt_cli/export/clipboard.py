"""
Best-effort clipboard copy. Always resolves to a bool, never raises.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

import pyperclip

logger = logging.getLogger(__name__)


class ClipboardWriter(Protocol):
    def write(self, text: str) -> bool: ...


class PyperclipWriter:
    """System clipboard via pyperclip (xclip/xsel/wl-copy, pbcopy, win32)."""

    def write(self, text: str) -> bool:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            logger.warning("Clipboard unavailable: %s", e)
            return False
        return True


async def copy_to_clipboard(text: str, writer: ClipboardWriter | None = None) -> bool:
    writer = writer or PyperclipWriter()
    try:
        ok = await asyncio.to_thread(writer.write, text)
    except Exception as e:  # noqa: BLE001
        logger.error("Failed to copy to clipboard: %s", e)
        return False
    if not ok:
        logger.error("Failed to copy to clipboard: writer reported failure")
        return False
    return True
