from __future__ import annotations

"""Narrow platform capability interfaces.

The calculator logic never touches a clipboard, an image renderer or a
storage backend directly; callers inject implementations of these.
"""
from dataclasses import dataclass
from typing import Optional, Protocol


class ClipboardError(Exception):
    pass


class ExportError(Exception):
    pass


@dataclass(frozen=True)
class CardSnapshot:
    """What the exported conversion card shows."""

    title: str
    source_amount: str
    target_amount: str
    rate_line: str
    caption: str
    footer: str
    dark: bool


class ClipboardWriter(Protocol):
    async def write_text(self, text: str) -> None: ...


class ImageExporter(Protocol):
    def export(self, snapshot: CardSnapshot) -> bytes: ...


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class StagedClipboard:
    """Keeps the last copied text for the browser to write on our behalf."""

    def __init__(self) -> None:
        self.last_text: Optional[str] = None

    async def write_text(self, text: str) -> None:
        self.last_text = text
