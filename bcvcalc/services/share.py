from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from bcvcalc.models.conversion import ConversionState
from .capabilities import CardSnapshot, ExportError, ImageExporter
from .presenter import (
    CAPTURE_FOOTER,
    CAPTURE_TITLE,
    rate_caption,
    rate_headline,
    share_text,
)

logger = logging.getLogger("bcvcalc.share")


@dataclass(frozen=True)
class Capture:
    filename: str
    content: bytes
    title: str
    text: str
    media_type: str = "image/png"


def snapshot_of(state: ConversionState, dark: bool) -> CardSnapshot:
    return CardSnapshot(
        title=CAPTURE_TITLE,
        source_amount=state.source_amount,
        target_amount=state.target_amount,
        rate_line=rate_headline(state),
        caption=rate_caption(state),
        footer=CAPTURE_FOOTER,
        dark=dark,
    )


class ShareService:
    def __init__(
        self,
        exporter: ImageExporter,
        clock_ms: Callable[[], int] = lambda: int(time.time() * 1000),
    ):
        self._exporter = exporter
        self._clock_ms = clock_ms

    def capture(self, state: ConversionState, dark: bool) -> Optional[Capture]:
        """Render the conversion card; None when the export fails."""
        try:
            content = self._exporter.export(snapshot_of(state, dark))
        except (ExportError, OSError):
            logger.exception("error exporting conversion capture")
            return None
        except Exception:
            logger.exception("image exporter failed rendering conversion capture")
            return None
        return Capture(
            filename=f"bcv-conversion-{self._clock_ms()}.png",
            content=content,
            title=CAPTURE_TITLE,
            text=share_text(state),
        )
