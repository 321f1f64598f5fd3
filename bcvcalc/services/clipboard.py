from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from bcvcalc.models.conversion import AmountField, ConversionState
from .capabilities import ClipboardError, ClipboardWriter

logger = logging.getLogger("bcvcalc.clipboard")


class CopyService:
    """Copy one amount and remember which field shows the '¡COPIADO!' badge."""

    def __init__(
        self,
        writer: ClipboardWriter,
        feedback_seconds: float = 1.5,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._writer = writer
        self._feedback_seconds = feedback_seconds
        self._clock = clock
        self._field: Optional[AmountField] = None
        self._expires_at = 0.0

    async def copy(self, field: AmountField, state: ConversionState) -> bool:
        text = state.amount(field)
        try:
            await self._writer.write_text(text)
        except (ClipboardError, OSError):
            logger.warning(
                "failed to copy %s amount", field.value, exc_info=True, extra={"field": field.value}
            )
            return False
        except Exception:
            logger.exception(
                "clipboard writer failed copying %s amount", field.value, extra={"field": field.value}
            )
            return False
        self._field = field
        self._expires_at = self._clock() + self._feedback_seconds
        return True

    def feedback(self) -> Optional[AmountField]:
        if self._field is not None and self._clock() >= self._expires_at:
            self._field = None
        return self._field
