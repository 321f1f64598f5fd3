from __future__ import annotations

"""Calculator session: the single user's live state plus its collaborators.

All transitions run on the event loop one at a time; only `refresh_rate`
suspends, and it dispatches RateLoaded once the (possibly shared) fetch
resolves.
"""
import logging
from typing import Any, Dict, Optional

from bcvcalc.core.config import Settings
from bcvcalc.db.store import SqliteKeyValueStore
from bcvcalc.models.conversion import AmountField, ConversionState, Event, RateLoaded
from bcvcalc.models.rates import ExchangeRate
from .capabilities import ClipboardWriter, ImageExporter, KeyValueStore, StagedClipboard
from .clipboard import CopyService
from .conversion import initial_state, reduce
from .exporter import PillowCardExporter
from .preferences import DARK, get_theme, toggle_theme
from .presenter import calculator_view
from .rates.base import RateProvider
from .rates.providers import make_rate_provider
from .rates.refresh import RateRefresher
from .share import Capture, ShareService

logger = logging.getLogger("bcvcalc.session")


class CalculatorSession:
    def __init__(
        self,
        provider: RateProvider,
        store: KeyValueStore,
        clipboard: ClipboardWriter,
        exporter: ImageExporter,
        copy_feedback_seconds: float = 1.5,
    ):
        self.state: ConversionState = initial_state()
        self.refresher = RateRefresher(provider)
        self.store = store
        self.clipboard = clipboard
        self.copier = CopyService(clipboard, copy_feedback_seconds)
        self.sharer = ShareService(exporter)
        self.theme = get_theme(store)

    @property
    def loading(self) -> bool:
        return self.refresher.loading

    def dispatch(self, event: Event) -> ConversionState:
        self.state = reduce(self.state, event)
        return self.state

    async def refresh_rate(self) -> ExchangeRate:
        rate = await self.refresher.refresh()
        self.dispatch(RateLoaded(rate))
        logger.info(
            "official rate now %s (%s)",
            rate.rate,
            rate.source,
            extra={"rate": str(rate.rate), "rate_source": rate.source},
        )
        return rate

    async def copy(self, field: AmountField) -> bool:
        return await self.copier.copy(field, self.state)

    def capture(self) -> Optional[Capture]:
        return self.sharer.capture(self.state, dark=self.theme == DARK)

    def toggle_theme(self) -> str:
        self.theme = toggle_theme(self.store)
        return self.theme

    def view(self) -> Dict[str, Any]:
        return calculator_view(
            self.state,
            loading=self.loading,
            theme=self.theme,
            copy_feedback=self.copier.feedback(),
        )


def build_session(settings: Settings) -> CalculatorSession:
    """Wire the production collaborators for the configured provider."""
    return CalculatorSession(
        provider=make_rate_provider(settings.rate_provider, settings),
        store=SqliteKeyValueStore(settings.db_path),  # type: ignore[arg-type]
        clipboard=StagedClipboard(),
        exporter=PillowCardExporter(scale=settings.capture_scale),
        copy_feedback_seconds=settings.copy_feedback_seconds,
    )
