import asyncio
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from bcvcalc.core.config import Settings
from bcvcalc.db.schema import init_db
from bcvcalc.db.store import SqliteKeyValueStore
from bcvcalc.main import create_app
from bcvcalc.models.rates import OFFICIAL_SOURCE, ExchangeRate
from bcvcalc.services.capabilities import StagedClipboard
from bcvcalc.services.exporter import PillowCardExporter
from bcvcalc.services.rates.base import RateProvider
from bcvcalc.services.session import CalculatorSession


class FakeRateProvider(RateProvider):
    """Serves a fixed rate and counts lookups; can be held open with `gate`."""

    def __init__(self, rate: str = "36.50"):
        self.rate = Decimal(rate)
        self.calls = 0
        self.gate: asyncio.Event | None = None

    async def fetch_rate(self) -> ExchangeRate:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        return ExchangeRate(rate=self.rate, last_update="10:30", source=OFFICIAL_SOURCE)


@pytest.fixture
def settings(tmp_path):
    s = Settings(data_dir=tmp_path, rate_provider="static", debug=False, capture_scale=1)
    s.init_post_load()
    return s


@pytest.fixture
def store(settings):
    init_db(settings.db_path)
    return SqliteKeyValueStore(settings.db_path)


@pytest.fixture
def provider():
    return FakeRateProvider()


@pytest.fixture
def session(provider, store, settings):
    return CalculatorSession(
        provider=provider,
        store=store,
        clipboard=StagedClipboard(),
        exporter=PillowCardExporter(scale=settings.capture_scale),
        copy_feedback_seconds=settings.copy_feedback_seconds,
    )


@pytest.fixture
def client(settings, session):
    app = create_app(settings_override=settings, session_override=session)
    with TestClient(app) as c:
        c.post("/rates/refresh")
        yield c
