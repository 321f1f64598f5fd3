from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from bcvcalc.main import create_app


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_view_after_startup_refresh(client):
    view = client.get("/calculator").json()
    assert view["source_amount"] == "1.00"
    assert view["target_amount"] == "36.50"
    assert view["active_rate"] == "36.50"
    assert view["headline"] == "1 USD = 36,50 VES"
    assert view["caption"] == "BCV Oficial • 10:30"
    assert view["manual_rate_text"] == "36.50"
    assert view["official_rate"]["source"] == "BCV Oficial"
    assert view["loading"] is False
    assert view["theme"] == "dark"


def test_typing_usd_updates_ves(client):
    view = client.post("/calculator/amount", json={"field": "source", "text": "10.00"}).json()
    assert view["target_amount"] == "365.00"
    assert view["last_edited"] == "source"


def test_typing_ves_updates_usd(client, provider):
    provider.rate = Decimal("50.00")
    client.post("/rates/refresh")
    view = client.post("/calculator/amount", json={"field": "target", "text": "100.00"}).json()
    assert view["source_amount"] == "2.00"


def test_garbage_amount_reads_as_zero(client):
    view = client.post("/calculator/amount", json={"field": "source", "text": "abc"}).json()
    assert view["source_amount"] == "abc"
    assert view["target_amount"] == "0.00"


def test_unknown_field_is_validation_error(client):
    resp = client.post("/calculator/amount", json={"field": "eur", "text": "1"})
    assert resp.status_code == 422
    assert resp.json()["error"] == "validation_error"


def test_focus_then_swap(client):
    client.post("/calculator/amount", json={"field": "source", "text": "10"})
    view = client.post("/calculator/swap").json()
    assert view["last_edited"] == "target"
    assert view["target_amount"] == "10"
    assert view["source_amount"] == "0.27"

    view = client.post("/calculator/focus", json={"field": "source"}).json()
    assert view["last_edited"] == "source"
    assert view["target_amount"] == "9.86"


def test_manual_rate_flow(client):
    view = client.post("/calculator/manual-rate", json={"text": ""}).json()
    view = client.post("/calculator/manual-rate/toggle", json={"enabled": True}).json()
    assert view["use_manual_rate"] is True
    assert view["manual_rate_active"] is False
    assert view["active_rate"] == "36.50"

    view = client.post("/calculator/manual-rate", json={"text": "45"}).json()
    assert view["manual_rate_active"] is True
    assert view["caption"] == "Tasa Personalizada Activa"
    assert view["target_amount"] == "45.00"

    view = client.post("/calculator/manual-rate/toggle").json()
    assert view["use_manual_rate"] is False
    assert view["target_amount"] == "36.50"


@pytest.mark.parametrize("value, expected", [(1, "36.50"), (5, "182.50"), (10, "365.00"), (20, "730.00")])
def test_quick_amounts(client, value, expected):
    view = client.post(f"/calculator/quick/{value}").json()
    assert view["source_amount"] == f"{value}.00"
    assert view["target_amount"] == expected


def test_quick_amount_outside_shortcuts(client):
    resp = client.post("/calculator/quick/7")
    assert resp.status_code == 400
    assert resp.json()["error"] == "bad_request"


def test_copy_returns_text_and_feedback(client, session):
    client.post("/calculator/amount", json={"field": "source", "text": "2"})
    body = client.post("/calculator/copy/target").json()
    assert body == {"copied": True, "text": "73.00", "feedback": "target"}
    assert session.clipboard.last_text == "73.00"


def test_capture_download(client):
    resp = client.get("/calculator/capture.png")
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "image/png"
    assert resp.headers["content-disposition"].startswith('attachment; filename="bcv-conversion-')
    assert resp.content.startswith(b"\x89PNG")
    assert "36.50" in resp.headers["x-share-text"]


def test_capture_failure_is_503(client, session, monkeypatch):
    monkeypatch.setattr(session, "capture", lambda: None)
    resp = client.get("/calculator/capture.png")
    assert resp.status_code == 503
    assert resp.json()["error"] == "unavailable"


def test_rates_current_and_refresh(client, provider):
    current = client.get("/rates/current").json()
    assert current["rate"] == "36.50"
    assert current["estimated"] is False

    provider.rate = Decimal("37.25")
    refreshed = client.post("/rates/refresh").json()
    assert refreshed["rate"] == "37.25"
    assert refreshed["view"]["target_amount"] == "37.25"
    # manual rate stays seeded from the first fetch
    assert refreshed["view"]["manual_rate_text"] == "36.50"


def test_rates_current_before_first_fetch(settings, session):
    app = create_app(settings_override=settings, session_override=session)
    # no lifespan: the startup refresh never runs
    client = TestClient(app)
    resp = client.get("/rates/current")
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


def test_theme_toggle_persists(client, store):
    assert client.get("/preferences/theme").json() == {"theme": "dark"}
    assert client.post("/preferences/theme/toggle").json() == {"theme": "light"}
    assert store.get("theme") == "light"
    assert client.get("/calculator").json()["theme"] == "light"


def test_index_page_renders(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Calculadora Dólar" in resp.text
    assert "1 USD = 36,50 VES" in resp.text


def test_unknown_route(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.json() == {"error": "not_found", "detail": "No route for GET /nope"}


def test_request_id_header(client):
    resp = client.get("/health", headers={"x-request-id": "abc123"})
    assert resp.headers["x-request-id"] == "abc123"


def test_long_garbage_amount_degrades_to_zero(client):
    text = "x" * 500
    resp = client.post("/calculator/amount", json={"field": "target", "text": text})
    assert resp.status_code == 200
    assert resp.json()["source_amount"] == "0.00"


def test_long_manual_rate_text_falls_back_to_official(client):
    client.post("/calculator/manual-rate/toggle", json={"enabled": True})
    view = client.post("/calculator/manual-rate", json={"text": "9" * 80 + "x"}).json()
    assert view["manual_rate_active"] is False
    assert view["active_rate"] == "36.50"


def test_unusable_request_id_is_replaced(client):
    resp = client.get("/health", headers={"x-request-id": "not a token"})
    assert resp.headers["x-request-id"] != "not a token"
    assert len(resp.headers["x-request-id"]) == 32
