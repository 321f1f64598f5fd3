import json
import os
import sys
import tempfile
from pathlib import Path

from fastapi.testclient import TestClient

from bcvcalc.core.config import Settings
from bcvcalc.main import create_app

"""Smoke script for the rate provider switch.

Starts the app once with the 'static' provider and once with 'answer-service'
and converts 10 USD under each. Without BCV_OPENAI_API_KEY the answer-service
run shows the estimated fallback label instead of failing.
"""


def convert_under(kind: str, data_dir: str) -> dict:
    settings = Settings(data_dir=Path(data_dir) / kind, rate_provider=kind, debug=False)
    settings.init_post_load()
    with TestClient(create_app(settings_override=settings)) as client:
        rate = client.post("/rates/refresh").json()
        view = client.post("/calculator/amount", json={"field": "source", "text": "10"}).json()
    return {
        "rate": rate["rate"],
        "source": rate["source"],
        "last_update": rate["last_update"],
        "ves_for_10_usd": view["target_amount"],
        "caption": view["caption"],
    }


def run():
    with tempfile.TemporaryDirectory() as d:
        out = {kind: convert_under(kind, d) for kind in ("static", "answer-service")}
    print(json.dumps(out, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    sys.path.append(os.getcwd())
    run()
