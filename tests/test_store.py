from typing import Any, Dict, List

import pytest
import requests

from cabinet_quote.demo_data import DEMO_LINES, demo_pricing
from cabinet_quote.models import CatalogEntry, LineRates, ManufacturerLine
from cabinet_quote.store import HttpPricingStore, InMemoryPricingStore


class _FakeResponse:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def json(self) -> Any:
        return self._payload


def _serve(monkeypatch: pytest.MonkeyPatch, routes: Dict[str, _FakeResponse], calls: List[Dict[str, Any]]) -> None:
    def fake_get(url: str, params=None, headers=None, timeout=None) -> _FakeResponse:
        calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        for path, response in routes.items():
            if url.endswith(path):
                return response
        return _FakeResponse([], status_code=404)

    monkeypatch.setattr("cabinet_quote.store.requests.get", fake_get)


def test_in_memory_store_returns_copies() -> None:
    store = InMemoryPricingStore(lines=DEMO_LINES, pricing=demo_pricing())

    table = store.get_pricing_table()
    table["line_builder"].clear()
    store.get_lines().clear()

    assert store.get_pricing_table() == demo_pricing()
    assert store.get_lines() == DEMO_LINES


def test_http_store_falls_back_to_demo_data_when_unreachable(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_get(*args, **kwargs):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr("cabinet_quote.store.requests.get", failing_get)
    store = HttpPricingStore(base_url="https://pricing.example.com/rest/v1")

    assert store.get_lines() == DEMO_LINES
    assert store.get_pricing_table() == demo_pricing()


def test_http_store_falls_back_on_http_error(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: List[Dict[str, Any]] = []
    _serve(monkeypatch, {"/cabinet_lines": _FakeResponse({"message": "denied"}, status_code=401)}, calls)

    assert HttpPricingStore(base_url="https://pricing.example.com").get_lines() == DEMO_LINES


def test_http_store_reads_lines_and_pricing_rows(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: List[Dict[str, Any]] = []
    routes = {
        "/cabinet_lines": _FakeResponse(
            [
                {
                    "id": "line_shaker",
                    "name": "Shaker Plus",
                    "tier": "Premium",
                    "multiplier": "2.1",
                    "shipping_factor": 0.08,
                    "rates": {"basePerFoot": 300, "wallPerFoot": 250, "tallPerUnit": 900, "accessoryPerFoot": 40},
                },
                {"name": "no id"},
            ]
        ),
        "/pricing_items": _FakeResponse(
            [
                {"line_id": "line_shaker", "type": "B30", "sku": "SHK-B30", "price": "315.5"},
                {"line_id": "line_shaker", "sku": "W3030", "price": 260},
                {"line_id": "line_shaker", "sku": "BAD", "price": "n/a"},
                {"sku": "ORPHAN", "price": 10},
            ]
        ),
    }
    _serve(monkeypatch, routes, calls)
    store = HttpPricingStore(base_url="https://pricing.example.com/rest/v1/", token="secret", timeout_seconds=3.0)

    lines = store.get_lines()
    table = store.get_pricing_table()

    assert lines == [
        ManufacturerLine(
            id="line_shaker",
            name="Shaker Plus",
            tier="Premium",
            multiplier=2.1,
            shipping_factor=0.08,
            rates=LineRates(base_per_foot=300.0, wall_per_foot=250.0, tall_per_unit=900.0, accessory_per_foot=40.0),
        )
    ]
    assert table["line_shaker"] == {
        "B30": CatalogEntry(sku="SHK-B30", price=315.5),
        "W3030": CatalogEntry(sku="W3030", price=260.0),
    }
    assert table["line_builder"] == demo_pricing()["line_builder"]
    assert calls[0]["url"] == "https://pricing.example.com/rest/v1/cabinet_lines"
    assert calls[0]["params"] == {"select": "*"}
    assert calls[0]["headers"]["Authorization"] == "Bearer secret"
    assert calls[0]["timeout"] == 3.0
