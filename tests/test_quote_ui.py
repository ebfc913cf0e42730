from typing import Dict, List

import pytest

import quote_ui
from cabinet_quote.demo_data import DEMO_LINES, demo_pricing
from cabinet_quote.models import CatalogEntry, ManufacturerLine
from cabinet_quote.store import InMemoryPricingStore


def test_sheet_imported_on_this_run_is_priced_immediately(monkeypatch: pytest.MonkeyPatch) -> None:
    def import_sheet(lines: List[ManufacturerLine], imported: Dict[str, Dict[str, CatalogEntry]]) -> None:
        imported["line_classic"] = {"B30": CatalogEntry(sku="CS-B30", price=310.0)}

    monkeypatch.setattr(quote_ui, "_price_sheet_sidebar", import_sheet)
    store = InMemoryPricingStore(lines=DEMO_LINES, pricing=demo_pricing())
    imported: Dict[str, Dict[str, CatalogEntry]] = {}

    pricing = quote_ui._session_pricing(store, DEMO_LINES, imported)

    assert pricing["line_classic"]["B30"].sku == "CS-B30"
    assert pricing["line_builder"] == demo_pricing()["line_builder"]
    assert "line_classic" not in store.get_pricing_table()
