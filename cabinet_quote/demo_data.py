"""Demo manufacturer lines and price table used when no pricing store is configured."""

from __future__ import annotations

from typing import Dict, List

from cabinet_quote.models import CatalogEntry, LineRates, ManufacturerLine

DEMO_LINES: List[ManufacturerLine] = [
    ManufacturerLine(
        id="line_builder",
        name="Builder Select",
        tier="Budget",
        multiplier=1.0,
        finish_premium=0.0,
        shipping_factor=0.05,
        description="Standard particle board, melamine finish.",
        finish="White Melamine",
    ),
    ManufacturerLine(
        id="line_classic",
        name="Classic Shaker",
        tier="Mid-Range",
        multiplier=1.65,
        finish_premium=0.10,
        shipping_factor=0.07,
        rates=LineRates(
            base_per_foot=240.0,
            wall_per_foot=190.0,
            tall_per_unit=780.0,
            accessory_per_foot=35.0,
        ),
        description="Plywood construction, painted finish.",
        finish="Painted White",
    ),
    ManufacturerLine(
        id="line_artisan",
        name="Artisan Custom",
        tier="Premium",
        multiplier=2.8,
        finish_premium=0.25,
        shipping_factor=0.10,
        rates=LineRates(
            base_per_foot=410.0,
            wall_per_foot=320.0,
            tall_per_unit=1350.0,
            accessory_per_foot=60.0,
            hardware_each=25.0,
        ),
        description="Solid wood, custom stains, full overlay.",
        finish="Custom Stain",
    ),
]

_BUILDER_PRICES: Dict[str, float] = {
    "B30": 210.00,
    "B15": 150.00,
    "B18": 165.00,
    "B24": 180.00,
    "B36": 240.00,
    "SB36": 250.00,
    "SB33": 235.00,
    "DB18": 340.00,
    "DB24": 380.00,
    "W3030": 180.00,
    "W1530": 120.00,
    "W1830": 140.00,
    "W3924": 220.00,
    "BBC42": 420.00,
    "LS36": 480.00,
    "U2484": 550.00,
    "T2484": 550.00,
    "REP": 120.00,
    "DWR": 60.00,
    "GEN": 150.00,
}


def demo_pricing() -> Dict[str, Dict[str, CatalogEntry]]:
    """A fresh copy of the demo table, keyed by line id then lookup key."""
    return {
        "line_builder": {key: CatalogEntry(sku=key, price=price) for key, price in _BUILDER_PRICES.items()},
    }
