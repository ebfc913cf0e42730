"""Read-only adapters for manufacturer lines and price tables.

Every call returns fresh containers, so a pricing pass works on a snapshot
that later store updates cannot change underneath it.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

import requests

from cabinet_quote.demo_data import DEMO_LINES, demo_pricing
from cabinet_quote.models import CatalogEntry, LineRates, ManufacturerLine

logger = logging.getLogger(__name__)

PricingSnapshot = Dict[str, Dict[str, CatalogEntry]]


class PricingStore(Protocol):
    def get_lines(self) -> List[ManufacturerLine]:
        ...

    def get_pricing_table(self) -> PricingSnapshot:
        ...


class InMemoryPricingStore:
    def __init__(
        self,
        lines: Sequence[ManufacturerLine] = (),
        pricing: Optional[Mapping[str, Mapping[str, CatalogEntry]]] = None,
    ) -> None:
        self._lines = list(lines)
        self._pricing = {line_id: dict(entries) for line_id, entries in (pricing or {}).items()}

    def get_lines(self) -> List[ManufacturerLine]:
        return list(self._lines)

    def get_pricing_table(self) -> PricingSnapshot:
        return {line_id: dict(entries) for line_id, entries in self._pricing.items()}


class HttpPricingStore:
    """
    Pricing store over a REST backend.
    Expected endpoints:
      GET {base_url}/cabinet_lines?select=*
      GET {base_url}/pricing_items?select=*
    cabinet_lines rows: id, name, tier, multiplier, finish_premium, shipping_factor,
    description, finish, rates ({base_per_foot, wall_per_foot, tall_per_unit, accessory_per_foot}).
    pricing_items rows: line_id, type (lookup key), sku, price.
    Failed or empty responses fall back to the demo data.
    """

    def __init__(self, base_url: str, token: Optional[str] = None, timeout_seconds: float = 8.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout_seconds = timeout_seconds

    def _get_rows(self, path: str) -> Optional[List[Dict[str, Any]]]:
        headers: Dict[str, str] = {}
        if self.token:
            headers["apikey"] = self.token
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = requests.get(
                f"{self.base_url}{path}",
                params={"select": "*"},
                headers=headers,
                timeout=self.timeout_seconds,
            )
            if response.status_code != 200:
                logger.warning("pricing store %s returned HTTP %s", path, response.status_code)
                return None
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("pricing store %s unavailable: %s", path, exc)
            return None

        if not isinstance(payload, list):
            logger.warning("pricing store %s returned %s, expected a list", path, type(payload).__name__)
            return None
        return [row for row in payload if isinstance(row, dict)]

    def get_lines(self) -> List[ManufacturerLine]:
        rows = self._get_rows("/cabinet_lines")
        lines = [line for line in (_line_from_row(row) for row in rows or ()) if line is not None]
        if not lines:
            logger.warning("no manufacturer lines from store, using demo lines")
            return list(DEMO_LINES)
        return lines

    def get_pricing_table(self) -> PricingSnapshot:
        rows = self._get_rows("/pricing_items")
        table = demo_pricing()
        if not rows:
            logger.warning("no pricing rows from store, using demo pricing")
            return table

        loaded: PricingSnapshot = {}
        for row in rows:
            line_id = str(row.get("line_id") or "").strip()
            sku = str(row.get("sku") or "").strip()
            key = str(row.get("type") or sku).strip()
            price = _to_float(row.get("price"))
            if not line_id or not key or price is None:
                continue
            loaded.setdefault(line_id, {})[key] = CatalogEntry(sku=sku or key, price=price)

        # Store rows replace the demo table of the same line, per line.
        table.update(loaded)
        logger.info("loaded %d pricing rows for %d lines", sum(len(v) for v in loaded.values()), len(loaded))
        return table


def _to_float(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _rates_from_row(value: Any) -> Optional[LineRates]:
    if not isinstance(value, dict):
        return None

    def pick(snake: str, camel: str) -> Optional[float]:
        return _to_float(value.get(snake, value.get(camel)))

    base = pick("base_per_foot", "basePerFoot")
    wall = pick("wall_per_foot", "wallPerFoot")
    tall = pick("tall_per_unit", "tallPerUnit")
    accessory = pick("accessory_per_foot", "accessoryPerFoot")
    if None in (base, wall, tall, accessory):
        return None
    hardware = pick("hardware_each", "hardwareEach")
    return LineRates(
        base_per_foot=base,
        wall_per_foot=wall,
        tall_per_unit=tall,
        accessory_per_foot=accessory,
        hardware_each=hardware if hardware is not None else LineRates.hardware_each,
    )


def _line_from_row(row: Dict[str, Any]) -> Optional[ManufacturerLine]:
    line_id = str(row.get("id") or "").strip()
    if not line_id:
        return None
    return ManufacturerLine(
        id=line_id,
        name=str(row.get("name") or line_id),
        tier=str(row.get("tier") or "Mid-Range"),
        multiplier=_to_float(row.get("multiplier")) or 1.0,
        finish_premium=_to_float(row.get("finish_premium")) or 0.0,
        shipping_factor=_to_float(row.get("shipping_factor")) or 0.0,
        rates=_rates_from_row(row.get("rates")),
        description=str(row.get("description") or ""),
        finish=str(row.get("finish") or ""),
    )
