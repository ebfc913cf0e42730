"""Verification summaries, manufacturer comparison and order totals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import pandas as pd

from cabinet_quote.bom import Candidate, validate_bom
from cabinet_quote.matcher import MatchSettings
from cabinet_quote.models import (
    ESTIMATE,
    MISSING,
    VERIFIED,
    ManufacturerLine,
    PricedBOMItem,
    PricingTable,
)
from cabinet_quote.pricing import round_money

BOM_COLUMNS: List[str] = [
    "raw_code",
    "normalized_code",
    "sku",
    "item_type",
    "description",
    "quantity",
    "unit_price",
    "total_price",
    "verification_status",
    "match_type",
    "matched_code",
    "pricing_method",
    "calculation_details",
    "cabinet_type",
    "width",
    "height",
    "depth",
]


@dataclass(frozen=True)
class VerificationStats:
    total: int
    verified: int
    estimate: int
    missing: int
    total_price: float


@dataclass(frozen=True)
class LineComparison:
    line: ManufacturerLine
    total_price: float
    stats: VerificationStats


@dataclass(frozen=True)
class QuoteSettings:
    surcharge_rate: float = 0.015
    tax_rate: float = 0.07


@dataclass(frozen=True)
class QuoteTotals:
    subtotal: float
    shipping: float
    surcharge: float
    tax: float
    grand_total: float
    quoted_items: int
    excluded_items: int


def summarize(items: Sequence[PricedBOMItem]) -> VerificationStats:
    return VerificationStats(
        total=len(items),
        verified=sum(1 for i in items if i.verification_status == VERIFIED),
        estimate=sum(1 for i in items if i.verification_status == ESTIMATE),
        missing=sum(1 for i in items if i.verification_status == MISSING),
        total_price=round_money(sum(i.total_price for i in items)),
    )


def compare_lines(
    candidates: Sequence[Candidate],
    table: PricingTable,
    lines: Sequence[ManufacturerLine],
    settings: Optional[MatchSettings] = None,
) -> List[LineComparison]:
    """Price the same candidates once per line, in the order the lines are given."""
    comparison: List[LineComparison] = []
    for line in lines:
        stats = summarize(validate_bom(candidates, table, line, settings=settings))
        comparison.append(LineComparison(line=line, total_price=stats.total_price, stats=stats))
    return comparison


def quote_totals(
    items: Sequence[PricedBOMItem],
    line: ManufacturerLine,
    settings: QuoteSettings = QuoteSettings(),
) -> QuoteTotals:
    """Order totals over verified items only.

    Shipping uses the line's shipping factor; tax applies to
    subtotal + shipping + surcharge.
    """
    quoted = [i for i in items if i.verification_status == VERIFIED]
    subtotal = round_money(sum(i.total_price for i in quoted))
    shipping = round_money(subtotal * line.shipping_factor)
    surcharge = round_money(subtotal * settings.surcharge_rate)
    tax = round_money((subtotal + shipping + surcharge) * settings.tax_rate)
    return QuoteTotals(
        subtotal=subtotal,
        shipping=shipping,
        surcharge=surcharge,
        tax=tax,
        grand_total=round_money(subtotal + shipping + surcharge + tax),
        quoted_items=len(quoted),
        excluded_items=len(items) - len(quoted),
    )


def bom_to_frame(items: Sequence[PricedBOMItem]) -> pd.DataFrame:
    rows = []
    for item in items:
        proof = item.verification_proof
        dims = item.dimensions
        rows.append(
            {
                "raw_code": item.raw_code,
                "normalized_code": item.normalized_code,
                "sku": item.sku,
                "item_type": item.item_type,
                "description": item.description,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "total_price": item.total_price,
                "verification_status": item.verification_status,
                "match_type": proof.match_type,
                "matched_code": proof.matched_code,
                "pricing_method": proof.pricing_method,
                "calculation_details": proof.calculation_details,
                "cabinet_type": dims.type if dims else None,
                "width": dims.width if dims else None,
                "height": dims.height if dims else None,
                "depth": dims.depth if dims else None,
            }
        )
    return pd.DataFrame(rows, columns=BOM_COLUMNS)
