"""Turn a catalog match (or its absence) into a unit price with provenance.

Tiers, first applicable wins:

    manual override  -> estimate
    catalog match    -> verified  (entry price x line multiplier x (1 + finish premium))
    size-based rates -> verified  (linear foot or flat rate from the line's rate sheet)
    nothing          -> missing   (price 0, never a guess)
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
import math
from typing import Optional, Union

from cabinet_quote.models import (
    ACCESSORY,
    BASE,
    ESTIMATE,
    HARDWARE,
    MISSING,
    TALL,
    VANITY,
    VERIFIED,
    WALL,
    CabinetDimensions,
    ConsolidatedItem,
    LineRates,
    ManufacturerLine,
    MatchResult,
    PriceResolution,
    RawCandidate,
    VerificationProof,
)

_CENT = Decimal("0.01")


def round_money(value: float) -> float:
    """Round half-up to the cent."""
    return float(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def line_total(unit_price: float, quantity: int) -> float:
    return round_money(unit_price * quantity)


def _catalog_price(
    match: MatchResult, line: ManufacturerLine, dimensions: Optional[CabinetDimensions]
) -> Optional[PriceResolution]:
    amount = match.entry.price * line.multiplier * (1 + line.finish_premium)
    if not math.isfinite(amount):
        return None
    details = f"Unit Price ${match.entry.price:.2f} × Multiplier {line.multiplier:g}"
    if line.finish_premium:
        details += f" × Finish Premium {1 + line.finish_premium:g}"
    return PriceResolution(
        unit_price=round_money(amount),
        status=VERIFIED,
        proof=VerificationProof(
            match_type=match.match_type,
            matched_code=match.matched_key,
            pricing_method="catalog",
            calculation_details=details,
            is_quoted=True,
            matched_dimensions=dimensions,
        ),
    )


def _size_based_price(dimensions: CabinetDimensions, rates: LineRates) -> Optional[PriceResolution]:
    linear_feet = dimensions.width / 12.0
    per_foot = {
        BASE: ("base", rates.base_per_foot),
        VANITY: ("base", rates.base_per_foot),
        WALL: ("wall", rates.wall_per_foot),
        ACCESSORY: ("accessory", rates.accessory_per_foot),
    }

    if dimensions.type in per_foot:
        label, rate = per_foot[dimensions.type]
        if linear_feet <= 0 or not rate or rate <= 0:
            return None
        amount = linear_feet * rate
        method = "linear_foot"
        details = f'{dimensions.width:g}" = {linear_feet:.2f} LF × ${rate:.2f}/LF ({label} rate)'
    elif dimensions.type == TALL:
        if not rates.tall_per_unit or rates.tall_per_unit <= 0:
            return None
        amount = rates.tall_per_unit
        method = "flat_rate"
        details = f"Tall unit flat rate ${rates.tall_per_unit:.2f}"
    elif dimensions.type == HARDWARE:
        if not rates.hardware_each or rates.hardware_each <= 0:
            return None
        amount = rates.hardware_each
        method = "flat_rate"
        details = f"Hardware flat rate ${rates.hardware_each:.2f} each"
    else:
        return None

    if not math.isfinite(amount):
        return None
    return PriceResolution(
        unit_price=round_money(amount),
        status=VERIFIED,
        proof=VerificationProof(
            match_type="size_based",
            matched_code=dimensions.code,
            pricing_method=method,
            calculation_details=details,
            is_quoted=True,
            matched_dimensions=dimensions,
        ),
    )


def _manual_price(fixed_price: float, dimensions: Optional[CabinetDimensions]) -> PriceResolution:
    unit_price = round_money(fixed_price)
    return PriceResolution(
        unit_price=unit_price,
        status=ESTIMATE,
        proof=VerificationProof(
            match_type="manual",
            matched_code=None,
            pricing_method="manual_override",
            calculation_details=f"Manual price ${unit_price:.2f}",
            is_quoted=False,
            matched_dimensions=dimensions,
        ),
    )


def _missing(dimensions: Optional[CabinetDimensions]) -> PriceResolution:
    return PriceResolution(
        unit_price=0.0,
        status=MISSING,
        proof=VerificationProof(
            match_type="none",
            matched_code=None,
            pricing_method="none",
            calculation_details="No catalog entry or rate applies",
            is_quoted=False,
            matched_dimensions=dimensions,
        ),
    )


def resolve_price(
    item: Union[RawCandidate, ConsolidatedItem],
    dimensions: Optional[CabinetDimensions],
    match: Optional[MatchResult],
    line: ManufacturerLine,
) -> PriceResolution:
    fixed_price = item.fixed_price
    if fixed_price is not None and math.isfinite(fixed_price) and fixed_price >= 0:
        return _manual_price(fixed_price, dimensions)

    if match is not None:
        resolution = _catalog_price(match, line, dimensions)
        if resolution is not None:
            return resolution

    if line.rates is not None and dimensions is not None:
        resolution = _size_based_price(dimensions, line.rates)
        if resolution is not None:
            return resolution

    return _missing(dimensions)
