"""Consolidate extracted labels and price them into a bill of materials."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Union

from cabinet_quote.dimensions import parse_dimensions
from cabinet_quote.matcher import DEFAULT_MATCH_SETTINGS, MatchSettings, find_match
from cabinet_quote.models import (
    MISSING,
    ConsolidatedItem,
    ManufacturerLine,
    PricedBOMItem,
    PricingTable,
    RawCandidate,
)
from cabinet_quote.normalizer import normalize
from cabinet_quote.pricing import line_total, resolve_price

logger = logging.getLogger(__name__)

Candidate = Union[RawCandidate, ConsolidatedItem]


def consolidate(candidates: Sequence[Candidate]) -> List[ConsolidatedItem]:
    """Merge candidates that normalize to the same code.

    Quantities are summed; the first occurrence keeps its raw code,
    description, type and price override. Output follows first-seen order.
    """
    grouped: Dict[str, ConsolidatedItem] = {}
    for candidate in candidates:
        key = normalize(candidate.raw_code)
        existing = grouped.get(key)
        if existing is None:
            grouped[key] = ConsolidatedItem(
                raw_code=candidate.raw_code,
                normalized_code=key,
                sku=key,
                quantity=candidate.quantity,
                description=candidate.description,
                item_type=candidate.item_type,
                fixed_price=candidate.fixed_price,
            )
            continue
        grouped[key] = ConsolidatedItem(
            raw_code=existing.raw_code,
            normalized_code=existing.normalized_code,
            sku=existing.sku,
            quantity=existing.quantity + candidate.quantity,
            description=existing.description,
            item_type=existing.item_type,
            fixed_price=existing.fixed_price,
        )
    return list(grouped.values())


def _price_item(
    item: Candidate,
    table: PricingTable,
    line: ManufacturerLine,
    settings: MatchSettings,
) -> PricedBOMItem:
    code = item.normalized_code if isinstance(item, ConsolidatedItem) else normalize(item.raw_code)
    dimensions = parse_dimensions(code)
    match = find_match(code, item.raw_code, (table or {}).get(line.id), settings)
    resolution = resolve_price(item, dimensions, match, line)

    if resolution.status == MISSING:
        logger.debug("no price for %r (normalized %r) on line %s", item.raw_code, code, line.id)

    return PricedBOMItem(
        raw_code=item.raw_code,
        description=item.description,
        item_type=item.item_type,
        quantity=item.quantity,
        sku=match.entry.sku if match else code,
        normalized_code=code,
        unit_price=resolution.unit_price,
        total_price=line_total(resolution.unit_price, item.quantity),
        verification_status=resolution.status,
        verification_proof=resolution.proof,
        dimensions=dimensions,
        line_id=line.id,
    )


def validate_bom(
    candidates: Sequence[Candidate],
    table: PricingTable,
    line: ManufacturerLine,
    *,
    consolidate_first: bool = False,
    settings: Optional[MatchSettings] = None,
) -> List[PricedBOMItem]:
    """Price every candidate against ``line``'s slice of ``table``.

    Pure: inputs are only read, output order follows input order, and the
    same call with a different ``line`` can be made on the same candidates to
    compare manufacturers. A line with no table, or an unknown line id,
    prices everything as missing instead of failing.
    """
    items: Sequence[Candidate] = consolidate(candidates) if consolidate_first else candidates
    match_settings = settings or DEFAULT_MATCH_SETTINGS
    return [_price_item(item, table, line, match_settings) for item in items]
