"""Cabinet quote package exports."""

__version__ = "0.1.0"

from cabinet_quote.bom import consolidate, validate_bom
from cabinet_quote.dimensions import parse_dimensions
from cabinet_quote.matcher import MatchSettings, find_match
from cabinet_quote.models import (
    CabinetDimensions,
    CatalogEntry,
    ConsolidatedItem,
    LineRates,
    ManufacturerLine,
    MatchResult,
    PricedBOMItem,
    RawCandidate,
    VerificationProof,
)
from cabinet_quote.normalizer import normalize
from cabinet_quote.parser import CatalogSheetParser, LabelParser
from cabinet_quote.pricing import resolve_price
from cabinet_quote.quote import QuoteSettings, compare_lines, quote_totals, summarize
from cabinet_quote.store import HttpPricingStore, InMemoryPricingStore, PricingStore

__all__ = [
    "CabinetDimensions",
    "CatalogEntry",
    "CatalogSheetParser",
    "ConsolidatedItem",
    "HttpPricingStore",
    "InMemoryPricingStore",
    "LabelParser",
    "LineRates",
    "ManufacturerLine",
    "MatchResult",
    "MatchSettings",
    "PricedBOMItem",
    "PricingStore",
    "QuoteSettings",
    "RawCandidate",
    "VerificationProof",
    "compare_lines",
    "consolidate",
    "find_match",
    "normalize",
    "parse_dimensions",
    "quote_totals",
    "resolve_price",
    "summarize",
    "validate_bom",
]
