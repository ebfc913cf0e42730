"""Value types shared by the normalization, matching and pricing stages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

# Cabinet types
BASE = "Base"
WALL = "Wall"
TALL = "Tall"
VANITY = "Vanity"
ACCESSORY = "Accessory"
HARDWARE = "Hardware"
UNKNOWN = "Unknown"

CABINET_TYPES = (BASE, WALL, TALL, VANITY, ACCESSORY, HARDWARE, UNKNOWN)

# Verification statuses
VERIFIED = "verified"
ESTIMATE = "estimate"
MISSING = "missing"

# Manufacturer tiers
TIERS = ("Budget", "Mid-Range", "Premium")


@dataclass(frozen=True)
class RawCandidate:
    raw_code: str
    description: Optional[str] = None
    quantity: int = 1
    item_type: Optional[str] = None  # free-text label from the extractor, e.g. "Base Cabinet"
    fixed_price: Optional[float] = None  # user/agent override, priced as an estimate


@dataclass(frozen=True)
class ConsolidatedItem:
    raw_code: str
    normalized_code: str
    sku: str
    quantity: int
    description: Optional[str] = None
    item_type: Optional[str] = None
    fixed_price: Optional[float] = None


@dataclass(frozen=True)
class CabinetDimensions:
    type: str  # Base | Wall | Tall | Vanity | Accessory | Hardware | Unknown
    width: float
    height: float
    depth: float
    code: str


@dataclass(frozen=True)
class CatalogEntry:
    sku: str
    price: float


LinePricing = Mapping[str, CatalogEntry]
PricingTable = Mapping[str, LinePricing]


@dataclass(frozen=True)
class LineRates:
    base_per_foot: float
    wall_per_foot: float
    tall_per_unit: float
    accessory_per_foot: float
    hardware_each: float = 15.0


@dataclass(frozen=True)
class ManufacturerLine:
    id: str
    name: str
    tier: str  # Budget | Mid-Range | Premium
    multiplier: float = 1.0
    finish_premium: float = 0.0
    shipping_factor: float = 0.0
    rates: Optional[LineRates] = None
    description: str = ""
    finish: str = ""


@dataclass(frozen=True)
class MatchResult:
    entry: CatalogEntry
    match_type: str  # exact | raw_exact | variant | category_fallback | nearest_size | fuzzy_prefix
    matched_key: str


@dataclass(frozen=True)
class VerificationProof:
    match_type: str
    matched_code: Optional[str]
    pricing_method: str  # catalog | linear_foot | flat_rate | manual_override | none
    calculation_details: str
    is_quoted: bool
    matched_dimensions: Optional[CabinetDimensions] = None


@dataclass(frozen=True)
class PriceResolution:
    unit_price: float
    status: str
    proof: VerificationProof


@dataclass(frozen=True)
class PricedBOMItem:
    raw_code: str
    description: Optional[str]
    item_type: Optional[str]
    quantity: int
    sku: str
    normalized_code: str
    unit_price: float
    total_price: float
    verification_status: str
    verification_proof: VerificationProof
    dimensions: Optional[CabinetDimensions]
    line_id: str
