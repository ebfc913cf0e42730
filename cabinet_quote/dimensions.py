"""Classify a normalized code into a cabinet type with nominal dimensions."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Callable, Optional, Pattern, Sequence

from cabinet_quote.models import (
    ACCESSORY,
    BASE,
    HARDWARE,
    TALL,
    UNKNOWN,
    VANITY,
    WALL,
    CabinetDimensions,
)

WALL_DEFAULT_HEIGHT = 30.0
WALL_DEPTH = 12.0
BASE_HEIGHT = 34.5
BASE_DEPTH = 24.0
TALL_DEFAULT_HEIGHT = 84.0
TALL_DEPTH = 24.0
PANEL_WIDTH = 3.0
ACCESSORY_DEFAULT_WIDTH = 3.0
VANITY_HEIGHT = 34.5
VANITY_DEPTH = 21.0

HARDWARE_KEYWORDS: Sequence[str] = ("HINGE", "GLIDE", "PULL", "KNOB", "CONN", "SCREW")


@dataclass(frozen=True)
class DimensionTemplate:
    name: str
    pattern: Pattern[str]
    build: Callable[[re.Match, str], CabinetDimensions]


def _wall(match: re.Match, code: str) -> CabinetDimensions:
    height = float(match.group(3)) if match.group(3) else WALL_DEFAULT_HEIGHT
    return CabinetDimensions(WALL, float(match.group(2)), height, WALL_DEPTH, code)


def _base(match: re.Match, code: str) -> CabinetDimensions:
    return CabinetDimensions(BASE, float(match.group(2)), BASE_HEIGHT, BASE_DEPTH, code)


def _refrigerator_return(match: re.Match, code: str) -> CabinetDimensions:
    # The number on a return panel is its height, not a width.
    return CabinetDimensions(TALL, PANEL_WIDTH, float(match.group(1)), TALL_DEPTH, code)


def _tall(match: re.Match, code: str) -> CabinetDimensions:
    height = float(match.group(3)) if match.group(3) else TALL_DEFAULT_HEIGHT
    return CabinetDimensions(TALL, float(match.group(2)), height, TALL_DEPTH, code)


def _accessory(match: re.Match, code: str) -> CabinetDimensions:
    width = float(match.group(2)) if match.group(2) else ACCESSORY_DEFAULT_WIDTH
    return CabinetDimensions(ACCESSORY, width, 0.0, 0.0, code)


def _vanity(match: re.Match, code: str) -> CabinetDimensions:
    return CabinetDimensions(VANITY, float(match.group(2)), VANITY_HEIGHT, VANITY_DEPTH, code)


def _hardware(match: re.Match, code: str) -> CabinetDimensions:
    return CabinetDimensions(HARDWARE, 0.0, 0.0, 0.0, code)


def _generic(match: re.Match, code: str) -> CabinetDimensions:
    return CabinetDimensions(ACCESSORY, float(match.group(0)), 0.0, 0.0, code)


# Order matters: the generic digit fallback must come last or every code
# would collapse to Accessory.
TEMPLATES: Sequence[DimensionTemplate] = (
    DimensionTemplate("wall", re.compile(r"^(WDC|WBC|WC|W)(\d{2})(\d{2})?"), _wall),
    DimensionTemplate("base", re.compile(r"^(BBC|SB|DB|LS|BC|PB|B)(\d{2})"), _base),
    DimensionTemplate("refrigerator_return", re.compile(r"^RR(\d{2,3})"), _refrigerator_return),
    DimensionTemplate("tall", re.compile(r"^(TP|U|T)(\d{2})(\d{2,3})?"), _tall),
    DimensionTemplate("accessory", re.compile(r"^(WF|BF|TK|CM|REP|DWR|DWP)(\d{1,4})?"), _accessory),
    DimensionTemplate("vanity", re.compile(r"^(VSB|V)(\d{2})"), _vanity),
    DimensionTemplate("hardware", re.compile("|".join(HARDWARE_KEYWORDS)), _hardware),
    DimensionTemplate("generic", re.compile(r"\d{1,4}"), _generic),
)


def parse_dimensions(code: Optional[str]) -> Optional[CabinetDimensions]:
    """Return the first template hit for ``code``; ``None`` only for empty input."""
    if not code:
        return None
    for template in TEMPLATES:
        match = template.pattern.search(code)
        if match:
            return template.build(match, code)
    return CabinetDimensions(UNKNOWN, 0.0, 0.0, 0.0, code)
