"""Tiered lookup of a normalized code against one manufacturer's price table.

Strategies are tried in order and the first hit wins:

    exact -> raw_exact -> variant -> category_fallback -> nearest_size -> fuzzy_prefix

No strategy ever invents a price; a miss returns ``None`` and the caller
decides what to do with it.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from typing import Callable, Optional, Sequence, Tuple

from cabinet_quote.models import LinePricing, MatchResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchSettings:
    max_size_distance: int = 6
    prefer_larger_on_tie: bool = True
    max_prefix_gap: int = 3  # fuzzy prefix must be shorter by less than this
    orientation_suffixes: Tuple[str, ...] = ("L", "R", " L", " R")


DEFAULT_MATCH_SETTINGS = MatchSettings()

MatchStrategy = Callable[[str, str, LinePricing, MatchSettings], Optional[MatchResult]]

# Sizes are one to four digits.
_SIZED_KEY = re.compile(r"^([A-Z]+)(\d{1,4})$")
_DIGITS = re.compile(r"\d")


def _hit(table: LinePricing, key: str, match_type: str) -> Optional[MatchResult]:
    entry = table.get(key) if key else None
    if entry is None:
        return None
    return MatchResult(entry=entry, match_type=match_type, matched_key=key)


def match_exact(code: str, raw: str, table: LinePricing, settings: MatchSettings) -> Optional[MatchResult]:
    return _hit(table, code, "exact")


def match_raw_exact(code: str, raw: str, table: LinePricing, settings: MatchSettings) -> Optional[MatchResult]:
    # Price lists imported without normalization are keyed by the SKU as printed.
    return _hit(table, (raw or "").strip().upper(), "raw_exact")


def match_variant(code: str, raw: str, table: LinePricing, settings: MatchSettings) -> Optional[MatchResult]:
    if not code:
        return None
    for suffix in settings.orientation_suffixes:
        result = _hit(table, code + suffix, "variant")
        if result:
            return result
    return None


def match_category(code: str, raw: str, table: LinePricing, settings: MatchSettings) -> Optional[MatchResult]:
    category = _DIGITS.sub("", code)
    if not category or category == code:
        return None
    return _hit(table, category, "category_fallback")


def match_nearest_size(code: str, raw: str, table: LinePricing, settings: MatchSettings) -> Optional[MatchResult]:
    target = _SIZED_KEY.match(code)
    if not target:
        return None
    prefix, size = target.group(1), int(target.group(2))

    best_key: Optional[str] = None
    best_rank: Optional[Tuple[int, int]] = None
    for key in sorted(table):
        candidate = _SIZED_KEY.match(key)
        if not candidate or candidate.group(1) != prefix:
            continue
        candidate_size = int(candidate.group(2))
        distance = abs(candidate_size - size)
        if distance > settings.max_size_distance:
            continue
        tie_break = -candidate_size if settings.prefer_larger_on_tie else candidate_size
        rank = (distance, tie_break)
        if best_rank is None or rank < best_rank:
            best_key, best_rank = key, rank

    if best_key is None:
        return None
    logger.debug("nearest size for %s is %s", code, best_key)
    return _hit(table, best_key, "nearest_size")


def match_fuzzy_prefix(code: str, raw: str, table: LinePricing, settings: MatchSettings) -> Optional[MatchResult]:
    if not code:
        return None
    candidates = [
        key
        for key in table
        if key and key != code and code.startswith(key) and len(code) - len(key) < settings.max_prefix_gap
    ]
    if not candidates:
        return None
    # Longest prefix is the closest; alphabetical order settles the rest.
    best = sorted(candidates, key=lambda key: (-len(key), key))[0]
    return _hit(table, best, "fuzzy_prefix")


STRATEGIES: Sequence[MatchStrategy] = (
    match_exact,
    match_raw_exact,
    match_variant,
    match_category,
    match_nearest_size,
    match_fuzzy_prefix,
)


def find_match(
    code: str,
    raw: str,
    table: Optional[LinePricing],
    settings: MatchSettings = DEFAULT_MATCH_SETTINGS,
    strategies: Sequence[MatchStrategy] = STRATEGIES,
) -> Optional[MatchResult]:
    """Resolve ``code`` (and its raw label) against one line's price table.

    Returns the first strategy hit, or ``None`` when the table has no
    acceptable entry. An empty or missing table always misses.
    """
    if not table:
        return None
    for strategy in strategies:
        result = strategy(code or "", raw or "", table, settings)
        if result is not None:
            return result
    return None
