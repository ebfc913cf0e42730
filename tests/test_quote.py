from cabinet_quote.bom import validate_bom
from cabinet_quote.demo_data import DEMO_LINES, demo_pricing
from cabinet_quote.models import RawCandidate
from cabinet_quote.quote import BOM_COLUMNS, QuoteSettings, bom_to_frame, compare_lines, quote_totals, summarize

BUILDER = DEMO_LINES[0]


def _items():
    candidates = [RawCandidate("B30", quantity=2), RawCandidate("W3030"), RawCandidate("ZZZ"), RawCandidate("B30", fixed_price=50.0)]
    return validate_bom(candidates, demo_pricing(), BUILDER)


def test_summarize_counts_statuses() -> None:
    stats = summarize(_items())

    assert (stats.total, stats.verified, stats.estimate, stats.missing) == (4, 2, 1, 1)
    assert stats.total_price == 650.0


def test_quote_totals_only_include_verified_items() -> None:
    totals = quote_totals(_items(), BUILDER)

    assert totals.subtotal == 600.0
    assert totals.shipping == 30.0
    assert totals.surcharge == 9.0
    assert totals.tax == 44.73
    assert totals.grand_total == 683.73
    assert (totals.quoted_items, totals.excluded_items) == (2, 2)


def test_quote_totals_use_configured_rates() -> None:
    totals = quote_totals(_items(), BUILDER, QuoteSettings(surcharge_rate=0.0, tax_rate=0.0))

    assert totals.grand_total == 630.0


def test_compare_lines_prices_each_line() -> None:
    comparison = compare_lines([RawCandidate("B30")], demo_pricing(), DEMO_LINES)

    assert [c.line.id for c in comparison] == ["line_builder", "line_classic", "line_artisan"]
    assert [c.total_price for c in comparison] == [210.0, 600.0, 1025.0]
    assert all(c.stats.verified == 1 for c in comparison)


def test_bom_to_frame_has_one_row_per_item() -> None:
    frame = bom_to_frame(_items())

    assert list(frame.columns) == BOM_COLUMNS
    assert len(frame) == 4
    assert frame.loc[0, "match_type"] == "exact"
    assert frame.loc[0, "cabinet_type"] == "Base"


def test_bom_to_frame_empty() -> None:
    frame = bom_to_frame([])

    assert frame.empty
    assert list(frame.columns) == BOM_COLUMNS
