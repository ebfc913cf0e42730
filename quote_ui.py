from __future__ import annotations

from dataclasses import replace
from typing import Dict, List

import pandas as pd
import streamlit as st

from cabinet_quote.bom import consolidate, validate_bom
from cabinet_quote.config import Settings, configure_logging, load_settings
from cabinet_quote.demo_data import DEMO_LINES, demo_pricing
from cabinet_quote.models import CatalogEntry, ManufacturerLine, RawCandidate
from cabinet_quote.parser import CatalogSheetParser, LabelParser
from cabinet_quote.quote import bom_to_frame, compare_lines, quote_totals, summarize
from cabinet_quote.store import HttpPricingStore, InMemoryPricingStore, PricingSnapshot, PricingStore

STATUS_COLORS: Dict[str, str] = {
    "verified": "#d9f2e3",
    "estimate": "#fff1cc",
    "missing": "#fbd5d5",
}


st.set_page_config(page_title="Cabinet Quote", page_icon="CQ", layout="wide")


CSS = """
<style>
.stApp {
    background: linear-gradient(180deg, #f4f7fb 0%, #edf2f8 100%);
}
.block-card {
    background: rgba(255, 255, 255, 0.78);
    border: 1px solid rgba(20, 40, 70, 0.08);
    border-radius: 18px;
    padding: 18px;
    box-shadow: 0 10px 35px rgba(12, 35, 64, 0.08);
}
.hero {
    background: linear-gradient(135deg, #0f4c75 0%, #1f7a8c 70%, #f57c00 100%);
    color: white;
    border-radius: 24px;
    padding: 22px;
    box-shadow: 0 12px 40px rgba(12, 35, 64, 0.22);
}
</style>
"""


def _render_header() -> None:
    st.markdown(CSS, unsafe_allow_html=True)
    st.markdown(
        """
        <div class="hero">
            <h1 style="margin: 0;">Cabinet Quote Studio</h1>
            <p style="margin: 4px 0 0 0; font-size: 1.02rem;">
                Paste the cabinet labels from a floor plan and get a priced, manufacturer-specific BOM.
            </p>
        </div>
        """,
        unsafe_allow_html=True,
    )


def _pricing_store(settings: Settings) -> PricingStore:
    if settings.pricing_api_base_url:
        return HttpPricingStore(
            base_url=settings.pricing_api_base_url,
            token=settings.pricing_api_token,
            timeout_seconds=settings.pricing_api_timeout,
        )
    return InMemoryPricingStore(lines=DEMO_LINES, pricing=demo_pricing())


def _candidates_from_input(text: str, uploaded) -> List[RawCandidate]:
    parser = LabelParser()
    if uploaded is not None:
        content = uploaded.getvalue().decode("utf-8", errors="replace")
        if uploaded.name.lower().endswith(".json"):
            return parser.parse_bom_json(content)
        return parser.parse(content)
    return parser.parse(text)


def _price_sheet_sidebar(lines: List[ManufacturerLine], imported: Dict[str, Dict[str, CatalogEntry]]) -> None:
    st.sidebar.subheader("Price sheet import")
    line_names = {line.name: line.id for line in lines}
    target = st.sidebar.selectbox("Line", list(line_names), key="sheet_line")
    uploaded = st.sidebar.file_uploader("CSV / XLSX", type=["csv", "xlsx", "xls"], key="sheet_upload")
    if uploaded is None or not st.sidebar.button("Import", use_container_width=True):
        return
    try:
        entries = CatalogSheetParser().parse_bytes(uploaded.getvalue(), uploaded.name)
    except ValueError as exc:
        st.sidebar.error(f"Could not read price sheet: {exc}")
        return
    if not entries:
        st.sidebar.warning("No SKU/price rows found in the sheet.")
        return
    imported[line_names[target]] = entries
    st.sidebar.success(f"Imported {len(entries)} lookup keys for {target}.")


def _session_pricing(
    store: PricingStore,
    lines: List[ManufacturerLine],
    imported: Dict[str, Dict[str, CatalogEntry]],
) -> PricingSnapshot:
    """Store pricing with this session's imported sheets on top, including one imported on this run."""
    _price_sheet_sidebar(lines, imported)
    pricing = store.get_pricing_table()
    pricing.update(imported)
    return pricing


def _comparison_frame(candidates, pricing, lines) -> pd.DataFrame:
    rows = []
    for result in compare_lines(candidates, pricing, lines):
        rows.append(
            {
                "line": result.line.name,
                "tier": result.line.tier,
                "total": result.total_price,
                "verified": result.stats.verified,
                "missing": result.stats.missing,
            }
        )
    return pd.DataFrame(rows)


def _status_style(row: pd.Series) -> List[str]:
    color = STATUS_COLORS.get(row.get("verification_status"), "")
    return [f"background-color: {color}" if color else ""] * len(row)


def main() -> None:
    settings = load_settings()
    configure_logging(settings)
    _render_header()

    store = _pricing_store(settings)
    lines = store.get_lines()
    pricing = _session_pricing(store, lines, st.session_state.setdefault("imported_pricing", {}))

    st.markdown('<div class="block-card">', unsafe_allow_html=True)
    text = st.text_area("Cabinet labels (comma or newline separated)", placeholder="B30, W3030, SB36 BUTT, B30")
    uploaded = st.file_uploader("...or upload extractor output (TXT / JSON)", type=["txt", "json"])
    try:
        candidates = consolidate(_candidates_from_input(text, uploaded))
    except ValueError as exc:
        st.error(f"Could not read extractor output: {exc}")
        st.markdown("</div>", unsafe_allow_html=True)
        return
    st.markdown("</div>", unsafe_allow_html=True)

    if not candidates:
        st.info("Add labels to start.")
        return

    st.subheader("Manufacturer comparison")
    st.dataframe(_comparison_frame(candidates, pricing, lines), use_container_width=True)

    line_by_name = {line.name: line for line in lines}
    selected = line_by_name[st.selectbox("Manufacturer line", list(line_by_name))]
    if selected.rates is not None and not st.checkbox("Use size-based rates when no SKU matches", value=True):
        selected = replace(selected, rates=None)

    items = validate_bom(candidates, pricing, selected)
    stats = summarize(items)
    col1, col2, col3 = st.columns(3)
    col1.metric("Verified", stats.verified)
    col2.metric("Estimate", stats.estimate)
    col3.metric("Missing", stats.missing)

    frame = bom_to_frame(items)
    st.dataframe(frame.style.apply(_status_style, axis=1), use_container_width=True)

    totals = quote_totals(items, selected, settings.quote)
    st.subheader("Order totals (verified items only)")
    st.table(
        pd.DataFrame(
            [
                ("Cabinets subtotal", totals.subtotal),
                (f"Shipping ({selected.shipping_factor * 100:.1f}%)", totals.shipping),
                (f"Surcharge ({settings.quote.surcharge_rate * 100:.1f}%)", totals.surcharge),
                (f"Est. tax ({settings.quote.tax_rate * 100:.1f}%)", totals.tax),
                ("Order grand total", totals.grand_total),
            ],
            columns=["", "amount"],
        )
    )
    if totals.excluded_items:
        st.warning(f"{totals.excluded_items} item(s) are not verified and are left off the order.")

    st.download_button(
        "Download BOM CSV",
        data=frame.to_csv(index=False).encode("utf-8-sig"),
        file_name=f"bom_{selected.id}.csv",
        mime="text/csv",
    )


if __name__ == "__main__":
    main()
