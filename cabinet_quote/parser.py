"""Parsers for extractor output and manufacturer price sheets."""

import io
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import pandas as pd

from cabinet_quote.models import CatalogEntry, RawCandidate
from cabinet_quote.normalizer import normalize

logger = logging.getLogger(__name__)

# Labels that name appliances or site work rather than cabinetry.
EXCLUSION_KEYWORDS: Sequence[str] = (
    "FAUCET",
    "HOOD",
    "RANGE",
    "FRIDGE",
    "REFRIGERATOR",
    "DISHWASHER",
    "DW",
    "MW",
    "MICROWAVE",
    "OVEN",
    "COOKTOP",
    "WINE",
    "LIGHT",
    "LED",
    "SWITCH",
    "OUTLET",
    "ELECTRICAL",
    "J-BOX",
    "STEEL",
    "BRACKET",
    "SUPPORT",
    "PIPE",
    "PLUMBING",
    "TRASH",
    "BIN",
    "WASTE",
    "RECYCLE",
    "CEILING",
    "ELEC",
    "PLUMB",
)
EXCLUDED_PREFIXES: Sequence[str] = ("K-", "RG-", "BAR-")

SKU_HEADERS: Sequence[str] = ("SKU", "ITEM", "CODE", "MODEL", "PRODUCT", "PART NO", "PART")
PRICE_HEADERS: Sequence[str] = (
    "PRICE",
    "COST",
    "MSRP",
    "LIST PRICE",
    "AMOUNT",
    "NET PRICE",
    "UNIT PRICE",
)
HEADER_SCAN_ROWS = 20

_EXCLUSION = re.compile(r"(?<![A-Z0-9])(?:" + "|".join(map(re.escape, EXCLUSION_KEYWORDS)) + r")(?![A-Z0-9])")
_LABEL_SEPARATORS = re.compile(r"[,;\n\r]+")
_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")
_NON_PRICE = re.compile(r"[^0-9.]")


class Parser:
    """Base parser with the JSON/file plumbing shared by the concrete parsers."""

    def parse_json(self, content: str) -> Any:
        """Parse JSON content.

        Args:
            content: JSON string to parse.

        Returns:
            The decoded JSON value.

        Raises:
            ValueError: If content is not valid JSON.
        """
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON content: {e}") from e

    def read_bytes(self, file_path: Union[str, Path]) -> bytes:
        """Read a file from disk.

        Raises:
            FileNotFoundError: If file does not exist.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        return path.read_bytes()

    def clean_text(self, text: str) -> str:
        """Collapse whitespace and trim."""
        return re.sub(r"\s+", " ", text).strip()


class LabelParser(Parser):
    """Turns extractor output into one :class:`RawCandidate` per label occurrence."""

    def is_excluded(self, code: str, description: Optional[str] = None) -> bool:
        """Return True for appliance and site-work labels.

        Keywords match whole words only, so ``CABINET`` is not caught by
        ``BIN`` and ``DWR`` is not caught by ``DW``.
        """
        code_upper = (code or "").strip().upper()
        if any(code_upper.startswith(prefix) for prefix in EXCLUDED_PREFIXES):
            return True
        text = f"{code_upper} {(description or '').upper()}"
        return bool(_EXCLUSION.search(text))

    def parse(self, content: str) -> List[RawCandidate]:
        """Parse a comma/newline separated label list.

        Args:
            content: Raw text from the extraction step, e.g. ``"B30, W3030, B30"``.

        Returns:
            Candidates in reading order, duplicates kept, appliances dropped.
        """
        candidates: List[RawCandidate] = []
        for chunk in _LABEL_SEPARATORS.split(content or ""):
            label = self.clean_text(chunk)
            if not label or self.is_excluded(label):
                continue
            candidates.append(RawCandidate(raw_code=label, quantity=1))
        return candidates

    def parse_bom_json(self, content: str) -> List[RawCandidate]:
        """Parse the structured BOM an extractor returns as JSON.

        Accepts a list of objects with ``rawCode`` (or ``raw_code``/``sku``),
        ``type``, ``description`` and ``quantity``; markdown code fences around
        the payload are ignored.

        Raises:
            ValueError: If the payload is not valid JSON or not a list.
        """
        payload = self.parse_json(_CODE_FENCE.sub("", (content or "").strip()) or "[]")
        if not isinstance(payload, list):
            raise ValueError("Expected a JSON list of BOM items.")

        candidates: List[RawCandidate] = []
        for row in payload:
            if not isinstance(row, dict):
                continue
            raw_code = str(row.get("rawCode") or row.get("raw_code") or row.get("sku") or "").strip()
            description = row.get("description") or None
            if not raw_code or self.is_excluded(raw_code, description):
                continue
            candidates.append(
                RawCandidate(
                    raw_code=raw_code,
                    description=description or raw_code,
                    quantity=_quantity(row.get("quantity")),
                    item_type=row.get("type") or None,
                )
            )
        return candidates


class CatalogSheetParser(Parser):
    """Reads a manufacturer price sheet into lookup-key -> :class:`CatalogEntry`."""

    def parse_file(self, file_path: Union[str, Path]) -> Dict[str, CatalogEntry]:
        """Parse a CSV or Excel price sheet from disk.

        Raises:
            FileNotFoundError: If file does not exist.
            ValueError: If the file type is not supported.
        """
        path = Path(file_path)
        return self.parse_bytes(self.read_bytes(path), path.name)

    def parse_bytes(self, data: bytes, file_name: str) -> Dict[str, CatalogEntry]:
        """Parse an uploaded price sheet; the file name picks the reader."""
        suffix = Path(file_name).suffix.lower()
        if suffix == ".csv":
            text = data.decode("utf-8-sig", errors="replace")
            # Title rows are narrower than the table; name enough columns for the widest line.
            width = max((line.count(",") + 1 for line in text.splitlines()), default=1)
            frame = pd.read_csv(io.StringIO(text), header=None, names=list(range(width)), dtype=str)
        elif suffix in (".xlsx", ".xls"):
            frame = pd.read_excel(io.BytesIO(data), header=None)
        else:
            raise ValueError(f"Unsupported price sheet type: {file_name}")
        entries = self.parse_frame(frame)
        logger.info("parsed %d catalog keys from %s", len(entries), file_name)
        return entries

    def find_header_row(self, frame: pd.DataFrame) -> int:
        """Index of the first row naming both a SKU and a price column, else 0."""
        for index in range(min(len(frame), HEADER_SCAN_ROWS)):
            cells = [_cell_text(v).upper() for v in frame.iloc[index].tolist()]
            has_sku = any(c and any(h in c for h in SKU_HEADERS) for c in cells)
            has_price = any(c and any(h in c for h in PRICE_HEADERS) for c in cells)
            if has_sku and has_price:
                return index
        return 0

    def parse_frame(self, frame: pd.DataFrame) -> Dict[str, CatalogEntry]:
        """Parse a header-less frame (row 0 may be a title) into catalog entries.

        Each row is stored under its normalized code and, when that differs,
        under its trimmed uppercase SKU so unnormalized lookups still hit.
        """
        if frame.empty:
            return {}
        header_index = self.find_header_row(frame)
        headers = [_cell_text(v).upper() for v in frame.iloc[header_index].tolist()]
        sku_col = _pick_column(headers, SKU_HEADERS)
        price_col = _pick_column(headers, PRICE_HEADERS)
        if sku_col is None or price_col is None:
            logger.warning("price sheet has no SKU/price header in its first %d rows", HEADER_SCAN_ROWS)
            return {}

        entries: Dict[str, CatalogEntry] = {}
        for _, row in frame.iloc[header_index + 1 :].iterrows():
            raw_sku = _cell_text(row.iloc[sku_col])
            price = parse_price(row.iloc[price_col])
            if not raw_sku or price is None:
                continue
            entry = CatalogEntry(sku=raw_sku, price=price)
            key = normalize(raw_sku)
            if key:
                entries[key] = entry
            raw_key = raw_sku.upper()
            if raw_key != key:
                entries[raw_key] = entry
        return entries


def parse_price(value: Any) -> Optional[float]:
    """Read a price cell such as ``245``, ``"$1,245.00"`` or ``"USD 99"``."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return None if pd.isna(value) else float(value)
    cleaned = _NON_PRICE.sub("", str(value))
    try:
        return float(cleaned)
    except ValueError:
        return None


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and pd.isna(value):
        return ""
    return str(value).strip()


def _pick_column(headers: List[str], candidates: Sequence[str]) -> Optional[int]:
    # Exact header names win over partial ones ("UNIT PRICE" before "PRICE LIST NOTE").
    for candidate in candidates:
        for index, header in enumerate(headers):
            if header == candidate:
                return index
    for candidate in candidates:
        for index, header in enumerate(headers):
            if candidate in header:
                return index
    return None


def _quantity(value: Any) -> int:
    try:
        return max(1, int(round(float(value))))
    except (TypeError, ValueError, OverflowError):
        return 1
