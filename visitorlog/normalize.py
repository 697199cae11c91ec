"""
Raw rows in, canonical VisitorRecords out.

Responsibilities:
- encoding detection + newline normalization of uploaded sheets
- delimiter detection and header-row parsing
- JSON row sources (plain arrays or the Apps Script envelope)
- per-row normalization into VisitorRecord
"""

from __future__ import annotations

import csv
import io
import json
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

from charset_normalizer import from_bytes

from .dates import parse_date
from .headers import HeaderResolver
from .models import GenderBreakdown, VisitorRecord
from .numbers import coerce_count, normalize_digits
from .rules import COUNT_FIELDS, CSV_DELIMITERS, DATE_FIELDS, HEADER_ORDER, TARGET_ENCODING

logger = logging.getLogger(__name__)

SUMMARY_TOKEN_PATTERN = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")

STRING_FIELDS = [
    field
    for field in HEADER_ORDER
    if field not in COUNT_FIELDS and field not in DATE_FIELDS
]


class RowSourceError(ValueError):
    """Raised when an uploaded source cannot be read as rows at all."""


def decode_text(raw: bytes) -> str:
    """
    Decode uploaded bytes to text with LF newlines.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A UTF-8 BOM is consumed, not kept.
    - If decode fails, fall back to UTF-8, then to UTF-8 with replacement.
    """
    match = from_bytes(raw).best()
    decode_used = match.encoding if match is not None else TARGET_ENCODING
    if raw.startswith(b"\xef\xbb\xbf") and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError:
            logger.warning("could not decode upload as %s, replacing bad bytes", decode_used)
            text = raw.decode("utf-8", errors="replace")

    return text.replace("\r\n", "\n").replace("\r", "\n")


def _sniff_delimiter(text: str) -> str:
    try:
        return csv.Sniffer().sniff(text[:4096], delimiters="".join(CSV_DELIMITERS)).delimiter
    except csv.Error:
        return ","


def parse_csv_rows(text: str) -> List[Dict[str, str]]:
    """
    Parse delimited text whose first line is the header row.

    Short rows are padded with empty cells; cells beyond the header width
    are dropped. Blank lines are skipped.
    """
    if not text or not text.strip():
        return []

    reader = csv.reader(io.StringIO(text, newline=""), delimiter=_sniff_delimiter(text))
    header: Optional[List[str]] = None
    rows: List[Dict[str, str]] = []
    long_rows = 0

    for cells in reader:
        if not any(cell.strip() for cell in cells):
            continue
        if header is None:
            header = cells
            continue
        if len(cells) < len(header):
            cells = cells + [""] * (len(header) - len(cells))
        elif len(cells) > len(header):
            long_rows += 1
            cells = cells[: len(header)]
        rows.append(dict(zip(header, cells)))

    if long_rows:
        logger.warning("%d rows had more cells than the header; extra cells dropped", long_rows)
    return rows


def parse_json_rows(payload: Any) -> List[Dict[str, Any]]:
    """Rows from a JSON array or an ``{"ok": true, "data": [...]}`` envelope."""
    if isinstance(payload, (bytes, str)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise RowSourceError(f"Invalid JSON: {exc.msg}") from exc

    if isinstance(payload, dict):
        if not payload.get("ok"):
            raise RowSourceError("JSON source did not report ok:true")
        payload = payload.get("data") or []

    if not isinstance(payload, list):
        raise RowSourceError("JSON source must be an array of rows")
    return [row for row in payload if isinstance(row, dict)]


def load_rows(raw: bytes, filename: str) -> List[Dict[str, Any]]:
    name = filename.lower()
    if name.endswith(".json"):
        return parse_json_rows(decode_text(raw))
    if name.endswith(".csv"):
        return parse_csv_rows(decode_text(raw))
    raise RowSourceError("Only CSV and JSON files are supported")


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def parse_gender_summary(value: Any) -> Optional[GenderBreakdown]:
    """First three positive numbers of a "male, female, children, total" cell."""
    if value is None or value == "":
        return None
    tokens = [float(token) for token in SUMMARY_TOKEN_PATTERN.findall(normalize_digits(value))]
    positive = [token for token in tokens if token > 0]
    if len(positive) < 3:
        return None
    male, female, children = positive[:3]
    return GenderBreakdown(male=male, female=female, children=children)


def derive_total_visitors(total_travellers: float, staying_travellers: float, by_gender: float) -> float:
    if total_travellers > 0:
        return total_travellers
    if staying_travellers > 0:
        return staying_travellers
    return max(by_gender, 0.0)


def normalize_row(row: Mapping[str, Any], resolver: HeaderResolver) -> VisitorRecord:
    data: Dict[str, Any] = {field: _to_text(resolver.resolve(row, field)) for field in STRING_FIELDS}
    counts = {field: coerce_count(resolver.resolve(row, field)) for field in COUNT_FIELDS}
    data.update(counts)

    for field in DATE_FIELDS:
        data[field] = parse_date(resolver.resolve(row, field))
    data["arrival_date"] = parse_date(resolver.resolve(row, "arrival_time"))

    data["total_visitors"] = derive_total_visitors(
        counts["total_travellers"],
        counts["staying_travellers"],
        counts["male"] + counts["female"] + counts["children"],
    )
    data["gender_breakdown"] = parse_gender_summary(data["gender_summary"])
    return VisitorRecord(**data)


def normalize_rows(rows: Iterable[Mapping[str, Any]], resolver: Optional[HeaderResolver] = None) -> List[VisitorRecord]:
    """Normalize one load of rows. Every row yields exactly one record."""
    if resolver is None:
        resolver = HeaderResolver()
    else:
        resolver.reset()

    records = [normalize_row(row, resolver) for row in rows]
    logger.info("normalized %d rows", len(records))
    return records
