from __future__ import annotations

import csv
import io
from typing import Any, Callable, List, NamedTuple, Optional

from yahoo_quotes.errors import QuoteReadError
from yahoo_quotes.schemas.quote import Quote

NOT_AVAILABLE = "N/A"


def parse_optional_number(value: Any) -> Optional[float]:
    """Parse a numeric column, returning None when the value is absent."""
    if value is None:
        return None
    text = str(value).strip()
    if text.endswith("%"):
        text = text[:-1]
    if not text or text == NOT_AVAILABLE:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def parse_number(value: Any, default: float = 0.0) -> float:
    parsed = parse_optional_number(value)
    if parsed is None:
        return default
    return parsed


def parse_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


class QuoteField(NamedTuple):
    attr: str
    code: str
    parse: Callable[[Any], Any]


# column index is the position in this table
QUOTE_FIELDS: tuple[QuoteField, ...] = (
    QuoteField("symbol", "s", parse_text),
    QuoteField("name", "n", parse_text),
    QuoteField("previous_close", "p", parse_number),
    QuoteField("open", "o", parse_number),
    QuoteField("price", "l1", parse_number),
    QuoteField("change", "c1", parse_number),
    QuoteField("change_percent", "p2", parse_number),
    QuoteField("day_low", "g", parse_number),
    QuoteField("day_high", "h", parse_number),
    QuoteField("last_trade_date", "d1", parse_text),
    QuoteField("last_trade_time", "t1", parse_text),
    QuoteField("last_trade", "l1", parse_number),
)

FORMAT_CODE = "".join(field.code for field in QUOTE_FIELDS)


def parse_rows(body: str) -> List[List[str]]:
    """Tokenize a CSV body, tolerating stray quotes instead of aborting."""
    reader = csv.reader(io.StringIO(body, newline=""), strict=False)
    try:
        return [row for row in reader if any(cell.strip() for cell in row)]
    except csv.Error as exc:
        raise QuoteReadError(f"QUOTE_CSV line={reader.line_num} error={exc}") from exc


def build_quote(row: List[str]) -> Quote:
    values = {}
    for index, field in enumerate(QUOTE_FIELDS):
        raw = row[index] if index < len(row) else None
        values[field.attr] = field.parse(raw)
    return Quote(**values)


def parse_quotes(body: str) -> List[Quote]:
    return [build_quote(row) for row in parse_rows(body)]
