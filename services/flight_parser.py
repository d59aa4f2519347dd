"""
Flight list extraction from the DHV-XC "my flights" page.

Each flight is a ``<tr data-flight-id="...">`` inside ``table.flights-table``;
its fields live in cells marked with stable class names (``.flight-date``,
``.takeoff``, ...). Extraction is lenient per field and strict per page:
a missing or garbled cell decays to ``""`` / ``0.0``, but a page without a
single flight row raises :class:`ParseError`.
"""

import re
import math
import logging
from typing import List

from bs4 import BeautifulSoup, Tag

from models.flight import FlightRecord

logger = logging.getLogger(__name__)

ROW_SELECTOR = "table.flights-table tr[data-flight-id]"
FLIGHT_ID_ATTR = "data-flight-id"

_TEXT_FIELDS = {
    "date": ".flight-date",
    "takeoff": ".takeoff",
    "landing": ".landing",
    "duration": ".duration",
    "glider": ".glider",
}
_NUMERIC_FIELDS = {
    "distance": ".distance",
    "points": ".points",
}

# Leading decimal prefix, like a browser's parseFloat()
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_COMMA_DECIMAL_RE = re.compile(r"^[+-]?\d+,\d+")


class ParseError(Exception):
    """The page could not be turned into any flight records."""


def parse_number(text: str) -> float:
    """
    Parse a free-text number, returning ``0.0`` when nothing usable is found.

    ``"12.5 km"`` -> 12.5, ``"12,5"`` -> 12.5, ``"n/a"`` -> 0.0
    """
    if not text:
        return 0.0
    text = text.strip()
    if _COMMA_DECIMAL_RE.match(text) and "." not in text:
        text = text.replace(",", ".", 1)
    match = _NUMBER_RE.match(text)
    if not match:
        return 0.0
    value = float(match.group(0))
    if math.isnan(value) or math.isinf(value):
        return 0.0
    return value


def _cell_text(row: Tag, selector: str) -> str:
    cell = row.select_one(selector)
    return cell.get_text().strip() if cell else ""


def parse_row(row: Tag) -> FlightRecord:
    """Map one table row to a FlightRecord. Never raises for bad cell content."""
    fields = {name: _cell_text(row, sel) for name, sel in _TEXT_FIELDS.items()}
    for name, sel in _NUMERIC_FIELDS.items():
        fields[name] = parse_number(_cell_text(row, sel))

    return FlightRecord(id=(row.get(FLIGHT_ID_ATTR) or "").strip(), **fields)


def _flight_rows(soup: BeautifulSoup) -> List[Tag]:
    """Rows that carry a non-empty flight id, in document order."""
    return [
        row for row in soup.select(ROW_SELECTOR)
        if (row.get(FLIGHT_ID_ATTR) or "").strip()
    ]


def parse_flight_data(html: str) -> List[FlightRecord]:
    """
    Extract all flights from a "my flights" HTML page.

    Raises:
        ParseError: if no flight rows are present, or the markup could not
            be processed at all.
    """
    try:
        soup = BeautifulSoup(html, "html.parser")
        flights = [parse_row(row) for row in _flight_rows(soup)]
    except Exception as e:
        logger.error(f"Flight page could not be parsed: {e}")
        raise ParseError("Failed to parse flight data from HTML") from e

    if not flights:
        raise ParseError("No flight data found in the HTML response")

    logger.info(f"Parsed {len(flights)} flights from HTML")
    return flights
