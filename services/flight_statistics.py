"""
Flight statistics.

Folds a list of FlightRecord into a StatisticsSummary: totals, averages,
maxima, a per-month flight count and the most recent flights.

Empty input yields zeros for the average and both maxima. A flight whose
date cannot be parsed is counted under ``UNKNOWN_MONTH`` and sorted after
all dated flights.
"""

from datetime import date, datetime, timezone
from typing import Dict, List, Optional, Sequence

from models.flight import FlightRecord, StatisticsSummary

RECENT_FLIGHTS_LIMIT = 5
UNKNOWN_MONTH = "Unknown"

_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
_EXTRA_DATE_FORMATS = ("%d.%m.%Y",)


def parse_flight_datetime(text: str) -> Optional[datetime]:
    """
    Parse a flight date string into a naive UTC-comparable timestamp.

    Accepts ISO dates (``2024-03-15``, midnight), ISO date-times
    (``2024-03-15T10:00:00``, offsets converted to UTC) and the German
    ``15.03.2024`` form. Returns None if the text is not a recognisable date.
    """
    if not text:
        return None
    text = text.strip()
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        parsed = None
    if parsed is not None:
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        return parsed
    for fmt in _EXTRA_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def parse_flight_date(text: str) -> Optional[date]:
    """Calendar date of a flight, or None if the text is not a recognisable date."""
    parsed = parse_flight_datetime(text)
    return parsed.date() if parsed else None


def month_label(d: date) -> str:
    """Format a date as ``"Mar 2024"``, independent of the process locale."""
    return f"{_MONTH_ABBR[d.month - 1]} {d.year:04d}"


def _flights_by_month(flights: Sequence[FlightRecord]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for flight in flights:
        parsed = parse_flight_date(flight.date)
        label = month_label(parsed) if parsed else UNKNOWN_MONTH
        counts[label] = counts.get(label, 0) + 1
    return counts


def _recent_flights(flights: Sequence[FlightRecord], limit: int) -> List[FlightRecord]:
    # Undated flights get datetime.min so they end up last
    def sort_key(flight: FlightRecord) -> datetime:
        return parse_flight_datetime(flight.date) or datetime.min

    return sorted(flights, key=sort_key, reverse=True)[:limit]


def calculate_statistics(flights: Sequence[FlightRecord]) -> StatisticsSummary:
    """Compute the dashboard statistics for *flights* without modifying it."""
    total_flights = len(flights)
    total_distance = sum(f.distance for f in flights)
    total_points = sum(f.points for f in flights)

    if total_flights:
        average_distance = total_distance / total_flights
        longest_flight = max(f.distance for f in flights)
        best_score = max(f.points for f in flights)
    else:
        average_distance = longest_flight = best_score = 0.0

    return StatisticsSummary(
        total_flights=total_flights,
        total_distance=float(total_distance),
        total_points=float(total_points),
        average_distance=average_distance,
        longest_flight=longest_flight,
        best_score=best_score,
        flights_by_month=_flights_by_month(flights),
        recent_flights=_recent_flights(flights, RECENT_FLIGHTS_LIMIT),
    )
