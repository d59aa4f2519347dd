"""Shared fixtures for the dashboard tests."""

import pytest

from models.flight import FlightRecord
from tests.pages import flight_row, flights_page


@pytest.fixture
def sample_page() -> str:
    """Three flights across January and February 2024."""
    return flights_page(
        flight_row("1", date="2024-01-10", distance="50", points="100"),
        flight_row("2", date="2024-02-05", distance="80", points="150"),
        flight_row("3", date="2024-02-20", distance="30", points="90"),
    )


@pytest.fixture
def make_flight():
    def _make(flight_id: str, date: str, distance: float = 0.0, points: float = 0.0, **extra):
        return FlightRecord(id=flight_id, date=date, distance=distance, points=points, **extra)

    return _make
