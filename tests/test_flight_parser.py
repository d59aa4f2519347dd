"""Tests for the flight page extractor."""

import pytest
from pydantic import ValidationError

from models.flight import FlightRecord
from services.flight_parser import ParseError, parse_flight_data, parse_number
from tests.pages import flight_row, flights_page


class TestParseNumber:
    """Tests for parse_number."""

    def test_plain_decimal(self):
        assert parse_number("42.7") == 42.7

    def test_integer(self):
        assert parse_number("100") == 100.0

    def test_trailing_unit_is_ignored(self):
        assert parse_number("12.5 km") == 12.5

    def test_surrounding_whitespace(self):
        assert parse_number("  33.1\n") == 33.1

    def test_comma_decimal_separator(self):
        assert parse_number("12,5") == 12.5

    def test_negative_value_is_kept(self):
        assert parse_number("-5") == -5.0

    def test_non_numeric_text_is_zero(self):
        assert parse_number("n/a") == 0.0

    def test_empty_is_zero(self):
        assert parse_number("") == 0.0

    def test_nan_is_zero(self):
        assert parse_number("NaN") == 0.0

    def test_overflow_is_zero(self):
        assert parse_number("1e999") == 0.0


class TestParseFlightData:
    """Tests for parse_flight_data."""

    def test_extracts_all_fields(self):
        html = flights_page(
            flight_row(
                "4711",
                date="2024-03-15",
                takeoff="Wallberg",
                landing="Rottach-Egern",
                duration="02:10",
                distance="63.4",
                points="88.75",
                glider="Ozone Rush 6",
            )
        )

        flights = parse_flight_data(html)

        assert flights == [
            FlightRecord(
                id="4711",
                date="2024-03-15",
                takeoff="Wallberg",
                landing="Rottach-Egern",
                duration="02:10",
                distance=63.4,
                points=88.75,
                glider="Ozone Rush 6",
            )
        ]

    def test_text_is_stripped(self):
        html = flights_page(flight_row("1", takeoff="  Brauneck \n"))
        assert parse_flight_data(html)[0].takeoff == "Brauneck"

    def test_untagged_rows_are_skipped_and_order_kept(self):
        html = flights_page(
            flight_row(None),
            flight_row("a"),
            "<tr><td colspan='7'>&nbsp;</td></tr>",
            flight_row("b"),
            flight_row(None),
            flight_row("c"),
        )

        flights = parse_flight_data(html)

        assert [f.id for f in flights] == ["a", "b", "c"]

    def test_empty_flight_id_is_skipped(self):
        html = flights_page(flight_row(""), flight_row("   "), flight_row("7"))
        assert [f.id for f in parse_flight_data(html)] == ["7"]

    def test_flight_id_is_stripped(self):
        html = flights_page(flight_row(" 42 "))
        assert parse_flight_data(html)[0].id == "42"

    def test_rows_outside_flights_table_are_ignored(self):
        html = (
            "<table class='other'>" + flight_row("x") + "</table>"
            + flights_page(flight_row("y"))
        )
        assert [f.id for f in parse_flight_data(html)] == ["y"]

    def test_non_numeric_distance_and_points_become_zero(self):
        html = flights_page(flight_row("1", distance="unbekannt", points="-"))

        flight = parse_flight_data(html)[0]

        assert flight.distance == 0.0
        assert flight.points == 0.0

    def test_missing_cells_default(self):
        html = flights_page('<tr data-flight-id="9"><td class="takeoff">Tegelberg</td></tr>')

        flight = parse_flight_data(html)[0]

        assert flight.id == "9"
        assert flight.takeoff == "Tegelberg"
        assert flight.date == ""
        assert flight.landing == ""
        assert flight.duration == ""
        assert flight.glider == ""
        assert flight.distance == 0.0
        assert flight.points == 0.0

    def test_duration_over_24_hours_is_kept_verbatim(self):
        html = flights_page(flight_row("1", duration="26:05"))
        assert parse_flight_data(html)[0].duration == "26:05"

    def test_no_tagged_rows_raises(self):
        html = flights_page(flight_row(None), flight_row(None))

        with pytest.raises(ParseError, match="No flight data found"):
            parse_flight_data(html)

    def test_page_without_table_raises(self):
        with pytest.raises(ParseError):
            parse_flight_data("<html><body><p>Bitte einloggen</p></body></html>")

    def test_empty_document_raises(self):
        with pytest.raises(ParseError):
            parse_flight_data("")

    def test_markup_failure_is_wrapped(self, monkeypatch):
        import services.flight_parser as flight_parser

        def broken_soup(*args, **kwargs):
            raise RuntimeError("parser exploded")

        monkeypatch.setattr(flight_parser, "BeautifulSoup", broken_soup)

        with pytest.raises(ParseError, match="Failed to parse flight data") as exc_info:
            parse_flight_data(flights_page(flight_row("1")))

        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_records_are_immutable(self, sample_page):
        flight = parse_flight_data(sample_page)[0]

        with pytest.raises(ValidationError):
            flight.distance = 1000.0
