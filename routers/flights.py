"""
Flights router.

Downloads the logged-in user's flight list from DHV-XC, extracts the
flights and returns the dashboard statistics.
"""

import logging
from typing import List, Optional

import httpx
from fastapi import APIRouter, Cookie, HTTPException, status

from data_ingestion import dhv_xc
from data_ingestion.dhv_xc import SESSION_COOKIE_NAME
from models.flight import FlightRecord, ScrapedFlightsResponse, StatisticsSummary
from models.responses import ErrorResponse
from services.flight_parser import ParseError, parse_flight_data
from services.flight_statistics import calculate_statistics

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Flights"],
)


async def _load_flights(session: Optional[str]) -> List[FlightRecord]:
    """Fetch and parse the flight page, mapping upstream failures to HTTP errors."""
    if not session:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    try:
        html = await dhv_xc.fetch_flights_html(session)
    except dhv_xc.SessionExpired as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except dhv_xc.UpstreamError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except httpx.HTTPError as e:
        logger.error(f"Flight data fetch error: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to fetch flights from DHV-XC",
        )

    return parse_flight_data(html)


@router.get(
    "/flights",
    response_model=StatisticsSummary,
    summary="Flight statistics",
    responses={
        401: {"model": ErrorResponse, "description": "Not logged in or session expired"},
        500: {"model": ErrorResponse, "description": "Flight page could not be parsed"},
        502: {"model": ErrorResponse, "description": "DHV-XC unavailable"},
    },
)
async def get_flight_statistics(
    session: Optional[str] = Cookie(None, alias=SESSION_COOKIE_NAME),
):
    """Return statistics over all flights of the logged-in user."""
    try:
        flights = await _load_flights(session)
    except ParseError as e:
        logger.error(f"Flight parse error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to parse flight data",
        )

    return calculate_statistics(flights)


@router.get(
    "/scrape-flights",
    response_model=ScrapedFlightsResponse,
    summary="Flight statistics with the flight list",
    responses={
        401: {"model": ErrorResponse, "description": "Not logged in or session expired"},
        404: {"model": ErrorResponse, "description": "No flights on the page"},
        502: {"model": ErrorResponse, "description": "DHV-XC unavailable"},
    },
)
async def scrape_flights(
    session: Optional[str] = Cookie(None, alias=SESSION_COOKIE_NAME),
):
    """Return statistics together with every flight in page order."""
    try:
        flights = await _load_flights(session)
    except ParseError as e:
        logger.info(f"No flights scraped: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No flights found")

    return ScrapedFlightsResponse(
        statistics=calculate_statistics(flights),
        flights=flights,
    )
