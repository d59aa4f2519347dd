from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class FlightRecord(BaseModel):
    """One logged flight as listed on the DHV-XC "my flights" page."""

    model_config = ConfigDict(frozen=True)

    id: str = Field("", description="Upstream flight identifier")
    date: str = Field("", description="Flight date as shown upstream (e.g. 2024-03-15)")
    takeoff: str = Field("", description="Takeoff site name")
    landing: str = Field("", description="Landing site name")
    duration: str = Field("", description="Airtime as HH:MM")
    distance: float = Field(0.0, description="Scored distance in kilometres")
    points: float = Field(0.0, description="XC score in points")
    glider: str = Field("", description="Glider model")


class StatisticsSummary(BaseModel):
    """Aggregate metrics over a set of flights."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "totalFlights": 3,
                "totalDistance": 160.0,
                "totalPoints": 340.0,
                "averageDistance": 53.33,
                "longestFlight": 80.0,
                "bestScore": 150.0,
                "flightsByMonth": {"Jan 2024": 1, "Feb 2024": 2},
                "recentFlights": [],
            }
        },
    )

    total_flights: int = Field(..., alias="totalFlights", description="Number of flights")
    total_distance: float = Field(..., alias="totalDistance", description="Sum of distances (km)")
    total_points: float = Field(..., alias="totalPoints", description="Sum of points")
    average_distance: float = Field(
        ..., alias="averageDistance", description="Mean distance per flight (0 when there are no flights)"
    )
    longest_flight: float = Field(
        ..., alias="longestFlight", description="Longest distance (0 when there are no flights)"
    )
    best_score: float = Field(
        ..., alias="bestScore", description="Highest score (0 when there are no flights)"
    )
    flights_by_month: Dict[str, int] = Field(
        default_factory=dict, alias="flightsByMonth", description="Flight count per month label, e.g. 'Mar 2024'"
    )
    recent_flights: List[FlightRecord] = Field(
        default_factory=list, alias="recentFlights", description="Up to 5 most recent flights, newest first"
    )


class ScrapedFlightsResponse(BaseModel):
    statistics: StatisticsSummary = Field(..., description="Aggregate statistics")
    flights: List[FlightRecord] = Field(..., description="All flights in page order")
