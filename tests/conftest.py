"""Shared fixtures for the rider dashboard tests."""

from typing import Dict, List, Optional

import pytest

from rider_dashboard.integrations.base import StaticRouteDataProvider
from rider_dashboard.models.routes import Route


SCHEDULE_HTML = """
<html><body>
<table class="spiffy calendar">
  <tr>
    <td class="spiffy-day-empty"><span class="spiffy-title">Paris</span></td>
    <td class="spiffy-day-1 past day-with-date">
      <span class="day-number">1</span>
      <span class="spiffy-title">London</span>
      <span class="spiffy-title">  Yorkshire  </span>
      <span class="spiffy-title">London</span>
    </td>
    <td class="spiffy-day-2 day-with-date"><span class="day-number">2</span></td>
    <td class="spiffy-day-3 day-with-date">
      <span class="day-number today">3</span>
      <span class="spiffy-title">Makuri &amp; Friends &#8211; Neokyo</span>
    </td>
    <td class="spiffy-day-10 day-with-date">
      <span class="day-number">10</span>
      <span class="spiffy-title">New
         York</span>
      <span class="spiffy-title">Watopia</span>
    </td>
  </tr>
</table>
</body></html>
"""

MARCH_2024_SCHEDULE = {
    "2024-03-01": ["London", "Yorkshire"],
    "2024-03-03": ["Makuri & Friends - Neokyo"],
    "2024-03-10": ["New York", "Watopia"],
}


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubScheduleFetcher:
    """Stands in for ScheduleFetcher; records which months were fetched."""

    def __init__(
        self,
        schedule: Optional[Dict[str, List[str]]] = None,
        error: Optional[Exception] = None,
    ):
        self.schedule = schedule if schedule is not None else MARCH_2024_SCHEDULE
        self.error = error
        self.calls: List[tuple] = []
        self.closed = False

    async def fetch_month(self, year: int, month: int) -> Dict[str, List[str]]:
        self.calls.append((year, month))
        if self.error is not None:
            raise self.error
        return self.schedule

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def schedule_html() -> str:
    return SCHEDULE_HTML


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def stub_fetcher() -> StubScheduleFetcher:
    return StubScheduleFetcher()


@pytest.fixture
def failing_fetcher():
    """Factory for a fetcher that raises the given error."""
    def _make(error: Exception) -> StubScheduleFetcher:
        return StubScheduleFetcher(error=error)
    return _make


@pytest.fixture
def make_route():
    """Factory for catalog routes with sensible defaults."""
    def _make(
        route_id: int,
        minutes: int,
        world_id: int = 1,
        name: Optional[str] = None,
    ) -> Route:
        return Route(
            id=route_id,
            world_id=world_id,
            name=name or f"Route {route_id}",
            distance_km=round(minutes * 28 / 60, 1),
            elevation_m=0.0,
            estimated_time_minutes=minutes,
        )
    return _make


RAW_PROFILE = {"playerId": 42, "firstName": "Ana", "lastName": "Ruiz", "country": "es"}

# At the default 28 km/h: 30, 60, 90, 30 and 60 minutes
RAW_ROUTES = [
    {"id": 1, "worldId": 1, "name": "Tempus Fugit", "distanceKm": 14, "elevationM": 0},
    {"id": 2, "worldId": 1, "name": "Volcano Circuit", "distanceKm": 28, "elevationM": 0},
    {"id": 3, "worldId": 1, "name": "Big Flat 8", "distanceKm": 42, "elevationM": 0},
    {"id": 4, "worldId": 3, "name": "Greater London Flat", "distanceKm": 14, "elevationM": 0},
    {"id": 5, "worldId": 7, "name": "Yorkshire UCI", "distanceKm": 28, "elevationM": 0},
    {"id": 6, "worldId": 1, "name": "Race Only", "distanceKm": 20, "isEventOnly": True},
]

RAW_ACTIVITIES = [
    {"id": "a1", "name": "Morning ride", "routeId": 1, "distanceKm": 14, "startDate": "2024-02-01T10:00:00Z"},
    {"id": "a2", "routeId": 99, "distanceInMeters": 21000, "startDate": "2024-02-03T10:00:00Z"},
    {"id": "a3", "routeId": 1, "distanceKm": 14, "startDate": "2024-02-05T10:00:00Z"},
]


@pytest.fixture
def static_provider():
    """Provider serving a small rider, history and route list."""
    return StaticRouteDataProvider(
        profile=dict(RAW_PROFILE),
        activities=[dict(item) for item in RAW_ACTIVITIES],
        routes=[dict(item) for item in RAW_ROUTES],
    )
