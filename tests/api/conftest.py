"""Fixtures for the HTTP API tests."""

import pytest
from fastapi.testclient import TestClient

from rider_dashboard.api.deps import get_availability_resolver
from rider_dashboard.main import app
from rider_dashboard.worlds.availability import WorldAvailabilityResolver
from rider_dashboard.worlds.cache import ScheduleCache


@pytest.fixture
def api_resolver(stub_fetcher, fake_clock):
    """Resolver over the stub March 2024 schedule."""
    return WorldAvailabilityResolver(fetcher=stub_fetcher, cache=ScheduleCache(clock=fake_clock))


@pytest.fixture
def client(api_resolver):
    """Test client with the schedule source stubbed out."""
    app.dependency_overrides[get_availability_resolver] = lambda: api_resolver
    yield TestClient(app)
    app.dependency_overrides.clear()
