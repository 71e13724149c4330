"""Tests for world availability resolution."""

from datetime import datetime

import pytest

from rider_dashboard.exceptions import ScheduleFetchError, ValidationError
from rider_dashboard.models.availability import WorldAvailability
from rider_dashboard.worlds.availability import (
    WorldAvailabilityResolver,
    parse_date_input,
    resolve_time_zone,
)
from rider_dashboard.worlds.cache import ScheduleCache


def _fixed_now(year, month, day, hour=12):
    """Clock returning a fixed wall time in whichever zone is asked for."""
    def _now(tz):
        return datetime(year, month, day, hour, tzinfo=tz)
    return _now


class TestResolveTimeZone:
    """Test IANA zone validation."""

    def test_known_zone(self):
        assert resolve_time_zone("Europe/Madrid") == "Europe/Madrid"

    def test_unknown_zone_falls_back(self):
        assert resolve_time_zone("Mars/Olympus_Mons") == "UTC"
        assert resolve_time_zone("../../etc/passwd") == "UTC"

    def test_missing_zone_uses_default(self):
        assert resolve_time_zone(None) == "UTC"
        assert resolve_time_zone("", default="America/New_York") == "America/New_York"


class TestParseDateInput:
    """Test calendar day resolution."""

    def test_explicit_date(self):
        resolved = parse_date_input("2024-03-10", "Europe/London")
        assert (resolved.year, resolved.month, resolved.day) == (2024, 3, 10)
        assert resolved.date_string == "2024-03-10"
        assert resolved.timezone == "Europe/London"

    @pytest.mark.parametrize("value", ["2024-3-10", "10/03/2024", "2024-03-10T00:00", "tomorrow"])
    def test_malformed_date(self, value):
        with pytest.raises(ValidationError) as exc_info:
            parse_date_input(value)
        assert exc_info.value.details["field"] == "date"

    @pytest.mark.parametrize("value", ["2024-02-30", "2023-02-29", "2024-13-01", "2024-00-10"])
    def test_impossible_date(self, value):
        with pytest.raises(ValidationError):
            parse_date_input(value)

    def test_leap_day(self):
        assert parse_date_input("2024-02-29").day == 29

    def test_today_in_zone(self):
        resolved = parse_date_input(None, "Asia/Tokyo", now=_fixed_now(2024, 3, 31))
        assert resolved.date_string == "2024-03-31"
        assert resolved.timezone == "Asia/Tokyo"

    def test_now_receives_resolved_zone(self):
        seen = []

        def _now(tz):
            seen.append(str(tz))
            return datetime(2024, 1, 5, tzinfo=tz)

        parse_date_input(None, "Not/AZone", now=_now)
        assert seen == ["UTC"]


class TestWorldAvailabilityResolver:
    """Test the resolver against a stubbed schedule source."""

    @pytest.mark.asyncio
    async def test_baseline_plus_guests(self, stub_fetcher, fake_clock):
        resolver = WorldAvailabilityResolver(fetcher=stub_fetcher, cache=ScheduleCache(clock=fake_clock))
        availability = await resolver.resolve_availability("2024-03-01", "UTC")

        assert availability.date == "2024-03-01"
        assert availability.timezone == "UTC"
        assert availability.guest_worlds == ["London", "Yorkshire"]
        assert availability.available_worlds == ["Watopia", "London", "Yorkshire"]

    @pytest.mark.asyncio
    async def test_baseline_not_repeated(self, stub_fetcher, fake_clock):
        resolver = WorldAvailabilityResolver(fetcher=stub_fetcher, cache=ScheduleCache(clock=fake_clock))
        availability = await resolver.resolve_availability("2024-03-10")

        assert availability.guest_worlds == ["New York", "Watopia"]
        assert availability.available_worlds == ["Watopia", "New York"]

    @pytest.mark.asyncio
    async def test_day_without_guests(self, stub_fetcher, fake_clock):
        resolver = WorldAvailabilityResolver(fetcher=stub_fetcher, cache=ScheduleCache(clock=fake_clock))
        availability = await resolver.resolve_availability("2024-03-02")

        assert availability.guest_worlds == []
        assert availability.available_worlds == ["Watopia"]

    @pytest.mark.asyncio
    async def test_month_cached_between_days(self, stub_fetcher, fake_clock):
        resolver = WorldAvailabilityResolver(fetcher=stub_fetcher, cache=ScheduleCache(clock=fake_clock))
        await resolver.resolve_availability("2024-03-01")
        await resolver.resolve_availability("2024-03-10")
        await resolver.resolve_availability("2024-04-01")

        assert stub_fetcher.calls == [(2024, 3), (2024, 4)]

    @pytest.mark.asyncio
    async def test_defaults_to_today(self, stub_fetcher, fake_clock):
        resolver = WorldAvailabilityResolver(
            fetcher=stub_fetcher,
            cache=ScheduleCache(clock=fake_clock),
            now=_fixed_now(2024, 3, 3),
        )
        availability = await resolver.resolve_availability(timezone="Europe/Madrid")

        assert availability.date == "2024-03-03"
        assert availability.timezone == "Europe/Madrid"
        assert availability.guest_worlds == ["Makuri & Friends - Neokyo"]

    @pytest.mark.asyncio
    async def test_invalid_date_skips_fetch(self, stub_fetcher):
        resolver = WorldAvailabilityResolver(fetcher=stub_fetcher)
        with pytest.raises(ValidationError):
            await resolver.resolve_availability("2024-02-31")
        assert stub_fetcher.calls == []

    @pytest.mark.asyncio
    async def test_fetch_error_propagates(self, failing_fetcher):
        resolver = WorldAvailabilityResolver(fetcher=failing_fetcher(ScheduleFetchError(upstream_status=500)))
        with pytest.raises(ScheduleFetchError):
            await resolver.resolve_availability("2024-03-01")

    @pytest.mark.asyncio
    async def test_close_closes_fetcher(self, stub_fetcher):
        resolver = WorldAvailabilityResolver(fetcher=stub_fetcher)
        await resolver.close()
        assert stub_fetcher.closed

    def test_to_dict(self):
        data = WorldAvailability("2024-03-01", "UTC", ["London"], ["Watopia", "London"]).to_dict()
        assert data == {
            "date": "2024-03-01",
            "timezone": "UTC",
            "guest_worlds": ["London"],
            "available_worlds": ["Watopia", "London"],
        }
