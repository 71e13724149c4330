"""Tests for schedule parsing, world lookup and the schedule fetcher."""

import httpx
import pytest

from rider_dashboard.exceptions import ErrorCode, ScheduleFetchError, ValidationError
from rider_dashboard.worlds.schedule import (
    ScheduleFetcher,
    build_schedule_url,
    normalize_world_key,
    parse_schedule_html,
    resolve_world_ids,
)


class TestBuildScheduleUrl:
    """Test calendar URL construction."""

    def test_month_slug(self):
        assert build_schedule_url(2024, 3) == (
            "https://zwiftinsider.com/schedule/?grid-list-toggle=grid&month=mar&yr=2024"
        )
        assert build_schedule_url(2025, 12).endswith("month=dec&yr=2025")

    def test_custom_base_url(self):
        assert build_schedule_url(2024, 1, "https://mirror.test/cal/").startswith(
            "https://mirror.test/cal/?grid-list-toggle=grid&month=jan"
        )

    def test_invalid_month(self):
        with pytest.raises(ValidationError):
            build_schedule_url(2024, 13)


class TestParseScheduleHtml:
    """Test calendar grid parsing."""

    def test_parses_days(self, schedule_html):
        schedule = parse_schedule_html(schedule_html, 2024, 3)
        assert schedule == {
            "2024-03-01": ["London", "Yorkshire"],
            "2024-03-03": ["Makuri & Friends - Neokyo"],
            "2024-03-10": ["New York", "Watopia"],
        }

    def test_days_without_titles_omitted(self, schedule_html):
        assert "2024-03-02" not in parse_schedule_html(schedule_html, 2024, 3)

    def test_undated_cells_ignored(self, schedule_html):
        worlds = [w for day in parse_schedule_html(schedule_html, 2024, 3).values() for w in day]
        assert "Paris" not in worlds

    def test_ellipsis_decoded(self):
        html = (
            '<table><tr><td class="spiffy-day-5 day-with-date">'
            '<span class="day-number">5</span>'
            '<span class="spiffy-title">Watopia &#8230;</span>'
            "</td></tr></table>"
        )
        assert parse_schedule_html(html, 2024, 7) == {"2024-07-05": ["Watopia ..."]}

    def test_non_decimal_day_number_skipped(self):
        html = (
            '<table><tr><td class="spiffy-day-2 day-with-date">'
            '<span class="day-number">²</span>'
            '<span class="spiffy-title">London</span>'
            '</td><td class="spiffy-day-4 day-with-date">'
            '<span class="day-number">4</span>'
            '<span class="spiffy-title">Paris</span>'
            "</td></tr></table>"
        )
        assert parse_schedule_html(html, 2024, 7) == {"2024-07-04": ["Paris"]}

    def test_empty_document(self):
        assert parse_schedule_html("", 2024, 3) == {}
        assert parse_schedule_html("<html><body>maintenance</body></html>", 2024, 3) == {}


class TestResolveWorldIds:
    """Test world name to id lookup."""

    def test_known_worlds(self):
        assert resolve_world_ids(["Watopia", "London", "Yorkshire"]) == [1, 3, 7]

    def test_normalization_and_dedup(self):
        names = ["NYC", "new   york", " New York ", "Makuri Islands!", "makuri"]
        assert resolve_world_ids(names) == [4, 9]

    def test_unknown_names_dropped(self):
        assert resolve_world_ids(["Atlantis", "Crit City", "Makuri & Friends - Neokyo"]) == [8]

    def test_full_table(self):
        names = [
            "watopia", "richmond", "london", "new york", "innsbruck", "bologna",
            "yorkshire", "crit city", "makuri islands", "france", "paris", "scotland",
        ]
        assert resolve_world_ids(names) == [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 13]

    def test_key_normalization(self):
        assert normalize_world_key("  Crit   City! ") == "crit city"


class TestScheduleFetcher:
    """Test the HTTP fetch of the calendar page."""

    @pytest.mark.asyncio
    async def test_fetch_month(self, schedule_html):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, text=schedule_html)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            fetcher = ScheduleFetcher(http_client=client)
            schedule = await fetcher.fetch_month(2024, 3)

        assert schedule["2024-03-01"] == ["London", "Yorkshire"]
        assert len(requests) == 1
        assert requests[0].url.params["month"] == "mar"
        assert requests[0].url.params["yr"] == "2024"

    @pytest.mark.asyncio
    async def test_non_2xx_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="Service Unavailable")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            fetcher = ScheduleFetcher(http_client=client)
            with pytest.raises(ScheduleFetchError) as exc_info:
                await fetcher.fetch_month(2024, 3)

        error = exc_info.value
        assert error.message == "Failed to fetch Zwift Insider schedule."
        assert error.code == ErrorCode.SCHEDULE_FETCH_FAILED
        assert error.status_code == 502
        assert error.upstream_status == 503
        assert error.details["upstream_text"] == "Service Unavailable"

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            fetcher = ScheduleFetcher(http_client=client)
            with pytest.raises(ScheduleFetchError):
                await fetcher.fetch_month(2024, 3)

    @pytest.mark.asyncio
    async def test_close_leaves_injected_client_open(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
        async with ScheduleFetcher(http_client=client):
            pass
        assert not client.is_closed
        await client.aclose()
