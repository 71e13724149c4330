"""
Guest world schedule.

Zwift Insider publishes a monthly calendar of which guest worlds are open on
each day. This module builds the calendar URL, fetches it, and parses the
grid view into ``{"YYYY-MM-DD": [world, ...]}``. It also maps world names to
the simulator's numeric world ids.
"""

import logging
import re
from typing import Dict, Iterable, List, Optional

import httpx
from bs4 import BeautifulSoup

from ..exceptions import ScheduleFetchError, ValidationError

logger = logging.getLogger(__name__)


DEFAULT_SCHEDULE_URL = "https://zwiftinsider.com/schedule/"

MONTH_SLUGS = (
    "jan", "feb", "mar", "apr", "may", "jun",
    "jul", "aug", "sep", "oct", "nov", "dec",
)

WORLD_NAME_TO_ID: Dict[str, int] = {
    "watopia": 1,
    "richmond": 2,
    "london": 3,
    "new york": 4,
    "nyc": 4,
    "innsbruck": 5,
    "bologna": 6,
    "yorkshire": 7,
    "crit city": 8,
    "makuri islands": 9,
    "makuri island": 9,
    "makuri": 9,
    "france": 10,
    "paris": 11,
    "scotland": 13,
}

# Typographic characters the calendar renders for "&#8211;" and "&#8230;"
_TYPOGRAPHY = str.maketrans({"\u2013": "-", "\u2026": "..."})

_WHITESPACE_RE = re.compile(r"\s+")
_WORLD_KEY_STRIP_RE = re.compile(r"[^a-z0-9 ]")


def normalize_world_name(value: str) -> str:
    """Trim and collapse internal whitespace."""
    return _WHITESPACE_RE.sub(" ", value.strip())


def normalize_world_key(value: str) -> str:
    """Lookup key: whitespace-normalized, lowercased, punctuation stripped."""
    return _WORLD_KEY_STRIP_RE.sub("", normalize_world_name(value).lower())


def format_date(year: int, month: int, day: int) -> str:
    return f"{year:04d}-{month:02d}-{day:02d}"


def build_schedule_url(year: int, month: int, base_url: str = DEFAULT_SCHEDULE_URL) -> str:
    """Grid-view calendar URL for one month."""
    if not 1 <= month <= 12:
        raise ValidationError(f"Month must be between 1 and 12, got {month}.", field="month")
    return f"{base_url}?grid-list-toggle=grid&month={MONTH_SLUGS[month - 1]}&yr={year}"


def _is_day_cell(classes: Optional[List[str]]) -> bool:
    if not classes:
        return False
    return "day-with-date" in classes and any(name.startswith("spiffy-day-") for name in classes)


def parse_schedule_html(html: str, year: int, month: int) -> Dict[str, List[str]]:
    """
    Parse the calendar grid into guest worlds per day.

    Only dated cells are considered. Titles are HTML-decoded,
    whitespace-collapsed and de-duplicated in order; days without any title
    are left out.
    """
    soup = BeautifulSoup(html, "html.parser")
    schedule: Dict[str, List[str]] = {}

    for cell in soup.find_all("td"):
        if not _is_day_cell(cell.get("class")):
            continue
        day_number = cell.find("span", class_="day-number")
        if day_number is None:
            continue
        day_text = day_number.get_text(strip=True)
        if not day_text.isdecimal():
            continue

        titles: List[str] = []
        for title in cell.find_all("span", class_="spiffy-title"):
            name = normalize_world_name(title.get_text().translate(_TYPOGRAPHY))
            if name and name not in titles:
                titles.append(name)
        if not titles:
            continue

        schedule[format_date(year, month, int(day_text))] = titles

    logger.debug(f"Parsed {len(schedule)} scheduled days for {year}-{month:02d}")
    return schedule


def resolve_world_ids(worlds: Iterable[str]) -> List[int]:
    """
    Map world names to world ids.

    Unknown names are skipped. Each id appears once, in first-seen order.
    """
    ids: List[int] = []
    for world in worlds:
        world_id = WORLD_NAME_TO_ID.get(normalize_world_key(world))
        if world_id and world_id not in ids:
            ids.append(world_id)
    return ids


class ScheduleFetcher:
    """
    Downloads the monthly calendar page.

    Pass an ``httpx.AsyncClient`` to share a connection pool (or a mock
    transport in tests); otherwise one is created lazily and closed by
    ``close()``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_SCHEDULE_URL,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self._http_client = http_client
        self._owns_client = http_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
            self._owns_client = True
        return self._http_client

    async def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client and self._http_client is not None and not self._http_client.is_closed:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "ScheduleFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def fetch_html(self, year: int, month: int) -> str:
        url = build_schedule_url(year, month, self.base_url)
        client = await self._get_client()

        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            logger.error(f"Schedule request to {url} failed: {e}")
            raise ScheduleFetchError(upstream_text=str(e)) from e

        if not response.is_success:
            logger.warning(f"Schedule request to {url} returned {response.status_code}")
            raise ScheduleFetchError(
                upstream_status=response.status_code,
                upstream_text=response.text,
            )
        return response.text

    async def fetch_month(self, year: int, month: int) -> Dict[str, List[str]]:
        """Fetch and parse the schedule for one month."""
        html = await self.fetch_html(year, month)
        return parse_schedule_html(html, year, month)
