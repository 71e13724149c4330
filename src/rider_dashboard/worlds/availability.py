"""
Which worlds are open on a given day.

The baseline world is always available; guest worlds come from the monthly
schedule, cached per month.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date as date_type
from datetime import datetime
from typing import Callable, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..config import Settings
from ..exceptions import ValidationError
from ..models.availability import WorldAvailability
from .cache import ScheduleCache
from .schedule import ScheduleFetcher, format_date

logger = logging.getLogger(__name__)


DEFAULT_TIMEZONE = "UTC"
BASELINE_WORLD = "Watopia"

_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


@dataclass(frozen=True)
class ResolvedDate:
    year: int
    month: int
    day: int
    date_string: str
    timezone: str


def resolve_time_zone(name: Optional[str], default: str = DEFAULT_TIMEZONE) -> str:
    """Return ``name`` if it is a known IANA zone, else ``default``."""
    if not name:
        return default
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.debug(f"Unknown time zone {name!r}, falling back to {default}")
        return default
    return name


def parse_date_input(
    date: Optional[str] = None,
    timezone: Optional[str] = None,
    now: Optional[Callable[[ZoneInfo], datetime]] = None,
    default_timezone: str = DEFAULT_TIMEZONE,
) -> ResolvedDate:
    """
    Resolve the calendar day to look up.

    An explicit ``YYYY-MM-DD`` date is used as-is; otherwise "today" in the
    resolved time zone.

    Raises:
        ValidationError: If ``date`` is given but is not a valid YYYY-MM-DD date
    """
    resolved_zone = resolve_time_zone(timezone, default_timezone)

    if date:
        match = _DATE_RE.match(date)
        if not match:
            raise ValidationError("Date must be in YYYY-MM-DD format.", field="date")
        try:
            day = date_type(int(match.group(1)), int(match.group(2)), int(match.group(3)))
        except ValueError as e:
            raise ValidationError("Date must be in YYYY-MM-DD format.", field="date") from e
        return ResolvedDate(day.year, day.month, day.day, date, resolved_zone)

    current = (now or datetime.now)(ZoneInfo(resolved_zone))
    return ResolvedDate(
        year=current.year,
        month=current.month,
        day=current.day,
        date_string=format_date(current.year, current.month, current.day),
        timezone=resolved_zone,
    )


class WorldAvailabilityResolver:
    """
    Resolves open worlds for a day from the cached monthly schedule.

    Owns its ``ScheduleCache``; pass one in to share or to control the
    clock in tests.
    """

    def __init__(
        self,
        fetcher: Optional[ScheduleFetcher] = None,
        cache: Optional[ScheduleCache] = None,
        baseline_world: str = BASELINE_WORLD,
        default_timezone: str = DEFAULT_TIMEZONE,
        now: Optional[Callable[[ZoneInfo], datetime]] = None,
    ):
        self.fetcher = fetcher or ScheduleFetcher()
        self.cache = cache or ScheduleCache()
        self.baseline_world = baseline_world
        self.default_timezone = default_timezone
        self._now = now

    @classmethod
    def from_settings(cls, settings: Settings) -> "WorldAvailabilityResolver":
        return cls(
            fetcher=ScheduleFetcher(
                base_url=settings.schedule_url,
                timeout=settings.http_timeout_seconds,
            ),
            cache=ScheduleCache(ttl_seconds=settings.schedule_ttl_seconds),
            baseline_world=settings.baseline_world,
            default_timezone=settings.default_timezone,
        )

    async def close(self) -> None:
        await self.fetcher.close()

    async def resolve_availability(
        self,
        date: Optional[str] = None,
        timezone: Optional[str] = None,
    ) -> WorldAvailability:
        """
        Worlds open on ``date`` (default: today in ``timezone``).

        Raises:
            ValidationError: Malformed date
            ScheduleFetchError: Schedule page could not be fetched
        """
        resolved = parse_date_input(
            date,
            timezone,
            now=self._now,
            default_timezone=self.default_timezone,
        )
        schedule = await self.cache.get_or_load(
            resolved.year,
            resolved.month,
            self.fetcher.fetch_month,
        )

        guest_worlds: List[str] = list(schedule.get(resolved.date_string, ()))
        available_worlds: List[str] = [self.baseline_world]
        for world in guest_worlds:
            if world not in available_worlds:
                available_worlds.append(world)

        return WorldAvailability(
            date=resolved.date_string,
            timezone=resolved.timezone,
            guest_worlds=guest_worlds,
            available_worlds=available_worlds,
        )
