"""World schedule, availability and world-id lookup."""

from .availability import (
    WorldAvailabilityResolver,
    parse_date_input,
    resolve_time_zone,
)
from .cache import ScheduleCache
from .schedule import (
    WORLD_NAME_TO_ID,
    ScheduleFetcher,
    build_schedule_url,
    parse_schedule_html,
    resolve_world_ids,
)

__all__ = [
    "WorldAvailabilityResolver",
    "parse_date_input",
    "resolve_time_zone",
    "ScheduleCache",
    "WORLD_NAME_TO_ID",
    "ScheduleFetcher",
    "build_schedule_url",
    "parse_schedule_html",
    "resolve_world_ids",
]
