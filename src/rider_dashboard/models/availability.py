"""World availability for a given calendar day."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class WorldAvailability:
    """Which worlds can be ridden on ``date`` in ``timezone``."""

    date: str                      # YYYY-MM-DD
    timezone: str                  # IANA name
    guest_worlds: List[str] = field(default_factory=list)
    available_worlds: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "timezone": self.timezone,
            "guest_worlds": list(self.guest_worlds),
            "available_worlds": list(self.available_worlds),
        }
