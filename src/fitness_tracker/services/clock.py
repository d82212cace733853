"""Clock abstraction for the server's canonical day."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of the current instant and logical date."""

    def now(self) -> datetime:
        """Return the current timezone-aware instant."""

    def today(self) -> date:
        """Return the current logical date."""


@dataclass
class SystemClock(Clock):
    """Wall clock anchored to a configured timezone."""

    timezone_name: str = "UTC"

    def now(self) -> datetime:
        """Return the current time in the configured timezone."""
        return datetime.now(tz=ZoneInfo(self.timezone_name))

    def today(self) -> date:
        """Return today's date in the configured timezone."""
        return self.now().date()
