from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from .config import DEFAULT_REPORT_TIMEZONE

_MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


class ReportingDateService:
    """Dates as the reporting backend sees them, in one fixed timezone."""

    def __init__(
        self,
        timezone_name: str = DEFAULT_REPORT_TIMEZONE,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self.zone = ZoneInfo(timezone_name)
        self._now = now or (lambda: datetime.now(timezone.utc))

    def current_date(self) -> datetime:
        return self._now().astimezone(self.zone)

    def current_date_string(self) -> str:
        return self.current_date().date().isoformat()

    def current_month_string(self) -> str:
        return self.current_date_string()[:7]

    def to_iso_date_string(self, value: datetime | date | str | int | float) -> str:
        if isinstance(value, datetime):
            moment = value
        elif isinstance(value, date):
            return value.isoformat()
        elif isinstance(value, (int, float)):
            moment = datetime.fromtimestamp(value, tz=timezone.utc)
        else:
            clean = value.strip()
            if "T" not in clean and " " not in clean:
                return date.fromisoformat(clean).isoformat()
            moment = datetime.fromisoformat(clean.replace("Z", "+00:00"))
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(self.zone).date().isoformat()

    @staticmethod
    def is_valid_month(value: str) -> bool:
        return bool(_MONTH_PATTERN.match(value or ""))
