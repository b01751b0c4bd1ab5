from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from meter_console.date_service import ReportingDateService


def _fixed(moment: datetime) -> ReportingDateService:
    return ReportingDateService(now=lambda: moment)


def test_current_date_uses_reporting_timezone() -> None:
    # 03:00 UTC on Feb 1st is still Jan 31st in Guayaquil (UTC-5)
    service = _fixed(datetime(2026, 2, 1, 3, 0, tzinfo=timezone.utc))

    assert service.current_date_string() == "2026-01-31"
    assert service.current_month_string() == "2026-01"
    assert service.current_date().utcoffset().total_seconds() == -5 * 3600


def test_to_iso_date_string_accepts_several_inputs() -> None:
    service = ReportingDateService()

    assert service.to_iso_date_string(date(2026, 3, 4)) == "2026-03-04"
    assert service.to_iso_date_string("2026-03-04") == "2026-03-04"
    assert service.to_iso_date_string("2026-03-05T02:00:00Z") == "2026-03-04"
    assert service.to_iso_date_string(datetime(2026, 3, 5, 2, 0)) == "2026-03-04"
    assert service.to_iso_date_string(0) == "1969-12-31"


def test_other_timezones_are_supported() -> None:
    service = ReportingDateService("Asia/Tokyo", now=lambda: datetime(2026, 2, 1, 16, 0, tzinfo=timezone.utc))

    assert service.current_date_string() == "2026-02-02"


@pytest.mark.parametrize(
    ("value", "valid"),
    [("2026-01", True), ("2026-12", True), ("2026-13", False), ("2026-1", False), ("", False)],
)
def test_is_valid_month(value, valid) -> None:
    assert ReportingDateService.is_valid_month(value) is valid
