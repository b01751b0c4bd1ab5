from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

ReportT = TypeVar("ReportT", bound="ReportRecord")


class ReportRecord(BaseModel):
    """Report rows are kept permissive until the backend contract is pinned."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def get(self, key: str, default: Any = None) -> Any:
        if key in type(self).model_fields:
            return getattr(self, key)
        return (self.model_extra or {}).get(key, default)


class DashboardMetrics(ReportRecord):
    date: str | None = None


class DailyReadingsReport(ReportRecord):
    cadastral_key: str | None = None


class YearlyReadingsReport(ReportRecord):
    year: int | None = None


class ConnectionLastReadingsReport(ReportRecord):
    cadastral_key: str | None = None


class GlobalStatsReport(ReportRecord):
    month: str | None = None


class DailyStatsReport(ReportRecord):
    day: str | None = None


class SectorStatsReport(ReportRecord):
    sector: int | str | None = None


class NoveltyStatsReport(ReportRecord):
    novelty: str | None = None


class AdvancedReportReadings(ReportRecord):
    sector: int | str | None = None


def parse_report(model_type: type[ReportT], data: Any) -> ReportT:
    """Single-object report; a one-element list is accepted as well.

    An empty list means the period has no data yet and yields an empty model.
    """
    if isinstance(data, list):
        if not data:
            return model_type()
        if len(data) > 1:
            raise ValueError(f"Expected a single {model_type.__name__}, got {len(data)} rows")
        data = data[0]
    if data is None:
        return model_type()
    return model_type.model_validate(data)


def parse_report_rows(model_type: type[ReportT], data: Any) -> list[ReportT]:
    """List report; a bare object is wrapped into a one-row list."""
    if data is None:
        return []
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of {model_type.__name__}, got {type(data).__name__}")
    return [model_type.model_validate(row) for row in data]
