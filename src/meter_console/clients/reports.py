from __future__ import annotations

from typing import Any

from ..models_reports import (
    AdvancedReportReadings,
    ConnectionLastReadingsReport,
    DailyReadingsReport,
    DailyStatsReport,
    DashboardMetrics,
    GlobalStatsReport,
    NoveltyStatsReport,
    SectorStatsReport,
    YearlyReadingsReport,
    parse_report,
    parse_report_rows,
)
from .base import BaseClient

REPORTS_PREFIX = "/Readings-Report-Dashboard/report"


class ReportsClient(BaseClient):
    async def get_dashboard_metrics(self, date: str) -> DashboardMetrics:
        data = await self._fetch("/dashboard", params={"date": date})
        return parse_report(DashboardMetrics, data)

    async def get_daily_readings_report(self, date: str) -> list[DailyReadingsReport]:
        return parse_report_rows(DailyReadingsReport, await self._fetch(f"/daily/{date}"))

    async def get_yearly_readings_report(self, year: int) -> YearlyReadingsReport:
        return parse_report(YearlyReadingsReport, await self._fetch(f"/yearly/{int(year)}"))

    async def get_connection_last_readings_report(
        self, cadastral_key: str, limit: int = 10
    ) -> list[ConnectionLastReadingsReport]:
        data = await self._fetch(f"/connection-last-readings-10/{cadastral_key}", params={"limit": limit})
        return parse_report_rows(ConnectionLastReadingsReport, data)

    async def get_global_stats(self, month: str) -> GlobalStatsReport:
        return parse_report(GlobalStatsReport, await self._fetch(f"/stats/global/{month}"))

    async def get_daily_stats(self, month: str) -> list[DailyStatsReport]:
        return parse_report_rows(DailyStatsReport, await self._fetch(f"/stats/daily/{month}"))

    async def get_sector_stats(self, month: str) -> list[SectorStatsReport]:
        return parse_report_rows(SectorStatsReport, await self._fetch(f"/stats/sector/{month}"))

    async def get_novelty_stats(self, month: str) -> list[NoveltyStatsReport]:
        return parse_report_rows(NoveltyStatsReport, await self._fetch(f"/stats/novelty/{month}"))

    async def get_advanced_report_readings(self, month: str) -> list[AdvancedReportReadings]:
        return parse_report_rows(AdvancedReportReadings, await self._fetch(f"/advanced-monthly/{month}"))

    async def _fetch(self, suffix: str, params: dict[str, Any] | None = None) -> Any:
        return await self._get_data(f"{REPORTS_PREFIX}{suffix}", params=params)
