from __future__ import annotations

from collections.abc import Callable

from .clients.reports import ReportsClient
from .config import ClientConfig
from .date_service import ReportingDateService
from .exceptions import FetchCycleFailedError
from .orchestrator import PollingFetchOrchestrator, Query, ReportSnapshot

MONTHLY_QUERIES = ("global_stats", "daily_stats", "sector_stats", "novelty_stats", "advanced_readings")
DAILY_QUERIES = ("metrics", "daily_readings")


def monthly_queries(reports: ReportsClient) -> dict[str, Query]:
    return {
        "global_stats": reports.get_global_stats,
        "daily_stats": reports.get_daily_stats,
        "sector_stats": reports.get_sector_stats,
        "novelty_stats": reports.get_novelty_stats,
        "advanced_readings": reports.get_advanced_report_readings,
    }


def daily_queries(reports: ReportsClient) -> dict[str, Query]:
    return {
        "metrics": reports.get_dashboard_metrics,
        "daily_readings": reports.get_daily_readings_report,
    }


def build_dashboard_orchestrator(
    reports: ReportsClient,
    date_service: ReportingDateService,
    config: ClientConfig,
    *,
    initial_month: str | None = None,
    on_error: Callable[[FetchCycleFailedError], None] | None = None,
    on_commit: Callable[[ReportSnapshot], None] | None = None,
) -> PollingFetchOrchestrator:
    month = initial_month or date_service.current_month_string()
    if not date_service.is_valid_month(month):
        raise ValueError(f"Invalid month {month!r}, expected YYYY-MM")
    return PollingFetchOrchestrator(
        monthly_queries(reports),
        month,
        debounce_seconds=config.debounce_seconds,
        poll_interval_seconds=config.poll_interval_seconds,
        on_error=on_error,
        on_commit=on_commit,
    )


def build_daily_report_orchestrator(
    reports: ReportsClient,
    date_service: ReportingDateService,
    config: ClientConfig,
    *,
    initial_date: str | None = None,
    on_error: Callable[[FetchCycleFailedError], None] | None = None,
    on_commit: Callable[[ReportSnapshot], None] | None = None,
) -> PollingFetchOrchestrator:
    day = date_service.to_iso_date_string(initial_date) if initial_date else date_service.current_date_string()
    return PollingFetchOrchestrator(
        daily_queries(reports),
        day,
        debounce_seconds=config.debounce_seconds,
        poll_interval_seconds=config.poll_interval_seconds,
        on_error=on_error,
        on_commit=on_commit,
    )
