from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any

from .exceptions import FetchCycleFailedError

logger = logging.getLogger(__name__)

Query = Callable[[str], Awaitable[Any]]


@dataclass(frozen=True)
class ReportSnapshot:
    period: str
    reports: Mapping[str, Any]
    fetched_at: datetime

    def __getitem__(self, name: str) -> Any:
        return self.reports[name]


class PollingFetchOrchestrator:
    """Keeps a set of period-keyed reports fresh.

    A period change is debounced into one foreground cycle, and a poll loop
    re-runs the same queries in the background. Each cycle is tagged with the
    generation and period it started under and only commits if both are still
    current when every query has settled. A cycle with any failure commits
    nothing, so ``snapshot`` is always a complete set for a single period.
    """

    def __init__(
        self,
        queries: Mapping[str, Query],
        initial_period: str,
        *,
        debounce_seconds: float = 0.5,
        poll_interval_seconds: float = 5.0,
        on_error: Callable[[FetchCycleFailedError], None] | None = None,
        on_commit: Callable[[ReportSnapshot], None] | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        if not queries:
            raise ValueError("At least one query is required")
        self.queries = dict(queries)
        self.current_period = initial_period
        self.debounce_seconds = debounce_seconds
        self.poll_interval_seconds = poll_interval_seconds
        self.on_error = on_error
        self.on_commit = on_commit
        self._sleep = sleep

        self.generation = 0
        self.loading = False
        self.snapshot: ReportSnapshot | None = None
        self.last_error: FetchCycleFailedError | None = None
        self._closed = False
        self._started = False
        self._foreground_seq = 0
        self._debounce_task: asyncio.Task | None = None
        self._poll_task: asyncio.Task | None = None
        self._cycles: set[asyncio.Task] = set()
        self._background: tuple[int, asyncio.Task] | None = None

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        asyncio.get_running_loop()
        if self._closed:
            raise RuntimeError("Orchestrator is closed")
        if self._started:
            return
        self._started = True
        self._schedule_debounce()
        self._restart_poll()

    def set_period(self, period: str) -> None:
        if period == self.current_period:
            return
        self.current_period = period
        self.generation += 1
        logger.info("period_changed", extra={"period": period, "generation": self.generation})
        if self._started and not self._closed:
            self._schedule_debounce()
            self._restart_poll()

    def refresh(self) -> asyncio.Task:
        """Run a foreground cycle for the current period right away."""
        if self._closed:
            raise RuntimeError("Orchestrator is closed")
        return self._launch(self.generation, self.current_period, foreground=True)

    def close(self) -> None:
        self._closed = True
        for task in (self._debounce_task, self._poll_task):
            if task is not None:
                task.cancel()
        self._debounce_task = None
        self._poll_task = None

    async def wait_idle(self) -> None:
        while self._cycles:
            await asyncio.gather(*list(self._cycles), return_exceptions=True)

    def _is_current(self, generation: int, period: str) -> bool:
        return not self._closed and generation == self.generation and period == self.current_period

    def _schedule_debounce(self) -> None:
        if self._debounce_task is not None:
            self._debounce_task.cancel()
        self._debounce_task = asyncio.create_task(self._debounced(self.generation, self.current_period))

    def _restart_poll(self) -> None:
        if self._poll_task is not None:
            self._poll_task.cancel()
        self._poll_task = asyncio.create_task(self._poll_loop(self.generation))

    async def _debounced(self, generation: int, period: str) -> None:
        await self._sleep(self.debounce_seconds)
        if self._is_current(generation, period):
            self._launch(generation, period, foreground=True)

    async def _poll_loop(self, generation: int) -> None:
        while not self._closed and generation == self.generation:
            await self._sleep(self.poll_interval_seconds)
            if self._closed or generation != self.generation:
                return
            if self._background is not None and self._background[0] == generation and not self._background[1].done():
                logger.debug("poll_skipped_cycle_in_flight", extra={"generation": generation})
                continue
            task = self._launch(generation, self.current_period, foreground=False)
            self._background = (generation, task)

    def _launch(self, generation: int, period: str, *, foreground: bool) -> asyncio.Task:
        task = asyncio.create_task(self._run_cycle(generation, period, foreground))
        self._cycles.add(task)
        task.add_done_callback(self._cycles.discard)
        return task

    async def _run_cycle(self, generation: int, period: str, foreground: bool) -> None:
        seq = None
        if foreground:
            self._foreground_seq += 1
            seq = self._foreground_seq
            self.loading = True
        names = list(self.queries)
        try:
            results = await asyncio.gather(
                *(self.queries[name](period) for name in names),
                return_exceptions=True,
            )
        finally:
            if seq is not None and seq == self._foreground_seq:
                self.loading = False

        if not self._is_current(generation, period):
            logger.debug("fetch_cycle_discarded", extra={"period": period, "generation": generation})
            return

        failures = {name: result for name, result in zip(names, results) if isinstance(result, BaseException)}
        if failures:
            error = FetchCycleFailedError(period=period, failures=failures)
            self.last_error = error
            logger.warning(
                "fetch_cycle_failed",
                extra={"period": period, "failed_queries": sorted(failures), "foreground": foreground},
            )
            if self.on_error is not None:
                try:
                    self.on_error(error)
                except Exception:
                    logger.exception("fetch_error_callback_failed", extra={"period": period})
            return

        snapshot = ReportSnapshot(
            period=period,
            reports=MappingProxyType(dict(zip(names, results))),
            fetched_at=datetime.now(timezone.utc),
        )
        self.snapshot = snapshot
        self.last_error = None
        logger.debug("fetch_cycle_committed", extra={"period": period, "foreground": foreground})
        if self.on_commit is not None:
            try:
                self.on_commit(snapshot)
            except Exception:
                logger.exception("fetch_commit_callback_failed", extra={"period": period})
