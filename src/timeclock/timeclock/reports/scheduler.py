from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeout
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler

from ..core.constants import (
    DAILY_REPORT_HOUR,
    DEFAULT_REPORT_TICK_TIMEOUT_SECONDS,
    WEEKLY_REPORT_DAY_OF_WEEK,
    WEEKLY_REPORT_HOUR,
)
from ..core.exceptions import SinkFailure
from .email import daily_subject, render_daily_text, render_weekly_text, weekly_subject
from .service import ReportAggregator

logger = logging.getLogger(__name__)


class TickStatus(str, Enum):
    DELIVERED = "delivered"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class TickResult:
    job: str
    status: TickStatus
    error: Optional[str] = None
    report: Any = None


class _Tick:
    """Hand-off between ``run`` and its worker.

    ``cancelled`` and ``delivering`` only change under ``lock``, so a tick is
    either abandoned before the sink is called or counted as delivering.
    """

    def __init__(self):
        self.lock = threading.Lock()
        self.cancelled = False
        self.delivering = False


class ReportJob:
    """One aggregation pass plus one delivery, guarded against overlap.

    A tick that finds the previous one still running is skipped. A tick that
    runs past its deadline is reported failed. If the sink had not been called
    yet the worker discards its result; if delivery is already under way the
    guard stays held until it finishes, so the next tick cannot send a
    duplicate.
    """

    def __init__(
        self,
        name: str,
        *,
        build: Callable[[], Any],
        render: Callable[[Any], str],
        subject: Callable[[Any], str],
        deliver: Callable[..., None],
        executor: Executor,
        timeout_seconds: float = DEFAULT_REPORT_TICK_TIMEOUT_SECONDS,
    ):
        self.name = name
        self._build = build
        self._render = render
        self._subject = subject
        self._deliver = deliver
        self._executor = executor
        self._timeout = float(timeout_seconds)
        self._guard = threading.Lock()

    @property
    def running(self) -> bool:
        return self._guard.locked()

    def _work(self, tick: _Tick):
        report = self._build()
        body = self._render(report)
        subject = self._subject(report)
        with tick.lock:
            if tick.cancelled:
                logger.info("%s report: tick was cancelled, discarding result", self.name)
                return report
            tick.delivering = True
        self._deliver(subject=subject, body=body)
        return report

    def _finish_late(self, future) -> None:
        try:
            future.result()
        except Exception as e:
            logger.error("%s report: late delivery failed: %s", self.name, e)
        else:
            logger.warning("%s report: delivered after its deadline", self.name)
        finally:
            self._guard.release()

    def run(self) -> TickResult:
        if not self._guard.acquire(blocking=False):
            logger.warning("%s report: previous tick still running, skipping", self.name)
            return TickResult(self.name, TickStatus.SKIPPED)

        tick = _Tick()
        release_guard = True
        try:
            future = self._executor.submit(self._work, tick)
            try:
                report = future.result(timeout=self._timeout)
            except FuturesTimeout:
                with tick.lock:
                    tick.cancelled = True
                    delivering = tick.delivering
                if delivering:
                    # The worker now owns the guard and releases it when the sink returns.
                    release_guard = False
                    future.add_done_callback(self._finish_late)
                    logger.error("%s report: tick exceeded %.0fs while delivering", self.name, self._timeout)
                    return TickResult(self.name, TickStatus.FAILED, error="timeout during delivery")
                future.cancel()
                logger.error("%s report: tick exceeded %.0fs, abandoned", self.name, self._timeout)
                return TickResult(self.name, TickStatus.FAILED, error="timeout")
            except SinkFailure as e:
                # The report itself is fine and can still be fetched on demand.
                logger.error("%s report: delivery failed: %s", self.name, e)
                return TickResult(self.name, TickStatus.FAILED, error=str(e))
            except Exception as e:
                logger.exception("%s report: aggregation failed", self.name)
                return TickResult(self.name, TickStatus.FAILED, error=str(e))

            logger.info("%s report delivered", self.name)
            return TickResult(self.name, TickStatus.DELIVERED, report=report)
        finally:
            if release_guard:
                self._guard.release()


class ReportScheduler:
    """Two independent timers (daily, weekly) feeding the e-mail sink."""

    def __init__(
        self,
        reports: ReportAggregator,
        deliver: Callable[..., None],
        *,
        timezone: str,
        timeout_seconds: float = DEFAULT_REPORT_TICK_TIMEOUT_SECONDS,
        executor: Optional[Executor] = None,
    ):
        self._executor = executor or ThreadPoolExecutor(max_workers=4, thread_name_prefix="report-tick")
        self.daily_job = ReportJob(
            "daily",
            build=reports.daily,
            render=render_daily_text,
            subject=daily_subject,
            deliver=deliver,
            executor=self._executor,
            timeout_seconds=timeout_seconds,
        )
        self.weekly_job = ReportJob(
            "weekly",
            build=reports.previous_week,
            render=render_weekly_text,
            subject=weekly_subject,
            deliver=deliver,
            executor=self._executor,
            timeout_seconds=timeout_seconds,
        )
        self._scheduler = BackgroundScheduler(
            timezone=timezone,
            job_defaults={"coalesce": True, "max_instances": 1, "misfire_grace_time": 3600},
        )

    def start(self) -> None:
        self._scheduler.add_job(
            self.daily_job.run, "cron", hour=DAILY_REPORT_HOUR, minute=0, id="daily-report", replace_existing=True
        )
        self._scheduler.add_job(
            self.weekly_job.run,
            "cron",
            day_of_week=WEEKLY_REPORT_DAY_OF_WEEK,
            hour=WEEKLY_REPORT_HOUR,
            minute=0,
            id="weekly-report",
            replace_existing=True,
        )
        self._scheduler.start()
        logger.info("Report scheduler started")

    def shutdown(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._executor.shutdown(wait=False)

    def trigger_daily(self) -> TickResult:
        return self.daily_job.run()

    def trigger_weekly(self) -> TickResult:
        return self.weekly_job.run()
