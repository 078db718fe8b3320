"""
Reorder Scheduler

Runs the reorder scan periodically on a background thread, outside the
request/response flow. Each tick opens its own session; a failing tick is
logged and the schedule carries on.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from sqlalchemy.orm import Session

from partsledger.config import settings
from partsledger.database import SessionLocal
from partsledger.services.reorder_monitor_service import ReorderMonitorService

logger = logging.getLogger(__name__)


class ReorderScheduler:
    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        interval_seconds: Optional[float] = None,
        initial_delay_seconds: Optional[float] = None,
    ):
        self._session_factory = session_factory
        self.interval_seconds = interval_seconds or settings.auto_reorder_interval_seconds
        self.initial_delay_seconds = (
            settings.AUTO_REORDER_INITIAL_DELAY_SECONDS
            if initial_delay_seconds is None
            else initial_delay_seconds
        )
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="reorder-scheduler", daemon=True)
        self._thread.start()
        logger.info(
            "reorder_scheduler_started interval_seconds=%s initial_delay_seconds=%s",
            self.interval_seconds, self.initial_delay_seconds,
        )

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("reorder_scheduler_stopped")

    def run_once(self) -> Optional[int]:
        """Run one scan; returns the number of new alerts, or None if the tick failed."""
        db = self._session_factory()
        try:
            created = ReorderMonitorService(db).scan()
            return len(created)
        except Exception:  # noqa: BLE001
            logger.exception("reorder_scan_failed")
            return None
        finally:
            db.close()

    def _run(self) -> None:
        if self._stop.wait(self.initial_delay_seconds):
            return
        while True:
            self.run_once()
            if self._stop.wait(self.interval_seconds):
                return
