import logging
import threading

from partsledger.models.reorder_alert import ReorderAlert
from partsledger.services.reorder_monitor_service import ReorderMonitorService
from partsledger.services.reorder_scheduler import ReorderScheduler
from tests.factories import make_part


class _TrackedSession:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


def test_run_once_scans_with_its_own_session(db, session_factory, vendor):
    make_part(db, "LOW", vendor=vendor, on_hand=1)

    scheduler = ReorderScheduler(session_factory=session_factory, interval_seconds=60, initial_delay_seconds=0)

    assert scheduler.run_once() == 1
    assert scheduler.run_once() == 0
    assert db.query(ReorderAlert).count() == 1


def test_run_once_logs_and_suppresses_failures(monkeypatch, caplog):
    session = _TrackedSession()

    def boom(self):
        raise RuntimeError("database is gone")

    monkeypatch.setattr(ReorderMonitorService, "scan", boom)
    scheduler = ReorderScheduler(session_factory=lambda: session, interval_seconds=60)

    with caplog.at_level(logging.ERROR, logger="partsledger.services.reorder_scheduler"):
        assert scheduler.run_once() is None

    assert session.closed is True
    assert "reorder_scan_failed" in caplog.text


def test_start_runs_ticks_until_stopped(monkeypatch):
    ticked = threading.Event()
    calls = []

    def fake_run_once(self):
        calls.append(1)
        ticked.set()
        return 0

    monkeypatch.setattr(ReorderScheduler, "run_once", fake_run_once)
    scheduler = ReorderScheduler(interval_seconds=0.01, initial_delay_seconds=0)

    scheduler.start()
    assert scheduler.is_running
    assert ticked.wait(2)
    scheduler.stop()

    assert not scheduler.is_running
    assert len(calls) >= 1


def test_stop_during_initial_delay_skips_first_tick(monkeypatch):
    calls = []
    monkeypatch.setattr(ReorderScheduler, "run_once", lambda self: calls.append(1))
    scheduler = ReorderScheduler(interval_seconds=60, initial_delay_seconds=30)

    scheduler.start()
    scheduler.stop()

    assert not scheduler.is_running
    assert calls == []


def test_defaults_come_from_settings(monkeypatch):
    from partsledger.config import settings

    monkeypatch.setattr(settings, "AUTO_REORDER_INTERVAL_HOURS", 2.0)
    monkeypatch.setattr(settings, "AUTO_REORDER_INITIAL_DELAY_SECONDS", 5.0)

    scheduler = ReorderScheduler()
    assert scheduler.interval_seconds == 7200
    assert scheduler.initial_delay_seconds == 5.0
