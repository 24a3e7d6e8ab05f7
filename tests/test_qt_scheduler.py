"""Tests for the QTimer-backed scheduler.

These run a real Qt event loop, so they use short delays and poll with
QCoreApplication.processEvents() until a condition holds.
"""
import time

import pytest
from PySide6.QtCore import QCoreApplication

from core.animation import EngineStatus, Phase
from core.scheduling.qt_scheduler import QtScheduler
from engine.symbol_engine import AnimationEngine


def _pump_until(predicate, timeout_s: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout_s
    while time.monotonic() < deadline:
        QCoreApplication.processEvents()
        if predicate():
            return True
        time.sleep(0.005)
    QCoreApplication.processEvents()
    return predicate()


def _pump_for(duration_s: float) -> None:
    _pump_until(lambda: False, timeout_s=duration_s)


@pytest.fixture
def qt_scheduler(qt_app):
    scheduler = QtScheduler()
    yield scheduler
    scheduler.cancel_all()


@pytest.mark.qt
def test_now_is_monotonic_seconds(qt_scheduler):
    first = qt_scheduler.now()
    time.sleep(0.02)
    second = qt_scheduler.now()
    assert second > first
    assert second - first < 1.0


@pytest.mark.qt
def test_single_shot_fires(qt_scheduler):
    fired = []
    handle = qt_scheduler.single_shot(0.02, lambda: fired.append(True), description="test-shot")

    assert handle.is_active()
    assert _pump_until(lambda: fired)
    assert fired == [True]
    assert not handle.is_active()
    assert qt_scheduler.pending_count() == 0


@pytest.mark.qt
def test_single_shot_cancel(qt_scheduler):
    fired = []
    handle = qt_scheduler.single_shot(0.03, lambda: fired.append(True))
    handle.cancel()
    handle.cancel()

    _pump_for(0.15)
    assert fired == []
    assert not handle.is_active()


@pytest.mark.qt
def test_recurring_fires_until_cancelled(qt_scheduler):
    ticks = []
    handle = qt_scheduler.schedule_recurring(0.01, lambda: ticks.append(1), description="test-tick")

    assert _pump_until(lambda: len(ticks) >= 3)
    handle.cancel()
    count = len(ticks)
    _pump_for(0.08)
    assert len(ticks) == count


@pytest.mark.qt
def test_callback_exception_is_logged(qt_scheduler, caplog):
    def broken():
        raise RuntimeError("qt boom")

    with caplog.at_level("ERROR"):
        qt_scheduler.single_shot(0.0, broken, description="broken-shot")
        _pump_until(lambda: "qt boom" in caplog.text)

    assert "broken-shot" in caplog.text


@pytest.mark.qt
def test_cancel_all(qt_scheduler):
    fired = []
    qt_scheduler.single_shot(0.05, lambda: fired.append("a"))
    qt_scheduler.schedule_recurring(0.05, lambda: fired.append("b"))

    assert qt_scheduler.cancel_all() == 2
    assert qt_scheduler.pending_count() == 0
    _pump_for(0.15)
    assert fired == []


@pytest.mark.qt
def test_engine_runs_on_qt_event_loop(qt_scheduler):
    engine = AnimationEngine(qt_scheduler)
    engine.start()
    try:
        assert _pump_until(lambda: engine.current_state().elapsed >= 0.2)
        state = engine.current_state()
        assert state.phase is Phase.FADE_IN
        assert state.symbol is engine.catalog[0]
        assert 0.0 < state.opacity < 1.0
    finally:
        engine.shutdown()

    assert engine.status is EngineStatus.STOPPED
    assert qt_scheduler.pending_count() == 0
