"""QTimer-backed scheduler running on the Qt event loop.

All callbacks fire on the thread that owns the timers (normally the thread
that created the QCoreApplication), which gives the engine its single
scheduling context. Timers use ``Qt.TimerType.PreciseTimer`` because the
clock ticks every 100ms and coarse timers can drift by 5%.
"""
from __future__ import annotations

import time
from typing import Callable, Optional, Set

from PySide6.QtCore import QElapsedTimer, QMetaObject, QObject, QThread, QTimer, Qt

from core.constants.timing import TIMER_GAP_WARN_MIN_MS
from core.logging.logger import get_logger, is_perf_metrics_enabled
from core.scheduling.scheduler import (
    Scheduler,
    TimerHandle,
    describe_callback,
    validate_delay,
    validate_interval,
)

logger = get_logger(__name__)


class QtTimerHandle(TimerHandle):
    """Wraps one QTimer owned by a QtScheduler."""

    def __init__(self, timer: QTimer, description: str, on_release: Callable[["QtTimerHandle"], None]) -> None:
        super().__init__(description)
        self._timer: Optional[QTimer] = timer
        self._on_release = on_release

    def cancel(self) -> None:
        timer = self._timer
        if timer is None:
            return
        try:
            # Timers can only be stopped from their owning thread
            if QThread.currentThread() is timer.thread():
                timer.stop()
            else:
                QMetaObject.invokeMethod(timer, "stop", Qt.ConnectionType.QueuedConnection)
        except RuntimeError:
            logger.debug("[SCHED] Timer %r already deleted", self.description)
        self._release()

    def is_active(self) -> bool:
        timer = self._timer
        if timer is None:
            return False
        try:
            return timer.isActive()
        except RuntimeError:
            return False

    def _release(self) -> bool:
        """Drop the timer; False if it was already released."""
        timer = self._timer
        if timer is None:
            return False
        self._timer = None
        self._on_release(self)
        try:
            timer.deleteLater()
        except RuntimeError:
            pass
        return True


class QtScheduler(Scheduler):
    """Scheduler backed by QTimer objects.

    Keeps a strong reference to every live handle so timers are not garbage
    collected before they fire. ``cancel_all`` stops everything still pending.
    """

    def __init__(self, parent: Optional[QObject] = None) -> None:
        self._parent = parent
        self._clock = QElapsedTimer()
        self._clock.start()
        self._handles: Set[QtTimerHandle] = set()

    def now(self) -> float:
        return self._clock.nsecsElapsed() / 1_000_000_000.0

    def single_shot(
        self,
        delay_s: float,
        callback: Callable[[], None],
        description: Optional[str] = None,
    ) -> TimerHandle:
        delay = validate_delay(delay_s, callback)
        desc = describe_callback(callback, description)

        timer = self._new_timer()
        timer.setSingleShot(True)
        handle = QtTimerHandle(timer, desc, self._handles.discard)

        def _invoke() -> None:
            # A queued cross-thread cancel may lose the race with timeout
            if not handle._release():
                return
            try:
                callback()
            except Exception as e:
                logger.exception("[SCHED] Single-shot %r raised: %s", desc, e)

        timer.timeout.connect(_invoke)
        self._handles.add(handle)
        timer.start(max(0, round(delay * 1000)))
        return handle

    def schedule_recurring(
        self,
        interval_s: float,
        callback: Callable[[], None],
        description: Optional[str] = None,
    ) -> TimerHandle:
        interval = validate_interval(interval_s, callback)
        interval_ms = max(1, round(interval * 1000))
        desc = describe_callback(callback, description)
        last_invoke_ts = [0.0]

        def _invoke() -> None:
            if not handle.is_active():
                return
            now = time.monotonic()
            if last_invoke_ts[0] > 0.0 and is_perf_metrics_enabled():
                gap_ms = (now - last_invoke_ts[0]) * 1000.0
                if gap_ms > max(TIMER_GAP_WARN_MIN_MS, interval_ms * 2.0):
                    logger.warning(
                        "[PERF] [TIMER] Large gap for %s: %.2fms (interval=%dms)",
                        desc,
                        gap_ms,
                        interval_ms,
                    )
            last_invoke_ts[0] = now
            try:
                callback()
            except Exception as e:
                logger.exception("[SCHED] Recurring %r raised: %s", desc, e)

        timer = self._new_timer()
        handle = QtTimerHandle(timer, desc, self._handles.discard)
        timer.timeout.connect(_invoke)
        self._handles.add(handle)
        timer.start(interval_ms)
        return handle

    def cancel_all(self) -> int:
        """Cancel every pending timer; returns how many were cancelled."""
        handles = list(self._handles)
        for handle in handles:
            handle.cancel()
        if handles:
            logger.debug("[SCHED] Cancelled %d pending timer(s)", len(handles))
        return len(handles)

    def pending_count(self) -> int:
        return len(self._handles)

    def _new_timer(self) -> QTimer:
        timer = QTimer(self._parent)
        timer.setTimerType(Qt.TimerType.PreciseTimer)
        return timer
