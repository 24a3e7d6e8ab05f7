"""Timer scheduling for the animation engine.

The Qt-backed implementation lives in ``core.scheduling.qt_scheduler`` and is
imported explicitly by hosts that run a Qt event loop.
"""

from .scheduler import Scheduler, TimerHandle
from .virtual_scheduler import VirtualScheduler

__all__ = ['Scheduler', 'TimerHandle', 'VirtualScheduler']
