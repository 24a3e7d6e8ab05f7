"""
Shared pytest fixtures for SymbolCycler tests.
"""
import logging
import random
import sys

import pytest
from PySide6.QtCore import QCoreApplication


@pytest.fixture(scope='session')
def qt_app():
    """Create QCoreApplication instance for tests that need an event loop."""
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication(sys.argv)
    yield app
    # Don't quit - causes issues with pytest


@pytest.fixture
def event_system():
    """Create EventSystem instance for testing."""
    from core.events import EventSystem
    system = EventSystem()
    yield system
    system.clear()


@pytest.fixture
def virtual_scheduler():
    """Scheduler whose clock only moves when the test advances it."""
    from core.scheduling import VirtualScheduler
    return VirtualScheduler()


@pytest.fixture
def engine(virtual_scheduler, event_system):
    """AnimationEngine on a virtual clock with a seeded colour generator."""
    from engine.symbol_engine import AnimationEngine
    eng = AnimationEngine(virtual_scheduler, event_system=event_system, rng=random.Random(1234))
    yield eng
    eng.shutdown()


@pytest.fixture
def isolated_logging(tmp_path, monkeypatch):
    """Point setup_logging() at a temp dir and remove its handlers afterwards."""
    import core.logging.logger as logger_module

    monkeypatch.setattr(logger_module, "_BASE_DIR", tmp_path)
    root = logging.getLogger()
    previous_level = root.level
    yield tmp_path / "logs"
    for handler in list(logger_module._INSTALLED_HANDLERS):
        root.removeHandler(handler)
        handler.close()
    logger_module._INSTALLED_HANDLERS.clear()
    monkeypatch.setattr(logger_module, "_VERBOSE", False)
    root.setLevel(previous_level)
