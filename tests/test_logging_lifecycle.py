"""
Tests for logging setup and the console handler helpers.

Verifies:
- setup_logging() writes to logs/symbolcycler.log under the base dir
- Repeated setup replaces handlers instead of stacking them
- Console output only exists in debug mode
- Consecutive duplicate console lines collapse into a summary
"""
import io
import logging
from logging.handlers import RotatingFileHandler


class TestSetupLogging:
    def test_creates_log_file(self, isolated_logging):
        from core.logging.logger import get_log_dir, setup_logging

        setup_logging()
        logging.getLogger("engine.symbols").info("hello from the engine")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert get_log_dir() == isolated_logging
        log_file = isolated_logging / "symbolcycler.log"
        assert log_file.exists()
        assert "hello from the engine" in log_file.read_text(encoding="utf-8")

    def test_rotation_limits(self, isolated_logging):
        import core.logging.logger as logger_module

        logger_module.setup_logging()
        file_handlers = [h for h in logger_module._INSTALLED_HANDLERS if isinstance(h, RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == 1024 * 1024
        assert file_handlers[0].backupCount == 5

    def test_repeated_setup_does_not_stack_handlers(self, isolated_logging):
        import core.logging.logger as logger_module

        root = logging.getLogger()
        baseline = len(root.handlers)
        for _ in range(3):
            logger_module.setup_logging(debug=True)
            assert len(logger_module._INSTALLED_HANDLERS) == 2
            assert len(root.handlers) == baseline + 2

    def test_console_only_in_debug(self, isolated_logging):
        import core.logging.logger as logger_module

        logger_module.setup_logging(debug=False)
        assert not any(
            isinstance(h, logger_module.SuppressingStreamHandler) for h in logger_module._INSTALLED_HANDLERS
        )
        assert logging.getLogger().level == logging.INFO

        logger_module.setup_logging(debug=True)
        assert any(
            isinstance(h, logger_module.SuppressingStreamHandler) for h in logger_module._INSTALLED_HANDLERS
        )
        assert logging.getLogger().level == logging.DEBUG

    def test_verbose_implies_debug(self, isolated_logging):
        from core.logging.logger import is_verbose_logging, setup_logging

        setup_logging(verbose=True)
        assert is_verbose_logging()
        assert logging.getLogger().level == logging.DEBUG


class TestGetLogger:
    def test_short_name_overrides(self):
        from core.logging.logger import get_logger

        assert get_logger("engine.symbol_engine").name == "engine.symbols"
        assert get_logger("core.scheduling.virtual_scheduler").name == "scheduling.virtual"
        assert get_logger("main").name == "main"


class TestSuppressingStreamHandler:
    def _handler(self):
        from core.logging.logger import SuppressingStreamHandler

        stream = io.StringIO()
        handler = SuppressingStreamHandler(stream)
        handler.setFormatter(logging.Formatter("%(name)s %(levelname)s %(message)s"))
        return handler, stream

    def _record(self, name, level, msg):
        return logging.LogRecord(name, level, __file__, 1, msg, None, None)

    def test_collapses_repeated_source(self):
        handler, stream = self._handler()
        for i in range(4):
            handler.emit(self._record("engine.symbols", logging.DEBUG, f"Clock {i}"))
        handler.emit(self._record("scheduling.qt", logging.DEBUG, "other"))

        lines = stream.getvalue().splitlines()
        assert lines == [
            "engine.symbols DEBUG Clock 0",
            "engine.symbols DEBUG [3 Suppressed: CHECK LOG]",
            "scheduling.qt DEBUG other",
        ]

    def test_warnings_always_pass_through(self):
        handler, stream = self._handler()
        handler.emit(self._record("engine.symbols", logging.WARNING, "first"))
        handler.emit(self._record("engine.symbols", logging.WARNING, "second"))

        assert stream.getvalue().splitlines() == [
            "engine.symbols WARNING first",
            "engine.symbols WARNING second",
        ]

    def test_close_flushes_pending_summary(self):
        handler, stream = self._handler()
        handler.emit(self._record("engine.symbols", logging.INFO, "a"))
        handler.emit(self._record("engine.symbols", logging.INFO, "b"))
        handler.close()

        assert "[1 Suppressed: CHECK LOG]" in stream.getvalue()


class TestColoredFormatter:
    def test_perf_lines_get_perf_colour(self):
        from core.logging.logger import ColoredFormatter

        formatter = ColoredFormatter("%(levelname)s %(message)s")
        record = logging.LogRecord("scheduling.qt", logging.WARNING, __file__, 1, "[PERF] [TIMER] gap", None, None)
        formatted = formatter.format(record)

        assert formatted.startswith(ColoredFormatter.PERF_COLOR)
        assert record.levelname == "WARNING"
