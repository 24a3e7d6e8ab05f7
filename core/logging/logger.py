"""
Centralized logging configuration for SymbolCycler.

Uses rotating file handler with logs stored in logs/ directory.
Includes colored console output for debug mode.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path


_VERBOSE: bool = False
_PERF_METRICS_ENABLED: bool = True
# Base directory for logs. Defaults to the project root; setup_logging()
# moves it next to the executable for frozen builds.
_BASE_DIR: Path = Path(__file__).parent.parent.parent
# Handlers installed by setup_logging() so a second call replaces them
# instead of stacking duplicates on the root logger.
_INSTALLED_HANDLERS: list[logging.Handler] = []

_LOG_FORMAT = '%(asctime)s - %(name)-24s - %(levelname)-8s - %(message)s'

_env_perf = os.getenv("SYMBOLCYCLER_PERF_METRICS")
if _env_perf is not None:
    if _env_perf.strip().lower() in ("0", "false", "off", "no"):
        _PERF_METRICS_ENABLED = False
    elif _env_perf.strip().lower() in ("1", "true", "on", "yes"):
        _PERF_METRICS_ENABLED = True


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors to console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',       # Cyan
        'INFO': '\033[32m',        # Green
        'WARNING': '\033[33m',     # Yellow
        'ERROR': '\033[31m',       # Red
        'CRITICAL': '\033[35m',    # Magenta
    }
    PERF_COLOR = '\033[38;5;208m'
    RESET = '\033[0m'
    BOLD = '\033[1m'

    def format(self, record):
        original_levelname = record.levelname

        color = None
        if '[PERF]' in str(record.msg):
            color = self.PERF_COLOR
        elif record.levelname in self.COLORS:
            color = self.COLORS[record.levelname]

        if color is None:
            return super().format(record)

        record.levelname = f"{self.BOLD}{color}{record.levelname}{self.RESET}"
        try:
            message = super().format(record)
        finally:
            record.levelname = original_levelname
        return f"{color}{message}{self.RESET}"


class SuppressingStreamHandler(logging.StreamHandler):
    """Stream handler that suppresses consecutive duplicate sources.

    Repeated DEBUG/INFO lines from the same logger/level are collapsed into a
    single summary line like "[N Suppressed: CHECK LOG]" while file logs
    remain unaffected. The 10 Hz clock tick is the main offender.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._last_name: str | None = None
        self._last_level: int | None = None
        self._suppress_count: int = 0
        self._last_record: logging.LogRecord | None = None

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._emit_with_suppression(record)
        except Exception:
            self.handleError(record)

    def _emit_with_suppression(self, record: logging.LogRecord) -> None:
        if record.levelno >= logging.WARNING:
            self._flush_summary()
            super().emit(record)
            self._last_name = None
            self._last_level = None
            return

        if record.name == self._last_name and record.levelno == self._last_level:
            self._suppress_count += 1
            self._last_record = record
            return

        self._flush_summary()
        super().emit(record)
        self._last_name = record.name
        self._last_level = record.levelno
        self._last_record = record

    def _flush_summary(self) -> None:
        last = self._last_record
        count = self._suppress_count
        self._suppress_count = 0
        if count <= 0 or last is None:
            return

        summary = logging.LogRecord(
            last.name,
            last.levelno,
            last.pathname,
            last.lineno,
            f"[{count} Suppressed: CHECK LOG]",
            args=None,
            exc_info=None,
        )
        summary.created = last.created
        summary.msecs = last.msecs
        summary.relativeCreated = last.relativeCreated
        super().emit(summary)

    def close(self) -> None:
        try:
            self._flush_summary()
        finally:
            super().close()


def get_log_dir() -> Path:
    """Return the directory used for log files.

    setup_logging() should be called once at startup so that _BASE_DIR is
    updated for frozen builds and the returned path matches the location used
    by the active RotatingFileHandler.
    """

    return _BASE_DIR / "logs"


def setup_logging(debug: bool = False, verbose: bool = False) -> None:
    """
    Configure application logging with file rotation.

    Args:
        debug: If True, set log level to DEBUG and enable console output.
        verbose: When True, also log every clock tick and snapshot publish.
            Verbose mode implies debug-level logging.
    """
    global _VERBOSE, _BASE_DIR

    debug_enabled = debug or verbose

    # Frozen builds keep logs/ next to the executable.
    if getattr(sys, "frozen", False):
        exe_path = Path(getattr(sys, "executable", "") or "")
        if exe_path.exists():
            _BASE_DIR = exe_path.parent

    log_dir = get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "symbolcycler.log"

    level = logging.DEBUG if debug_enabled else logging.INFO

    formatter = logging.Formatter(_LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    # File handler with rotation (1MB max, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(level)

    root_logger = logging.getLogger()
    for handler in _INSTALLED_HANDLERS:
        root_logger.removeHandler(handler)
        handler.close()
    _INSTALLED_HANDLERS.clear()

    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)
    _INSTALLED_HANDLERS.append(file_handler)

    if debug_enabled:
        console_handler = SuppressingStreamHandler(sys.stdout)
        if sys.stdout.isatty():
            console_handler.setFormatter(ColoredFormatter(_LOG_FORMAT, datefmt='%H:%M:%S'))
        else:
            console_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt='%H:%M:%S'))
        console_handler.setLevel(level)
        root_logger.addHandler(console_handler)
        _INSTALLED_HANDLERS.append(console_handler)

    _VERBOSE = bool(verbose)

    root_logger.info("=" * 60)
    root_logger.info(
        "SymbolCycler logging initialized (debug=%s, verbose=%s)",
        debug_enabled,
        _VERBOSE,
    )
    root_logger.info("=" * 60)


_SHORT_NAME_OVERRIDES = {
    "engine.symbol_engine": "engine.symbols",
    "engine.qt_bridge": "engine.bridge",
    "core.scheduling.qt_scheduler": "scheduling.qt",
    "core.scheduling.virtual_scheduler": "scheduling.virtual",
}


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with optional short-name overrides for noisy modules."""
    actual = _SHORT_NAME_OVERRIDES.get(name, name)
    return logging.getLogger(actual)


def is_verbose_logging() -> bool:
    """Return True when verbose debug logging is enabled globally."""

    return _VERBOSE


def is_perf_metrics_enabled() -> bool:
    """Return True when PERF metrics/telemetry are enabled globally."""

    return _PERF_METRICS_ENABLED
