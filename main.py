"""
SymbolCycler - Main Entry Point

Runs the symbol animation engine either live on a Qt event loop (logging
what a renderer would draw) or as an instant simulation on a virtual clock.
"""
import argparse
import random
import signal
import sys
from enum import Enum
from typing import List, Optional, TextIO

from PySide6.QtCore import QCoreApplication, QTimer

from core.events import Event, EventType
from core.logging.logger import setup_logging, get_logger
from core.scheduling import VirtualScheduler
from core.scheduling.qt_scheduler import QtScheduler
from engine.qt_bridge import EngineSignalBridge
from engine.symbol_engine import AnimationEngine
from versioning import APP_EXE_NAME, APP_NAME, APP_VERSION

logger = get_logger(__name__)


class RunMode(Enum):
    """Execution modes selected on the command line."""
    LIVE = "live"            # Real time on the Qt event loop
    SIMULATE = "simulate"    # Virtual clock, runs instantly


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_EXE_NAME,
        description="Cycle symbols through fade-in, stable and fade-out phases.",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="debug logging with console output")
    parser.add_argument("-v", "--verbose", action="store_true", help="also log every clock tick")
    parser.add_argument(
        "--simulate",
        type=float,
        metavar="SECONDS",
        default=None,
        help="run on a virtual clock for SECONDS and print the phase timeline",
    )
    parser.add_argument(
        "--duration",
        type=float,
        metavar="SECONDS",
        default=None,
        help="live mode only: quit after SECONDS instead of running until interrupted",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for the colour generator")
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {APP_VERSION}")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> tuple[RunMode, argparse.Namespace]:
    args = build_arg_parser().parse_args(argv)
    if args.simulate is not None and args.simulate < 0:
        raise SystemExit("--simulate must be >= 0")
    mode = RunMode.SIMULATE if args.simulate is not None else RunMode.LIVE
    return mode, args


def format_timeline_line(t: float, engine: AnimationEngine) -> str:
    state = engine.current_state()
    symbol = state.symbol
    symbol_text = f"{symbol.name} ({symbol.description})" if symbol is not None else "No Symbol"
    return f"t={t:6.1f}s  {state.state_label():<16}  Symbol: {symbol_text:<24}  {state.time_label()}"


def run_simulation(seconds: float, seed: Optional[int] = None, out: Optional[TextIO] = None) -> List[str]:
    """
    Drive the engine on a virtual clock and report every phase change.

    Args:
        seconds: Virtual time to simulate
        seed: Optional seed for colour generation
        out: Stream to print lines to (None = don't print)

    Returns:
        The timeline lines, one per phase entry
    """
    scheduler = VirtualScheduler()
    engine = AnimationEngine(scheduler, rng=random.Random(seed))
    lines: List[str] = []

    def _on_phase(event: Event) -> None:
        line = format_timeline_line(scheduler.now(), engine)
        lines.append(line)
        if out is not None:
            print(line, file=out)

    engine.events.subscribe(EventType.PHASE_CHANGED, _on_phase)
    engine.start()
    scheduler.advance_to(seconds)
    engine.shutdown()

    logger.info("Simulation finished: %.1fs, %d phase changes", seconds, len(lines))
    return lines


def run_live(app: QCoreApplication, duration: Optional[float] = None, seed: Optional[int] = None) -> int:
    """Run the engine in real time until interrupted (or for ``duration``)."""
    scheduler = QtScheduler(parent=app)
    engine = AnimationEngine(scheduler, rng=random.Random(seed))
    bridge = EngineSignalBridge(engine)

    bridge.phase_changed.connect(lambda label: logger.info("State: %s", label))
    bridge.symbol_changed.connect(
        lambda name, description: logger.info("Symbol: %s - Description: %s", name, description)
    )
    bridge.color_changed.connect(lambda hex_color: logger.debug("Colour: %s", hex_color))
    bridge.elapsed_changed.connect(lambda elapsed: logger.debug("Time: %.1fs", elapsed))

    # Qt's loop blocks Python signal handlers; a periodic no-op lets Ctrl+C through
    previous_sigint = signal.signal(signal.SIGINT, lambda *_: app.quit())
    wakeup = QTimer(app)
    wakeup.timeout.connect(lambda: None)
    wakeup.start(200)

    if duration is not None:
        QTimer.singleShot(max(0, int(duration * 1000)), app.quit)

    engine.start()
    try:
        exit_code = app.exec()
    finally:
        engine.shutdown()
        bridge.detach()
        wakeup.stop()
        wakeup.deleteLater()
        scheduler.cancel_all()
        signal.signal(signal.SIGINT, previous_sigint)
    return exit_code


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for SymbolCycler."""
    mode, args = parse_args(argv)
    setup_logging(debug=args.debug, verbose=args.verbose)

    logger.info("=" * 60)
    logger.info("%s %s Starting (mode=%s)", APP_NAME, APP_VERSION, mode.value)
    logger.info("=" * 60)

    exit_code = 0
    try:
        if mode == RunMode.SIMULATE:
            run_simulation(args.simulate, seed=args.seed, out=sys.stdout)
        else:
            app = QCoreApplication.instance() or QCoreApplication(sys.argv if argv is None else [APP_EXE_NAME])
            app.setApplicationName(APP_EXE_NAME)
            app.setApplicationVersion(APP_VERSION)
            exit_code = run_live(app, duration=args.duration, seed=args.seed)
    except Exception as e:
        logger.exception(f"Fatal error in main: {e}")
        exit_code = 1

    logger.info("=" * 60)
    logger.info(f"{APP_NAME} Exiting (code={exit_code})")
    logger.info("=" * 60)

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
