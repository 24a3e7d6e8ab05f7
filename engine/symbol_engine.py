"""
Symbol animation engine - the phase state machine.

The AnimationEngine cycles through the symbol catalog forever:
- FadeIn: opacity 0 -> 1, scale 0.2 -> 1.0 (ease-in), 2s
- Stable: held at full size, three random colours 2s apart, 6s
- FadeOut: opacity 1 -> 0, scale 1.0 -> 0.2 (ease-out), 2s
then picks the next symbol. Alongside it a free-running 100ms clock counts
elapsed display time and wraps every 10s.

All timing goes through a Scheduler, so the same engine runs on the Qt event
loop (QtScheduler) or on a virtual clock (VirtualScheduler).
"""
from __future__ import annotations

import random
from functools import partial
from typing import Callable, List, Optional, Sequence

from core.animation.tween import Tween
from core.animation.types import (
    BLACK,
    AnimationState,
    Color,
    EasingCurve,
    EngineStatus,
    Phase,
    Symbol,
)
from core.constants.sizes import OPACITY_HIDDEN, OPACITY_VISIBLE, SCALE_MAX, SCALE_MIN
from core.constants.timing import (
    CLOCK_TICK_INTERVAL_S,
    CLOCK_TICKS_PER_CYCLE,
    COLOR_CHANGE_INTERVAL_S,
    COLOR_CHANGES_PER_STABLE,
)
from core.events import Event, EventSystem, EventType
from core.logging.logger import get_logger, is_verbose_logging
from core.scheduling.scheduler import Scheduler, TimerHandle
from engine.catalog import build_catalog

logger = get_logger(__name__)

FADE_IN_EASING = EasingCurve.QUAD_IN
FADE_OUT_EASING = EasingCurve.QUAD_OUT


class AnimationEngine:
    """
    Drives the symbol display cycle and publishes state snapshots.

    The engine owns the catalog, the current index and phase, the phase
    tweens and the elapsed-time clock. Consumers either poll
    ``current_state()`` or subscribe to pushed snapshots; they never mutate
    engine state.

    Every phase entry bumps a generation counter and cancels the callbacks
    scheduled by the previous phase, so a late timer can never advance the
    wrong phase.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        event_system: Optional[EventSystem] = None,
        rng: Optional[random.Random] = None,
        catalog: Optional[Sequence[Symbol]] = None,
    ):
        """
        Initialize the engine. Nothing is scheduled until start().

        Args:
            scheduler: Clock and timer source for every callback
            event_system: Where snapshots and change events are published;
                a private EventSystem is created when omitted
            rng: Random source for Stable-phase colours
            catalog: Symbols to cycle through, defaults to the fixed catalog
        """
        self._scheduler = scheduler
        self._events = event_system if event_system is not None else EventSystem()
        self._rng = rng if rng is not None else random.Random()
        self._catalog = tuple(catalog) if catalog is not None else build_catalog()
        if not self._catalog:
            raise ValueError("AnimationEngine requires at least one symbol")

        self._status = EngineStatus.IDLE

        # Index of the next symbol to show; wraps when a FadeIn begins
        self._next_index = 0
        self._symbol: Optional[Symbol] = None
        self._symbol_index = -1

        self._phase = Phase.FADE_IN
        self._phase_started_at = 0.0
        self._generation = 0
        self._opacity = Tween.hold(OPACITY_HIDDEN)
        self._scale = Tween.hold(SCALE_MIN)
        self._color: Color = BLACK

        self._ticks = 0

        self._phase_timers: List[TimerHandle] = []
        self._clock_timer: Optional[TimerHandle] = None

        logger.debug("[ENGINE] AnimationEngine created (symbols=%d)", len(self._catalog))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def status(self) -> EngineStatus:
        return self._status

    @property
    def events(self) -> EventSystem:
        return self._events

    @property
    def catalog(self) -> tuple[Symbol, ...]:
        return self._catalog

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def phase_started_at(self) -> float:
        """Scheduler time at which the current phase began."""
        return self._phase_started_at

    def start(self) -> None:
        """
        Begin the display cycle. Single use per engine.

        Shows the first symbol, schedules its FadeIn and starts the elapsed
        clock. Calling again, or after shutdown(), only logs a warning.
        """
        if self._status is EngineStatus.RUNNING:
            logger.warning("[ENGINE] start() called while already running; ignoring")
            return
        if self._status is EngineStatus.STOPPED:
            logger.warning("[ENGINE] start() called after shutdown; ignoring")
            return

        self._status = EngineStatus.RUNNING
        logger.info("[ENGINE] Starting symbol cycle (%d symbols)", len(self._catalog))
        self._events.publish(EventType.ENGINE_STARTED, source=self)
        if self._status is not EngineStatus.RUNNING:
            return

        # Created before any phase timer so a tick due at the same instant as a
        # phase boundary always runs first
        self._clock_timer = self._scheduler.schedule_recurring(
            CLOCK_TICK_INTERVAL_S,
            self._on_clock_tick,
            description="elapsed clock",
        )
        self._move_to_next_symbol()

    def shutdown(self) -> None:
        """Cancel every pending callback. The engine cannot be restarted."""
        if self._status is EngineStatus.STOPPED:
            return

        self._cancel_phase_timers()
        if self._clock_timer is not None:
            self._clock_timer.cancel()
            self._clock_timer = None

        was_running = self._status is EngineStatus.RUNNING
        self._status = EngineStatus.STOPPED
        if was_running:
            self._events.publish(EventType.ENGINE_STOPPED, source=self)
        logger.info("[ENGINE] Symbol cycle stopped")

    def current_state(self) -> AnimationState:
        """Latest snapshot, with opacity/scale sampled at the scheduler's now."""
        now = self._scheduler.now()
        return AnimationState(
            symbol=self._symbol,
            symbol_index=self._symbol_index,
            phase=self._phase,
            opacity=self._opacity.value_at(now),
            scale=self._scale.value_at(now),
            color=self._color,
            elapsed=self._ticks * CLOCK_TICK_INTERVAL_S,
        )

    def subscribe(self, callback: Callable[[AnimationState], None], priority: int = 50) -> str:
        """
        Receive every snapshot the engine publishes.

        Returns:
            Subscription ID for unsubscribe()
        """
        if not callable(callback):
            raise ValueError("Callback must be callable")

        def _deliver(event: Event) -> None:
            callback(event.data)

        return self._events.subscribe(EventType.STATE_CHANGED, _deliver, priority=priority)

    def unsubscribe(self, subscription_id: str) -> bool:
        return self._events.unsubscribe(subscription_id)

    # ------------------------------------------------------------------
    # Phase state machine
    # ------------------------------------------------------------------

    def _move_to_next_symbol(self) -> None:
        if self._next_index >= len(self._catalog):
            self._next_index = 0

        index = self._next_index % len(self._catalog)
        self._next_index += 1
        self._symbol = self._catalog[index]
        self._symbol_index = index
        self._color = BLACK
        self._ticks = 0

        logger.info(
            "[ENGINE] Symbol %d/%d: %s (%s)",
            index + 1,
            len(self._catalog),
            self._symbol.name,
            self._symbol.description,
        )
        self._events.publish(EventType.SYMBOL_CHANGED, self._symbol, source=self)
        if self._status is not EngineStatus.RUNNING:
            return
        self._enter_phase(Phase.FADE_IN)

    def _enter_phase(self, phase: Phase) -> None:
        self._cancel_phase_timers()
        if self._status is not EngineStatus.RUNNING:
            return
        self._generation += 1
        generation = self._generation

        now = self._scheduler.now()
        self._phase = phase
        self._phase_started_at = now

        if phase is Phase.FADE_IN:
            self._opacity = Tween(OPACITY_HIDDEN, OPACITY_VISIBLE, phase.duration, now, FADE_IN_EASING)
            self._scale = Tween(SCALE_MIN, SCALE_MAX, phase.duration, now, FADE_IN_EASING)
        elif phase is Phase.STABLE:
            self._opacity = Tween.hold(OPACITY_VISIBLE, now)
            self._scale = Tween.hold(SCALE_MAX, now)
            for step in range(COLOR_CHANGES_PER_STABLE):
                self._phase_timers.append(
                    self._scheduler.single_shot(
                        step * COLOR_CHANGE_INTERVAL_S,
                        partial(self._on_color_change, generation, step),
                        description=f"colour change {step + 1}/{COLOR_CHANGES_PER_STABLE}",
                    )
                )
        else:
            self._opacity = Tween(OPACITY_VISIBLE, OPACITY_HIDDEN, phase.duration, now, FADE_OUT_EASING)
            self._scale = Tween(SCALE_MAX, SCALE_MIN, phase.duration, now, FADE_OUT_EASING)

        self._phase_timers.append(
            self._scheduler.single_shot(
                phase.duration,
                partial(self._on_phase_timer, generation),
                description=f"phase advance ({phase.label})",
            )
        )

        logger.debug("[ENGINE] Phase -> %s at t=%.3f", phase.label, now)
        self._events.publish(EventType.PHASE_CHANGED, phase, source=self)
        if self._status is EngineStatus.RUNNING:
            self._publish_state()

    def _on_phase_timer(self, generation: int) -> None:
        if not self._is_current(generation):
            logger.debug("[ENGINE] Dropping stale phase timer (generation %d)", generation)
            return

        next_phase = self._phase.next()
        if next_phase is Phase.FADE_IN:
            self._move_to_next_symbol()
        else:
            self._enter_phase(next_phase)

    def _on_color_change(self, generation: int, step: int) -> None:
        if not self._is_current(generation) or self._phase is not Phase.STABLE:
            logger.debug("[ENGINE] Dropping stale colour change %d", step)
            return

        self._color = Color.random(self._rng)
        logger.debug("[ENGINE] Colour %d -> %s", step + 1, self._color.to_hex())
        self._events.publish(EventType.COLOR_CHANGED, self._color, source=self)
        self._publish_state()

    # ------------------------------------------------------------------
    # Elapsed clock
    # ------------------------------------------------------------------

    def _on_clock_tick(self) -> None:
        if self._status is not EngineStatus.RUNNING:
            return

        self._ticks += 1
        if self._ticks >= CLOCK_TICKS_PER_CYCLE:
            self._ticks = 0

        elapsed = self._ticks * CLOCK_TICK_INTERVAL_S
        if is_verbose_logging():
            logger.debug("[ENGINE] Clock %.1fs", elapsed)
        self._events.publish(EventType.CLOCK_TICK, elapsed, source=self)
        self._publish_state()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _is_current(self, generation: int) -> bool:
        return self._status is EngineStatus.RUNNING and generation == self._generation

    def _cancel_phase_timers(self) -> None:
        for handle in self._phase_timers:
            handle.cancel()
        self._phase_timers.clear()

    def _publish_state(self) -> None:
        self._events.publish(EventType.STATE_CHANGED, self.current_state(), source=self)
