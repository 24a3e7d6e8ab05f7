"""Timing constants for the symbol animation cycle.

All timing values are in seconds. The animation timeline is fixed: these
names are the only place the phase durations and clock period are defined.
"""

# =============================================================================
# Phase Durations
# =============================================================================

FADE_IN_TIME_S = 2.0
"""Length of the FadeIn phase."""

FADE_OUT_TIME_S = 2.0
"""Length of the FadeOut phase."""

TOTAL_DISPLAY_TIME_S = 10.0
"""Length of one full symbol cycle (FadeIn + Stable + FadeOut)."""

STABLE_TIME_S = TOTAL_DISPLAY_TIME_S - FADE_IN_TIME_S - FADE_OUT_TIME_S
"""Length of the Stable phase (6 seconds)."""

# =============================================================================
# Stable Phase Colour Changes
# =============================================================================

COLOR_CHANGES_PER_STABLE = 3
"""Number of colour changes fired during each Stable phase."""

COLOR_CHANGE_INTERVAL_S = STABLE_TIME_S / COLOR_CHANGES_PER_STABLE
"""Spacing between colour changes; the first fires on Stable entry."""

# =============================================================================
# Elapsed-Time Clock
# =============================================================================

CLOCK_TICK_INTERVAL_S = 0.1
"""Period of the free-running elapsed-time ticker."""

CLOCK_TICKS_PER_CYCLE = 100
"""Ticks before the elapsed counter wraps (TOTAL_DISPLAY_TIME_S / tick)."""

# =============================================================================
# Performance Thresholds
# =============================================================================

TIMER_GAP_WARN_MIN_MS = 100.0
"""Smallest recurring-timer gap worth a [PERF] warning."""

__all__ = [
    # Phase durations
    "FADE_IN_TIME_S",
    "FADE_OUT_TIME_S",
    "TOTAL_DISPLAY_TIME_S",
    "STABLE_TIME_S",
    # Colour changes
    "COLOR_CHANGES_PER_STABLE",
    "COLOR_CHANGE_INTERVAL_S",
    # Clock
    "CLOCK_TICK_INTERVAL_S",
    "CLOCK_TICKS_PER_CYCLE",
    # Performance
    "TIMER_GAP_WARN_MIN_MS",
]
