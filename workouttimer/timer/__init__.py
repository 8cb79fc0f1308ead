"""Timer package."""

from .engine import (
    TimerEngine,
    TimerState,
    DEFAULT_DURATION,
    MIN_DURATION,
    TICK_INTERVAL_MS,
    COUNTDOWN_WINDOW,
    format_seconds,
)

__all__ = [
    "TimerEngine",
    "TimerState",
    "DEFAULT_DURATION",
    "MIN_DURATION",
    "TICK_INTERVAL_MS",
    "COUNTDOWN_WINDOW",
    "format_seconds",
]
