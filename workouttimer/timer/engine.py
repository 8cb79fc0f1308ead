"""Countdown state machine for Workout Timer.

States
------
IDLE        Not running.  ``remaining`` is the full duration, a paused
            partial value, or 0 right after a natural finish.
RUNNING     Counting down.  Exactly one tick loop is alive.
COMPLETED   Momentary: emitted while completion side effects fire,
            immediately followed by IDLE.

Transitions
-----------
IDLE → RUNNING           (start / toggle)
RUNNING → IDLE           (pause / toggle / reset)
RUNNING → COMPLETED      (remaining reaches 0)
COMPLETED → IDLE         (automatic)
Any → IDLE               (reset)

Ticking
-------
The wake timer fires every ``tick_interval_ms`` (250 ms) so haptics land
close to the second boundary, but ``remaining`` only moves in whole
seconds.  Elapsed time is read from a monotonic clock rather than counted
per wake, so scheduling jitter never accumulates.

Everything runs on the Qt thread that owns the engine, so a ``pause()``
from the UI and a tick commit can never interleave.
"""

from __future__ import annotations

import logging
import math
import time
from datetime import datetime
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..notifications import HapticKind, NotificationService, NullNotificationService

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class TimerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_DURATION = 60.0  # seconds
MIN_DURATION = 1.0
TICK_INTERVAL_MS = 250
COMMIT_INTERVAL = 1.0  # seconds of elapsed time per committed decrement
COUNTDOWN_WINDOW = 10  # last N seconds get a haptic per second


def format_seconds(seconds: float) -> str:
    """Render *seconds* as ``MM:SS``, rounding half-up to whole seconds.

    Minutes are not wrapped, so an hour reads ``60:00``.
    """
    total = int(math.floor(max(0.0, seconds) + 0.5))
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"


# ── tick loop ─────────────────────────────────────────────────────────────


class _TickLoop:
    """One run's wake timer plus its cancellation flag.

    A cancelled loop is never restarted; ``start()`` always builds a new
    one.
    """

    def __init__(
        self,
        owner: "TimerEngine",
        interval_ms: int,
        started_at: float,
    ) -> None:
        self.cancelled = False
        self.last_commit = started_at
        self._timer = QTimer(owner)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(owner._on_tick)

    def start(self) -> None:
        self._timer.start()

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        try:
            self._timer.stop()
            self._timer.deleteLater()
        except RuntimeError:
            # The host already destroyed the Qt timer; nothing left to stop.
            logger.debug("tick timer already deleted")


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Single-session countdown timer with haptic and alert side effects.

    Signals
    -------
    duration_changed(seconds: float)
    remaining_changed(seconds: float)
    running_changed(is_running: bool)
    progress_changed(progress: float)
        Each fires synchronously whenever the committed value changes.
    state_changed(new_state: TimerState)
        Emitted on every state transition, including the momentary
        COMPLETED.
    session_completed(data: dict)
        Emitted after a run finishes naturally.  Keys:
        ``duration_seconds``, ``start_time``, ``end_time``.
    """

    duration_changed = pyqtSignal(float)
    remaining_changed = pyqtSignal(float)
    running_changed = pyqtSignal(bool)
    progress_changed = pyqtSignal(float)
    state_changed = pyqtSignal(object)
    session_completed = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        notifier: NotificationService | None = None,
        duration: float = DEFAULT_DURATION,
        tick_interval_ms: int = TICK_INTERVAL_MS,
        countdown_window: int = COUNTDOWN_WINDOW,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(parent)

        # ── collaborators ─────────────────────────────────────────────
        self._notifier: NotificationService = notifier or NullNotificationService()
        self._clock = clock

        # ── configuration ─────────────────────────────────────────────
        self._tick_interval_ms: int = max(1, tick_interval_ms)
        self._countdown_window: int = countdown_window

        # ── session state ─────────────────────────────────────────────
        if not math.isfinite(duration):
            duration = DEFAULT_DURATION
        self._duration: float = max(MIN_DURATION, float(duration))
        self._remaining: float = self._duration
        self._is_running: bool = False
        self._progress: float = 0.0
        self._state: TimerState = TimerState.IDLE
        self._start_time: datetime | None = None

        # Exclusively owned; replaced only after the previous one is cancelled.
        self._tick_loop: _TickLoop | None = None

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def duration(self) -> float:
        """Configured session length in seconds (always >= 1)."""
        return self._duration

    @property
    def remaining(self) -> float:
        """Seconds left on the clock."""
        return self._remaining

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def progress(self) -> float:
        """0.0 → 1.0 progress through the current session."""
        return self._progress

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def notifier(self) -> NotificationService:
        return self._notifier

    def formatted_remaining(self) -> str:
        """Remaining time as ``MM:SS``."""
        return format_seconds(self._remaining)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def set_duration(self, seconds: float) -> None:
        """Set a new session length.  Ignored while running."""
        if self._is_running:
            logger.debug("set_duration(%s) ignored while running", seconds)
            return
        if not math.isfinite(seconds):
            logger.debug("set_duration(%s) ignored: not finite", seconds)
            return
        duration = max(MIN_DURATION, float(seconds))
        duration_moved = duration != self._duration
        remaining_moved = duration != self._remaining
        # Commit both before notifying so observers never see remaining > duration.
        self._duration = duration
        self._remaining = duration
        if duration_moved:
            self.duration_changed.emit(duration)
        if remaining_moved:
            self.remaining_changed.emit(duration)
        self._update_progress()

    def start(self) -> None:
        """Begin (or resume) counting down.  No-op while running."""
        if self._is_running:
            logger.debug("start ignored: already running")
            return

        # A finished run starts over rather than completing again at once.
        if self._remaining <= 0:
            self._set_remaining(self._duration)
            self._update_progress()

        self._start_time = datetime.now()
        self._schedule_completion_alert()
        self._spawn_tick_loop()
        self._set_running(True)
        self._set_state(TimerState.RUNNING)
        logger.debug("started with %.1fs remaining", self._remaining)

    def pause(self) -> None:
        """Freeze the countdown.  No-op when not running."""
        if not self._is_running:
            return
        self._cancel_tick_loop()
        self._cancel_completion_alert()
        self._set_running(False)
        self._set_state(TimerState.IDLE)
        logger.debug("paused with %.1fs remaining", self._remaining)

    def reset(self) -> None:
        """Stop and restore the full duration.  Always allowed."""
        self._cancel_tick_loop()
        self._cancel_completion_alert()
        self._start_time = None
        self._set_running(False)
        self._set_remaining(self._duration)
        self._update_progress()
        self._set_state(TimerState.IDLE)
        logger.debug("reset to %.1fs", self._duration)

    def toggle(self) -> None:
        if self._is_running:
            self.pause()
        else:
            self.start()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _spawn_tick_loop(self) -> None:
        self._cancel_tick_loop()
        loop = _TickLoop(self, self._tick_interval_ms, self._clock())
        self._tick_loop = loop
        loop.start()

    def _cancel_tick_loop(self) -> None:
        loop, self._tick_loop = self._tick_loop, None
        if loop is not None:
            loop.cancel()

    def _owns_session(self, loop: _TickLoop) -> bool:
        """False once a slot has paused, reset or restarted mid-wake."""
        return not loop.cancelled and self._tick_loop is loop and self._is_running

    def _on_tick(self) -> None:
        loop = self._tick_loop
        if loop is None or not self._owns_session(loop):
            return

        now = self._clock()
        elapsed = now - loop.last_commit
        if elapsed >= COMMIT_INTERVAL:
            whole = math.floor(elapsed)
            # Advance by whole seconds only; the fraction rolls into the next commit.
            loop.last_commit += whole
            self._set_remaining(max(0.0, self._remaining - whole))
            if not self._owns_session(loop):
                return
            self._update_progress()
            if not self._owns_session(loop):
                return

            if 0 < self._remaining <= self._countdown_window:
                self._play_haptic(HapticKind.COUNTDOWN_TICK)

        if self._remaining <= 0 and self._owns_session(loop):
            self._finish_session(loop)

    def _finish_session(self, loop: _TickLoop) -> None:
        end_time = datetime.now()

        # The loop stays attached until the side effects have fired, so a
        # pause/reset from a COMPLETED slot still cancels them.
        self._set_remaining(0.0)
        self._update_progress()
        if not self._owns_session(loop):
            return
        self._set_state(TimerState.COMPLETED)
        if not self._owns_session(loop):
            return
        self._play_haptic(HapticKind.COMPLETION)
        if not self._owns_session(loop):
            return
        # Fallback in case the host dropped the scheduled alert.
        self._send_immediate_alert()

        self._tick_loop = None
        loop.cancel()
        self._set_running(False)

        logger.info("session of %.0fs completed", self._duration)
        self.session_completed.emit({
            "duration_seconds": self._duration,
            "start_time": self._start_time,
            "end_time": end_time,
        })
        self._start_time = None
        self._set_state(TimerState.IDLE)

    # ── committed state ───────────────────────────────────────────────

    def _set_remaining(self, value: float) -> None:
        value = min(max(0.0, value), self._duration)
        if value == self._remaining:
            return
        self._remaining = value
        self.remaining_changed.emit(value)

    def _update_progress(self) -> None:
        if self._duration <= 0:
            progress = 0.0
        else:
            progress = max(0.0, min(1.0, 1.0 - self._remaining / self._duration))
        if progress == self._progress:
            return
        self._progress = progress
        self.progress_changed.emit(progress)

    def _set_running(self, running: bool) -> None:
        if running == self._is_running:
            return
        self._is_running = running
        self.running_changed.emit(running)

    def _set_state(self, new_state: TimerState) -> None:
        if new_state == self._state:
            return
        self._state = new_state
        self.state_changed.emit(new_state)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: notification side effects
    # ══════════════════════════════════════════════════════════════════
    # The scheduled alert is never guaranteed, so every failure here is
    # logged and swallowed.

    def _schedule_completion_alert(self) -> None:
        try:
            if not self._notifier.is_authorized():
                logger.debug("notifications not authorized; nothing scheduled")
                return
            self._notifier.schedule_completion_alert(max(1.0, self._remaining))
        except Exception:
            logger.warning("could not schedule completion alert", exc_info=True)

    def _cancel_completion_alert(self) -> None:
        try:
            self._notifier.cancel_scheduled_completion_alert()
        except Exception:
            logger.warning("could not cancel completion alert", exc_info=True)

    def _send_immediate_alert(self) -> None:
        try:
            self._notifier.send_immediate_alert()
        except Exception:
            logger.warning("could not send completion alert", exc_info=True)

    def _play_haptic(self, kind: HapticKind) -> None:
        try:
            self._notifier.play_haptic(kind)
        except Exception:
            logger.warning("haptic %s failed", kind.value, exc_info=True)
