"""Shared test helpers for Workout Timer."""

from workouttimer.notifications import HapticKind
from workouttimer.timer.engine import TimerEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingNotifier:
    """NotificationService double that records every call."""

    def __init__(self, authorized: bool = True):
        self.authorized = authorized
        self.auth_queries = 0
        self.scheduled: list[float] = []
        self.cancels = 0
        self.immediate = 0
        self.haptics: list[HapticKind] = []
        self.pending: float | None = None

    def is_authorized(self) -> bool:
        self.auth_queries += 1
        return self.authorized

    def schedule_completion_alert(self, after_seconds: float) -> None:
        self.scheduled.append(after_seconds)
        self.pending = after_seconds

    def cancel_scheduled_completion_alert(self) -> None:
        self.cancels += 1
        self.pending = None

    def send_immediate_alert(self) -> None:
        self.immediate += 1

    def play_haptic(self, kind: HapticKind) -> None:
        self.haptics.append(kind)

    def count(self, kind: HapticKind) -> int:
        return sum(1 for k in self.haptics if k == kind)


class BrokenNotifier:
    """Every call blows up, as a host that rejects requests might."""

    def is_authorized(self) -> bool:
        raise RuntimeError("notification center unavailable")

    def schedule_completion_alert(self, after_seconds: float) -> None:
        raise RuntimeError("rejected")

    def cancel_scheduled_completion_alert(self) -> None:
        raise RuntimeError("rejected")

    def send_immediate_alert(self) -> None:
        raise RuntimeError("rejected")

    def play_haptic(self, kind: HapticKind) -> None:
        raise RuntimeError("no haptic engine")


def run_for(engine: TimerEngine, clock: FakeClock, seconds: float,
            step: float = 0.25) -> None:
    """Move the clock forward in wake-sized steps, delivering each wake."""
    for _ in range(round(seconds / step)):
        clock.advance(step)
        engine._on_tick()


def run_to_completion(engine: TimerEngine, clock: FakeClock,
                      step: float = 0.25, limit: float = 7200.0) -> None:
    """Deliver wakes until the engine stops running."""
    elapsed = 0.0
    while engine.is_running and elapsed < limit:
        clock.advance(step)
        elapsed += step
        engine._on_tick()
