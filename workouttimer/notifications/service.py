"""Notification/haptic contract the timer engine depends on.

The engine never talks to a platform service directly; it is handed
something that satisfies :class:`NotificationService`.  Tests use a
recording fake, the console runner uses
:class:`~workouttimer.notifications.desktop.DesktopNotificationService`.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable


class HapticKind(Enum):
    COUNTDOWN_TICK = "countdown_tick"  # light pulse, once per second near the end
    COMPLETION = "completion"          # stronger pulse when the run finishes


# ── alert content ─────────────────────────────────────────────────────────

COMPLETION_ALERT_ID = "WorkoutTimerCompletion"
IMMEDIATE_ALERT_PREFIX = "WorkoutTimerImmediate"

ALERT_TITLE = "Workout Timer"
SCHEDULED_ALERT_BODY = "Timer finished."
IMMEDIATE_ALERT_BODY = "Your timer has completed."


@runtime_checkable
class NotificationService(Protocol):
    """Capabilities the engine needs from the host."""

    def is_authorized(self) -> bool:
        """Whether alerts may be scheduled at all."""
        ...

    def schedule_completion_alert(self, after_seconds: float) -> None:
        """Schedule the completion alert under ``COMPLETION_ALERT_ID``.

        Scheduling again replaces whatever is pending under that id.
        """
        ...

    def cancel_scheduled_completion_alert(self) -> None:
        """Drop the pending completion alert.  Safe when none is pending."""
        ...

    def send_immediate_alert(self) -> None:
        """Deliver a completion alert now, under a fresh unique id."""
        ...

    def play_haptic(self, kind: HapticKind) -> None:
        ...


class NullNotificationService:
    """Does nothing.  Used when the engine is built without a notifier."""

    def is_authorized(self) -> bool:
        return False

    def schedule_completion_alert(self, after_seconds: float) -> None:
        pass

    def cancel_scheduled_completion_alert(self) -> None:
        pass

    def send_immediate_alert(self) -> None:
        pass

    def play_haptic(self, kind: HapticKind) -> None:
        pass
