"""Desktop notification service: tray alerts plus sound-based "haptics".

Alerts go out through a ``QSystemTrayIcon`` when the host has a tray.
Without one they are only logged, but ``alert_delivered`` still fires so
callers (and tests) can observe delivery either way.

Desktops have no vibration motor, so each :class:`HapticKind` maps to a
short synthesized sound played by :class:`SoundManager`.
"""

from __future__ import annotations

import logging
import uuid

from PyQt6.QtCore import QObject, QTimer, pyqtSignal
from PyQt6.QtWidgets import QSystemTrayIcon

from ..audio.sounds import SoundManager
from .service import (
    ALERT_TITLE,
    COMPLETION_ALERT_ID,
    IMMEDIATE_ALERT_BODY,
    IMMEDIATE_ALERT_PREFIX,
    SCHEDULED_ALERT_BODY,
    HapticKind,
)

logger = logging.getLogger(__name__)


_HAPTIC_SOUNDS: dict[HapticKind, str] = {
    HapticKind.COUNTDOWN_TICK: "countdown_tick",
    HapticKind.COMPLETION: "completion",
}


class DesktopNotificationService(QObject):
    """Satisfies ``NotificationService`` on a desktop Qt host.

    Signals
    -------
    alert_delivered(identifier: str, title: str, body: str)
        Emitted whenever an alert (scheduled or immediate) goes out.
    """

    alert_delivered = pyqtSignal(str, str, str)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        enabled: bool = True,
        tray_icon: QSystemTrayIcon | None = None,
        sound_manager: SoundManager | None = None,
        haptics_enabled: bool = True,
    ) -> None:
        super().__init__(parent)
        self._enabled = enabled
        self._tray_icon = tray_icon
        self._sound_manager = sound_manager
        self._haptics_enabled = haptics_enabled
        self._pending: dict[str, QTimer] = {}

    @property
    def has_pending_completion_alert(self) -> bool:
        return COMPLETION_ALERT_ID in self._pending

    # ── NotificationService ───────────────────────────────────────────

    def is_authorized(self) -> bool:
        return self._enabled

    def schedule_completion_alert(self, after_seconds: float) -> None:
        self._cancel(COMPLETION_ALERT_ID)

        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.setInterval(max(0, int(after_seconds * 1000)))
        timer.timeout.connect(lambda: self._fire_scheduled(COMPLETION_ALERT_ID))
        self._pending[COMPLETION_ALERT_ID] = timer
        timer.start()
        logger.debug("completion alert scheduled in %.1fs", after_seconds)

    def cancel_scheduled_completion_alert(self) -> None:
        self._cancel(COMPLETION_ALERT_ID)

    def send_immediate_alert(self) -> None:
        identifier = f"{IMMEDIATE_ALERT_PREFIX}-{uuid.uuid4().hex}"
        self._deliver(identifier, ALERT_TITLE, IMMEDIATE_ALERT_BODY)

    def play_haptic(self, kind: HapticKind) -> None:
        if not self._haptics_enabled or self._sound_manager is None:
            return
        self._sound_manager.play(_HAPTIC_SOUNDS[kind])

    # ── internal ──────────────────────────────────────────────────────

    def _cancel(self, identifier: str) -> None:
        timer = self._pending.pop(identifier, None)
        if timer is None:
            return
        timer.stop()
        timer.deleteLater()
        logger.debug("alert %s cancelled", identifier)

    def _fire_scheduled(self, identifier: str) -> None:
        timer = self._pending.pop(identifier, None)
        if timer is None:
            return
        timer.deleteLater()
        self._deliver(identifier, ALERT_TITLE, SCHEDULED_ALERT_BODY)

    def _deliver(self, identifier: str, title: str, body: str) -> None:
        if self._tray_icon is not None and QSystemTrayIcon.isSystemTrayAvailable():
            self._tray_icon.showMessage(title, body)
        else:
            logger.info("%s: %s (no system tray)", title, body)
        self.alert_delivered.emit(identifier, title, body)
