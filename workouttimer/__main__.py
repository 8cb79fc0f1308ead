"""Run a single countdown from the terminal: python -m workouttimer."""

from __future__ import annotations

import argparse
import logging
import math
import sys

from PyQt6.QtCore import QTimer
from PyQt6.QtGui import QColor, QIcon, QPainter, QPixmap
from PyQt6.QtWidgets import QApplication, QSystemTrayIcon

from .audio.sounds import SoundManager
from .notifications.desktop import DesktopNotificationService
from .presets import (
    CUSTOM_INDEX,
    PRESETS,
    custom_total_seconds,
    label_for,
    resolve_duration,
    split_custom,
)
from .settings import Settings, load_settings, save_settings
from .timer.engine import TimerEngine

logger = logging.getLogger("workouttimer")


def _finite_seconds(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}")
    if not math.isfinite(value):
        raise argparse.ArgumentTypeError(f"not a finite duration: {text!r}")
    return value


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="workouttimer",
        description="Workout Timer - single countdown with haptic cues",
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "seconds", nargs="?", type=_finite_seconds,
        help="custom duration in seconds, up to 120:59 (remembered as the custom value)",
    )
    group.add_argument(
        "--preset", type=int, choices=range(len(PRESETS)),
        help="preset index: " + ", ".join(
            f"{i}={label_for(i)}" for i in range(len(PRESETS))
        ),
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def _make_tray_icon() -> QIcon:
    """Plain filled circle; stands in until there is real artwork."""
    pix = QPixmap(64, 64)
    pix.fill(QColor(0, 0, 0, 0))
    p = QPainter(pix)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    p.setBrush(QColor("#A6E3A1"))
    p.setPen(QColor("#A6E3A1").darker(120))
    p.drawEllipse(4, 4, 56, 56)
    p.end()
    return QIcon(pix)


def _apply_selection(settings: Settings, args: argparse.Namespace) -> None:
    """Record the command-line choice the way the preset pills would."""
    if args.seconds is not None:
        # Same whole-second range the custom picker offers.
        minutes, seconds = split_custom(int(args.seconds))
        settings.last_preset_index = CUSTOM_INDEX
        settings.last_custom_seconds = custom_total_seconds(minutes, seconds)
    elif args.preset is not None:
        settings.last_preset_index = args.preset


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings()
    _apply_selection(settings, args)
    save_settings(settings)

    duration = resolve_duration(
        settings.last_preset_index, settings.last_custom_seconds,
    )

    app = QApplication(sys.argv[:1])
    app.setApplicationName("WorkoutTimer")
    app.setOrganizationName("WorkoutTimer")

    tray: QSystemTrayIcon | None = None
    if QSystemTrayIcon.isSystemTrayAvailable():
        tray = QSystemTrayIcon(_make_tray_icon(), app)
        tray.setToolTip("Workout Timer")
        tray.show()

    sounds = SoundManager(app)
    sounds.set_volume(settings.haptic_volume)
    sounds.set_enabled(settings.haptics_enabled)

    notifier = DesktopNotificationService(
        app,
        enabled=settings.notifications_enabled,
        tray_icon=tray,
        sound_manager=sounds,
        haptics_enabled=settings.haptics_enabled,
    )
    engine = TimerEngine(
        app,
        notifier=notifier,
        duration=duration,
        tick_interval_ms=settings.tick_interval_ms,
        countdown_window=settings.countdown_window_seconds,
    )

    engine.remaining_changed.connect(
        lambda _remaining: print(engine.formatted_remaining(), flush=True)
    )
    # Give the completion sound a moment to play before quitting.
    engine.session_completed.connect(
        lambda _data: QTimer.singleShot(1500, app.quit)
    )

    logger.info(
        "%s timer (%s) starting", label_for(settings.last_preset_index),
        engine.formatted_remaining(),
    )
    print(engine.formatted_remaining(), flush=True)
    engine.start()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
