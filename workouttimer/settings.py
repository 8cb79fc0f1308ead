"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/WorkoutTimer/settings.json

The timer engine never reads this file.  The console runner resolves
``last_preset_index`` / ``last_custom_seconds`` into a duration and hands
that to the engine.

Usage::

    settings = load_settings()
    settings.last_preset_index = 2
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

logger = logging.getLogger(__name__)


APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "WorkoutTimer"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    tick_interval_ms: int = 250
    countdown_window_seconds: int = 10

    # ── presets (last selection) ──────────────────────────────────────
    last_preset_index: int = 1            # 5m
    last_custom_seconds: int = 0

    # ── notifications ─────────────────────────────────────────────────
    notifications_enabled: bool = True

    # ── haptics ───────────────────────────────────────────────────────
    haptics_enabled: bool = True
    haptic_volume: int = 70               # 0-100


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError):
        logger.warning("unreadable settings at %s; using defaults", SETTINGS_PATH)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
