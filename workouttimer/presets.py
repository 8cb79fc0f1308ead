"""Duration presets and the custom-time picker bounds.

The presentation layer offers five preset "pills" plus a Custom entry.
Selecting Custom is recorded as ``CUSTOM_INDEX`` (one past the last
preset), and the picked total is remembered separately.
"""

from __future__ import annotations

PRESETS: tuple[int, ...] = (60, 5 * 60, 10 * 60, 20 * 60, 30 * 60)
PRESET_LABELS: tuple[str, ...] = ("1m", "5m", "10m", "20m", "30m")
DEFAULT_PRESET_INDEX = 1
CUSTOM_INDEX = len(PRESETS)
CUSTOM_LABEL = "Custom"

MAX_CUSTOM_MINUTES = 120
MAX_CUSTOM_SECONDS = 59


def label_for(index: int) -> str:
    if 0 <= index < len(PRESETS):
        return PRESET_LABELS[index]
    return CUSTOM_LABEL


def custom_total_seconds(minutes: int, seconds: int) -> int:
    """Total seconds for a picker selection, clamped to the picker's range."""
    minutes = max(0, min(minutes, MAX_CUSTOM_MINUTES))
    seconds = max(0, min(seconds, MAX_CUSTOM_SECONDS))
    return minutes * 60 + seconds


def split_custom(total_seconds: int) -> tuple[int, int]:
    """Inverse of :func:`custom_total_seconds`, used to pre-fill the picker."""
    minutes, seconds = divmod(max(0, int(total_seconds)), 60)
    if minutes > MAX_CUSTOM_MINUTES:
        return MAX_CUSTOM_MINUTES, MAX_CUSTOM_SECONDS
    return minutes, seconds


def resolve_duration(preset_index: int, last_custom_seconds: int) -> float:
    """Duration to hand the engine at startup.

    A valid preset index wins; anything else means the last custom
    value.  The engine clamps the result to at least one second, so an
    unset custom value (0) becomes a 1 s timer, as in the watch app.
    """
    if 0 <= preset_index < len(PRESETS):
        return float(PRESETS[preset_index])
    return float(max(0, last_custom_seconds))
