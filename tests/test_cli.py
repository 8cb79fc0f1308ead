"""Tests for the console runner's argument parsing and selection handling."""

import argparse

import pytest

from workouttimer.__main__ import _apply_selection, _parse_args
from workouttimer.presets import (
    CUSTOM_INDEX,
    MAX_CUSTOM_MINUTES,
    MAX_CUSTOM_SECONDS,
)
from workouttimer.settings import Settings


def test_defaults():
    args = _parse_args([])
    assert args.seconds is None
    assert args.preset is None
    assert args.verbose is False


def test_custom_seconds():
    assert _parse_args(["90"]).seconds == 90.0


def test_preset():
    assert _parse_args(["--preset", "2"]).preset == 2


def test_preset_out_of_range_rejected():
    with pytest.raises(SystemExit):
        _parse_args(["--preset", "9"])


def test_seconds_and_preset_are_exclusive():
    with pytest.raises(SystemExit):
        _parse_args(["90", "--preset", "1"])


@pytest.mark.parametrize("text", ["nan", "inf", "-inf", "abc"])
def test_non_finite_or_non_numeric_seconds_rejected(text):
    with pytest.raises(SystemExit):
        _parse_args([text])


# ── selection ────────────────────────────────────────────────────────────


def _select(seconds=None, preset=None) -> Settings:
    settings = Settings()
    _apply_selection(settings, argparse.Namespace(seconds=seconds, preset=preset))
    return settings


def test_custom_seconds_recorded_as_custom():
    settings = _select(seconds=90.0)
    assert settings.last_preset_index == CUSTOM_INDEX
    assert settings.last_custom_seconds == 90


def test_fractional_seconds_truncate():
    assert _select(seconds=90.7).last_custom_seconds == 90


def test_oversized_seconds_clamp_to_picker_max():
    settings = _select(seconds=1e6)
    assert settings.last_custom_seconds == MAX_CUSTOM_MINUTES * 60 + MAX_CUSTOM_SECONDS


def test_negative_seconds_clamp_to_zero():
    assert _select(seconds=-5.0).last_custom_seconds == 0


def test_preset_recorded():
    settings = _select(preset=2)
    assert settings.last_preset_index == 2
    assert settings.last_custom_seconds == Settings().last_custom_seconds


def test_no_selection_leaves_settings_alone():
    assert _select() == Settings()
