"""Workout Timer: a single-session countdown engine with haptic cues."""

__version__ = "0.1.0"
