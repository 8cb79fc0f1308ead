#!/usr/bin/env python3
"""Workout Timer entry point.

Run with:
    python main.py 90
    python -m workouttimer --preset 2
"""

from workouttimer.__main__ import main


if __name__ == "__main__":
    main()
