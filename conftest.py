"""Conftest.py for pytest configuration."""

import os
import sys

# Headless plotting and Qt for every test run.
os.environ.setdefault("MPLBACKEND", "Agg")
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add the project root to sys.path so that eq_trainer and main are discoverable.
project_root = os.path.abspath(os.path.dirname(__file__))
if project_root not in sys.path:
    sys.path.insert(0, project_root)
