"""rtd: a small personal todo tracker (SQLite + argparse)."""
from __future__ import annotations

__version__ = "0.1.0"
