"""Run live camera overlay.

Usage:
    uvicorn api.main:app --reload  # (separate, for API)
    python scripts/live_overlay.py  # (to see camera overlay window)

Press 'q' to quit the window.
"""
import logging
from facemood.config import Settings
from facemood.live import run_live_overlay

if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    s = Settings()
    run_live_overlay(s)
