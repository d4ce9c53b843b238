"""Smoke test for the pygame UI.

Runs the main loop for a few frames with the SDL dummy drivers to check
that the pygame integration starts and shuts down cleanly. Rendering
correctness is not checked.
"""

from __future__ import annotations

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")


def test_app_runs_headless(tmp_path) -> None:
    # Import inside the test so that environment variables take effect
    from guess_hue.app import run

    exit_code = run(max_frames=3, options_path=tmp_path / "options.json")
    assert exit_code == 0
