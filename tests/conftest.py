from __future__ import annotations

import os

import pytest

# Headless SDL before anything imports pygame.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")


@pytest.fixture(autouse=True)
def _isolated_options(tmp_path, monkeypatch) -> None:
    # Never touch the real ~/.guess_hue_options.json from tests.
    monkeypatch.setenv("GUESS_HUE_OPTIONS_PATH", str(tmp_path / "options.json"))
