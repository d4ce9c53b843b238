"""Test package for Guess Hue?.

Core tests drive the game through a fake clock. UI tests run pygame with
the SDL dummy video/audio drivers so no window opens. Run ``pytest`` from
the project root.
"""
