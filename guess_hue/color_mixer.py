"""Pigment-style color mixing.

Colors are averaged in Mixbox's latent pigment space rather than in RGB, so
blue and yellow mix to green the way paint does.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import ClassVar

import mixbox

Latent = tuple[float, ...]

LATENT_SIZE: int = int(mixbox.LATENT_SIZE)


def _clamp01(x: float) -> float:
    return 0.0 if x <= 0.0 else 1.0 if x >= 1.0 else float(x)


@dataclass(frozen=True, slots=True)
class Rgb:
    """Gamma-encoded sRGB color with float channels in [0.0, 1.0]."""

    r: float
    g: float
    b: float
    a: float = 1.0

    NONE: ClassVar["Rgb"]

    @classmethod
    def from_rgb8(cls, r: int, g: int, b: int) -> "Rgb":
        return cls(r / 255.0, g / 255.0, b / 255.0)

    @classmethod
    def from_hex(cls, text: str) -> "Rgb":
        raw = text.strip().lstrip("#")
        if len(raw) != 6:
            raise ValueError(f"expected #rrggbb, got {text!r}")
        try:
            value = int(raw, 16)
        except ValueError as exc:
            raise ValueError(f"expected #rrggbb, got {text!r}") from exc
        return cls.from_rgb8((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    def to_rgb8(self) -> tuple[int, int, int]:
        return (
            int(round(_clamp01(self.r) * 255.0)),
            int(round(_clamp01(self.g) * 255.0)),
            int(round(_clamp01(self.b) * 255.0)),
        )

    def to_hex(self) -> str:
        r, g, b = self.to_rgb8()
        return f"#{r:02x}{g:02x}{b:02x}"

    @property
    def is_transparent(self) -> bool:
        return self.a <= 0.0


Rgb.NONE = Rgb(0.0, 0.0, 0.0, 0.0)


def to_latent(color: Rgb) -> Latent:
    latent = mixbox.float_rgb_to_latent((_clamp01(color.r), _clamp01(color.g), _clamp01(color.b)))
    return tuple(float(v) for v in latent)


def from_latent(latent: Sequence[float]) -> Rgb:
    if len(latent) != LATENT_SIZE:
        raise ValueError(f"latent must have {LATENT_SIZE} components, got {len(latent)}")
    r, g, b = mixbox.latent_to_float_rgb(list(latent))
    return Rgb(_clamp01(r), _clamp01(g), _clamp01(b))


def mix_colors(colors: Iterable[Rgb]) -> Rgb:
    """Blend colors with equal weights; an empty input yields Rgb.NONE."""

    latents = [to_latent(c) for c in colors]
    if not latents:
        return Rgb.NONE

    weight = 1.0 / len(latents)
    accum = [0.0] * LATENT_SIZE
    for latent in latents:
        for i, v in enumerate(latent):
            accum[i] += v * weight
    return from_latent(accum)


def same_color(a: Rgb, b: Rgb) -> bool:
    """Compare at display precision (8 bits per channel)."""

    if a.is_transparent or b.is_transparent:
        return a.is_transparent and b.is_transparent
    return a.to_rgb8() == b.to_rgb8()
