from __future__ import annotations

import pytest

from guess_hue.color_mixer import LATENT_SIZE, Rgb, from_latent, mix_colors, same_color, to_latent
from guess_hue.levels import PALETTE_BLACK, PALETTE_BLUE, PALETTE_RED, PALETTE_WHITE, PALETTE_YELLOW


def test_empty_mix_is_transparent() -> None:
    mixed = mix_colors([])
    assert mixed == Rgb.NONE
    assert mixed.is_transparent


@pytest.mark.parametrize("color", [PALETTE_WHITE, PALETTE_RED, PALETTE_YELLOW, PALETTE_BLUE, PALETTE_BLACK])
def test_single_color_mixes_to_itself(color: Rgb) -> None:
    assert mix_colors([color]).to_rgb8() == color.to_rgb8()


def test_repeating_a_paint_does_not_change_the_mix() -> None:
    assert same_color(mix_colors([PALETTE_RED]), mix_colors([PALETTE_RED, PALETTE_RED]))
    assert same_color(
        mix_colors([PALETTE_RED, PALETTE_YELLOW]),
        mix_colors([PALETTE_RED, PALETTE_YELLOW, PALETTE_RED, PALETTE_YELLOW]),
    )


def test_mix_ignores_pick_order() -> None:
    a = mix_colors([PALETTE_RED, PALETTE_YELLOW, PALETTE_WHITE])
    b = mix_colors([PALETTE_WHITE, PALETTE_RED, PALETTE_YELLOW])
    assert same_color(a, b)


def test_blue_and_yellow_mix_like_paint() -> None:
    r, g, b = mix_colors([PALETTE_BLUE, PALETTE_YELLOW]).to_rgb8()
    # An RGB average would be neutral grey; pigment mixing leans green.
    assert g > r
    assert g > b


def test_different_compositions_give_different_colors() -> None:
    assert not same_color(
        mix_colors([PALETTE_RED, PALETTE_YELLOW]),
        mix_colors([PALETTE_RED, PALETTE_YELLOW, PALETTE_YELLOW]),
    )


def test_latent_round_trip() -> None:
    color = Rgb.from_rgb8(40, 130, 200)
    latent = to_latent(color)
    assert len(latent) == LATENT_SIZE
    assert from_latent(latent).to_rgb8() == (40, 130, 200)


def test_from_latent_rejects_wrong_length() -> None:
    with pytest.raises(ValueError):
        from_latent([0.0, 0.0, 0.0])


def test_hex_conversions() -> None:
    color = Rgb.from_hex("#ff8000")
    assert color.to_rgb8() == (255, 128, 0)
    assert color.to_hex() == "#ff8000"
    assert Rgb.from_hex("00ff00").to_rgb8() == (0, 255, 0)

    with pytest.raises(ValueError):
        Rgb.from_hex("#fff")
    with pytest.raises(ValueError):
        Rgb.from_hex("#gg0000")


def test_to_rgb8_clamps_out_of_range_channels() -> None:
    assert Rgb(1.5, -0.2, 0.5).to_rgb8() == (255, 0, 128)


def test_same_color_handles_transparency() -> None:
    assert same_color(Rgb.NONE, Rgb.NONE)
    assert not same_color(Rgb.NONE, PALETTE_BLACK)
    assert not same_color(PALETTE_BLACK, Rgb.NONE)
    assert same_color(Rgb(1.0, 0.0, 0.0), Rgb(0.999, 0.001, 0.0))
