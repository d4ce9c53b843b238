from __future__ import annotations

from dataclasses import dataclass

import pytest

from guess_hue.color_mixer import Rgb
from guess_hue.game_core import (
    AlertKind,
    GameConfig,
    GuessHueGame,
    LevelState,
    Outcome,
    Phase,
    build_guess_hue_game,
)
from guess_hue.levels import (
    PALETTE,
    PALETTE_BLUE,
    PALETTE_RED,
    PALETTE_WHITE,
    PALETTE_YELLOW,
    FixedObjectives,
)

WHITE, RED, YELLOW, BLUE, BLACK = range(5)


@dataclass
class FakeClock:
    t: float = 0.0

    def now(self) -> float:
        return self.t

    def advance(self, dt: float) -> None:
        self.t += float(dt)


def test_new_game_starts_selecting_first_level() -> None:
    game = build_guess_hue_game(clock=FakeClock())
    snap = game.snapshot()

    assert snap.phase is Phase.SELECT
    assert snap.level_number == 1
    assert snap.level_count == 11
    assert snap.lives_remaining == 5
    assert snap.max_lives == 5
    assert snap.complexity == 2
    assert snap.selected_count == 0
    assert snap.player_color == Rgb.NONE
    assert not snap.objective_color.is_transparent
    assert snap.alert is None
    assert snap.palette == PALETTE
    assert game.palette is snap.palette


def test_correct_mix_succeeds_and_advances_after_alert() -> None:
    clock = FakeClock()
    game = build_guess_hue_game(clock=clock, alert_duration_s=1.0)

    assert game.select_color(BLUE) is True
    assert game.phase is Phase.SELECT
    assert game.select_color(YELLOW) is True
    assert game.phase is Phase.LEVEL_SUCCEEDED

    snap = game.snapshot()
    assert snap.alert is not None
    assert snap.alert.kind is AlertKind.LEVEL_SUCCEEDED
    assert snap.alert.message == AlertKind.LEVEL_SUCCEEDED.message

    # Picks are ignored while the alert shows.
    assert game.select_color(RED) is False
    clock.advance(0.5)
    game.update()
    assert game.phase is Phase.LEVEL_SUCCEEDED

    clock.advance(0.5)
    game.update()
    snap = game.snapshot()
    assert snap.phase is Phase.SELECT
    assert snap.level_number == 2
    assert snap.selected_count == 0
    assert snap.alert is None
    assert snap.lives_remaining == 5


def test_wrong_mix_costs_a_life_and_retries_same_level() -> None:
    clock = FakeClock()
    game = build_guess_hue_game(clock=clock, alert_duration_s=1.0)

    game.select_color(WHITE)
    game.select_color(WHITE)

    assert game.phase is Phase.LEVEL_FAILED
    assert game.lives_remaining == 4
    assert game.snapshot().alert.kind is AlertKind.LEVEL_FAILED

    clock.advance(1.0)
    game.update()
    snap = game.snapshot()
    assert snap.phase is Phase.SELECT
    assert snap.level_number == 1
    assert snap.selected_count == 0
    assert snap.player_color == Rgb.NONE


def test_losing_the_last_life_ends_the_game() -> None:
    clock = FakeClock()
    game = build_guess_hue_game(clock=clock, starting_lives=1, alert_duration_s=0.5)

    game.select_color(BLACK)
    game.select_color(BLACK)
    assert game.phase is Phase.GAME_LOST
    assert game.lives_remaining == 0
    assert game.snapshot().alert.kind is AlertKind.GAME_LOST

    clock.advance(0.5)
    game.update()
    assert game.phase is Phase.FINISHED
    assert game.select_color(BLUE) is False
    assert game.lives_remaining == 0

    summary = game.summary()
    assert summary.won is False
    assert summary.failures == 1
    assert summary.levels_cleared == 0


def test_clearing_the_last_level_wins() -> None:
    clock = FakeClock()
    game = GuessHueGame(
        clock=clock,
        objectives=FixedObjectives(((PALETTE_RED, PALETTE_WHITE),)),
        config=GameConfig(alert_duration_s=1.0),
    )

    game.select_color(RED)
    game.select_color(WHITE)
    assert game.phase is Phase.GAME_WON
    assert game.snapshot().alert.kind is AlertKind.GAME_WON

    clock.advance(1.0)
    game.update()
    assert game.phase is Phase.FINISHED
    summary = game.summary()
    assert summary.won is True
    assert summary.levels_cleared == 1
    assert summary.level_count == 1


def test_level_can_be_solved_before_using_every_pick() -> None:
    game = GuessHueGame(
        clock=FakeClock(),
        objectives=FixedObjectives(((PALETTE_RED, PALETTE_RED), (PALETTE_BLUE, PALETTE_YELLOW))),
    )
    assert game.snapshot().complexity == 2

    game.select_color(RED)
    assert game.phase is Phase.LEVEL_SUCCEEDED
    assert game.snapshot().selected_count == 1


def test_pick_order_does_not_matter() -> None:
    game = GuessHueGame(
        clock=FakeClock(),
        objectives=FixedObjectives(((PALETTE_RED, PALETTE_YELLOW, PALETTE_YELLOW), (PALETTE_BLUE, PALETTE_WHITE))),
    )
    game.select_color(YELLOW)
    game.select_color(RED)
    assert game.phase is Phase.SELECT
    game.select_color(YELLOW)
    assert game.phase is Phase.LEVEL_SUCCEEDED


def test_events_record_each_outcome() -> None:
    clock = FakeClock()
    game = build_guess_hue_game(clock=clock, alert_duration_s=0.0)

    clock.advance(2.0)
    game.select_color(RED)
    game.select_color(RED)
    game.update()
    clock.advance(3.0)
    game.select_color(YELLOW)
    game.select_color(BLUE)

    events = game.events()
    assert [e.outcome for e in events] == [Outcome.FAILED, Outcome.SUCCEEDED]
    assert [e.at_s for e in events] == [2.0, 5.0]
    assert events[0].selected == (PALETTE_RED, PALETTE_RED)
    assert events[1].selected == (PALETTE_YELLOW, PALETTE_BLUE)
    assert all(e.level_index == 0 for e in events)
    assert events[1].objective == (PALETTE_BLUE, PALETTE_YELLOW)


def test_invalid_palette_index_raises() -> None:
    game = build_guess_hue_game(clock=FakeClock())
    with pytest.raises(IndexError):
        game.select_color(5)
    with pytest.raises(IndexError):
        game.select_color(-1)


def test_update_without_alert_is_a_no_op() -> None:
    game = build_guess_hue_game(clock=FakeClock())
    game.update()
    assert game.phase is Phase.SELECT
    assert game.can_exit() is True


def test_config_validation() -> None:
    with pytest.raises(ValueError):
        GuessHueGame(clock=FakeClock(), config=GameConfig(starting_lives=0))
    with pytest.raises(ValueError):
        GuessHueGame(clock=FakeClock(), config=GameConfig(alert_duration_s=-1.0))
    with pytest.raises(ValueError):
        GuessHueGame(clock=FakeClock(), palette=())


def test_level_state_requires_an_objective() -> None:
    with pytest.raises(ValueError):
        LevelState(level_index=0, objective_colors=())


def test_level_state_reset_clears_selection() -> None:
    level = LevelState(level_index=3, objective_colors=(PALETTE_RED, PALETTE_WHITE))
    level.selected_colors.append(PALETTE_RED)
    assert level.complexity == 2
    assert level.player_color().to_rgb8() == (255, 0, 0)

    level.reset()
    assert level.selected_colors == []
    assert level.player_color() == Rgb.NONE
