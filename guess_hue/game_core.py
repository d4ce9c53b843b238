"""Level progression for Guess Hue?.

The game runs select -> evaluate -> succeed/fail -> alert -> next. Every
outcome is announced with a timed alert during which picks are rejected;
when the alert ends the game moves on. Time comes from an injected Clock,
so the whole flow is deterministic under test.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from .clock import Clock, Countdown
from .color_mixer import Rgb, mix_colors, same_color
from .levels import PALETTE, FixedObjectives, ObjectiveSource, PaletteColor

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    SELECT = "select"
    LEVEL_SUCCEEDED = "level_succeeded"
    LEVEL_FAILED = "level_failed"
    GAME_LOST = "game_lost"
    GAME_WON = "game_won"
    FINISHED = "finished"


class AlertKind(str, Enum):
    LEVEL_FAILED = "level_failed"
    LEVEL_SUCCEEDED = "level_succeeded"
    GAME_LOST = "game_lost"
    GAME_WON = "game_won"

    @property
    def message(self) -> str:
        return _ALERT_MESSAGES[self]


_ALERT_MESSAGES = {
    AlertKind.LEVEL_FAILED: "Not quite! Try again.",
    AlertKind.LEVEL_SUCCEEDED: "Well mixed!",
    AlertKind.GAME_LOST: "Out of lives. Game over!",
    AlertKind.GAME_WON: "You matched every hue!",
}

_ALERT_PHASES = {
    AlertKind.LEVEL_FAILED: Phase.LEVEL_FAILED,
    AlertKind.LEVEL_SUCCEEDED: Phase.LEVEL_SUCCEEDED,
    AlertKind.GAME_LOST: Phase.GAME_LOST,
    AlertKind.GAME_WON: Phase.GAME_WON,
}


class Outcome(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class GameConfig:
    starting_lives: int = 5
    alert_duration_s: float = 1.5


@dataclass(slots=True)
class GameState:
    lives_remaining: int


@dataclass(slots=True)
class LevelState:
    level_index: int
    objective_colors: tuple[Rgb, ...]
    selected_colors: list[Rgb] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.objective_colors:
            raise ValueError("objective_colors must not be empty")

    @property
    def complexity(self) -> int:
        return len(self.objective_colors)

    def reset(self) -> None:
        self.selected_colors.clear()

    def player_color(self) -> Rgb:
        return mix_colors(self.selected_colors)

    def objective_color(self) -> Rgb:
        return mix_colors(self.objective_colors)


@dataclass(frozen=True, slots=True)
class Alert:
    kind: AlertKind
    message: str
    remaining_s: float


@dataclass(frozen=True, slots=True)
class LevelEvent:
    level_index: int
    outcome: Outcome
    selected: tuple[Rgb, ...]
    objective: tuple[Rgb, ...]
    at_s: float


@dataclass(frozen=True, slots=True)
class GameSummary:
    levels_cleared: int
    level_count: int
    lives_remaining: int
    failures: int
    won: bool


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """View model for the UI (pure data)."""

    phase: Phase
    level_number: int
    level_count: int
    lives_remaining: int
    max_lives: int
    complexity: int
    selected_count: int
    player_color: Rgb
    objective_color: Rgb
    alert: Alert | None
    palette: tuple[PaletteColor, ...]


class GuessHueGame:
    def __init__(
        self,
        *,
        clock: Clock,
        objectives: ObjectiveSource | None = None,
        config: GameConfig | None = None,
        palette: tuple[PaletteColor, ...] = PALETTE,
    ) -> None:
        config = GameConfig() if config is None else config
        if config.starting_lives < 1:
            raise ValueError("starting_lives must be >= 1")
        if config.alert_duration_s < 0.0:
            raise ValueError("alert_duration_s must be >= 0")
        if not palette:
            raise ValueError("palette must not be empty")

        self._clock = clock
        self._objectives: ObjectiveSource = FixedObjectives() if objectives is None else objectives
        self._config = config
        self._palette = palette

        self._game = GameState(lives_remaining=config.starting_lives)
        self._level: LevelState | None = None
        self._objective_color = Rgb.NONE
        self._phase = Phase.SELECT
        self._alert_kind: AlertKind | None = None
        self._alert_timer: Countdown | None = None
        self._events: list[LevelEvent] = []

        self._prepare_level(0)

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def palette(self) -> tuple[PaletteColor, ...]:
        return self._palette

    @property
    def lives_remaining(self) -> int:
        return self._game.lives_remaining

    @property
    def level(self) -> LevelState:
        assert self._level is not None
        return self._level

    def can_exit(self) -> bool:
        return True

    def events(self) -> list[LevelEvent]:
        return list(self._events)

    def select_color(self, index: int) -> bool:
        """Add the palette color at ``index`` to the mix. Returns True if accepted."""

        if not (0 <= index < len(self._palette)):
            raise IndexError(f"palette index {index} out of range")
        if self._phase is not Phase.SELECT:
            return False

        level = self.level
        level.selected_colors.append(self._palette[index].color)
        self._evaluate(level)
        return True

    def update(self) -> None:
        if self._alert_timer is None or not self._alert_timer.expired():
            return

        kind = self._alert_kind
        self._alert_kind = None
        self._alert_timer = None
        logger.debug("Alert %s ended", kind)

        if kind is AlertKind.LEVEL_SUCCEEDED:
            self._prepare_level(self.level.level_index + 1)
        elif kind is AlertKind.LEVEL_FAILED:
            self.level.reset()
            self._phase = Phase.SELECT
        else:
            self._phase = Phase.FINISHED
            logger.info("Game finished: %s", self.summary())

    def summary(self) -> GameSummary:
        cleared = sum(1 for e in self._events if e.outcome is Outcome.SUCCEEDED)
        failures = sum(1 for e in self._events if e.outcome is Outcome.FAILED)
        count = self._objectives.level_count()
        return GameSummary(
            levels_cleared=cleared,
            level_count=count,
            lives_remaining=self._game.lives_remaining,
            failures=failures,
            won=cleared >= count,
        )

    def snapshot(self) -> GameSnapshot:
        level = self.level
        alert = None
        if self._alert_kind is not None and self._alert_timer is not None:
            alert = Alert(
                kind=self._alert_kind,
                message=self._alert_kind.message,
                remaining_s=self._alert_timer.remaining_s(),
            )
        return GameSnapshot(
            phase=self._phase,
            level_number=level.level_index + 1,
            level_count=self._objectives.level_count(),
            lives_remaining=self._game.lives_remaining,
            max_lives=self._config.starting_lives,
            complexity=level.complexity,
            selected_count=len(level.selected_colors),
            player_color=level.player_color(),
            objective_color=self._objective_color,
            alert=alert,
            palette=self._palette,
        )

    def _prepare_level(self, level_index: int) -> None:
        objective = self._objectives.objective(level_index)
        self._level = LevelState(level_index=level_index, objective_colors=tuple(objective))
        self._objective_color = self._level.objective_color()
        self._phase = Phase.SELECT
        logger.debug("Prepared level %d (complexity %d)", level_index, len(objective))

    def _evaluate(self, level: LevelState) -> None:
        if same_color(level.player_color(), self._objective_color):
            self._record(level, Outcome.SUCCEEDED)
            is_last = level.level_index + 1 >= self._objectives.level_count()
            self._start_alert(AlertKind.GAME_WON if is_last else AlertKind.LEVEL_SUCCEEDED)
        elif len(level.selected_colors) >= level.complexity:
            self._record(level, Outcome.FAILED)
            self._game.lives_remaining = max(0, self._game.lives_remaining - 1)
            if self._game.lives_remaining == 0:
                self._start_alert(AlertKind.GAME_LOST)
            else:
                self._start_alert(AlertKind.LEVEL_FAILED)

    def _record(self, level: LevelState, outcome: Outcome) -> None:
        self._events.append(
            LevelEvent(
                level_index=level.level_index,
                outcome=outcome,
                selected=tuple(level.selected_colors),
                objective=level.objective_colors,
                at_s=self._clock.now(),
            )
        )
        logger.info("Level %d %s", level.level_index + 1, outcome.value)

    def _start_alert(self, kind: AlertKind) -> None:
        self._alert_kind = kind
        self._alert_timer = Countdown(self._clock, self._config.alert_duration_s)
        self._phase = _ALERT_PHASES[kind]
        logger.debug("Alert %s started", kind)


def build_guess_hue_game(
    *,
    clock: Clock,
    objectives: ObjectiveSource | None = None,
    starting_lives: int = 5,
    alert_duration_s: float = 1.5,
) -> GuessHueGame:
    return GuessHueGame(
        clock=clock,
        objectives=objectives,
        config=GameConfig(starting_lives=int(starting_lives), alert_duration_s=float(alert_duration_s)),
    )
