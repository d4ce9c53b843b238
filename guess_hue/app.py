"""Pygame UI shell for Guess Hue?.

Screens:
- Main menu (Play / Random Levels / Options / Quit)
- Options (sound on/off, persisted)
- Game board (target swatch, player mix, palette brushes, alerts)

Deterministic level progression and color mixing live in guess_hue/game_core.py
and guess_hue/color_mixer.py; this module only draws and forwards input.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import pygame

from .audio import GameAudio
from .clock import RealClock
from .color_mixer import Rgb
from .game_core import AlertKind, GameSnapshot, GuessHueGame, Phase, build_guess_hue_game
from .levels import FixedObjectives, RandomObjectives
from .options import OptionsStore
from .widgets import GameButton, GameIndicator

logger = logging.getLogger(__name__)

LAUNCHER_TITLE = "Guess Hue?"
WINDOW_SIZE = (960, 640)
TARGET_FPS = 60

BG = (238, 232, 220)
PANEL_EDGE = (60, 56, 52)
TEXT_MAIN = (14, 14, 18)
TEXT_MUTED = (96, 92, 88)

ALERT_COLORS = {
    AlertKind.LEVEL_FAILED: (255, 69, 0),
    AlertKind.LEVEL_SUCCEEDED: (36, 160, 60),
    AlertKind.GAME_LOST: (210, 24, 24),
    AlertKind.GAME_WON: (36, 160, 60),
}


class Screen(Protocol):
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def render(self, surface: pygame.Surface) -> None: ...


@dataclass(frozen=True, slots=True)
class MenuItem:
    label: str
    action: Callable[[], None]
    value: Callable[[], str] | None = None


class App:
    def __init__(self, surface: pygame.Surface) -> None:
        self._surface = surface
        self._screens: list[Screen] = []
        self._running = True

    @property
    def running(self) -> bool:
        return self._running

    @property
    def top(self) -> Screen | None:
        return self._screens[-1] if self._screens else None

    def push(self, screen: Screen) -> None:
        self._screens.append(screen)

    def pop(self) -> None:
        # The root menu stays; it handles its own quit.
        if len(self._screens) > 1:
            self._screens.pop()

    def quit(self) -> None:
        self._running = False

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.quit()
            return
        if not self._screens:
            return
        self._screens[-1].handle_event(event)

    def render(self) -> None:
        if not self._screens:
            return
        self._screens[-1].render(self._surface)


class MenuScreen:
    def __init__(
        self,
        app: App,
        title: str,
        items: list[MenuItem],
        *,
        subtitle: str | None = None,
        is_root: bool = False,
    ) -> None:
        self._app = app
        self._title = title
        self._subtitle = subtitle
        self._items = items
        self._selected = 0
        self._is_root = is_root
        self._title_font = pygame.font.Font(None, 64)
        self._subtitle_font = pygame.font.Font(None, 28)
        self._item_font = pygame.font.Font(None, 36)
        self._item_hover_font = pygame.font.Font(None, 42)
        self._hint_font = pygame.font.Font(None, 22)
        self._item_hitboxes: list[pygame.Rect] = []

    @property
    def selected(self) -> int:
        return self._selected

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            self._handle_key(event.key)
            return

        if event.type == pygame.MOUSEMOTION:
            idx = self._item_at(getattr(event, "pos", None))
            if idx is not None:
                self._selected = idx
            return

        if event.type == pygame.MOUSEBUTTONDOWN and getattr(event, "button", 0) == 1:
            idx = self._item_at(getattr(event, "pos", None))
            if idx is not None:
                self._selected = idx
                self._activate()
            return

        if event.type == pygame.JOYHATMOTION:
            _, y = event.value
            if y == 1:
                self._move(-1)
            elif y == -1:
                self._move(1)
            return

        if event.type == pygame.JOYBUTTONDOWN:
            # Common mapping: 0 = select, 1 = back.
            if event.button == 0:
                self._activate()
            elif event.button == 1:
                self._back()

    def _handle_key(self, key: int) -> None:
        if key in (pygame.K_UP, pygame.K_w):
            self._move(-1)
        elif key in (pygame.K_DOWN, pygame.K_s):
            self._move(1)
        elif key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE):
            self._activate()
        elif key in (pygame.K_ESCAPE, pygame.K_BACKSPACE):
            self._back()

    def _item_at(self, pos: tuple[int, int] | None) -> int | None:
        if pos is None:
            return None
        for idx, rect in enumerate(self._item_hitboxes):
            if rect.collidepoint(pos):
                return idx
        return None

    def _move(self, delta: int) -> None:
        if not self._items:
            return
        self._selected = (self._selected + delta) % len(self._items)

    def _activate(self) -> None:
        if not self._items:
            return
        self._items[self._selected].action()

    def _back(self) -> None:
        if self._is_root:
            self._app.quit()
        else:
            self._app.pop()

    def render(self, surface: pygame.Surface) -> None:
        w, h = surface.get_size()
        surface.fill(BG)
        self._item_hitboxes = []

        title = self._title_font.render(self._title, True, (36, 150, 60))
        title_y = max(30, h // 7)
        surface.blit(title, title.get_rect(midtop=(w // 2, title_y)))
        y = title_y + title.get_height() + 8
        if self._subtitle:
            sub = self._subtitle_font.render(self._subtitle, True, (130, 160, 50))
            surface.blit(sub, sub.get_rect(midtop=(w // 2, y)))
            y += sub.get_height()

        row_h = 52
        row_w = max(240, min(420, w // 2))
        y = max(y + 40, (h - row_h * len(self._items)) // 2)
        for idx, item in enumerate(self._items):
            row = pygame.Rect((w - row_w) // 2, y, row_w, row_h)
            self._item_hitboxes.append(row)
            selected = idx == self._selected
            font = self._item_hover_font if selected else self._item_font
            color = (255, 255, 255) if selected else TEXT_MAIN
            if selected:
                pygame.draw.rect(surface, (70, 66, 62), row, border_radius=8)

            label = item.label if item.value is None else f"{item.label}: {item.value()}"
            text = font.render(label, True, color)
            surface.blit(text, text.get_rect(center=row.center))
            y += row_h + 6

        footer = "Enter/Click: Select  |  Esc: Back"
        foot = self._hint_font.render(footer, True, TEXT_MUTED)
        surface.blit(foot, foot.get_rect(midbottom=(w // 2, h - 12)))


class GameScreen:
    """One play-through. Returns to the previous screen when the game finishes."""

    _palette_keys = (pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4, pygame.K_5)
    _keypad_keys = (pygame.K_KP1, pygame.K_KP2, pygame.K_KP3, pygame.K_KP4, pygame.K_KP5)

    def __init__(
        self,
        app: App,
        *,
        game_factory: Callable[[], GuessHueGame],
        audio: GameAudio | None = None,
    ) -> None:
        self._app = app
        self._game = game_factory()
        self._audio = audio
        self._closed = False

        self._menu_button = GameButton("Back to menu")
        self._level_indicator = GameIndicator("Level", "-")
        self._lives_indicator = GameIndicator("Lives", "-")
        self._complexity_indicator = GameIndicator("Level complexity", "-")
        self._selection_indicator = GameIndicator("Selected colors", "0")

        self._alert_font = pygame.font.Font(None, 48)
        self._caption_font = pygame.font.Font(None, 24)
        self._key_font = pygame.font.Font(None, 26)
        self._brush_hitboxes: list[tuple[pygame.Rect, int]] = []
        self._shown_alert: AlertKind | None = None

    @property
    def game(self) -> GuessHueGame:
        return self._game

    @property
    def menu_button(self) -> GameButton:
        return self._menu_button

    @property
    def brush_rects(self) -> list[pygame.Rect]:
        """Palette brush areas from the last render, in palette order."""
        return [rect.copy() for rect, _ in self._brush_hitboxes]

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEMOTION:
            pos = getattr(event, "pos", None)
            if pos is not None:
                self._menu_button.track_hover(pos)
            return

        if event.type == pygame.MOUSEBUTTONDOWN and getattr(event, "button", 0) == 1:
            pos = getattr(event, "pos", None)
            if pos is None:
                return
            if self._menu_button.hit(pos):
                self._leave()
                return
            for rect, index in self._brush_hitboxes:
                if rect.collidepoint(pos):
                    self._pick(index)
                    return
            return

        if event.type != pygame.KEYDOWN:
            return

        if event.key in (pygame.K_ESCAPE, pygame.K_BACKSPACE) and self._game.can_exit():
            self._leave()
            return

        index = self._palette_index_from_key(event.key)
        if index is not None:
            self._pick(index)

    def _palette_index_from_key(self, key: int) -> int | None:
        for keys in (self._palette_keys, self._keypad_keys):
            if key in keys:
                return keys.index(key)
        return None

    def _pick(self, index: int) -> None:
        if index >= len(self._game.palette):
            return
        if self._game.select_color(index) and self._audio is not None:
            self._audio.play_click()

    def _leave(self) -> None:
        if self._closed:
            return
        self._closed = True
        logger.debug("Leaving game at level %d", self._game.level.level_index + 1)
        self._app.pop()

    def render(self, surface: pygame.Surface) -> None:
        self._game.update()
        snap = self._game.snapshot()

        if snap.phase is Phase.FINISHED:
            self._leave()
            return

        alert_kind = None if snap.alert is None else snap.alert.kind
        if alert_kind is not None and alert_kind is not self._shown_alert and self._audio is not None:
            self._audio.play_alert(alert_kind)
        self._shown_alert = alert_kind

        self._level_indicator.value = f"{snap.level_number}/{snap.level_count}"
        self._lives_indicator.value = f"{snap.lives_remaining}/{snap.max_lives}"
        self._complexity_indicator.value = str(snap.complexity)
        self._selection_indicator.value = str(snap.selected_count)

        w, h = surface.get_size()
        margin = 10
        surface.fill(BG)

        # Top row: level, menu button, lives.
        _, ind_h = self._level_indicator.size()
        self._level_indicator.render(surface, (margin, margin))
        lives_w, _ = self._lives_indicator.size()
        self._lives_indicator.render(surface, (w - margin - lives_w, margin))
        bw, bh = self._menu_button.preferred_size()
        self._menu_button.render(surface, pygame.Rect((w - bw) // 2, margin - 6, bw, bh))

        top = margin + max(ind_h, bh - 6) + 8
        bottom_h = max(90, h // 4)
        info_h = ind_h + 16
        board = pygame.Rect(margin, top, w - margin * 2, h - top - bottom_h - info_h - margin)
        self._render_board(surface, board, snap)

        info_y = board.bottom + 8
        cw, _ = self._complexity_indicator.size()
        sw, _ = self._selection_indicator.size()
        self._complexity_indicator.render(surface, (w // 4 - cw // 2, info_y))
        self._selection_indicator.render(surface, ((3 * w) // 4 - sw // 2, info_y))

        bottom = pygame.Rect(margin, h - bottom_h - margin, w - margin * 2, bottom_h)
        if snap.alert is not None:
            self._brush_hitboxes = []
            color = ALERT_COLORS.get(snap.alert.kind, TEXT_MAIN)
            text = self._alert_font.render(snap.alert.message, True, color)
            surface.blit(text, text.get_rect(center=bottom.center))
        else:
            self._render_palette(surface, bottom, snap)

    def _render_board(self, surface: pygame.Surface, board: pygame.Rect, snap: GameSnapshot) -> None:
        swatch_w = int(board.w * 0.45)
        caption_h = 24
        gap = (board.w - swatch_w * 2) // 3
        panels = (
            ("Target", snap.objective_color, board.x + gap),
            ("Your mix", snap.player_color, board.x + gap * 2 + swatch_w),
        )
        for caption, color, x in panels:
            label = self._caption_font.render(caption, True, TEXT_MUTED)
            surface.blit(label, (x, board.y))
            rect = pygame.Rect(x, board.y + caption_h, swatch_w, max(10, board.h - caption_h))
            self._draw_swatch(surface, rect, color)

    def _draw_swatch(self, surface: pygame.Surface, rect: pygame.Rect, color: Rgb) -> None:
        if color.is_transparent:
            pygame.draw.rect(surface, PANEL_EDGE, rect, 2, border_radius=6)
            mark = self._alert_font.render("?", True, TEXT_MUTED)
            surface.blit(mark, mark.get_rect(center=rect.center))
            return
        pygame.draw.rect(surface, color.to_rgb8(), rect, border_radius=6)
        pygame.draw.rect(surface, PANEL_EDGE, rect, 2, border_radius=6)

    def _render_palette(self, surface: pygame.Surface, area: pygame.Rect, snap: GameSnapshot) -> None:
        self._brush_hitboxes = []
        count = len(snap.palette)
        gap = 12
        brush_w = max(40, min(200, (area.w - gap * (count + 1)) // max(1, count)))
        brush_h = max(30, min(70, area.h - 20))
        total_w = brush_w * count + gap * (count - 1)
        x = area.x + (area.w - total_w) // 2
        y = area.centery - brush_h // 2
        for index, entry in enumerate(snap.palette):
            rect = pygame.Rect(x, y, brush_w, brush_h)
            rgb8 = entry.color.to_rgb8()
            pygame.draw.rect(surface, rgb8, rect, border_radius=brush_h // 2)
            pygame.draw.rect(surface, PANEL_EDGE, rect, 2, border_radius=brush_h // 2)
            key = self._key_font.render(entry.key, True, _contrast_text(rgb8))
            surface.blit(key, key.get_rect(center=rect.center))
            self._brush_hitboxes.append((rect, index))
            x += brush_w + gap


def _contrast_text(rgb: tuple[int, int, int]) -> tuple[int, int, int]:
    r, g, b = rgb
    luma = 0.299 * r + 0.587 * g + 0.114 * b
    return TEXT_MAIN if luma > 140 else (245, 245, 245)


def _init_joysticks() -> None:
    # Safe on platforms with no joystick support.
    try:
        count = pygame.joystick.get_count()
    except pygame.error:
        return

    for i in range(count):
        try:
            pygame.joystick.Joystick(i).init()
        except pygame.error as exc:
            logger.debug("Skipping joystick %d: %s", i, exc)


def _new_seed() -> int:
    return random.SystemRandom().randint(1, 2**31 - 1)


def run(
    *,
    max_frames: int | None = None,
    event_injector: Callable[[int], None] | None = None,
    options_path: Path | None = None,
) -> int:
    pygame.init()
    _init_joysticks()

    pygame.display.set_caption(LAUNCHER_TITLE)
    surface = pygame.display.set_mode(WINDOW_SIZE, pygame.RESIZABLE)
    clock = pygame.time.Clock()

    app = App(surface=surface)
    options = OptionsStore(OptionsStore.default_path() if options_path is None else options_path)
    audio = GameAudio(options)
    real_clock = RealClock()

    def open_campaign() -> None:
        app.push(
            GameScreen(
                app,
                game_factory=lambda: build_guess_hue_game(clock=real_clock, objectives=FixedObjectives()),
                audio=audio,
            )
        )

    def open_random_levels() -> None:
        seed = _new_seed()
        logger.info("Starting random levels with seed %d", seed)
        app.push(
            GameScreen(
                app,
                game_factory=lambda: build_guess_hue_game(clock=real_clock, objectives=RandomObjectives(seed)),
                audio=audio,
            )
        )

    options_menu = MenuScreen(
        app,
        "Options",
        [
            MenuItem("Sound", options.toggle_mute, value=lambda: "Off" if options.mute else "On"),
            MenuItem("Back", app.pop),
        ],
    )

    main_items = [
        MenuItem("Play", open_campaign),
        MenuItem("Random Levels", open_random_levels),
        MenuItem("Options", lambda: app.push(options_menu)),
        MenuItem("Quit", app.quit),
    ]

    app.push(MenuScreen(app, LAUNCHER_TITLE, main_items, subtitle="Mix the paints, match the hue", is_root=True))

    frame = 0
    try:
        while app.running:
            if event_injector is not None:
                event_injector(frame)

            for event in pygame.event.get():
                app.handle_event(event)

            app.render()

            pygame.display.flip()

            frame += 1
            if max_frames is not None and frame >= max_frames:
                break

            clock.tick(TARGET_FPS)
    finally:
        pygame.quit()

    return 0
