"""Small pygame widgets shared by the game screens."""

from __future__ import annotations

import pygame

TEXT_IDLE = (14, 14, 18)
TEXT_HOVER = (255, 255, 255)


class GameButton:
    """Text button that brightens and grows while hovered."""

    def __init__(self, text: str, *, font_size: int = 30, hover_font_size: int = 35) -> None:
        self.text = text
        self.hovered = False
        self._font = pygame.font.Font(None, font_size)
        self._hover_font = pygame.font.Font(None, hover_font_size)
        self._rect: pygame.Rect | None = None

    @property
    def rect(self) -> pygame.Rect | None:
        return self._rect

    def hit(self, pos: tuple[int, int]) -> bool:
        return self._rect is not None and self._rect.collidepoint(pos)

    def track_hover(self, pos: tuple[int, int]) -> None:
        self.hovered = self.hit(pos)

    def preferred_size(self) -> tuple[int, int]:
        w, h = self._hover_font.size(self.text)
        return w + 20, h + 20

    def render(self, surface: pygame.Surface, rect: pygame.Rect) -> None:
        self._rect = rect.copy()
        font = self._hover_font if self.hovered else self._font
        color = TEXT_HOVER if self.hovered else TEXT_IDLE
        label = font.render(self.text, True, color)
        surface.blit(label, label.get_rect(center=rect.center))


class GameIndicator:
    """Readout rendered as "Label: value"."""

    def __init__(self, label: str, value: str = "", *, label_size: int = 24, value_size: int = 30) -> None:
        self.label = label
        self.value = value
        self._label_font = pygame.font.Font(None, label_size)
        self._value_font = pygame.font.Font(None, value_size)

    def size(self) -> tuple[int, int]:
        lw, lh = self._label_font.size(f"{self.label}: ")
        vw, vh = self._value_font.size(self.value)
        return lw + vw, max(lh, vh)

    def render(self, surface: pygame.Surface, pos: tuple[int, int], *, color: tuple[int, int, int] = TEXT_IDLE) -> None:
        x, y = pos
        _, h = self.size()
        label = self._label_font.render(f"{self.label}: ", True, color)
        value = self._value_font.render(self.value, True, color)
        # Baseline-align the two runs.
        surface.blit(label, (x, y + h - label.get_height()))
        surface.blit(value, (x + label.get_width(), y + h - value.get_height()))
