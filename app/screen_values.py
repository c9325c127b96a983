"""
Resistor Network Finder - Value Picker Screen

Pick the resistor values available to the finder, one decade at a time.
Each chip is a catalogue label ("4.7K Ω"); the finder parses the selected
labels exactly as typed on the chips.

Layout (480 × 272 content area):

  Row 0      series toggle (E3 → E6 → E12 → E24), All, None, selection count
  Row 1      decade tabs 1 Ω … 1 MΩ
  Rows 2+    value chips of the current decade (4 or 6 per row)
"""

from __future__ import annotations

import logging

import pygame

import config
from resistor_constants import E_SERIES_BASE, series_labels
from ui_manager import (
    ACCENT,
    BG_COLOR,
    BTN_BG,
    CARD_BG,
    GREEN,
    TEXT_COLOR,
    TEXT_MUTED,
    draw_button,
    draw_text,
    fonts,
)

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Layout constants
# ---------------------------------------------------------------------------

_MARGIN    = 8
_TOOL_Y    = 6
_TOOL_H    = 32
_TOOL_W    = 70
_DECADE_Y  = 44
_DECADE_H  = 32
_CHIP_TOP  = 84
_CHIP_H    = 40
_CHIP_GAP  = 4

_DECADES = ["1", "10", "100", "1K", "10K", "100K", "1M"]


class ScreenValues:
    """Toggle grid of catalogue values, paged by decade.

    Args:
        surface: pygame.Surface to render onto, OR a UIManager instance
                 (detected via ``hasattr(surface, '_surface')``).
        series:  Initial E-series name.
    """

    def __init__(self, surface, series: str = config.DEFAULT_SERIES) -> None:
        if hasattr(surface, "_surface"):
            self._ui      = surface
            self._surface = surface._surface
        else:
            self._ui      = None
            self._surface = surface

        self.series: str = series
        self.decade: int = 2
        # All values of the starting series are available by default.
        self.selected: set[str] = set(series_labels(series))

        self._tool_rects: list[tuple[str, pygame.Rect]] = []
        self._decade_rects: list[tuple[int, pygame.Rect]] = []
        self._chip_rects: list[tuple[str, pygame.Rect]] = []

        if not pygame.font.get_init():
            pygame.font.init()

    # ------------------------------------------------------------------
    # Public state
    # ------------------------------------------------------------------

    def labels(self) -> list[str]:
        """All catalogue labels of the current series, in order."""
        return series_labels(self.series)

    def decade_labels(self, decade: int | None = None) -> list[str]:
        d = self.decade if decade is None else decade
        return series_labels(self.series, d, d)

    def selected_labels(self) -> list[str]:
        """Selected labels in catalogue order (what the finder uses)."""
        return [label for label in self.labels() if label in self.selected]

    def toggle(self, label: str) -> None:
        if label in self.selected:
            self.selected.discard(label)
        else:
            self.selected.add(label)

    def select_all(self) -> None:
        self.selected = set(self.labels())

    def select_none(self) -> None:
        self.selected = set()

    def set_series(self, series: str) -> None:
        """Switch catalogue, keeping the decades that had any selection."""
        if series == self.series:
            return
        kept_decades = {
            d for d in range(len(_DECADES))
            if any(label in self.selected for label in self.decade_labels(d))
        }
        self.series = series
        self.selected = {
            label for d in kept_decades for label in self.decade_labels(d)
        }
        log.debug("Series %s, %d values selected", series, len(self.selected))

    # ------------------------------------------------------------------
    # Screen interface
    # ------------------------------------------------------------------

    def update(self, dt: float) -> None:
        pass

    def draw(self, surface: pygame.Surface | None = None) -> None:
        target = surface if surface is not None else self._surface
        target.fill(BG_COLOR)

        try:
            fnt = fonts()
            self._draw_toolbar(target, fnt)
            self._draw_decades(target, fnt)
            self._draw_chips(target, fnt)
        except Exception:
            # pygame.draw.* calls fail on MagicMock surfaces in tests.
            pass

    def handle_event(self, event) -> None:
        """LEFT / RIGHT change decade; ``a`` selects all, ``n`` none."""
        if event.type != pygame.KEYDOWN:
            return
        if event.key == pygame.K_LEFT:
            self.decade = max(0, self.decade - 1)
        elif event.key == pygame.K_RIGHT:
            self.decade = min(len(_DECADES) - 1, self.decade + 1)
        elif event.unicode == "a":
            self.select_all()
        elif event.unicode == "n":
            self.select_none()

    def handle_touch(self, x: int, y: int) -> None:
        for action, rect in self._tool_rects:
            if rect.collidepoint(x, y):
                self._tool_action(action)
                return
        for decade, rect in self._decade_rects:
            if rect.collidepoint(x, y):
                self.decade = decade
                return
        for label, rect in self._chip_rects:
            if rect.collidepoint(x, y):
                self.toggle(label)
                return

    def on_enter(self) -> None:
        pass

    def on_exit(self) -> None:
        log.info("%d resistor values selected", len(self.selected))

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _tool_action(self, action: str) -> None:
        if action == "series":
            names = sorted(E_SERIES_BASE, key=lambda s: int(s[1:]))
            self.set_series(names[(names.index(self.series) + 1) % len(names)])
        elif action == "all":
            self.select_all()
        elif action == "none":
            self.select_none()

    def _draw_toolbar(self, surface: pygame.Surface, fnt: dict) -> None:
        self._tool_rects = []
        for i, (action, text) in enumerate(
            (("series", self.series), ("all", "All"), ("none", "None"))
        ):
            rect = pygame.Rect(_MARGIN + i * (_TOOL_W + _CHIP_GAP), _TOOL_Y, _TOOL_W, _TOOL_H)
            self._tool_rects.append((action, rect))
            draw_button(surface, text, rect, ACCENT if action == "series" else BTN_BG,
                        BG_COLOR if action == "series" else TEXT_COLOR, fnt["body"])

        count = len(self.selected)
        draw_text(surface, f"{count} value{'s' if count != 1 else ''} selected",
                  fnt["body"], TEXT_MUTED, config.SCREEN_W - _MARGIN,
                  _TOOL_Y + _TOOL_H // 2, anchor="midright")

    def _draw_decades(self, surface: pygame.Surface, fnt: dict) -> None:
        self._decade_rects = []
        width = (config.SCREEN_W - 2 * _MARGIN - (len(_DECADES) - 1) * _CHIP_GAP) // len(_DECADES)
        for d, name in enumerate(_DECADES):
            rect = pygame.Rect(_MARGIN + d * (width + _CHIP_GAP), _DECADE_Y, width, _DECADE_H)
            self._decade_rects.append((d, rect))
            active = d == self.decade
            draw_button(surface, name, rect, ACCENT if active else CARD_BG,
                        BG_COLOR if active else TEXT_COLOR, fnt["small"])

    def _draw_chips(self, surface: pygame.Surface, fnt: dict) -> None:
        self._chip_rects = []
        labels = self.decade_labels()
        cols = 4 if len(labels) <= 12 else 6
        width = (config.SCREEN_W - 2 * _MARGIN - (cols - 1) * _CHIP_GAP) // cols
        height = _CHIP_H if len(labels) <= 12 else _CHIP_H - 10
        for i, label in enumerate(labels):
            row, col = divmod(i, cols)
            rect = pygame.Rect(
                _MARGIN + col * (width + _CHIP_GAP),
                _CHIP_TOP + row * (height + _CHIP_GAP),
                width,
                height,
            )
            self._chip_rects.append((label, rect))
            on = label in self.selected
            draw_button(surface, label, rect, GREEN if on else CARD_BG,
                        BG_COLOR if on else TEXT_MUTED, fnt["small"])
