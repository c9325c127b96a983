"""
Resistor Network Finder - Network Finder Screen

Enter a target resistance, pick tolerance and network size, and list the
best series/parallel networks built from the values chosen on the value
picker screen.

Layout (480 × 272 content area):

  LEFT PANEL  (x   6–216)  target display, tolerance / size buttons, keypad
  RIGHT PANEL (x 224–474)  result summary, ranked list, bands of best part

Construction modes (same pattern as the other screens):
  ScreenFinder(surface, values_source)     test mode: plain Surface or MagicMock
  ScreenFinder(ui_manager, values_source)  app mode: UIManager passed as 'surface'

``values_source`` is a callable returning the selected value labels.
"""

from __future__ import annotations

import logging

import pygame

import config
# Module-level imports so tests can patch screen_finder.find_networks_from_labels.
from calculator import find_networks_from_labels
from color_code import resistance_to_bands
from report import format_ohms
from ui_manager import (
    ACCENT,
    BG_COLOR,
    BTN_BG,
    CARD_BG,
    GREEN,
    RED,
    TEXT_COLOR,
    TEXT_MUTED,
    YELLOW,
    Keypad,
    draw_button,
    draw_resistor,
    draw_text,
    fonts,
)
from value_parser import parse_resistor_value

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Layout constants
# ---------------------------------------------------------------------------

_LEFT_X  = 6
_LEFT_W  = 210
_RIGHT_X = 224
_RIGHT_W = 250

_INPUT_Y = 6
_INPUT_H = 36
_OPT_Y   = 48
_OPT_H   = 30
_KP_TOP  = 84

_LIST_Y     = 30
_ROW_H      = 24
_LIST_ROWS  = 7
_BANDS_Y    = 206

MAX_INPUT = 10

_KEYPAD_LAYOUT = [
    ["1", "2", "3", "K"],
    ["4", "5", "6", "M"],
    ["7", "8", "9", "DEL"],
    [".", "0", "C", "="],
]


class ScreenFinder:
    """Target entry and ranked network list.

    Args:
        surface:       pygame.Surface (or MagicMock) or a UIManager instance.
        values_source: Callable returning the selected value labels; defaults
                       to the whole default catalogue.
    """

    def __init__(self, surface, values_source=None) -> None:
        if hasattr(surface, "_surface"):
            self._ui      = surface
            self._surface = surface._surface
        else:
            self._ui      = None
            self._surface = surface

        if values_source is None:
            from resistor_constants import series_labels
            values_source = lambda: series_labels(config.DEFAULT_SERIES)  # noqa: E731
        self._values_source = values_source

        self.input_buffer: str = ""
        self.tolerance: float = config.DEFAULT_TOLERANCE
        self.max_size: int = config.MAX_N
        self.outcome: dict | None = None
        self.scroll: int = 0

        self._keypad = Keypad(_KEYPAD_LAYOUT, _LEFT_X, _KP_TOP, 49, 42, gap=5)
        self._tol_rect  = pygame.Rect(_LEFT_X, _OPT_Y, 103, _OPT_H)
        self._size_rect = pygame.Rect(_LEFT_X + 107, _OPT_Y, 103, _OPT_H)
        self._list_rect = pygame.Rect(_RIGHT_X, _LIST_Y, _RIGHT_W, _LIST_ROWS * _ROW_H)

        if not pygame.font.get_init():
            pygame.font.init()

    # ------------------------------------------------------------------
    # Screen interface
    # ------------------------------------------------------------------

    def update(self, dt: float) -> None:
        """No-op: this screen has no time-based animation."""
        pass

    def draw(self, surface: pygame.Surface | None = None) -> None:
        target = surface if surface is not None else self._surface
        target.fill(BG_COLOR)

        try:
            fnt = fonts()
            self._draw_left_panel(target, fnt)
            self._draw_right_panel(target, fnt)
        except Exception:
            # pygame.draw.* calls fail on MagicMock surfaces in tests.
            pass

    def handle_event(self, event) -> None:
        """Keyboard input.

        - K_BACKSPACE: remove the last character.
        - K_RETURN:    run the search.
        - K_UP/K_DOWN: scroll the result list.
        - digits, ``.``, ``k``/``K``, ``m``/``M``: edit the target.
        """
        if event.type != pygame.KEYDOWN:
            return

        if event.key == pygame.K_BACKSPACE:
            self.input_buffer = self.input_buffer[:-1]
            return
        if event.key == pygame.K_RETURN:
            self.calculate()
            return
        if event.key == pygame.K_UP:
            self._scroll_by(-1)
            return
        if event.key == pygame.K_DOWN:
            self._scroll_by(1)
            return

        ch = event.unicode
        if ch.isdigit() or ch == ".":
            self._append(ch)
        elif ch in ("k", "K", "m", "M"):
            self._append(ch.upper())

    def handle_touch(self, x: int, y: int) -> None:
        if self._tol_rect.collidepoint(x, y):
            self.cycle_tolerance()
            return
        if self._size_rect.collidepoint(x, y):
            self.cycle_size()
            return
        if self._list_rect.collidepoint(x, y):
            # Upper half scrolls up, lower half down
            self._scroll_by(-1 if y < self._list_rect.centery else 1)
            return
        label = self._keypad.hit(x, y)
        if label is not None:
            self._handle_keypad_label(label)

    def on_enter(self) -> None:
        pass

    def on_exit(self) -> None:
        self._keypad.pressed = None

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def target_value(self) -> float:
        """Target in ohms as typed (``'4.7K'`` → 4700.0); 0.0 when empty."""
        return parse_resistor_value(self.input_buffer)

    def cycle_tolerance(self) -> None:
        choices = config.TOLERANCE_CHOICES
        if self.tolerance in choices:
            self.tolerance = choices[(choices.index(self.tolerance) + 1) % len(choices)]
        else:
            self.tolerance = config.DEFAULT_TOLERANCE

    def cycle_size(self) -> None:
        self.max_size = self.max_size % config.MAX_N + 1

    def calculate(self) -> None:
        """Run the finder on the current inputs and keep the outcome dict."""
        labels = list(self._values_source())
        self.outcome = find_networks_from_labels(
            labels, self.target_value(), self.tolerance, self.max_size
        )
        self.scroll = 0
        if self.outcome.get("status") == "ok":
            log.info("Finder: %d matches for %r", self.outcome["total"], self.input_buffer)
        else:
            log.info("Finder: %s", self.outcome.get("message"))

    def _append(self, ch: str) -> None:
        if len(self.input_buffer) >= MAX_INPUT:
            return
        if ch == "." and "." in self.input_buffer:
            return
        if ch in ("K", "M"):
            # One multiplier, only after a digit
            if not self.input_buffer or self.input_buffer[-1] in "KM." \
                    or "K" in self.input_buffer or "M" in self.input_buffer:
                return
        elif self.input_buffer[-1:] in ("K", "M"):
            return
        self.input_buffer += ch

    def _handle_keypad_label(self, label: str) -> None:
        if label == "DEL":
            self.input_buffer = self.input_buffer[:-1]
        elif label == "C":
            self.input_buffer = ""
            self.outcome = None
            self.scroll = 0
        elif label == "=":
            self.calculate()
        else:
            self._append(label)

    def _rows(self) -> list[dict]:
        if not self.outcome or self.outcome.get("status") != "ok":
            return []
        return self.outcome["results"]

    def _scroll_by(self, step: int) -> None:
        limit = max(0, len(self._rows()) - _LIST_ROWS)
        self.scroll = max(0, min(limit, self.scroll + step))

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _draw_left_panel(self, surface: pygame.Surface, fnt: dict) -> None:
        input_box = pygame.Rect(_LEFT_X, _INPUT_Y, _LEFT_W, _INPUT_H)
        pygame.draw.rect(surface, CARD_BG, input_box, border_radius=8)
        pygame.draw.line(surface, ACCENT,
                         (_LEFT_X + 4, _INPUT_Y + 1), (_LEFT_X + _LEFT_W - 5, _INPUT_Y + 1), 2)
        if self.input_buffer:
            draw_text(surface, self.input_buffer + " Ω", fnt["heading"], TEXT_COLOR,
                      _LEFT_X + _LEFT_W - 8, input_box.centery, anchor="midright")
        else:
            draw_text(surface, "Target Ω", fnt["body"], TEXT_MUTED,
                      input_box.centerx, input_box.centery, anchor="center")

        draw_button(surface, f"±{self.tolerance:g}%", self._tol_rect, BTN_BG, YELLOW, fnt["body"])
        draw_button(surface, f"≤{self.max_size} parts", self._size_rect, BTN_BG, TEXT_COLOR,
                    fnt["body"])

        self._keypad.draw(surface, fnt["body"])

    def _draw_right_panel(self, surface: pygame.Surface, fnt: dict) -> None:
        outcome = self.outcome
        if outcome is None:
            draw_text(surface, "Press = to search", fnt["body"], TEXT_MUTED,
                      _RIGHT_X, _INPUT_Y + 4)
            return

        if outcome.get("status") != "ok":
            draw_text(surface, outcome.get("message", "Error"), fnt["small"], RED,
                      _RIGHT_X, _INPUT_Y + 4)
            return

        if not outcome["found"]:
            draw_text(surface, "No network within tolerance", fnt["body"], TEXT_MUTED,
                      _RIGHT_X, _INPUT_Y + 4)
            return

        summary = f"{outcome['total']} found for {format_ohms(outcome['target'])}"
        if outcome["hidden"]:
            summary += f" ({outcome['hidden']} more)"
        draw_text(surface, summary, fnt["small"], TEXT_MUTED, _RIGHT_X, _INPUT_Y + 4)

        pygame.draw.rect(surface, CARD_BG, self._list_rect, border_radius=6)
        rows = self._rows()[self.scroll:self.scroll + _LIST_ROWS]
        for i, row in enumerate(rows):
            y = _LIST_Y + i * _ROW_H + 2
            colour = GREEN if row["error_percent"] == 0 else TEXT_COLOR
            head = f"#{row['rank']} {format_ohms(row['resistance'])} " \
                   f"{row['error_percent']:.2f}% n={row['count']}"
            draw_text(surface, head, fnt["small"], colour, _RIGHT_X + 4, y)
            draw_text(surface, row["expression"], fnt["mono"], TEXT_MUTED,
                      _RIGHT_X + 4, y + 11)

        best = self._rows()[0]
        if best["component_codes"]:
            value = best["component_codes"][0]["value"]
            draw_resistor(surface, _RIGHT_X, _BANDS_Y, 120, 26, resistance_to_bands(value))
            draw_text(surface, best["component_codes"][0]["four_band"], fnt["small"],
                      TEXT_MUTED, _RIGHT_X, _BANDS_Y + 32)
            draw_text(surface, f"SMD {best['component_codes'][0]['smd']}", fnt["small"],
                      TEXT_MUTED, _RIGHT_X + 130, _BANDS_Y + 8)
