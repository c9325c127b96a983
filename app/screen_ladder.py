"""
Resistor Network Finder - R-2R Ladder Screen

Enter R, Vref and the bit count; shows the resistor counts, LSB, full
scale, the codes of R and 2R, and a table of sample output voltages.

Layout (480 × 272 content area):

  LEFT PANEL  (x   6–216)  R / Vref fields, bits − / +, keypad
  RIGHT PANEL (x 224–474)  figures, R / 2R bands, sample table
"""

from __future__ import annotations

import logging

import pygame

import config
from calculator import ladder_summary
from color_code import resistance_to_bands
from report import format_ohms
from ui_manager import (
    ACCENT,
    BG_COLOR,
    BTN_BG,
    CARD_BG,
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

_FIELD_Y = 6
_FIELD_H = 32
_BITS_Y  = 44
_BITS_H  = 32
_KP_TOP  = 82

_TABLE_Y    = 112
_TABLE_ROW  = 15
_TABLE_ROWS = 10

MAX_INPUT = 10

_KEYPAD_LAYOUT = [
    ["1", "2", "3", "K"],
    ["4", "5", "6", "M"],
    ["7", "8", "9", "DEL"],
    [".", "0", "C", "="],
]

FIELDS = ("r", "vref")


class ScreenLadder:
    """R-2R ladder DAC calculator.

    Args:
        surface: pygame.Surface (or MagicMock) or a UIManager instance.
    """

    def __init__(self, surface) -> None:
        if hasattr(surface, "_surface"):
            self._ui      = surface
            self._surface = surface._surface
        else:
            self._ui      = None
            self._surface = surface

        self.buffers: dict[str, str] = {"r": "", "vref": f"{config.DEFAULT_VREF:g}"}
        self.active_field: str = "r"
        self.bits: int = config.DEFAULT_BITS
        self.summary: dict | None = None
        self.scroll: int = 0

        self._keypad = Keypad(_KEYPAD_LAYOUT, _LEFT_X, _KP_TOP, 49, 42, gap=5)
        self._field_rects = {
            "r":    pygame.Rect(_LEFT_X, _FIELD_Y, 124, _FIELD_H),
            "vref": pygame.Rect(_LEFT_X + 128, _FIELD_Y, 82, _FIELD_H),
        }
        self._minus_rect = pygame.Rect(_LEFT_X, _BITS_Y, 50, _BITS_H)
        self._plus_rect  = pygame.Rect(_LEFT_X + _LEFT_W - 50, _BITS_Y, 50, _BITS_H)
        self._table_rect = pygame.Rect(_RIGHT_X, _TABLE_Y, _RIGHT_W, _TABLE_ROWS * _TABLE_ROW)

        if not pygame.font.get_init():
            pygame.font.init()

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
            self._draw_inputs(target, fnt)
            self._draw_summary(target, fnt)
        except Exception:
            # pygame.draw.* calls fail on MagicMock surfaces in tests.
            pass

    def handle_event(self, event) -> None:
        """Keyboard input.

        - K_TAB:       switch between the R and Vref fields.
        - K_BACKSPACE: remove the last character.
        - K_RETURN:    calculate.
        - ``+`` / ``-``: change the bit count.
        - K_UP/K_DOWN: scroll the sample table.
        """
        if event.type != pygame.KEYDOWN:
            return

        if event.key == pygame.K_TAB:
            self.next_field()
        elif event.key == pygame.K_BACKSPACE:
            self._delete()
        elif event.key == pygame.K_RETURN:
            self.calculate()
        elif event.key == pygame.K_UP:
            self._scroll_by(-1)
        elif event.key == pygame.K_DOWN:
            self._scroll_by(1)
        elif event.unicode == "+":
            self.change_bits(1)
        elif event.unicode == "-":
            self.change_bits(-1)
        elif event.unicode.isdigit() or event.unicode == ".":
            self._append(event.unicode)
        elif event.unicode in ("k", "K", "m", "M"):
            self._append(event.unicode.upper())

    def handle_touch(self, x: int, y: int) -> None:
        for name, rect in self._field_rects.items():
            if rect.collidepoint(x, y):
                self.active_field = name
                return
        if self._minus_rect.collidepoint(x, y):
            self.change_bits(-1)
            return
        if self._plus_rect.collidepoint(x, y):
            self.change_bits(1)
            return
        if self._table_rect.collidepoint(x, y):
            self._scroll_by(-1 if y < self._table_rect.centery else 1)
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

    def r_value(self) -> float:
        return parse_resistor_value(self.buffers["r"])

    def vref_value(self) -> float:
        return parse_resistor_value(self.buffers["vref"])

    def next_field(self) -> None:
        self.active_field = FIELDS[(FIELDS.index(self.active_field) + 1) % len(FIELDS)]

    def change_bits(self, step: int) -> None:
        self.bits = max(config.LADDER_MIN_BITS,
                        min(config.LADDER_MAX_BITS, self.bits + step))

    def calculate(self) -> None:
        self.summary = ladder_summary(self.r_value(), self.bits, self.vref_value())
        self.scroll = 0
        if self.summary["status"] == "ok":
            log.info("Ladder: %d bits, R=%g Ω", self.bits, self.summary["r"])
        else:
            log.info("Ladder: %s", self.summary["message"])

    def _append(self, ch: str) -> None:
        buf = self.buffers[self.active_field]
        if len(buf) >= MAX_INPUT:
            return
        if ch == "." and "." in buf:
            return
        if ch in ("K", "M"):
            # Multipliers only make sense for R
            if self.active_field != "r" or not buf or buf[-1] in "KM." \
                    or "K" in buf or "M" in buf:
                return
        elif buf[-1:] in ("K", "M"):
            return
        self.buffers[self.active_field] = buf + ch

    def _delete(self) -> None:
        self.buffers[self.active_field] = self.buffers[self.active_field][:-1]

    def _handle_keypad_label(self, label: str) -> None:
        if label == "DEL":
            self._delete()
        elif label == "C":
            self.buffers[self.active_field] = ""
            self.summary = None
        elif label == "=":
            self.calculate()
        else:
            self._append(label)

    def _scroll_by(self, step: int) -> None:
        if not self.summary or self.summary["status"] != "ok":
            return
        limit = max(0, len(self.summary["samples"]) - _TABLE_ROWS)
        self.scroll = max(0, min(limit, self.scroll + step))

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _draw_inputs(self, surface: pygame.Surface, fnt: dict) -> None:
        for name, rect in self._field_rects.items():
            active = name == self.active_field
            pygame.draw.rect(surface, CARD_BG, rect, border_radius=6)
            if active:
                pygame.draw.rect(surface, ACCENT, rect, width=2, border_radius=6)
            caption = "R" if name == "r" else "Vref"
            unit = " Ω" if name == "r" else " V"
            draw_text(surface, caption, fnt["small"], TEXT_MUTED, rect.x + 6, rect.centery,
                      anchor="midleft")
            text = self.buffers[name]
            draw_text(surface, text + unit if text else "-", fnt["body"], TEXT_COLOR,
                      rect.right - 6, rect.centery, anchor="midright")

        draw_button(surface, "−", self._minus_rect, BTN_BG, TEXT_COLOR, fnt["heading"])
        draw_button(surface, "+", self._plus_rect, BTN_BG, TEXT_COLOR, fnt["heading"])
        draw_text(surface, f"{self.bits} bits", fnt["heading"], YELLOW,
                  _LEFT_X + _LEFT_W // 2, _BITS_Y + _BITS_H // 2, anchor="center")

        self._keypad.draw(surface, fnt["body"])

    def _draw_summary(self, surface: pygame.Surface, fnt: dict) -> None:
        summary = self.summary
        if summary is None:
            draw_text(surface, "Enter R and press =", fnt["body"], TEXT_MUTED,
                      _RIGHT_X, _FIELD_Y + 4)
            return
        if summary["status"] != "ok":
            draw_text(surface, summary["message"], fnt["small"], RED, _RIGHT_X, _FIELD_Y + 4)
            return

        lines = [
            f"R  {format_ohms(summary['r'])} × {summary['r_count']}",
            f"2R {format_ohms(summary['r2'])} × {summary['r2_count']}",
            f"LSB {summary['lsb'] * 1000:.3f} mV",
            f"Full scale {summary['full_scale']:.4f} V   Zout {format_ohms(summary['output_impedance'])}",
        ]
        for i, line in enumerate(lines):
            draw_text(surface, line, fnt["small"], TEXT_COLOR, _RIGHT_X, _FIELD_Y + i * 16)

        draw_resistor(surface, _RIGHT_X + 130, _FIELD_Y, 56, 12, resistance_to_bands(summary["r"]))
        draw_resistor(surface, _RIGHT_X + 130, _FIELD_Y + 16, 56, 12,
                      resistance_to_bands(summary["r2"]))

        pygame.draw.rect(surface, CARD_BG, self._table_rect, border_radius=6)
        rows = summary["samples"][self.scroll:self.scroll + _TABLE_ROWS]
        for i, sample in enumerate(rows):
            y = _TABLE_Y + i * _TABLE_ROW + 1
            draw_text(surface, sample["code"], fnt["mono"], TEXT_MUTED, _RIGHT_X + 4, y)
            draw_text(surface, f"{sample['voltage']:.4f} V", fnt["mono"], TEXT_COLOR,
                      _RIGHT_X + _RIGHT_W - 4, y, anchor="topright")
