from __future__ import annotations

"""
Resistor Network Finder - Pygame Display Manager

Manages pygame initialisation, screen transitions, the nav bar, and the main
render loop for the 480×320 finder window.

The UIManager can be constructed in two modes:

  1. Window mode (no surface argument):
       mgr = UIManager()
     pygame.init() is called, a 480×320 window is created (fullscreen when
     asked), and the clock and fonts are set up.

  2. Headless / test mode (surface provided):
       mgr = UIManager(surface)
     pygame is NOT re-initialised.  The supplied surface is used directly.
     Clock and display-flip calls are skipped so the class works with a
     MagicMock surface under SDL dummy mode.

The module also holds the drawing helpers and palette shared by the screens.
"""

import logging

import pygame

import config

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Layout constants
# ---------------------------------------------------------------------------

SCREEN_W  = config.SCREEN_W
SCREEN_H  = config.SCREEN_H
NAV_H     = 48                  # nav bar height, pinned to bottom


# ---------------------------------------------------------------------------
# Colour palette
# ---------------------------------------------------------------------------

BG_COLOR     = (15,  23,  42)   # dark blue-gray, main background
CARD_BG      = (22,  33,  62)
TEXT_COLOR   = (226, 232, 240)  # near-white, primary text
TEXT_MUTED   = (150, 160, 180)
ACCENT       = (56,  189, 248)  # cyan, active nav / primary action
GREEN        = (52,  211, 153)  # exact / good match
YELLOW       = (251, 191, 36)   # warning / highlight
RED          = (248, 113, 113)  # error
NAV_BG       = (8,   15,  30)
NAV_BORDER   = (30,  41,  59)
RESISTOR_TAN = (210, 180, 140)
LEAD_COLOR   = (160, 160, 160)
BTN_BG       = (30,  45,  75)

# ---------------------------------------------------------------------------
# Nav bar configuration
# ---------------------------------------------------------------------------

_NAV_LABELS = ["Values", "Finder", "Ladder"]
_NAV_KEYS   = ["values", "finder", "ladder"]
_NAV_BTN_W  = SCREEN_W // len(_NAV_KEYS)


# ---------------------------------------------------------------------------
# Shared drawing helpers
# ---------------------------------------------------------------------------

_FONT_CACHE: dict[str, pygame.font.Font] | None = None


def load_font(family: str, size: int, bold: bool = False) -> pygame.font.Font:
    """Load a font by family name with a fallback to the default font."""
    try:
        font = pygame.font.SysFont(family, size, bold=bold)
        # SysFont can return None in dummy SDL environments
        if font is None:
            raise RuntimeError("SysFont returned None")
        return font
    except Exception:
        return pygame.font.SysFont(None, size, bold=bold)


def fonts() -> dict[str, pygame.font.Font]:
    """Return the cached font dict, initialising on first call."""
    global _FONT_CACHE
    if _FONT_CACHE is None:
        pygame.font.init()
        _FONT_CACHE = {
            "heading": load_font("dejavusans", 20, bold=True),
            "body":    load_font("dejavusans", 15),
            "small":   load_font("dejavusans", 12),
            "mono":    load_font("dejavusansmono", 12),
        }
    return _FONT_CACHE


def draw_text(
    surface: pygame.Surface,
    text: str,
    font: pygame.font.Font,
    color: tuple,
    x: int,
    y: int,
    anchor: str = "topleft",
) -> pygame.Rect:
    """Render *text* onto *surface* at the given anchor position.

    *anchor* is any pygame.Rect attribute (``'topleft'``, ``'center'``,
    ``'midright'`` ...).
    """
    surf = font.render(text, True, color)
    rect = surf.get_rect()
    setattr(rect, anchor, (x, y))
    surface.blit(surf, rect)
    return rect


def draw_button(
    surface: pygame.Surface,
    text: str,
    rect: pygame.Rect,
    color: tuple,
    text_color: tuple,
    font: pygame.font.Font,
    pressed: bool = False,
) -> pygame.Rect:
    """Draw a rounded-rectangle button with centred label text.

    If *pressed*, *color* is darkened by 35 % for a press effect.
    """
    if pressed:
        color = tuple(max(0, int(c * 0.65)) for c in color)
    pygame.draw.rect(surface, color, rect, border_radius=6)
    draw_text(surface, text, font, text_color, rect.centerx, rect.centery, anchor="center")
    return pygame.Rect(rect)


def draw_resistor(
    surface: pygame.Surface,
    x: int,
    y: int,
    w: int,
    h: int,
    bands: list[dict],
) -> None:
    """Draw a 4-band resistor illustration.

    A tan rounded body with wire leads; four colour stripes centred at 20 %,
    40 %, 60 % and 80 % of the body width.

    Args:
        surface: Target surface to draw onto.
        x, y:    Top-left origin of the bounding box (includes leads).
        w, h:    Width and height of the bounding box.
        bands:   Band dicts from ``color_code.resistance_to_bands()``.
    """
    if not bands or len(bands) < 4:
        return

    lead_w = int(w * 0.15)
    body_x = x + lead_w
    body_w = int(w * 0.70)
    cy     = y + h // 2

    pygame.draw.line(surface, LEAD_COLOR, (x, cy), (body_x, cy), 2)
    pygame.draw.line(surface, LEAD_COLOR, (body_x + body_w, cy), (x + w, cy), 2)

    body_rect = pygame.Rect(body_x, y, body_w, h)
    radius = max(2, h // 3)
    pygame.draw.rect(surface, RESISTOR_TAN, body_rect, border_radius=radius)

    band_w    = max(2, int(w * 0.06))
    half_band = band_w // 2
    for i, band in enumerate(bands[:4]):
        centre_x = int(body_x + (0.20 + 0.20 * i) * body_w)
        bx = max(body_x, min(centre_x - half_band, body_x + body_w - band_w))
        band_rect = pygame.Rect(bx, y, band_w, h).clip(body_rect)
        if band_rect.width > 0 and band_rect.height > 0:
            pygame.draw.rect(surface, band.get("rgb", (128, 128, 128)), band_rect)

    # Re-draw the outline to crisp up the rounded corners over the bands
    pygame.draw.rect(surface, RESISTOR_TAN, body_rect, width=2, border_radius=radius)


# ---------------------------------------------------------------------------
# On-screen keypad
# ---------------------------------------------------------------------------

_KEY_STYLE: dict[str, tuple] = {
    "DEL": ((60, 30, 30), RED),
    "=":   (ACCENT, BG_COLOR),
}


class Keypad:
    """Grid of labelled touch buttons.

    Hit rects are rebuilt on every draw(); hit() returns the label under a
    tap, or None.

    Args:
        layout: Rows of button labels.
        left, top: Pixel origin of the grid.
        btn_w, btn_h, gap: Button size and spacing.
    """

    def __init__(self, layout: list[list[str]], left: int, top: int,
                 btn_w: int, btn_h: int, gap: int = 4) -> None:
        self.layout = layout
        self.left = left
        self.top = top
        self.btn_w = btn_w
        self.btn_h = btn_h
        self.gap = gap
        self.pressed: str | None = None
        self._rects: list[tuple[str, pygame.Rect]] = self._build_rects()

    def _build_rects(self) -> list[tuple[str, pygame.Rect]]:
        rects = []
        for row_idx, row in enumerate(self.layout):
            for col_idx, label in enumerate(row):
                x = self.left + col_idx * (self.btn_w + self.gap)
                y = self.top + row_idx * (self.btn_h + self.gap)
                rects.append((label, pygame.Rect(x, y, self.btn_w, self.btn_h)))
        return rects

    def hit(self, x: int, y: int) -> str | None:
        for label, rect in self._rects:
            if rect.collidepoint(x, y):
                self.pressed = label
                return label
        self.pressed = None
        return None

    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        self._rects = self._build_rects()
        for label, rect in self._rects:
            bg_col, fg_col = _KEY_STYLE.get(label, (BTN_BG, TEXT_COLOR))
            draw_button(surface, label, rect, bg_col, fg_col, font,
                        pressed=(label == self.pressed))


# ---------------------------------------------------------------------------
# UIManager
# ---------------------------------------------------------------------------

class UIManager:
    """Manages registered screens and dispatches events, updates, and draws.

    Screens are registered by name and activated via switch_to().  Only the
    active screen receives update(), draw() and handle_event() calls.

    Args:
        surface:    Optional pygame.Surface for headless / test mode.
        fullscreen: Window mode only; open a fullscreen display.
    """

    def __init__(self, surface=None, fullscreen: bool = False) -> None:
        self._test_mode = surface is not None

        if self._test_mode:
            pygame.font.init()
            self._surface = surface
            self.screen   = surface
            self.clock    = None
        else:
            pygame.init()
            flags = pygame.FULLSCREEN if fullscreen else 0
            self.screen = pygame.display.set_mode((SCREEN_W, SCREEN_H), flags)
            pygame.display.set_caption("Resistor Network Finder")
            self._surface = self.screen
            self.clock = pygame.time.Clock()

        self._screens: dict[str, object] = {}
        self._active: str | None = None

        # Built in draw_nav_bar(); empty until the first draw.
        self._nav_rects: list[pygame.Rect] = []

        self.current_screen: str | None = None

    # ------------------------------------------------------------------
    # Screen registry
    # ------------------------------------------------------------------

    def register_screen(self, name: str, screen_obj) -> None:
        """Add a screen to the registry under the given name.

        Args:
            name:       Unique string key (e.g. ``'finder'``).
            screen_obj: Object with update, draw, handle_event and optionally
                        handle_touch / on_enter / on_exit.
        """
        self._screens[name] = screen_obj

    def screen_named(self, name: str):
        """Return the registered screen object for *name*."""
        return self._screens[name]

    def switch_to(self, name: str) -> None:
        """Activate the named screen.

        Raises:
            KeyError: If *name* has not been registered.
        """
        if name not in self._screens:
            raise KeyError(f"Unknown screen: {name!r}")
        if self._active is not None and self._active != name:
            old = self._screens[self._active]
            if hasattr(old, "on_exit"):
                old.on_exit()
        self._active = name
        self.current_screen = name
        new = self._screens[name]
        if hasattr(new, "on_enter"):
            new.on_enter()
        log.debug("Switched to screen %s", name)

    # ------------------------------------------------------------------
    # Main-loop hooks
    # ------------------------------------------------------------------

    def handle_event(self, event) -> None:
        """Forward a single pygame event to the active screen (if any)."""
        if self._active is not None:
            self._screens[self._active].handle_event(event)

    def handle_events(self) -> bool:
        """Drain the pygame event queue, handle nav taps, and dispatch to the active screen.

        Returns:
            ``False`` if the application should quit (QUIT or Escape pressed),
            ``True`` otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                nav_name = self._nav_hit(event.pos)
                if nav_name is None and self._active is not None:
                    screen = self._screens[self._active]
                    if hasattr(screen, "handle_touch"):
                        screen.handle_touch(event.pos[0], event.pos[1])
                continue
            self.handle_event(event)
        return True

    def update(self, dt: float) -> None:
        """Advance the active screen by *dt* seconds."""
        if self._active is not None:
            self._screens[self._active].update(dt)

    def draw(self) -> None:
        """Render the active screen onto the surface, then overlay the nav bar."""
        if self._active is not None:
            self._screens[self._active].draw(self._surface)

        if not self._test_mode:
            self.draw_nav_bar()
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(30)

    # ------------------------------------------------------------------
    # Nav bar
    # ------------------------------------------------------------------

    def draw_nav_bar(self) -> None:
        """Draw the bottom nav bar and rebuild ``self._nav_rects``."""
        nav_y = SCREEN_H - NAV_H
        font = fonts()["body"]

        pygame.draw.line(self._surface, NAV_BORDER, (0, nav_y), (SCREEN_W - 1, nav_y), 1)

        self._nav_rects = []
        for i, (label, key) in enumerate(zip(_NAV_LABELS, _NAV_KEYS)):
            rect = pygame.Rect(i * _NAV_BTN_W, nav_y + 1, _NAV_BTN_W, NAV_H - 1)
            self._nav_rects.append(rect)

            is_active = key == self._active
            pygame.draw.rect(self._surface, ACCENT if is_active else NAV_BG, rect)
            draw_text(self._surface, label, font, BG_COLOR if is_active else TEXT_COLOR,
                      rect.centerx, rect.centery, anchor="center")

    def _nav_hit(self, pos) -> str | None:
        """Return the nav key under *pos* (switching to it), else ``None``."""
        for rect, key in zip(self._nav_rects, _NAV_KEYS):
            if rect.collidepoint(pos):
                if key in self._screens:
                    self.switch_to(key)
                return key
        return None
