"""
Resistor Network Finder - Main Entry Point

Builds the Pygame UI and runs the main event loop.

Screens
-------
  values  ScreenValues  pick the resistor values on hand
  finder  ScreenFinder  target entry and ranked networks
  ladder  ScreenLadder  R-2R ladder DAC figures

The finder reads the current selection from the value picker each time it
searches, so the two screens never hold separate copies of the list.
"""

import logging
import sys
import time

import click
import pygame

from screen_finder import ScreenFinder
from screen_ladder import ScreenLadder
from screen_values import ScreenValues
from ui_manager import UIManager

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s %(name)s: %(message)s",
    stream=sys.stdout,
)
log = logging.getLogger(__name__)


def build_ui(mgr: UIManager) -> None:
    """Create the three screens, register them and show the finder."""
    values = ScreenValues(mgr)
    finder = ScreenFinder(mgr, values_source=values.selected_labels)
    ladder = ScreenLadder(mgr)

    mgr.register_screen("values", values)
    mgr.register_screen("finder", finder)
    mgr.register_screen("ladder", ladder)

    mgr.switch_to("finder")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--fullscreen", is_flag=True, help="Open a fullscreen display")
def main(fullscreen: bool) -> None:
    """Run the touch UI."""
    mgr = UIManager(fullscreen=fullscreen)
    build_ui(mgr)

    log.info("Resistor Network Finder started")

    last_t = time.monotonic()

    try:
        running = True
        while running:
            now = time.monotonic()
            dt  = now - last_t
            last_t = now

            running = mgr.handle_events()
            mgr.update(dt)
            mgr.draw()

    finally:
        pygame.quit()
        log.info("Pygame quit")


if __name__ == "__main__":
    main()
