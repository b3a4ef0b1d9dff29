"""Seeded Orrery main module (window loop and command line)."""

from __future__ import annotations

import argparse
import logging
import math
import sys
from typing import Sequence

import pygame

from .constants import BLACK, FPS, SCREEN_HEIGHT, SCREEN_WIDTH, TITLE
from .models.seed_link import parse_seed_value, seed_from_query, share_query
from .models.system import SystemDescription, generate_system
from .screens.system_view import SystemViewScreen
from .ui.hud import HUD
from .ui.seed_entry import SeedEntry
from .ui.starfield import StarField

logger = logging.getLogger(__name__)


class Game:
    """Owns the window, the current system and the per-frame loop."""

    def __init__(self, seed_input: int | str | None = None) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(TITLE)
        self.clock = pygame.time.Clock()
        self.running = True
        self.hud = HUD()
        self.seed_entry = SeedEntry()

        self.system: SystemDescription
        self.system_view: SystemViewScreen
        self.starfield: StarField
        self.load_system(seed_input)

    def load_system(self, seed_input: int | str | None) -> None:
        """Generate a system and rebuild everything seeded from it."""
        self.system = generate_system(seed_input)
        self.system_view = SystemViewScreen(self.system)
        self.starfield = StarField(self.system.seed)
        pygame.display.set_caption(f"{TITLE} {share_query(self.system.seed)}")
        logger.info(
            "Loaded system seed=%d with %d planets", self.system.seed, len(self.system.planets)
        )

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        while self.running:
            dt = self.clock.tick(FPS) / 1000.0
            self._handle_events()
            self._update(dt)
            self._draw()

        pygame.quit()

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            self._handle_event(event)
            if not self.running:
                return

    def _handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.running = False
            return

        if self.seed_entry.active:
            entered = self.seed_entry.handle_event(event)
            if entered is not None:
                self._reload(parse_seed_value(entered) if entered else None)
            return

        if event.type == pygame.KEYDOWN and event.key == pygame.K_s:
            self.seed_entry.start(getattr(event, "unicode", ""))
            return

        self.system_view.handle_events(event)

    def _reload(self, seed_input: int | str | None) -> None:
        """Load a new system, keeping the viewing preferences."""
        view = self.system_view
        mode, speed, paused = view.view_mode, view.time_scale_index, view.paused
        self.load_system(seed_input)
        self.system_view.view_mode = mode
        self.system_view.time_scale_index = speed
        self.system_view.paused = paused

    def _update(self, dt: float) -> None:
        view = self.system_view
        if view.quit_requested:
            self.running = False
            return
        if view.reroll_requested:
            self._reload(None)
            view = self.system_view

        self.starfield.update(dt)
        self.hud.update(dt)
        view.update(dt, pygame.mouse.get_pos())

    def _draw(self) -> None:
        self.screen.fill(BLACK)
        self.starfield.draw(self.screen)
        self.system_view.draw(self.screen)
        self.hud.draw(
            self.screen,
            seed=self.system.seed,
            time_scale=self.system_view.time_scale,
            paused=self.system_view.paused,
            view_mode=self.system_view.view_mode,
        )
        self.seed_entry.draw(self.screen)
        pygame.display.flip()


# ----------------------------------------------------------------------
# Command line
# ----------------------------------------------------------------------


def describe_system(system: SystemDescription) -> str:
    """Plain-text summary of a generated system."""
    star = system.star
    lines = [
        f"seed {system.seed}  ({share_query(system.seed)})",
        f"star  radius {star.radius:.2f}  color #{star.color:06x}  light {star.light_intensity}",
        f"{len(system.planets)} planets, max orbit {system.max_orbit:.2f}",
    ]
    for index, planet in enumerate(system.planets):
        extras = []
        if planet.ring is not None:
            extras.append("ring")
        if planet.atmosphere is not None:
            extras.append("atmosphere")
        lines.append(
            f"  {index + 1:2d}. {planet.name:<14} {planet.planet_type.value:<5} "
            f"r={planet.radius:.2f} a={planet.orbit_radius:6.2f} e={planet.eccentricity:.3f} "
            f"i={math.degrees(planet.inclination):+5.1f}° {' '.join(extras)}".rstrip()
        )
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Explore a procedurally generated star system")
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--seed",
        type=parse_seed_value,
        default=None,
        help="Numeric seed (up to 2^32-1) or any text to hash into one",
    )
    source.add_argument(
        "--url",
        default=None,
        help="Shared link or query string carrying ?seed=...",
    )
    parser.add_argument(
        "--describe",
        action="store_true",
        help="Print the generated system and exit without opening a window",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the seeded-orrery command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    seed_input = seed_from_query(args.url) if args.url is not None else args.seed

    if args.describe:
        print(describe_system(generate_system(seed_input)))
        return 0

    Game(seed_input).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
